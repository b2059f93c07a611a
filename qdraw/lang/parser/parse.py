"""Recursive descent parser for the Qdraw language.

Grammar:
    Program      = { MainBlock | Procedure } EOF ;           (exactly one MainBlock)
    MainBlock    = "programa" "{" Statements "}" ;
    Procedure    = "procedimiento" IDENTIFIER "(" ")" "{" Statements "}" ;
    Statements   = { Statement } ;                            (stops at "}" or EOF)
    Statement    = Command
                 | "repetir" NUMBER "veces" "{" Statements "}"
                 | "si" "(" Sensor ")" "{" Statements "}" [ "sino" "{" Statements "}" ]
                 | IDENTIFIER "(" ")" ;
"""

from __future__ import annotations

from typing import List, Optional

from qdraw.ast import (
    Block,
    Command,
    If,
    MainBlock,
    Procedure,
    ProcedureCall,
    Program,
    Repeat,
    Sensor,
    Statement,
)
from qdraw.config import QdrawSettings, get_settings
from qdraw.errors import QdrawSyntaxError
from qdraw.lang.keywords import ALL_WORDS, SENSOR_WORDS, suggest_word

from .grammar.lexer import COMMAND_TOKENS, SENSOR_TOKENS, Token, TokenType

TOKEN_DESCRIPTIONS = {
    TokenType.LBRACE: "'{' (opening brace)",
    TokenType.RBRACE: "'}' (closing brace)",
    TokenType.LPAREN: "'(' (opening parenthesis)",
    TokenType.RPAREN: "')' (closing parenthesis)",
    TokenType.PROGRAM: "'programa'",
    TokenType.PROCEDURE: "'procedimiento'",
    TokenType.IF: "'si'",
    TokenType.ELSE: "'sino'",
    TokenType.REPEAT: "'repetir'",
    TokenType.TIMES: "'veces'",
    TokenType.IDENTIFIER: "procedure name",
    TokenType.NUMBER: "number",
    TokenType.EOF: "end of file",
}

VALID_INSTRUCTIONS = (
    "Valid instructions:\n"
    "    - Movement: MoverArriba, MoverAbajo, MoverDerecha, MoverIzquierda\n"
    "    - Painting: PintarNegro, PintarRojo, PintarVerde, Limpiar\n"
    "    - Control: repetir N veces { ... }, si (...) { ... } sino { ... }\n"
    "    - Calls: procedureName()"
)

VALID_SENSORS = (
    "Valid conditions (sensors): estaVacia?, estaPintadaDeNegro?, "
    "estaPintadaDeRojo?, estaPintadaDeVerde?. Example: si (estaVacia?) { PintarRojo }"
)


def describe_token_type(token_type: TokenType) -> str:
    """Natural-language name of a token type."""
    return TOKEN_DESCRIPTIONS.get(token_type, token_type.name.lower().replace("_", " "))


def describe_token(token: Token) -> str:
    """Literal text of a token, or its kind when it has none."""
    if token.value is not None:
        return str(token.value)
    return describe_token_type(token.type)


class QdrawParser:
    """
    Recursive descent parser producing a :class:`~qdraw.ast.Program`.

    Every production reports failures through :meth:`expect` or
    :meth:`error`, so diagnostics always carry the line, what was expected,
    what was found and a corrective example.
    """

    def __init__(self, tokens: List[Token], *, max_nesting_depth: Optional[int] = None):
        if not tokens or tokens[-1].type is not TokenType.EOF:
            raise ValueError("token list must end with an EOF token")
        self.tokens = tokens
        self.pos = 0
        self.depth = 0
        self.max_nesting_depth = max_nesting_depth or get_settings().max_nesting_depth

    # ====================================================================
    # Token Management
    # ====================================================================

    def current(self) -> Token:
        """Get current token."""
        return self.tokens[self.pos]

    def advance(self) -> Token:
        """Consume and return current token. EOF is never consumed."""
        token = self.current()
        if token.type is not TokenType.EOF:
            self.pos += 1
        return token

    def match(self, *types: TokenType) -> bool:
        """Check if current token matches any of the given types."""
        return self.current().type in types

    def consume_if(self, *types: TokenType) -> Optional[Token]:
        """Consume token if it matches any of the given types."""
        if self.match(*types):
            return self.advance()
        return None

    def at_end(self) -> bool:
        return self.match(TokenType.EOF)

    def expect(self, token_type: TokenType, hint: str) -> Token:
        """Consume a token of the given type or fail with a full diagnostic."""
        token = self.current()
        if token.type is not token_type:
            raise QdrawSyntaxError(
                message="Syntax error",
                line=token.line,
                column=token.column,
                expected=[describe_token_type(token_type)],
                found=describe_token(token),
                hint=self._with_suggestion(hint, token),
            )
        return self.advance()

    def error(self, message: str, token: Optional[Token] = None, *, line: Optional[int] = None,
              hint: Optional[str] = None, expected: Optional[List[str]] = None) -> QdrawSyntaxError:
        """Create a syntax error at the given token (current by default)."""
        token = token or self.current()
        return QdrawSyntaxError(
            message=message,
            line=token.line if line is None else line,
            column=token.column if line is None else None,
            expected=expected or [],
            found=describe_token(token),
            hint=self._with_suggestion(hint, token),
        )

    def _with_suggestion(self, hint: Optional[str], token: Token) -> Optional[str]:
        """Append a 'did you mean' for near-miss words."""
        if token.type is not TokenType.IDENTIFIER or not isinstance(token.value, str):
            return hint
        suggestion = suggest_word(token.value, ALL_WORDS)
        if suggestion is None:
            return hint
        note = f"Did you mean '{suggestion}'?"
        return f"{note} {hint}" if hint else note

    def unclosed_block(self, what: str, line: int) -> QdrawSyntaxError:
        return self.error(
            f"The {what} block was not closed",
            line=line,
            expected=[describe_token_type(TokenType.RBRACE)],
            hint="A closing '}' is missing at the end. Every '{' needs its matching '}'.",
        )

    # ====================================================================
    # High-Level Parsing
    # ====================================================================

    def parse(self) -> Program:
        """
        Parse the whole token stream.

        Grammar:
            Program = { MainBlock | Procedure } EOF ;
        """
        program = Program()

        while not self.at_end():
            token = self.current()
            if token.type is TokenType.PROGRAM:
                if program.main is not None:
                    raise self.error(
                        "Duplicate 'programa' block",
                        hint=(
                            f"A 'programa' block was already declared on line {program.main.line}. "
                            "Remove the duplicate block."
                        ),
                    )
                program.main = self.parse_main_block()
            elif token.type is TokenType.PROCEDURE:
                program.procedures.append(self.parse_procedure())
            else:
                raise self.error(
                    "Unexpected top-level element",
                    expected=["'programa'", "'procedimiento'"],
                    hint=(
                        "A Qdraw file holds one 'programa { ... }' block (required) "
                        "and any number of 'procedimiento name() { ... }' declarations."
                    ),
                )

        if program.main is None:
            raise self.error(
                "Missing 'programa' block",
                expected=["'programa'"],
                hint="Every Qdraw file needs a main block. Example: programa { MoverArriba }",
            )

        return program

    def parse_main_block(self) -> MainBlock:
        """
        Grammar:
            MainBlock = "programa" "{" Statements "}" ;
        """
        start = self.expect(TokenType.PROGRAM, "The file must start with 'programa'.")
        self.expect(TokenType.LBRACE, "'programa' must be followed by '{'. Example: programa { ... }")
        body = self.parse_block_body("'programa'", start.line)
        return MainBlock(body=body, line=start.line)

    def parse_procedure(self) -> Procedure:
        """
        Grammar:
            Procedure = "procedimiento" IDENTIFIER "(" ")" "{" Statements "}" ;
        """
        start = self.expect(TokenType.PROCEDURE, "Expected the word 'procedimiento'.")
        name_token = self.expect(
            TokenType.IDENTIFIER,
            "'procedimiento' must be followed by a name. Example: procedimiento drawLine() { ... }",
        )
        name = str(name_token.value)
        self.expect(
            TokenType.LPAREN,
            "Procedures take no parameters but the parentheses are required. "
            f"Example: procedimiento {name}() {{ ... }}",
        )
        self.expect(
            TokenType.RPAREN,
            f"Procedures take no parameters, close with ')'. Example: procedimiento {name}() {{ ... }}",
        )
        self.expect(
            TokenType.LBRACE,
            f"'()' must be followed by '{{' to open the body. Example: procedimiento {name}() {{ ... }}",
        )
        body = self.parse_block_body(f"procedure '{name}'", start.line)
        return Procedure(name=name, body=body, line=start.line)

    def parse_block_body(self, what: str, line: int) -> Block:
        """Parse statements up to and including the closing brace."""
        if self.depth >= self.max_nesting_depth:
            raise self.error(
                "Blocks nested too deeply",
                line=line,
                hint=(
                    f"At most {self.max_nesting_depth} blocks can be nested inside each other. "
                    "Move the inner part into a procedure and call it."
                ),
            )
        self.depth += 1
        try:
            body = self.parse_statements()
            if self.at_end():
                raise self.unclosed_block(what, line)
            self.expect(TokenType.RBRACE, f"The {what} block must be closed with '}}'.")
        finally:
            self.depth -= 1
        return body

    def parse_statements(self) -> Block:
        """
        Grammar:
            Statements = { Statement } ;

        Stops at '}' or end of input; the caller decides which is an error.
        """
        statements: List[Statement] = []
        while not self.match(TokenType.RBRACE, TokenType.EOF):
            statements.append(self.parse_statement())
        return tuple(statements)

    def parse_statement(self) -> Statement:
        token = self.current()

        if token.type in COMMAND_TOKENS:
            self.advance()
            return Command(kind=COMMAND_TOKENS[token.type], line=token.line)

        if token.type is TokenType.REPEAT:
            return self.parse_repeat()

        if token.type is TokenType.IF:
            return self.parse_if()

        if token.type is TokenType.IDENTIFIER:
            return self.parse_procedure_call()

        raise self.error(
            f"Unrecognized instruction '{describe_token(token)}'",
            hint=VALID_INSTRUCTIONS,
        )

    def parse_repeat(self) -> Repeat:
        """
        Grammar:
            Repeat = "repetir" NUMBER "veces" "{" Statements "}" ;
        """
        start = self.expect(TokenType.REPEAT, "Expected 'repetir'.")
        count = self.expect(
            TokenType.NUMBER,
            "'repetir' must be followed by a number. Example: repetir 10 veces { ... }",
        )
        self.expect(
            TokenType.TIMES,
            f"The number must be followed by 'veces'. Example: repetir {count.value} veces {{ ... }}",
        )
        self.expect(
            TokenType.LBRACE,
            f"'veces' must be followed by '{{'. Example: repetir {count.value} veces {{ MoverArriba }}",
        )
        body = self.parse_block_body("'repetir'", start.line)
        return Repeat(count=int(count.value), body=body, line=start.line)

    def parse_if(self) -> If:
        """
        Grammar:
            If = "si" "(" Sensor ")" "{" Statements "}" [ "sino" "{" Statements "}" ] ;
        """
        start = self.expect(TokenType.IF, "Expected 'si'.")
        self.expect(
            TokenType.LPAREN,
            "'si' must be followed by '(' to open the condition. Example: si (estaVacia?) { ... }",
        )
        sensor = self.parse_sensor()
        self.expect(
            TokenType.RPAREN,
            "The condition must be closed with ')'. Example: si (estaVacia?) { ... }",
        )
        self.expect(
            TokenType.LBRACE,
            "')' must be followed by '{'. Example: si (estaVacia?) { PintarRojo }",
        )
        then_body = self.parse_block_body("'si'", start.line)

        else_body: Optional[Block] = None
        if self.consume_if(TokenType.ELSE):
            self.expect(
                TokenType.LBRACE,
                "'sino' must be followed by '{'. Example: sino { PintarNegro }",
            )
            else_body = self.parse_block_body("'sino'", start.line)

        return If(sensor=sensor, then_body=then_body, else_body=else_body, line=start.line)

    def parse_sensor(self) -> Sensor:
        token = self.current()
        if token.type in SENSOR_TOKENS:
            self.advance()
            return SENSOR_TOKENS[token.type]

        raise self.error(
            f"Invalid condition '{describe_token(token)}'",
            expected=list(SENSOR_WORDS),
            hint=VALID_SENSORS,
        )

    def parse_procedure_call(self) -> ProcedureCall:
        """
        Grammar:
            Call = IDENTIFIER "(" ")" ;
        """
        name_token = self.expect(TokenType.IDENTIFIER, "Expected the name of a procedure.")
        name = str(name_token.value)
        if not self.match(TokenType.LPAREN) and suggest_word(name) is not None:
            # Misspelled command or keyword rather than a call
            raise self.error(
                f"Unrecognized instruction '{name}'",
                name_token,
                hint="Commands, keywords and sensors are case sensitive.",
            )
        self.expect(
            TokenType.LPAREN,
            f"Procedures are always called with parentheses. Example: {name}()",
        )
        self.expect(TokenType.RPAREN, f"Procedures take no parameters, close with ')'. Example: {name}()")
        return ProcedureCall(name=name, line=name_token.line)


def parse_tokens(tokens: List[Token], *, settings: Optional[QdrawSettings] = None) -> Program:
    """Parse an already tokenized source."""
    settings = settings or get_settings()
    return QdrawParser(tokens, max_nesting_depth=settings.max_nesting_depth).parse()


__all__ = [
    "QdrawParser",
    "parse_tokens",
    "describe_token",
    "describe_token_type",
    "TOKEN_DESCRIPTIONS",
]
