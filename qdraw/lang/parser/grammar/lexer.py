"""Lexical analyzer (tokenizer) for the Qdraw language.

Converts source text into a list of tokens for parsing. Whitespace, newlines
and ``/* ... */`` comments (which may nest) are discarded.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from types import MappingProxyType
from typing import List, Mapping, Optional, Union

from qdraw.ast import CommandKind, Sensor
from qdraw.config import QdrawSettings, get_settings
from qdraw.errors import LexError
from qdraw.lang.keywords import COMMAND_WORDS, SENSOR_WORDS


class TokenType(Enum):
    """Token types for the Qdraw language."""

    # Keywords
    PROGRAM = auto()
    PROCEDURE = auto()
    IF = auto()
    ELSE = auto()
    REPEAT = auto()
    TIMES = auto()

    # Commands
    MOVE_UP = auto()
    MOVE_DOWN = auto()
    MOVE_RIGHT = auto()
    MOVE_LEFT = auto()
    PAINT_BLACK = auto()
    PAINT_RED = auto()
    PAINT_GREEN = auto()
    CLEAR = auto()

    # Sensors
    IS_EMPTY = auto()
    IS_PAINTED_BLACK = auto()
    IS_PAINTED_RED = auto()
    IS_PAINTED_GREEN = auto()

    # Punctuation
    LBRACE = auto()
    RBRACE = auto()
    LPAREN = auto()
    RPAREN = auto()

    # Literals
    NUMBER = auto()
    IDENTIFIER = auto()

    # Special
    EOF = auto()


@dataclass(frozen=True)
class Token:
    """A single token with position information."""

    type: TokenType
    value: Union[str, int, None]
    line: int
    column: int

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"


COMMAND_TOKENS: Mapping[TokenType, CommandKind] = MappingProxyType({
    TokenType[kind.name]: kind for kind in CommandKind
})

SENSOR_TOKENS: Mapping[TokenType, Sensor] = MappingProxyType({
    TokenType[sensor.name]: sensor for sensor in Sensor
})

# Exact-match classification of scanned words
KEYWORDS: Mapping[str, TokenType] = MappingProxyType({
    "programa": TokenType.PROGRAM,
    "procedimiento": TokenType.PROCEDURE,
    "si": TokenType.IF,
    "sino": TokenType.ELSE,
    "repetir": TokenType.REPEAT,
    "veces": TokenType.TIMES,
    **{word: TokenType[kind.name] for word, kind in COMMAND_WORDS.items()},
    **{word: TokenType[sensor.name] for word, sensor in SENSOR_WORDS.items()},
})

PUNCTUATION: Mapping[str, TokenType] = MappingProxyType({
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
})

VALID_CHARACTERS = (
    "letters (a-z, A-Z), digits (0-9), '_', "
    "symbols '{', '}', '(', ')' and '?' at the end of a sensor name"
)

_WHITESPACE = frozenset(" \t\r\n")


def _is_word_start(char: str) -> bool:
    return ("a" <= char <= "z") or ("A" <= char <= "Z") or char == "_"


def _is_word_char(char: str) -> bool:
    return _is_word_start(char) or ("0" <= char <= "9")


def _display_char(char: str) -> str:
    if 32 <= ord(char) <= 126:
        return char
    return f"\\u{ord(char):04x}"


class Lexer:
    """Tokenizer for Qdraw source code."""

    def __init__(self, source: str, *, settings: Optional[QdrawSettings] = None):
        self.source = source
        self.settings = settings or get_settings()
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []

    def error(self, message: str, *, line: Optional[int] = None, column: Optional[int] = None,
              hint: Optional[str] = None) -> LexError:
        """Create a lexer error at the current (or given) position."""
        return LexError(
            message=message,
            line=self.line if line is None else line,
            column=self.column if column is None else column,
            hint=hint,
        )

    def peek(self, offset: int = 0) -> Optional[str]:
        """Peek at character without consuming."""
        pos = self.pos + offset
        if pos < len(self.source):
            return self.source[pos]
        return None

    def advance(self) -> Optional[str]:
        """Consume and return current character."""
        if self.pos >= len(self.source):
            return None

        char = self.source[self.pos]
        self.pos += 1

        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1

        return char

    def skip_whitespace(self) -> None:
        """Skip spaces, tabs, carriage returns and newlines."""
        while self.peek() is not None and self.peek() in _WHITESPACE:
            self.advance()

    def skip_comment(self) -> None:
        """Skip a ``/* ... */`` comment, honouring nested comments."""
        start_line, start_column = self.line, self.column
        self.advance()  # /
        self.advance()  # *
        depth = 1

        while depth > 0:
            char = self.peek()
            if char is None:
                raise self.error(
                    "Unterminated comment",
                    line=start_line,
                    column=start_column,
                    hint="Every '/*' needs a matching '*/'. Nested comments must be closed too.",
                )
            if char == "/" and self.peek(1) == "*":
                depth += 1
                self.advance()
                self.advance()
            elif char == "*" and self.peek(1) == "/":
                depth -= 1
                self.advance()
                self.advance()
            else:
                self.advance()

    def read_number(self) -> Token:
        """Read an integer literal."""
        line, column = self.line, self.column
        chars = []
        while self.peek() is not None and self.peek().isascii() and self.peek().isdigit():
            chars.append(self.advance())
        text = "".join(chars)

        limit = self.settings.max_number_literal
        # Compare lengths first so huge digit runs never reach int()
        significant = text.lstrip("0")
        if len(significant) > len(str(limit)) or int(significant or "0") > limit:
            shown = text if len(text) <= 20 else text[:20] + "..."
            raise self.error(
                f"Number too large ({shown})",
                line=line,
                column=column,
                hint=f"Numbers cannot be greater than {limit}.",
            )
        return Token(TokenType.NUMBER, int(significant or "0"), line, column)

    def read_word(self) -> Token:
        """Read an identifier, keyword, command or sensor name."""
        line, column = self.line, self.column
        chars = []
        while self.peek() is not None and _is_word_char(self.peek()):
            chars.append(self.advance())
        if self.peek() == "?":
            chars.append(self.advance())
        word = "".join(chars)

        token_type = KEYWORDS.get(word, TokenType.IDENTIFIER)
        return Token(token_type, word, line, column)

    def tokenize(self) -> List[Token]:
        """Tokenize the entire source."""
        while True:
            self.skip_whitespace()

            char = self.peek()
            if char is None:
                break

            if char == "/" and self.peek(1) == "*":
                self.skip_comment()
                continue

            if char in PUNCTUATION:
                self.tokens.append(Token(PUNCTUATION[char], char, self.line, self.column))
                self.advance()
                continue

            if char.isascii() and char.isdigit():
                self.tokens.append(self.read_number())
                continue

            if _is_word_start(char):
                self.tokens.append(self.read_word())
                continue

            raise self.error(
                f"Unexpected character '{_display_char(char)}'",
                hint=f"Valid characters are {VALID_CHARACTERS}.",
            )

        self.tokens.append(Token(TokenType.EOF, None, self.line, self.column))
        return self.tokens


def tokenize(source: str, *, settings: Optional[QdrawSettings] = None) -> List[Token]:
    """Tokenize Qdraw source code."""
    return Lexer(source, settings=settings).tokenize()


__all__ = [
    "Token",
    "TokenType",
    "Lexer",
    "tokenize",
    "KEYWORDS",
    "COMMAND_TOKENS",
    "SENSOR_TOKENS",
    "VALID_CHARACTERS",
]
