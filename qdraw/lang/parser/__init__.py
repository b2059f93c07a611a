"""Qdraw parser package.

Public API:
    parse_program(source) -> Program
    QdrawParser - The recursive descent parser
    tokenize(source) -> List[Token]

Error types:
    LexError, QdrawSyntaxError
"""

from typing import Optional

from qdraw.ast import Program
from qdraw.config import QdrawSettings
from qdraw.errors import LexError, QdrawSyntaxError

from .grammar.lexer import Lexer, Token, TokenType, tokenize
from .parse import QdrawParser, parse_tokens


def parse_program(source: str, *, settings: Optional[QdrawSettings] = None) -> Program:
    """
    Lex and parse Qdraw source code into a Program AST.

    Args:
        source: Qdraw source code
        settings: Optional settings (the number literal and nesting caps are read from them)

    Returns:
        Program with exactly one main block

    Raises:
        LexError: If the text cannot be tokenized
        QdrawSyntaxError: If the tokens do not form a valid program

    Example:
        ```python
        program = parse_program("programa { repetir 4 veces { PintarRojo MoverDerecha } }")
        print(len(program.main.body))  # 1
        ```
    """
    return parse_tokens(tokenize(source, settings=settings), settings=settings)


__all__ = [
    "parse_program",
    "parse_tokens",
    "QdrawParser",
    "Lexer",
    "Token",
    "TokenType",
    "tokenize",
    "LexError",
    "QdrawSyntaxError",
]
