"""Tests for the Qdraw tokenizer."""

import pytest

from qdraw.config import QdrawSettings
from qdraw.errors import LexError
from qdraw.lang.parser import TokenType, tokenize


def kinds(source):
    return [token.type for token in tokenize(source)]


def shape(source):
    """Token types and values without positions."""
    return [(token.type, token.value) for token in tokenize(source)]


class TestTokens:
    """Classification of words, numbers and punctuation."""

    def test_main_block(self):
        assert kinds("programa { MoverArriba }") == [
            TokenType.PROGRAM,
            TokenType.LBRACE,
            TokenType.MOVE_UP,
            TokenType.RBRACE,
            TokenType.EOF,
        ]

    def test_all_commands(self):
        source = "MoverArriba MoverAbajo MoverDerecha MoverIzquierda PintarNegro PintarRojo PintarVerde Limpiar"
        assert kinds(source)[:-1] == [
            TokenType.MOVE_UP,
            TokenType.MOVE_DOWN,
            TokenType.MOVE_RIGHT,
            TokenType.MOVE_LEFT,
            TokenType.PAINT_BLACK,
            TokenType.PAINT_RED,
            TokenType.PAINT_GREEN,
            TokenType.CLEAR,
        ]

    def test_sensors_keep_question_mark(self):
        tokens = tokenize("estaVacia? estaPintadaDeNegro? estaPintadaDeRojo? estaPintadaDeVerde?")
        assert [t.type for t in tokens[:-1]] == [
            TokenType.IS_EMPTY,
            TokenType.IS_PAINTED_BLACK,
            TokenType.IS_PAINTED_RED,
            TokenType.IS_PAINTED_GREEN,
        ]
        assert tokens[0].value == "estaVacia?"

    def test_unknown_word_is_identifier(self):
        tokens = tokenize("dibujarCuadrado foo? _x1")
        assert [t.type for t in tokens[:-1]] == [TokenType.IDENTIFIER] * 3
        assert [t.value for t in tokens[:-1]] == ["dibujarCuadrado", "foo?", "_x1"]

    def test_keywords_are_case_sensitive(self):
        assert kinds("Programa moverarriba")[:-1] == [TokenType.IDENTIFIER, TokenType.IDENTIFIER]

    def test_number_value(self):
        tokens = tokenize("repetir 42 veces")
        assert tokens[1].type is TokenType.NUMBER
        assert tokens[1].value == 42

    def test_empty_source_has_only_eof(self):
        tokens = tokenize("")
        assert len(tokens) == 1
        assert tokens[0].type is TokenType.EOF
        assert (tokens[0].line, tokens[0].column) == (1, 1)


class TestPositions:
    """Line and column tracking."""

    def test_line_and_column(self):
        tokens = tokenize("programa {\n  PintarRojo\n}")
        paint = tokens[2]
        assert paint.type is TokenType.PAINT_RED
        assert (paint.line, paint.column) == (2, 3)
        assert (tokens[3].line, tokens[3].column) == (3, 1)

    def test_tabs_and_carriage_returns_are_whitespace(self):
        assert kinds("programa\t{\r\n}") == [
            TokenType.PROGRAM,
            TokenType.LBRACE,
            TokenType.RBRACE,
            TokenType.EOF,
        ]

    def test_comments_advance_lines(self):
        tokens = tokenize("/* one\ntwo\nthree */ programa")
        assert tokens[0].line == 3


class TestComments:
    """Nested block comments."""

    def test_comment_is_discarded(self):
        assert shape("programa /* hola */ { }") == shape("programa { }")

    def test_nested_comments_are_discarded(self):
        assert shape("programa /* a /* b */ c */ { MoverArriba }") == shape("programa { MoverArriba }")

    def test_deeply_nested(self):
        assert shape("/* /* /* x */ */ */ Limpiar") == shape("Limpiar")

    def test_unterminated_comment_reports_opening_line(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("programa {\n  /* a /* b */\n  MoverArriba\n}")

        error = exc_info.value
        assert error.line == 2
        assert "Unterminated comment" in str(error)
        assert str(error).startswith("Line 2:")

    def test_unterminated_simple_comment(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("/* never closed")
        assert exc_info.value.line == 1


class TestNumbers:
    """Numeric literal limits."""

    def test_limit_is_accepted(self):
        assert tokenize("1000000")[0].value == 1_000_000

    def test_above_limit_fails(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("programa {\n repetir 1000001 veces { }\n}")
        assert exc_info.value.line == 2
        assert "Number too large" in str(exc_info.value)

    def test_leading_zeros(self):
        assert tokenize("0001000000")[0].value == 1_000_000

    def test_huge_literal_does_not_crash(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("9" * 5000)
        assert "Number too large" in exc_info.value.message

    def test_long_zero_padded_literal(self):
        assert tokenize("0" * 5000 + "7")[0].value == 7

    def test_limit_comes_from_settings(self):
        settings = QdrawSettings(max_number_literal=10)
        assert tokenize("10", settings=settings)[0].value == 10
        with pytest.raises(LexError):
            tokenize("11", settings=settings)


class TestInvalidCharacters:
    """Characters outside the language."""

    def test_names_the_character(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("programa {\n  # \n}")

        error = exc_info.value
        assert error.line == 2
        assert error.column == 3
        assert "Unexpected character '#'" in str(error)
        assert "Valid characters" in str(error)

    def test_non_printable_is_escaped(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("programa \x01")
        assert "\\u0001" in str(exc_info.value)

    def test_non_ascii_letter_is_escaped(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("pintarMarrón")
        assert "\\u00f3" in str(exc_info.value)

    def test_lone_slash(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("programa / { }")
        assert "'/'" in str(exc_info.value)

    def test_question_mark_alone(self):
        with pytest.raises(LexError):
            tokenize("?")
