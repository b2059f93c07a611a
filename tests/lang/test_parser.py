"""Tests for the Qdraw parser and its diagnostics."""

import pytest

from qdraw.ast import Command, CommandKind, If, ProcedureCall, Repeat, Sensor
from qdraw.errors import QdrawSyntaxError, extract_line
from qdraw.lang.parser import QdrawParser, parse_program, tokenize


def parse_error(source):
    with pytest.raises(QdrawSyntaxError) as exc_info:
        parse_program(source)
    return exc_info.value


class TestValidPrograms:
    """Programs that parse into the expected tree."""

    def test_empty_main_block(self):
        program = parse_program("programa { }")
        assert program.main is not None
        assert program.main.body == ()
        assert program.procedures == []

    def test_repeat(self):
        program = parse_program("programa { repetir 5 veces { PintarRojo MoverDerecha } }")
        (loop,) = program.main.body
        assert isinstance(loop, Repeat)
        assert loop.count == 5
        assert loop.body == (
            Command(CommandKind.PAINT_RED, line=1),
            Command(CommandKind.MOVE_RIGHT, line=1),
        )

    def test_procedures_and_calls(self):
        source = "procedimiento linea() {\n  MoverDerecha\n}\nprograma {\n  linea()\n}"
        program = parse_program(source)

        assert program.procedure_names == ["linea"]
        assert program.procedures[0].line == 1
        assert program.main.line == 4
        assert program.main.body == (ProcedureCall("linea", line=5),)

    def test_procedure_after_main(self):
        program = parse_program("programa { a() } procedimiento a() { Limpiar }")
        assert program.procedure_names == ["a"]

    def test_if_else(self):
        program = parse_program("programa { si (estaVacia?) { PintarVerde } sino { Limpiar } }")
        (stmt,) = program.main.body
        assert isinstance(stmt, If)
        assert stmt.sensor is Sensor.IS_EMPTY
        assert stmt.then_body == (Command(CommandKind.PAINT_GREEN, line=1),)
        assert stmt.else_body == (Command(CommandKind.CLEAR, line=1),)

    def test_if_without_else(self):
        program = parse_program("programa { si (estaPintadaDeRojo?) { MoverArriba } }")
        (stmt,) = program.main.body
        assert stmt.sensor is Sensor.IS_PAINTED_RED
        assert stmt.else_body is None

    def test_nested_blocks(self):
        source = "programa {\n repetir 2 veces {\n  si (estaVacia?) {\n   repetir 3 veces { PintarNegro }\n  }\n }\n}"
        program = parse_program(source)
        outer = program.main.body[0]
        inner_if = outer.body[0]
        assert inner_if.line == 3
        assert inner_if.then_body[0].count == 3

    def test_duplicate_procedure_names_parse(self):
        program = parse_program("procedimiento a() { } procedimiento a() { } programa { }")
        assert program.procedure_names == ["a", "a"]

    def test_parser_requires_eof_token(self):
        tokens = tokenize("programa { }")
        with pytest.raises(ValueError):
            QdrawParser(tokens[:-1])


class TestTopLevelErrors:
    """Program-level structure errors."""

    def test_missing_main_block(self):
        error = parse_error("procedimiento a() { MoverArriba }")
        assert "Missing 'programa' block" in str(error)
        assert "Example: programa {" in str(error)

    def test_empty_source(self):
        error = parse_error("")
        assert "Missing 'programa' block" in error.message

    def test_duplicate_main_block(self):
        error = parse_error("programa { }\nprograma { }")
        assert error.line == 2
        assert "Duplicate 'programa' block" in str(error)
        assert "line 1" in str(error)

    def test_unexpected_top_level_element(self):
        error = parse_error("MoverArriba\nprograma { }")
        assert error.line == 1
        assert "Unexpected top-level element" in str(error)
        assert "Found: 'MoverArriba'" in str(error)

    def test_misspelled_program_keyword(self):
        error = parse_error("Programa { }")
        assert "Did you mean 'programa'?" in str(error)


class TestUnclosedBlocks:
    """Unclosed blocks are reported at their opening line."""

    def test_main_block(self):
        error = parse_error("programa {\n  MoverArriba\n  MoverAbajo\n")
        assert error.line == 1
        assert "'programa' block was not closed" in str(error)
        assert "Found: 'end of file'" in str(error)

    def test_inner_repeat(self):
        error = parse_error("programa {\n repetir 2 veces {\n  MoverArriba\n")
        assert error.line == 2
        assert "'repetir' block was not closed" in str(error)

    def test_outer_block_when_inner_closed(self):
        error = parse_error("programa {\n repetir 2 veces {\n  MoverArriba\n }\n")
        assert error.line == 1

    def test_procedure(self):
        error = parse_error("programa { }\nprocedimiento dibujar() {\n  PintarRojo\n")
        assert error.line == 2
        assert "procedure 'dibujar'" in str(error)

    def test_if_and_else(self):
        assert parse_error("programa {\n si (estaVacia?) {\n").line == 2
        error = parse_error("programa {\n si (estaVacia?) { } sino {\n PintarRojo\n")
        assert "'sino' block was not closed" in str(error)
        assert error.line == 2


class TestExpectDiagnostics:
    """Every expect() failure carries expected, found and an example."""

    def test_missing_times(self):
        error = parse_error("programa { repetir 5 { MoverArriba } }")
        text = str(error)
        assert "Expected: 'veces'" in text
        assert "Found: '{'" in text
        assert "Example: repetir 5 veces" in text
        assert error.expected == ["'veces'"]
        assert error.found == "{"

    def test_missing_count(self):
        error = parse_error("programa { repetir veces { } }")
        assert "Expected: number" in str(error)
        assert "Found: 'veces'" in str(error)

    def test_misspelled_times(self):
        error = parse_error("programa { repetir 3 vece { } }")
        assert "Did you mean 'veces'?" in str(error)

    def test_procedure_without_parentheses(self):
        error = parse_error("procedimiento a { }\nprograma { }")
        assert "Expected: '(' (opening parenthesis)" in str(error)
        assert "procedimiento a()" in str(error)

    def test_procedure_without_name(self):
        error = parse_error("procedimiento () { }")
        assert "Expected: procedure name" in str(error)

    def test_call_without_parentheses(self):
        error = parse_error("procedimiento dibujar() { }\nprograma {\n  dibujar\n}")
        assert error.line == 4
        assert "Example: dibujar()" in str(error)

    def test_program_without_brace(self):
        error = parse_error("programa MoverArriba }")
        assert "Expected: '{' (opening brace)" in str(error)
        assert "Found: 'MoverArriba'" in str(error)

    def test_condition_without_parentheses(self):
        error = parse_error("programa { si estaVacia? { } }")
        assert "Expected: '(' (opening parenthesis)" in str(error)
        assert "si (estaVacia?)" in str(error)

    def test_rendered_line_round_trip(self):
        error = parse_error("programa {\n\n  repetir 5 { }\n}")
        assert extract_line(str(error)) == error.line == 3


class TestStatementErrors:
    """Unrecognized statements and conditions."""

    def test_unrecognized_statement_lists_instructions(self):
        error = parse_error("programa { veces }")
        text = str(error)
        assert "Unrecognized instruction 'veces'" in text
        assert "Movement: MoverArriba" in text
        assert "Painting: PintarNegro" in text

    def test_else_without_if(self):
        error = parse_error("programa { sino { } }")
        assert "Unrecognized instruction 'sino'" in str(error)

    def test_misspelled_command(self):
        error = parse_error("programa {\n  Moverarriba\n}")
        assert error.line == 2
        assert "Unrecognized instruction 'Moverarriba'" in str(error)
        assert "Did you mean 'MoverArriba'?" in str(error)

    def test_invalid_sensor(self):
        error = parse_error("programa { si (MoverArriba) { } }")
        text = str(error)
        assert "Invalid condition 'MoverArriba'" in text
        assert "estaVacia?" in text
        assert "estaPintadaDeVerde?" in text

    def test_sensor_without_question_mark(self):
        error = parse_error("programa { si (estaVacia) { } }")
        assert "Did you mean 'estaVacia?'?" in str(error)

    def test_number_as_statement(self):
        error = parse_error("programa { 5 }")
        assert "Unrecognized instruction '5'" in str(error)


def nested_ifs(depth):
    return "programa { " + "si (estaVacia?) { " * depth + "PintarRojo" + " }" * depth + " }"


class TestNesting:
    """Block nesting is capped before Python's own stack runs out."""

    def test_nesting_up_to_the_limit(self):
        program = parse_program(nested_ifs(99))
        inner = program.main.body[0]
        for _ in range(98):
            inner = inner.then_body[0]
        assert inner.then_body == (Command(CommandKind.PAINT_RED, line=1),)

    @pytest.mark.parametrize("depth", [100, 400])
    def test_too_deep(self, depth):
        error = parse_error(nested_ifs(depth))
        assert error.message == "Blocks nested too deeply"
        assert "At most 100 blocks" in error.hint

    def test_error_points_at_the_opening_line(self):
        source = (
            "programa {\n"
            "  si (estaVacia?) {\n"
            "    repetir 2 veces {\n"
            "      si (estaVacia?) {\n"
            "        PintarRojo\n"
            "      }\n"
            "    }\n"
            "  }\n"
            "}"
        )
        with pytest.raises(QdrawSyntaxError) as exc_info:
            QdrawParser(tokenize(source), max_nesting_depth=3).parse()
        assert exc_info.value.line == 4

        assert QdrawParser(tokenize(source), max_nesting_depth=4).parse().main is not None

    def test_sibling_blocks_do_not_accumulate(self):
        source = "programa { " + "repetir 2 veces { PintarRojo } " * 10 + "}"
        program = QdrawParser(tokenize(source), max_nesting_depth=2).parse()
        assert len(program.main.body) == 10
