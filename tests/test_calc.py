"""Tests for the line-oriented stack calculator."""

import io
import logging

import pytest

from calc import Calculator
from polynomial import Polynomial

from .util import C, S, x


def run(script):
    out, err = io.StringIO(), io.StringIO()
    calc = Calculator(out=out, err=err)
    calc.run(io.StringIO(script))
    return out.getvalue(), err.getvalue(), calc


class TestCommands:
    def test_add_and_print(self):
        out, err, calc = run("1\n2\nADD\nPRINT\n")
        assert out == "3\n"
        assert err == ""
        assert calc.stack == [C(3)]

    def test_zero(self):
        out, _, calc = run("ZERO\nPRINT\nIS_ZERO\nIS_COEFF\n")
        assert out == "0\n1\n1\n"
        assert calc.stack == [Polynomial.zero()]

    def test_is_coeff_and_is_zero_on_sum(self):
        out, _, _ = run("(1,1)\nIS_COEFF\nIS_ZERO\n")
        assert out == "0\n0\n"

    def test_clone(self):
        _, _, calc = run("(1,1)\nCLONE\n")
        assert calc.stack == [x(0), x(0)]
        assert calc.stack[0] is not calc.stack[1]

    def test_mul(self):
        out, _, _ = run("(1,2)\n(1,3)\nMUL\nPRINT\n")
        assert out == "(1,5)\n"

    def test_neg(self):
        out, _, _ = run("(1,1)+(-2,0)\nNEG\nPRINT\n")
        assert out == "(2,0)+(-1,1)\n"

    def test_sub_uses_top_minus_below(self):
        out, _, calc = run("(1,1)\n5\nSUB\nPRINT\n")
        assert out == "(5,0)+(-1,1)\n"
        assert len(calc.stack) == 1

    def test_is_eq_keeps_operands(self):
        out, _, calc = run("(1,1)\n(1,1)\nIS_EQ\n2\nIS_EQ\n")
        assert out == "1\n0\n"
        assert calc.stack == [x(0), x(0), C(2)]

    def test_deg_and_deg_by(self):
        out, _, _ = run("((1,3),2)+(1,4)\nDEG\nDEG_BY 0\nDEG_BY 1\nDEG_BY 2\nZERO\nDEG\nDEG_BY 5\n")
        assert out == "5\n4\n3\n0\n-1\n-1\n"

    def test_deg_by_max_index(self):
        out, err, _ = run("(1,1)\nDEG_BY 18446744073709551615\n")
        assert out == "0\n"
        assert err == ""

    def test_at(self):
        out, _, calc = run("(1,0)+(1,2)\nAT 3\nPRINT\n((1,1),0)+(1,1)\nAT -2\nPRINT\n")
        assert out == "10\n(-2,0)+(1,1)\n"
        assert len(calc.stack) == 2

    def test_at_extreme_values(self):
        out, err, _ = run("(1,1)\nAT -9223372036854775808\nPRINT\n(1,1)\nAT 9223372036854775807\nPRINT\n")
        assert out == "-9223372036854775808\n9223372036854775807\n"
        assert err == ""

    def test_pop(self):
        _, _, calc = run("1\n2\nPOP\n")
        assert calc.stack == [C(1)]

    def test_compose_order(self):
        # q0 = 2 is deepest, q1 = 3 sits just below p = x0
        out, _, calc = run("2\n3\n(1,1)\nCOMPOSE 2\nPRINT\n")
        assert out == "2\n"
        assert len(calc.stack) == 1

    def test_compose_two_variables(self):
        out, _, _ = run("(1,1)\n(1,2)\n((1,1),1)\nCOMPOSE 2\nPRINT\n")
        assert out == "(1,3)\n"

    def test_compose_zero(self):
        out, _, calc = run("7\n(1,1)+(4,0)\nCOMPOSE 0\nPRINT\n")
        assert out == "4\n"
        assert calc.stack == [C(7), C(4)]

    def test_comments_and_blank_lines(self):
        out, err, calc = run("# a comment\n\n1\n#PRINT\nPRINT\n")
        assert out == "1\n"
        assert err == ""
        assert calc.stack == [C(1)]

    def test_last_line_without_newline(self):
        out, _, _ = run("1\nPRINT")
        assert out == "1\n"

    def test_polynomial_is_canonicalized(self):
        out, _, _ = run("(2,3)+(1,1)+(-2,3)\nPRINT\n")
        assert out == "(1,1)\n"

    def test_execute_single_line(self):
        out, err = io.StringIO(), io.StringIO()
        calc = Calculator(out=out, err=err)
        calc.execute("((1,1),0)\n", 1)
        calc.execute("PRINT\n", 2)
        assert out.getvalue() == "((1,1),0)\n"
        assert calc.stack == [x(1)]


class TestErrors:
    @pytest.mark.parametrize(
        "line,message",
        [
            ("FOO", "WRONG COMMAND"),
            ("add", "WRONG COMMAND"),
            ("ADD ", "WRONG COMMAND"),
            ("PRINTX", "WRONG COMMAND"),
            ("DEG 1", "WRONG COMMAND"),
            ("DEG_BYX", "WRONG COMMAND"),
            ("ATX", "WRONG COMMAND"),
            ("COMPOSEX", "WRONG COMMAND"),
            ("DEG_BY", "DEG BY WRONG VARIABLE"),
            ("DEG_BY -1", "DEG BY WRONG VARIABLE"),
            ("DEG_BY a", "DEG BY WRONG VARIABLE"),
            ("DEG_BY 1 ", "DEG BY WRONG VARIABLE"),
            ("DEG_BY  1", "DEG BY WRONG VARIABLE"),
            ("DEG_BY\t1", "DEG BY WRONG VARIABLE"),
            ("DEG_BY 18446744073709551616", "DEG BY WRONG VARIABLE"),
            ("AT", "AT WRONG VALUE"),
            ("AT -", "AT WRONG VALUE"),
            ("AT 1x", "AT WRONG VALUE"),
            ("AT +1", "AT WRONG VALUE"),
            ("AT 9223372036854775808", "AT WRONG VALUE"),
            ("AT -9223372036854775809", "AT WRONG VALUE"),
            ("COMPOSE", "COMPOSE WRONG PARAMETER"),
            ("COMPOSE -1", "COMPOSE WRONG PARAMETER"),
            ("COMPOSE 18446744073709551616", "COMPOSE WRONG PARAMETER"),
            ("(1,2", "WRONG POLY"),
            (" 1", "WRONG POLY"),
            ("1 2", "WRONG POLY"),
            ("(1,2)+", "WRONG POLY"),
            ("99999999999999999999", "WRONG POLY"),
        ],
    )
    def test_messages(self, line, message):
        out, err, calc = run(line + "\n")
        assert out == ""
        assert err == f"ERROR 1 {message}\n"
        assert calc.stack == []

    @pytest.mark.parametrize("command", ["IS_COEFF", "IS_ZERO", "CLONE", "NEG", "DEG", "PRINT", "POP", "DEG_BY 0", "AT 1", "COMPOSE 0"])
    def test_unary_underflow(self, command):
        out, err, calc = run(command + "\n")
        assert out == ""
        assert err == "ERROR 1 STACK UNDERFLOW\n"
        assert calc.stack == []

    @pytest.mark.parametrize("command", ["ADD", "MUL", "SUB", "IS_EQ", "COMPOSE 1"])
    def test_binary_underflow_keeps_stack(self, command):
        out, err, calc = run("(1,1)\n" + command + "\nPRINT\n")
        assert out == "(1,1)\n"
        assert err == "ERROR 2 STACK UNDERFLOW\n"
        assert calc.stack == [x(0)]

    def test_compose_underflow_keeps_stack(self):
        _, err, calc = run("1\n2\nCOMPOSE 2\n")
        assert err == "ERROR 3 STACK UNDERFLOW\n"
        assert calc.stack == [C(1), C(2)]

    def test_parameter_checked_before_stack(self):
        _, err, _ = run("AT z\nDEG_BY q\nCOMPOSE w\n")
        assert err == "ERROR 1 AT WRONG VALUE\nERROR 2 DEG BY WRONG VARIABLE\nERROR 3 COMPOSE WRONG PARAMETER\n"

    def test_line_numbers_count_every_line(self):
        out, err, calc = run("# comment\n\nPOP\n1\nBAD\nPRINT\n")
        assert out == "1\n"
        assert err == "ERROR 3 STACK UNDERFLOW\nERROR 5 WRONG COMMAND\n"
        assert calc.stack == [C(1)]

    def test_errors_logged(self, caplog):
        caplog.set_level(logging.DEBUG, logger="calc")
        run("FOO\n")
        assert any("WRONG COMMAND" in r.getMessage() for r in caplog.records)


class TestSession:
    def test_longer_script(self):
        script = "\n".join([
            "(1,1)",            # x0
            "CLONE",
            "MUL",              # x0^2
            "((1,1),0)",        # x1
            "ADD",              # x1 + x0^2
            "PRINT",
            "DEG",
            "CLONE",
            "AT 2",             # x0 + 4
            "PRINT",
            "IS_EQ",
            "POP",
            "NEG",
            "PRINT",
            "",
        ])
        out, err, calc = run(script)
        assert err == ""
        assert out == "((1,1),0)+(1,2)\n2\n(4,0)+(1,1)\n0\n((-1,1),0)+(-1,2)\n"
        assert calc.stack == [S((S((-1, 1)), 0), (-1, 2))]
