from __future__ import annotations
from typing import Callable, Dict, Iterable, List, Optional, TextIO, Tuple
import logging
import re
import string
import sys

from coeff import COEFF_MAX, COEFF_MIN, UINT64_MAX
from polynomial import Polynomial
from polynomial_parser import PolySyntaxError, parse_polynomial

log = logging.getLogger(__name__)

COMMENT_CHAR = "#"

_UNSIGNED_ARG = re.compile(r" ([0-9]+)")
_SIGNED_ARG = re.compile(r" (-?[0-9]+)")


class CalcError(Exception):
    """Error in a single input line; reported, then the next line is read."""

    message = "UNEXPECTED ERROR"


class WrongCommand(CalcError):
    message = "WRONG COMMAND"


class DegByWrongVariable(CalcError):
    message = "DEG BY WRONG VARIABLE"


class AtWrongValue(CalcError):
    message = "AT WRONG VALUE"


class StackUnderflow(CalcError):
    message = "STACK UNDERFLOW"


class WrongPoly(CalcError):
    message = "WRONG POLY"


class ComposeWrongParameter(CalcError):
    message = "COMPOSE WRONG PARAMETER"


def _parse_arg(rest: str, pattern: "re.Pattern[str]", error: type, lo: int, hi: int) -> int:
    m = pattern.fullmatch(rest)
    if m is None:
        raise error()
    value = int(m.group(1))
    if not lo <= value <= hi:
        raise error()
    return value


class Calculator:
    """Stack machine over polynomials driven by a line-oriented protocol.

    Lines starting with a letter are commands, empty lines and lines starting
    with ``#`` are skipped, and anything else is a polynomial pushed onto the
    stack. Results go to ``out``; errors go to ``err`` as
    ``ERROR <line> <MESSAGE>`` and leave the stack untouched.
    """

    def __init__(self, out: Optional[TextIO] = None, err: Optional[TextIO] = None) -> None:
        self.stack: List[Polynomial] = []
        self.out = out if out is not None else sys.stdout
        self.err = err if err is not None else sys.stderr
        self._commands: Dict[str, Callable[[], None]] = {
            "ZERO": self.zero,
            "IS_COEFF": self.is_coeff,
            "IS_ZERO": self.is_zero,
            "CLONE": self.clone,
            "ADD": self.add,
            "MUL": self.mul,
            "NEG": self.neg,
            "SUB": self.sub,
            "IS_EQ": self.is_eq,
            "DEG": self.deg,
            "PRINT": self.print,
            "POP": self.pop,
        }
        self._param_commands: List[Tuple[str, Callable[[str], int], Callable[[int], None]]] = [
            ("DEG_BY", self._deg_by_arg, self.deg_by),
            ("AT", self._at_arg, self.at),
            ("COMPOSE", self._compose_arg, self.compose),
        ]

    def run(self, lines: Iterable[str]) -> None:
        for line_number, line in enumerate(lines, start=1):
            self.execute(line, line_number)

    def execute(self, line: str, line_number: int) -> None:
        text = line[:-1] if line.endswith("\n") else line
        try:
            self._dispatch(text)
        except CalcError as e:
            log.debug("line %d: %s (%r)", line_number, e.message, text)
            print(f"ERROR {line_number} {e.message}", file=self.err)

    def _dispatch(self, text: str) -> None:
        if not text or text.startswith(COMMENT_CHAR):
            return
        if text[0] in string.ascii_letters:
            self._command(text)
            return
        try:
            p = parse_polynomial(text)
        except PolySyntaxError as e:
            log.debug("rejected polynomial: %s", e)
            raise WrongPoly() from e
        self.stack.append(p)

    def _command(self, text: str) -> None:
        handler = self._commands.get(text)
        if handler is not None:
            log.debug("command %s", text)
            handler()
            return
        for name, parse_arg, op in self._param_commands:
            if text.startswith(name):
                rest = text[len(name):]
                if rest and not rest[0].isspace():
                    raise WrongCommand()
                arg = parse_arg(rest)
                log.debug("command %s %d", name, arg)
                op(arg)
                return
        raise WrongCommand()

    def _deg_by_arg(self, rest: str) -> int:
        return _parse_arg(rest, _UNSIGNED_ARG, DegByWrongVariable, 0, UINT64_MAX)

    def _at_arg(self, rest: str) -> int:
        return _parse_arg(rest, _SIGNED_ARG, AtWrongValue, COEFF_MIN, COEFF_MAX)

    def _compose_arg(self, rest: str) -> int:
        return _parse_arg(rest, _UNSIGNED_ARG, ComposeWrongParameter, 0, UINT64_MAX)

    def _require(self, n: int) -> None:
        if len(self.stack) < n:
            raise StackUnderflow()

    def _top(self) -> Polynomial:
        self._require(1)
        return self.stack[-1]

    def _emit(self, value: object) -> None:
        print(value, file=self.out)

    def _emit_bool(self, value: bool) -> None:
        self._emit(1 if value else 0)

    # --- commands ---

    def zero(self) -> None:
        self.stack.append(Polynomial.zero())

    def is_coeff(self) -> None:
        self._emit_bool(self._top().is_coeff())

    def is_zero(self) -> None:
        self._emit_bool(self._top().is_zero())

    def clone(self) -> None:
        self.stack.append(self._top().clone())

    def _binary(self, op: Callable[[Polynomial, Polynomial], Polynomial]) -> None:
        self._require(2)
        p = self.stack.pop()
        q = self.stack.pop()
        self.stack.append(op(p, q))

    def add(self) -> None:
        self._binary(Polynomial.add)

    def mul(self) -> None:
        self._binary(Polynomial.mul)

    def sub(self) -> None:
        self._binary(Polynomial.sub)

    def neg(self) -> None:
        self.stack[-1] = self._top().neg()

    def is_eq(self) -> None:
        self._require(2)
        self._emit_bool(self.stack[-1].is_eq(self.stack[-2]))

    def deg(self) -> None:
        self._emit(self._top().deg())

    def deg_by(self, var_idx: int) -> None:
        self._emit(self._top().deg_by(var_idx))

    def at(self, x: int) -> None:
        self.stack[-1] = self._top().at(x)

    def print(self) -> None:
        self._emit(self._top())

    def pop(self) -> None:
        self._top()
        self.stack.pop()

    def compose(self, count: int) -> None:
        self._require(count + 1)
        p = self.stack.pop()
        if count == 0:
            substitutes: List[Polynomial] = []
        else:
            substitutes = self.stack[-count:]
            del self.stack[-count:]
        self.stack.append(p.compose(substitutes))
