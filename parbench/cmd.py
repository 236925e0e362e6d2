"""Command-line input of the matrix multiplication benchmark."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from enum import IntEnum

MAX_DIMENSION = 10e6

_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1
_INTEGER = re.compile(r"[ \t\n\v\f\r]*[+-]?[0-9]+")
_RESET = "\033[0m"

# Flags taking a value, in the order they are checked and reported.
_FLAGS = {
    "a": "lines_a",
    "b": "columns_a",
    "c": "lines_b",
    "d": "columns_b",
    "n": "num_threads",
}

_USAGE = (
    "Multmat project for matrix multiplication benchmarking of different solvers.\n"
    "Usage :\n"
    "-a <lines_a>\t\tlines for matrix A\n"
    "-b <columns_a>\t\tcolumns for matrix A\n"
    "-c <lines_b>\t\tlines for matrix B\n"
    "-d <columns_b>\t\tcolumns for matrix\n"
    "-n <number_threads>\tnumber of threads to launch parallel solvers with\n"
    "-h\t\t\tprint usage\n"
)


class Color(IntEnum):
    """Terminal colours used for messages."""

    DEFAULT = 0
    RED = 1
    GREEN = 2

    @property
    def code(self) -> str:
        return {Color.RED: "\033[0;31m", Color.GREEN: "\033[0;32m"}.get(self, _RESET)


class InputError(ValueError):
    """Raised when the command-line input is missing or inconsistent."""


@dataclass(frozen=True)
class CmdInput:
    """Dimensions of both matrices and the number of threads to use."""

    num_threads: int
    lines_a: int
    columns_a: int
    lines_b: int
    columns_b: int


def colored(text: str, color: Color | int) -> str:
    """Wrap text in the escape sequence of a colour, resetting afterwards."""
    try:
        code = Color(color).code
    except ValueError:
        code = _RESET
    return f"{code}{text}{_RESET}"


def usage_text() -> str:
    """The help text of the benchmark command."""
    return _USAGE


def to_int(text: str) -> int:
    """Parse a whole decimal integer, optionally signed and led by blanks."""
    if not _INTEGER.fullmatch(text):
        raise ValueError(f"not an integer: {text!r}")
    value = int(text)
    if not _INT_MIN <= value <= _INT_MAX:
        raise ValueError(f"integer out of range: {text!r}")
    return value


def parse_positive(flag: str, value: str | None) -> int:
    """Return the strictly positive integer given to a flag."""
    if value is None:
        raise InputError(f"ERROR: flag {flag} is required.")
    try:
        number = to_int(value)
    except ValueError:
        number = -1
    if number <= 0:
        raise InputError(f"ERROR: flag {flag} needs to be a strictly positive integer.")
    return number


def _scan(argv: Sequence[str]) -> dict[str, str] | None:
    """Collect flag values; None when help is asked for. Unknown flags are ignored."""
    values: dict[str, str] = {}
    args = iter(argv)
    for arg in args:
        if arg == "--":
            break
        if not arg.startswith("-") or arg == "-":
            continue
        cluster = arg[1:]
        while cluster:
            flag, cluster = cluster[0], cluster[1:]
            if flag == "h":
                return None
            if flag in _FLAGS:
                value = cluster if cluster else next(args, None)
                if value is not None:
                    values[flag] = value
                break
    return values


def read_input(argv: Sequence[str]) -> CmdInput | None:
    """Read the flags of a command line; None when -h asks for the usage text."""
    values = _scan(argv)
    if values is None:
        return None
    parsed: dict[str, int] = {}
    errors: list[str] = []
    for flag, field in _FLAGS.items():
        try:
            parsed[field] = parse_positive(flag, values.get(flag))
        except InputError as exc:
            errors.append(str(exc))
    if errors:
        raise InputError("\n".join(errors))
    return CmdInput(**parsed)


def check_input(ci: CmdInput) -> CmdInput:
    """Validate the dimensions of an input and return it unchanged."""
    dims = (ci.lines_a, ci.columns_a, ci.lines_b, ci.columns_b)
    if ci.num_threads <= 0 or any(d <= 0 for d in dims):
        raise InputError("ERROR: every dimension and the thread count must be strictly positive.")
    shape = f"A: {ci.lines_a} x {ci.columns_a}, B: {ci.lines_b} x {ci.columns_b}."
    if ci.columns_a != ci.lines_b:
        raise InputError(f"ERROR: LINES_B # COLUMNS_A. {shape}")
    if ci.lines_a * ci.columns_a > MAX_DIMENSION or ci.lines_b * ci.columns_b > MAX_DIMENSION:
        raise InputError(f"ERROR: LINES * COLUMNS > 10e6. {shape}")
    return ci