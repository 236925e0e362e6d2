import pytest

from parbench.cmd import (
    CmdInput,
    Color,
    InputError,
    check_input,
    colored,
    parse_positive,
    read_input,
    to_int,
    usage_text,
)

FULL = ["-a", "2", "-b", "3", "-c", "3", "-d", "4", "-n", "2"]


def test_colored_red():
    assert colored("hi", Color.RED) == "\033[0;31mhi\033[0m"


def test_colored_green():
    assert colored("ok", Color.GREEN) == "\033[0;32mok\033[0m"


def test_colored_default_and_unknown():
    assert colored("x", Color.DEFAULT) == "\033[0mx\033[0m"
    assert colored("x", 7) == "\033[0mx\033[0m"


def test_usage_lists_flags():
    text = usage_text()
    assert "-a <lines_a>" in text
    assert "-n <number_threads>" in text
    assert text.endswith("print usage\n")


def test_to_int_valid():
    assert to_int("42") == 42
    assert to_int(" -7") == -7
    assert to_int("+5") == 5


@pytest.mark.parametrize("text", ["", "12abc", "abc", "1.5", "99999999999"])
def test_to_int_invalid(text):
    with pytest.raises(ValueError):
        to_int(text)


def test_parse_positive_missing():
    with pytest.raises(InputError, match="flag a is required"):
        parse_positive("a", None)


@pytest.mark.parametrize("value", ["0", "-3", "x"])
def test_parse_positive_not_positive(value):
    with pytest.raises(InputError, match="flag n needs to be a strictly positive integer"):
        parse_positive("n", value)


def test_parse_positive_ok():
    assert parse_positive("b", "9") == 9


def test_read_input_full():
    ci = read_input(FULL)
    assert ci == CmdInput(num_threads=2, lines_a=2, columns_a=3, lines_b=3, columns_b=4)


def test_read_input_attached_values_and_unknown_flags():
    ci = read_input(["-a2", "-x", "-b3", "stray", "-c", "3", "-d4", "-n1"])
    assert ci == CmdInput(num_threads=1, lines_a=2, columns_a=3, lines_b=3, columns_b=4)


def test_read_input_help():
    assert read_input(["-a", "2", "-h"]) is None


def test_read_input_reports_every_missing_flag():
    with pytest.raises(InputError) as info:
        read_input(["-a", "2"])
    message = str(info.value)
    assert "flag a" not in message
    for flag in "bcdn":
        assert f"flag {flag} is required" in message


def test_check_input_valid_returns_input():
    ci = read_input(FULL)
    assert check_input(ci) == ci


def test_check_input_dimension_mismatch():
    ci = CmdInput(num_threads=1, lines_a=2, columns_a=3, lines_b=4, columns_b=2)
    with pytest.raises(InputError, match="LINES_B # COLUMNS_A"):
        check_input(ci)


def test_check_input_too_large():
    ci = CmdInput(num_threads=1, lines_a=10001, columns_a=1000, lines_b=1000, columns_b=1)
    with pytest.raises(InputError, match="10e6"):
        check_input(ci)


def test_check_input_non_positive():
    ci = CmdInput(num_threads=0, lines_a=1, columns_a=1, lines_b=1, columns_b=1)
    with pytest.raises(InputError):
        check_input(ci)