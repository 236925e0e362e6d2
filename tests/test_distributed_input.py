import pytest

from parbench.cmd import InputError, check_input
from parbench.distributed_input import DistributedInput, read_distributed_input, result_correct
from parbench.matrix_util import flatten

ARGV = ["-a", "2", "-b", "3", "-c", "3", "-d", "4", "-n", "5"]


def test_reads_every_flag_and_machine_count():
    ci = read_distributed_input(ARGV, 4)
    assert ci == DistributedInput(
        num_machines=4, num_threads=5, lines_a=2, columns_a=3, lines_b=3, columns_b=4
    )


def test_help_returns_none():
    assert read_distributed_input(["-h"], 2) is None


def test_missing_flag_raises():
    with pytest.raises(InputError, match="flag d is required"):
        read_distributed_input(["-a", "2", "-b", "3", "-c", "3", "-n", "1"], 2)


def test_non_positive_flag_raises():
    with pytest.raises(InputError, match="flag a"):
        read_distributed_input(["-a", "0", "-b", "3", "-c", "3", "-d", "4", "-n", "1"], 2)


def test_world_size_must_be_positive():
    with pytest.raises(ValueError):
        read_distributed_input(ARGV, 0)


def test_command_view_passes_check():
    ci = read_distributed_input(ARGV, 3)
    command = check_input(ci.command)
    assert (command.lines_a, command.columns_a, command.lines_b, command.columns_b) == (
        ci.lines_a,
        ci.columns_a,
        ci.lines_b,
        ci.columns_b,
    )
    assert command.num_threads == ci.num_threads


def test_dimension_mismatch_detected_through_command():
    ci = read_distributed_input(["-a", "2", "-b", "3", "-c", "4", "-d", "4", "-n", "1"], 1)
    with pytest.raises(InputError, match="LINES_B # COLUMNS_A"):
        check_input(ci.command)


def test_result_correct_on_equal_values(capsys):
    matrix = [[1, 2, 3], [4, 5, 6]]
    assert result_correct(2, 3, flatten(matrix), matrix) is True
    assert capsys.readouterr().out == ""


def test_result_correct_reports_difference(capsys):
    matrix = [[1, 2], [3, 4]]
    flat = flatten(matrix)
    flat[2] = 9
    assert result_correct(2, 2, flat, matrix) is False
    out = capsys.readouterr().out
    assert "Found no equal cell: (1,0)" in out
    assert out.count("\n") == 1


def test_result_correct_rejects_wrong_length():
    with pytest.raises(ValueError):
        result_correct(2, 2, [1, 2, 3], [[1, 2], [3, 4]])