from unittest import mock

import pytest

from statusblocks.errors import BlockError
from statusblocks.taskwarrior import (
    DEFAULT_FILTERS,
    TaskFilter,
    cycle_filters,
    get_number_of_tasks,
    parse_task_count,
    task_state,
)
from statusblocks.temperature import State


def test_parse_task_count_trims_whitespace():
    assert parse_task_count(b"12\n") == 12
    assert parse_task_count("  7 ") == 7


@pytest.mark.parametrize("output", [b"abc", b"-1", b"", b"4294967296"])
def test_parse_task_count_rejects_garbage(output):
    with pytest.raises(BlockError) as info:
        parse_task_count(output)
    assert info.value.message == "could not parse the result of taskwarrior"


def test_parse_task_count_rejects_invalid_utf8():
    with pytest.raises(BlockError) as info:
        parse_task_count(b"\xff")
    assert "invalid UTF-8" in info.value.message


@pytest.mark.parametrize(
    "count, expected",
    [(0, State.IDLE), (9, State.IDLE), (10, State.WARNING), (19, State.WARNING), (20, State.CRITICAL)],
)
def test_task_state_uses_default_thresholds(count, expected):
    assert task_state(count) is expected


def test_task_state_custom_thresholds():
    assert task_state(3, warning_threshold=2, critical_threshold=3) is State.CRITICAL
    assert task_state(2, warning_threshold=2, critical_threshold=3) is State.WARNING


def test_cycle_filters_wraps_around():
    filters = [TaskFilter("a", "+A"), TaskFilter("b", "+B")]
    it = cycle_filters(filters)
    assert [next(it).name for _ in range(5)] == ["a", "b", "a", "b", "a"]


def test_cycle_filters_empty_raises():
    with pytest.raises(BlockError) as info:
        cycle_filters([])
    assert info.value.message == "`filters` is empty"


def test_default_filter_cycle_starts_with_pending():
    assert next(cycle_filters(DEFAULT_FILTERS)).filter == "-COMPLETED -DELETED"


def test_get_number_of_tasks_runs_task():
    with mock.patch(
        "statusblocks.taskwarrior.subprocess.run",
        return_value=mock.Mock(stdout=b"7\n"),
    ) as run:
        assert get_number_of_tasks("+PENDING") == 7
    assert run.call_args.args[0] == ["task", "rc.gc=off", "+PENDING", "count"]


def test_get_number_of_tasks_missing_binary_raises():
    with mock.patch(
        "statusblocks.taskwarrior.subprocess.run", side_effect=FileNotFoundError("task")
    ):
        with pytest.raises(BlockError) as info:
            get_number_of_tasks("+PENDING")
    assert "failed to run taskwarrior" in info.value.message