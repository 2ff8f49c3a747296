from dataclasses import dataclass, field
from typing import Any, Optional

import pytest

from taskkit.uptodate import is_task_up_to_date


@dataclass
class FakeTask:
    task: str = "t"
    dir: str = ""
    status: list[str] = field(default_factory=list)
    sources: list[Any] = field(default_factory=list)
    env: Optional[Any] = None


class FakeChecker:
    def __init__(self, result: Optional[bool] = None) -> None:
        self.result = result
        self.calls = 0

    def is_up_to_date(self, task):
        if self.result is None:
            raise AssertionError("unexpected call")
        self.calls += 1
        return self.result


@pytest.mark.parametrize(
    "status, sources, expected",
    [
        (None, None, False),
        (None, True, True),
        (None, False, False),
        (True, None, True),
        (True, True, True),
        (True, False, False),
        (False, None, False),
        (False, True, False),
        (False, False, False),
    ],
)
def test_truth_table(status, sources, expected):
    task = FakeTask(
        status=["status"] if status is not None else [],
        sources=["sources"] if sources is not None else [],
    )
    status_checker = FakeChecker(status)
    sources_checker = FakeChecker(sources)
    result = is_task_up_to_date(
        task, status_checker=status_checker, sources_checker=sources_checker
    )
    assert result is expected
    assert status_checker.calls == (1 if status is not None else 0)
    assert sources_checker.calls == (1 if sources is not None else 0)


def test_default_checkers_with_none_method():
    assert is_task_up_to_date(FakeTask(sources=["*.x"]), method="none") is False


def test_default_status_checker_runs_commands():
    assert is_task_up_to_date(FakeTask(status=["true"])) is True
    assert is_task_up_to_date(FakeTask(status=["false"])) is False


def test_invalid_method():
    with pytest.raises(ValueError, match="invalid method"):
        is_task_up_to_date(FakeTask(), method="bogus")