import io
from dataclasses import dataclass, field
from typing import Any, Optional

from taskkit.logger import Logger
from taskkit.status import StatusChecker


@dataclass
class FakeTask:
    status: list[str] = field(default_factory=list)
    dir: str = ""
    env: Optional[Any] = None


def test_all_commands_succeed():
    assert StatusChecker().is_up_to_date(FakeTask(status=["true", "exit 0"])) is True


def test_failing_command():
    assert StatusChecker().is_up_to_date(FakeTask(status=["true", "false"])) is False


def test_no_status_commands():
    assert StatusChecker().is_up_to_date(FakeTask()) is True


def test_verbose_logging():
    out = io.StringIO()
    checker = StatusChecker(Logger(stdout=out, verbose=True))
    assert checker.is_up_to_date(FakeTask(status=["true", "exit 2"])) is False
    text = out.getvalue()
    assert "task: status command true exited zero" in text
    assert "task: status command exit 2 exited non-zero: exit status 2" in text


def test_quiet_without_verbose():
    out = io.StringIO()
    checker = StatusChecker(Logger(stdout=out, verbose=False))
    assert checker.is_up_to_date(FakeTask(status=["false"])) is False
    assert out.getvalue() == ""


def test_runs_in_task_dir(tmp_path):
    (tmp_path / "marker").write_text("x")
    task = FakeTask(status=["test -f marker"], dir=str(tmp_path))
    assert StatusChecker().is_up_to_date(task) is True