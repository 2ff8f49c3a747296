import io
from dataclasses import dataclass, field

import pytest

from taskkit.args import Call
from taskkit.logger import Logger
from taskkit.omap import OrderedMap
from taskkit.summary import print_task, print_tasks


@dataclass
class _Dep:
    task: str


@dataclass
class _Cmd:
    cmd: str = ""
    task: str = ""


@dataclass
class _Task:
    task: str = ""
    desc: str = ""
    summary: str = ""
    deps: list = field(default_factory=list)
    cmds: list = field(default_factory=list)
    aliases: list = field(default_factory=list)


@pytest.fixture(autouse=True)
def _plain_output(monkeypatch):
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.setenv("NO_COLOR", "1")


def _dummy_logger():
    buffer = io.StringIO()
    return buffer, Logger(stdout=buffer, stderr=buffer)


def test_prints_dependencies_if_present():
    buffer, log = _dummy_logger()
    print_task(log, _Task(deps=[_Dep("dep1"), _Dep("dep2"), _Dep("dep3")]))
    assert "\ndependencies:\n - dep1\n - dep2\n - dep3\n" in buffer.getvalue()


def test_does_not_print_dependencies_if_missing():
    buffer, log = _dummy_logger()
    print_task(log, _Task(deps=[]))
    assert "dependencies:" not in buffer.getvalue()


def test_print_task_name():
    buffer, log = _dummy_logger()
    print_task(log, _Task(task="my-task-name"))
    assert "task: my-task-name\n" in buffer.getvalue()


def test_print_task_commands_if_present():
    buffer, log = _dummy_logger()
    print_task(log, _Task(cmds=[_Cmd(cmd="command-1"), _Cmd(cmd="command-2"), _Cmd(task="task-1")]))
    text = buffer.getvalue()
    assert "\ncommands:\n" in text
    assert "\n - command-1\n" in text
    assert "\n - command-2\n" in text
    assert "\n - Task: task-1\n" in text


def test_does_not_print_command_if_missing():
    buffer, log = _dummy_logger()
    print_task(log, _Task(cmds=[]))
    assert "commands" not in buffer.getvalue()


def test_layout():
    buffer, log = _dummy_logger()
    task = _Task(
        task="sample-task",
        summary="line1\nline2\nline3\n",
        deps=[_Dep("dependency")],
        cmds=[_Cmd(cmd="command")],
    )
    print_task(log, task)
    expected = (
        "task: sample-task\n"
        "\n"
        "line1\n"
        "line2\n"
        "line3\n"
        "\n"
        "dependencies:\n"
        " - dependency\n"
        "\n"
        "commands:\n"
        " - command\n"
    )
    assert buffer.getvalue() == expected


def test_print_description_as_fallback():
    buffer, log = _dummy_logger()
    print_task(log, _Task(desc="description"))
    assert "description" in buffer.getvalue()

    buffer.seek(0)
    buffer.truncate(0)
    print_task(log, _Task(desc="description", summary="summary"))
    assert "description" not in buffer.getvalue()

    buffer.seek(0)
    buffer.truncate(0)
    print_task(log, _Task())
    assert "\n(task does not have description or summary)\n" in buffer.getvalue()


def test_print_all_with_spaces():
    buffer, log = _dummy_logger()
    tasks = OrderedMap()
    tasks.set("t1", _Task(task="t1"))
    tasks.set("t2", _Task(task="t2"))
    tasks.set("t3", _Task(task="t3"))

    print_tasks(log, tasks, [Call("t1"), Call("t2"), Call("t3")])

    text = buffer.getvalue()
    assert text.startswith("task: t1")
    assert "\n(task does not have description or summary)\n\n\ntask: t2" in text
    assert "\n(task does not have description or summary)\n\n\ntask: t3" in text


def test_print_aliases():
    buffer, log = _dummy_logger()
    print_task(log, _Task(task="x", aliases=["a1", "a2"]))
    assert "\naliases:\n - a1\n - a2\n" in buffer.getvalue()