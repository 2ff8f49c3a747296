import io
import os
from dataclasses import dataclass, field

import pytest

from taskkit.errors import TaskfileAlreadyExistsError
from taskkit.listing import DEFAULT_TASKFILE, ListOptions, init_taskfile, list_task_names
from taskkit.task_sort import Noop


@dataclass
class _Task:
    task: str
    desc: str = ""
    internal: bool = False
    aliases: list = field(default_factory=list)


def test_should_list_tasks():
    assert ListOptions(list_only_tasks_with_descriptions=True).should_list_tasks()
    assert ListOptions(list_all_tasks=True).should_list_tasks()
    assert not ListOptions(format_task_list_as_json=True).should_list_tasks()


def test_validate_accepts_consistent_options():
    ListOptions(list_all_tasks=True, format_task_list_as_json=True, no_status=True).validate()
    assert ListOptions(list_all_tasks=True).should_list_tasks()


@pytest.mark.parametrize(
    "options,message",
    [
        (ListOptions(True, True), "cannot use --list and --list-all at the same time"),
        (ListOptions(format_task_list_as_json=True), "--json only applies to --list or --list-all"),
        (
            ListOptions(list_all_tasks=True, no_status=True),
            "--no-status only applies to --json with --list or --list-all",
        ),
    ],
)
def test_validate_errors(options, message):
    with pytest.raises(ValueError, match=message):
        options.validate()


def _tasks():
    return [
        _Task("ns:deploy", desc="Deploy"),
        _Task("build", desc="Build", aliases=["b:"]),
        _Task("hidden", desc="Hidden", internal=True),
        _Task("clean:"),
    ]


def test_list_task_names_only_described():
    out = io.StringIO()
    list_task_names(_tasks(), False, out)
    assert out.getvalue().splitlines() == ["build", "b", "ns:deploy"]


def test_list_task_names_all_tasks():
    out = io.StringIO()
    list_task_names(_tasks(), True, out)
    assert out.getvalue().splitlines() == ["build", "b", "ns:deploy", "clean"]


def test_list_task_names_with_noop_sorter_keeps_order():
    out = io.StringIO()
    list_task_names(_tasks(), True, out, Noop())
    assert out.getvalue().splitlines() == ["ns:deploy", "build", "b", "clean"]


def test_init_taskfile_creates_file(tmp_path):
    out = io.StringIO()
    path = init_taskfile(out, str(tmp_path))
    assert os.path.basename(path) == "Taskfile.yml"
    with open(path, encoding="utf-8") as handle:
        assert handle.read() == DEFAULT_TASKFILE
    assert out.getvalue().endswith(" created in the current directory\n")


def test_init_taskfile_refuses_to_overwrite(tmp_path):
    init_taskfile(io.StringIO(), str(tmp_path))
    with pytest.raises(TaskfileAlreadyExistsError) as info:
        init_taskfile(io.StringIO(), str(tmp_path))
    assert info.value.code == 101