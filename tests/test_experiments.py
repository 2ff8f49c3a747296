import io
import os

from taskkit.experiments import (
    Experiment,
    env_file_path,
    list_experiments,
    load_experiments,
    new_experiment,
    read_dot_env,
)
from taskkit.logger import Logger


def _clear(monkeypatch, name):
    monkeypatch.setenv(name, "x")
    monkeypatch.delenv(name)


def test_enabled_experiment(monkeypatch):
    monkeypatch.setenv("TASK_X_SAMPLE", "1")
    x = new_experiment("SAMPLE")
    assert x.enabled
    assert x.value == "1"
    assert str(x) == "on (1)"


def test_disabled_experiment(monkeypatch):
    _clear(monkeypatch, "TASK_X_SAMPLE")
    x = new_experiment("SAMPLE")
    assert not x.enabled
    assert str(x) == "off"


def test_custom_enabled_values(monkeypatch):
    monkeypatch.setenv("TASK_X_SAMPLE", "2")
    assert new_experiment("SAMPLE", "1", "2").enabled
    monkeypatch.setenv("TASK_X_SAMPLE", "3")
    x = new_experiment("SAMPLE", "1", "2")
    assert not x.enabled
    assert x.value == "3"


def test_env_file_path():
    assert env_file_path(["-d", "some/dir"]) == "some/dir/.env"
    assert env_file_path(["--dir=some/dir"]) == "some/dir/.env"
    assert env_file_path(["--taskfile", "a/b/Taskfile.yml"]) == "a/b/.env"
    assert env_file_path(["-t", "Taskfile.yml"]) == ".env"
    assert env_file_path([]) == ".env"


def test_read_dot_env_exports_only_experiments(monkeypatch, tmp_path):
    _clear(monkeypatch, "TASK_X_FROM_FILE")
    _clear(monkeypatch, "NOT_AN_EXPERIMENT_VAR")
    (tmp_path / ".env").write_text("TASK_X_FROM_FILE=1\nNOT_AN_EXPERIMENT_VAR=2\n")
    read_dot_env(["-d", str(tmp_path)])
    x = new_experiment("FROM_FILE")
    assert x.enabled
    assert x.value == "1"
    assert os.environ["TASK_X_FROM_FILE"] == "1"
    assert "NOT_AN_EXPERIMENT_VAR" not in os.environ


def test_load_experiments(monkeypatch, tmp_path):
    monkeypatch.setenv("TASK_X_GENTLE_FORCE", "1")
    _clear(monkeypatch, "TASK_X_REMOTE_TASKFILES")
    monkeypatch.setenv("TASK_X_ANY_VARIABLES", "2")
    experiments = load_experiments(["-d", str(tmp_path)])
    assert list(experiments) == ["GENTLE_FORCE", "REMOTE_TASKFILES", "ANY_VARIABLES"]
    assert experiments["GENTLE_FORCE"].enabled
    assert not experiments["REMOTE_TASKFILES"].enabled
    assert experiments["ANY_VARIABLES"].enabled


def test_list_experiments_aligns_columns():
    out = io.StringIO()
    items = [Experiment("GENTLE_FORCE", True, "1"), Experiment("ANY_VARIABLES", False, "")]
    list_experiments(Logger(color=False), items, out)
    lines = out.getvalue().splitlines()
    assert lines[0].startswith("* GENTLE_FORCE: ")
    assert lines[0].endswith("on (1)")
    assert lines[1].endswith("off")
    assert lines[0].index("on (1)") == lines[1].index("off")