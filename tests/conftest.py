import os

import pytest
import yaml

from todolist.todolist import TaskStore


@pytest.fixture()
def home(tmp_path, monkeypatch):
    """Point HOME and XDG_CONFIG_HOME at a per-test directory."""
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    return tmp_path


@pytest.fixture()
def data_file(home):
    return os.path.join(str(home), ".todo.yaml")


@pytest.fixture()
def write_tasks(data_file):
    def _write(tasks):
        with open(data_file, "w", encoding="utf-8") as out_file:
            yaml.dump(tasks, out_file, default_flow_style=False)
    return _write


@pytest.fixture()
def read_tasks(data_file):
    def _read():
        return TaskStore.load(data_file).tasks
    return _read


@pytest.fixture()
def store():
    return TaskStore(["a", "b", "c"])
