import pytest

from todolist.todolist import (
    EmptyInputError,
    IndexParseError,
    OutOfBoundsError,
    PersistenceError,
    TaskStore,
)


def test_create_on_empty_store():
    store = TaskStore()
    assert store.create("buy milk") == 0
    assert store.list() == [(0, "buy milk")]


def test_create_appends_and_joins_words(store):
    index = store.create(["call", "the", "bank"])
    assert index == 3
    assert store.list()[-1] == (3, "call the bank")


@pytest.mark.parametrize("text", ["", "   ", [], ["", " "], None])
def test_create_rejects_blank_text(store, text):
    with pytest.raises(EmptyInputError):
        store.create(text)
    assert store.tasks == ["a", "b", "c"]


def test_create_trims_text():
    store = TaskStore()
    store.create("  pad me  ")
    assert store.tasks == ["pad me"]


def test_list_empty():
    assert TaskStore().list() == []


def test_get(store):
    assert store.get(1) == "b"
    assert store.get("2") == "c"


@pytest.mark.parametrize("index", [-1, 3, 100, "-1", "3"])
def test_out_of_bounds_never_mutates(store, index):
    with pytest.raises(OutOfBoundsError):
        store.get(index)
    with pytest.raises(OutOfBoundsError):
        store.update(index, "z")
    with pytest.raises(OutOfBoundsError):
        store.delete(index)
    assert store.tasks == ["a", "b", "c"]


@pytest.mark.parametrize(
    "token", ["x", "1.5", "", None, "one", "1_0", "\u0661", " 1", 1.0])
def test_index_must_be_integer(store, token):
    with pytest.raises(IndexParseError):
        store.get(token)
    with pytest.raises(IndexParseError):
        store.delete(token)
    assert store.tasks == ["a", "b", "c"]


def test_get_on_empty_store():
    with pytest.raises(OutOfBoundsError):
        TaskStore().get(0)


def test_update_overwrites(store):
    assert store.update(1, "bee") == ("b", "bee")
    assert store.tasks == ["a", "bee", "c"]


def test_update_backref():
    store = TaskStore(["x"])
    store.update(0, "y @@ z")
    assert store.tasks == ["y x z"]


def test_update_backref_every_occurrence(store):
    store.update("0", ["@@", "and", "@@"])
    assert store.get(0) == "a and a"


def test_update_validation_order(store):
    # index problems are reported before blank text
    with pytest.raises(IndexParseError):
        store.update("x", "")
    with pytest.raises(OutOfBoundsError):
        store.update(9, "")
    with pytest.raises(EmptyInputError):
        store.update(0, "  ")
    assert store.tasks == ["a", "b", "c"]


def test_delete_shifts_later_tasks(store):
    assert store.delete(1) == "b"
    assert store.tasks == ["a", "c"]
    assert store.get(1) == "c"
    assert len(store) == 2


def test_load_missing_file(tmp_path):
    store = TaskStore.load(str(tmp_path / "nope.yaml"))
    assert store.list() == []


def test_load_empty_file(tmp_path):
    path = tmp_path / "todo.yaml"
    path.write_text("", encoding="utf-8")
    assert TaskStore.load(str(path)).tasks == []


def test_save_and_load(tmp_path, store):
    path = str(tmp_path / "sub" / "todo.yaml")
    store.create("unicode ✓ task")
    store.update(0, "first: @@")
    store.delete(2)
    store.save(path)
    assert TaskStore.load(path).tasks == store.tasks


def test_save_writes_yaml_sequence(tmp_path):
    path = tmp_path / "todo.yaml"
    TaskStore(["one", "two"]).save(str(path))
    assert path.read_text(encoding="utf-8") == "- one\n- two\n"


def test_load_keeps_scalar_text(tmp_path):
    path = tmp_path / "todo.yaml"
    path.write_text(
        "- 42\n- yes\n- 1.50\n- ~\n- plain\n", encoding="utf-8")
    assert TaskStore.load(str(path)).tasks == [
        "42", "yes", "1.50", "~", "plain"]


def test_save_and_load_scalar_lookalikes(tmp_path):
    path = str(tmp_path / "todo.yaml")
    TaskStore(["yes", "1.50", "null", "007"]).save(path)
    assert TaskStore.load(path).tasks == ["yes", "1.50", "null", "007"]


def test_load_invalid_utf8(tmp_path):
    path = tmp_path / "todo.yaml"
    path.write_bytes(b"- caf\xe9\n")
    with pytest.raises(PersistenceError) as err:
        TaskStore.load(str(path))
    assert err.value.context == "read tasks"


@pytest.mark.parametrize("content", [
    "- [unclosed\n",
    "key: value\n",
    "- ok\n- {nested: map}\n",
    "- ok\n- \n",
])
def test_load_malformed(tmp_path, content):
    path = tmp_path / "todo.yaml"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(PersistenceError) as err:
        TaskStore.load(str(path))
    assert err.value.context == "read tasks"


def test_save_failure(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("", encoding="utf-8")
    with pytest.raises(PersistenceError) as err:
        TaskStore(["a"]).save(str(blocker / "todo.yaml"))
    assert err.value.context == "write tasks"
