import os

from taskkit.filepathext import is_abs, smart_join, try_abs_to_rel


def test_smart_join_absolute_second_wins():
    b = os.path.abspath(os.sep + "b")
    assert smart_join("a", b) == b


def test_smart_join_relative():
    assert smart_join("a", "b") == os.path.join("a", "b")


def test_smart_join_cleans_path():
    assert smart_join("a", os.path.join("x", "..", "b")) == os.path.join("a", "b")


def test_smart_join_special_var_kept():
    assert smart_join("/root", "{{.TASKFILE_DIR}}/x") == "{{.TASKFILE_DIR}}/x"


def test_is_abs_special_dirs():
    for name in (".ROOT_DIR", ".TASKFILE_DIR", ".USER_WORKING_DIR"):
        assert is_abs("{{" + name + "}}/out")


def test_is_abs_plain():
    assert is_abs(os.path.abspath("x"))
    assert not is_abs("relative/path")


def test_try_abs_to_rel_under_cwd():
    target = os.path.join(os.getcwd(), "sub", "file.txt")
    assert try_abs_to_rel(target) == os.path.join("sub", "file.txt")


def test_try_abs_to_rel_relative_input_unchanged():
    assert try_abs_to_rel("already/rel") == "already/rel"