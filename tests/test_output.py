import io

import pytest

from taskkit.output import Group, Interleaved, Prefixed, build_for


class _VarTemplater:
    def __init__(self, variables):
        self.variables = variables

    def replace(self, tmpl):
        for key, value in self.variables.items():
            tmpl = tmpl.replace("{{ .%s }}" % key, value)
        return tmpl


def test_interleaved():
    b = io.StringIO()
    w, _, _ = Interleaved().wrap_writer(b, io.StringIO(), "", None)
    print("foo\nbar", file=w)
    assert b.getvalue() == "foo\nbar\n"
    print("baz", file=w)
    assert b.getvalue() == "foo\nbar\nbaz\n"


def test_group():
    b = io.StringIO()
    out, err, cleanup = Group().wrap_writer(b, io.StringIO(), "", None)
    print("out\nout", file=out)
    assert b.getvalue() == ""
    print("err\nerr", file=err)
    assert b.getvalue() == ""
    print("out", file=out)
    assert b.getvalue() == ""
    print("err", file=err)
    assert b.getvalue() == ""
    cleanup(None)
    assert b.getvalue() == "out\nout\nerr\nerr\nout\nerr\n"


def test_group_with_begin_end_simple():
    tmpl = _VarTemplater({"VAR1": "example-value"})
    o = Group(begin="::group::{{ .VAR1 }}", end="::endgroup::")
    b = io.StringIO()
    w, _, cleanup = o.wrap_writer(b, io.StringIO(), "", tmpl)
    print("foo\nbar", file=w)
    assert b.getvalue() == ""
    print("baz", file=w)
    assert b.getvalue() == ""
    cleanup(None)
    assert b.getvalue() == "::group::example-value\nfoo\nbar\nbaz\n::endgroup::\n"


def test_group_with_begin_end_no_output():
    tmpl = _VarTemplater({"VAR1": "example-value"})
    o = Group(begin="::group::{{ .VAR1 }}", end="::endgroup::")
    b = io.StringIO()
    _, _, cleanup = o.wrap_writer(b, io.StringIO(), "", tmpl)
    cleanup(None)
    assert b.getvalue() == ""


def test_group_error_only_swallows_output_on_no_error():
    b = io.StringIO()
    out, err, cleanup = Group(error_only=True).wrap_writer(b, io.StringIO(), "", None)
    print("std-out", file=out)
    print("std-err", file=err)
    cleanup(None)
    assert b.getvalue() == ""


def test_group_error_only_shows_output_on_error():
    b = io.StringIO()
    out, err, cleanup = Group(error_only=True).wrap_writer(b, io.StringIO(), "", None)
    print("std-out", file=out)
    print("std-err", file=err)
    cleanup(RuntimeError("any-error"))
    assert b.getvalue() == "std-out\nstd-err\n"


def test_prefixed():
    b = io.StringIO()
    w, _, cleanup = Prefixed().wrap_writer(b, io.StringIO(), "prefix", None)

    print("foo\nbar", file=w)
    assert b.getvalue() == "[prefix] foo\n[prefix] bar\n"
    print("baz", file=w)
    assert b.getvalue() == "[prefix] foo\n[prefix] bar\n[prefix] baz\n"
    cleanup(None)

    b.seek(0)
    b.truncate(0)
    for char in ["T", "e", "s", "t", "!"]:
        print(char, end="", file=w)
        assert b.getvalue() == ""
    cleanup(None)
    assert b.getvalue() == "[prefix] Test!\n"


def test_build_for_styles():
    assert build_for("") == Interleaved()
    assert build_for("interleaved") == Interleaved()
    assert build_for("prefixed") == Prefixed()
    assert build_for("group", "b", "e", True) == Group(begin="b", end="e", error_only=True)


def test_build_for_unknown_style():
    with pytest.raises(ValueError, match='output style "foo" not recognized'):
        build_for("foo")


def test_build_for_rejects_group_params_for_other_styles():
    with pytest.raises(ValueError, match="does not support the group begin/end parameter"):
        build_for("prefixed", group_begin="x")
    with pytest.raises(ValueError, match="does not support the group begin/end parameter"):
        build_for("interleaved", group_end="y")