import pytest

from taskkit.args import Call, parse


@pytest.mark.parametrize(
    "args,expected_calls,expected_keys,expected_values",
    [
        (
            ["task-a", "task-b", "task-c"],
            [Call("task-a"), Call("task-b"), Call("task-c")],
            [],
            [],
        ),
        (
            ["task-a", "FOO=bar", "task-b", "task-c", "BAR=baz", "BAZ=foo"],
            [Call("task-a"), Call("task-b"), Call("task-c")],
            ["FOO", "BAR", "BAZ"],
            ["bar", "baz", "foo"],
        ),
        (
            ["task-a", "CONTENT=with some spaces"],
            [Call("task-a")],
            ["CONTENT"],
            ["with some spaces"],
        ),
        (
            ["FOO=bar", "task-a", "task-b"],
            [Call("task-a"), Call("task-b")],
            ["FOO"],
            ["bar"],
        ),
        ([], [], [], []),
        (["FOO=bar", "BAR=baz"], [], ["FOO", "BAR"], ["bar", "baz"]),
    ],
)
def test_args(args, expected_calls, expected_keys, expected_values):
    calls, globals_ = parse(*args)
    assert calls == expected_calls
    assert globals_.keys() == expected_keys
    assert globals_.values() == expected_values


def test_value_may_contain_equals_sign():
    calls, globals_ = parse("X=a=b")
    assert calls == []
    assert globals_.get("X") == "a=b"