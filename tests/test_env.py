import pytest

from minishpy.env import Environment, ShellState, parse_env, split_entry


def test_split_entry_with_value():
    assert split_entry("A=b=c") == ("A", "b=c")


def test_split_entry_without_equal():
    assert split_entry("NOEQ") == ("NOEQ", None)


def test_split_entry_empty_value():
    assert split_entry("EMPTY=") == ("EMPTY", "")


def test_parse_env_preserves_order():
    env = parse_env(["B=2", "A=1", "C=3"])
    assert [k for k, _ in env.items()] == ["B", "A", "C"]


def test_parse_env_first_duplicate_wins():
    env = parse_env(["X=first", "X=second"])
    assert env.get("X") == "first"
    assert len(env) == 1


def test_to_envp_round_trip():
    envp = ["PATH=/bin:/usr/bin", "HOME=/home/user", "EQ=a=b"]
    assert parse_env(envp).to_envp() == envp


def test_to_envp_skips_valueless():
    env = parse_env(["A=1", "B"])
    assert "B" in env
    assert env.to_envp() == ["A=1"]


def test_set_existing_keeps_position():
    env = parse_env(["A=1", "B=2"])
    env.set("A", "9")
    assert env.items() == [("A", "9"), ("B", "2")]


def test_set_new_appends():
    env = parse_env(["A=1"])
    env.set("Z", "26")
    assert env.items()[-1] == ("Z", "26")


def test_set_none_clears_value():
    env = parse_env(["A=1"])
    env.set("A", None)
    assert env.get("A") is None
    assert "A" in env


def test_unset_removes_and_ignores_missing():
    env = parse_env(["A=1", "B=2"])
    env.unset("A")
    env.unset("MISSING")
    assert list(env) == ["B"]


def test_get_missing_is_none():
    assert Environment().get("NOPE") is None


@pytest.mark.parametrize("initial", [{"K": "v"}, [("K", "v")]])
def test_constructor_accepts_mapping_or_pairs(initial):
    assert Environment(initial).get("K") == "v"


def test_shell_state_defaults():
    state = ShellState()
    assert state.last_exit_status == 0
    assert state.should_exit is False
    assert len(state.env) == 0
    assert state.tokens == []