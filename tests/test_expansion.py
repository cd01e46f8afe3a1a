import os

import pytest

from minishpy.env import Environment
from minishpy.expansion import expand_token, expand_tokens


@pytest.fixture
def env():
    return Environment({"HOME": "/home/user", "USER": "someone"})


def test_plain_variable(env):
    assert expand_token("$HOME", env, 0, 1) == "/home/user"


def test_variable_inside_text(env):
    assert expand_token("x$HOME/y", env, 0, 1) == "x" + "/home/user" + "/y"


def test_exit_status(env):
    assert expand_token("$?", env, 42, 1) == str(42)


def test_pid(env):
    assert expand_token("$$", env, 0, 1234) == str(1234)


def test_pid_defaults_to_current_process(env):
    assert expand_token("$$", env) == str(os.getpid())


def test_missing_variable_is_empty(env):
    assert expand_token("$MISSING", env, 0, 1) == ""


def test_name_includes_underscore_and_digits(env):
    assert expand_token("$HOME_x1", env, 0, 1) == ""


def test_single_quotes_suppress_expansion(env):
    assert expand_token("'$HOME'", env, 0, 1) == "$HOME"


def test_double_quotes_allow_expansion(env):
    assert expand_token('"$HOME"', env, 0, 1) == "/home/user"


def test_single_quote_inside_double_is_kept(env):
    assert expand_token("\"'$USER'\"", env, 0, 1) == "'someone'"


@pytest.mark.parametrize("token", ["a$", "$1", "$-", "$"])
def test_dollar_without_name_is_literal(env, token):
    assert expand_token(token, env, 0, 1) == token


def test_text_without_dollar_unchanged(env):
    assert expand_token("plain-text", env, 0, 1) == "plain-text"


def test_expand_tokens_maps_each(env):
    tokens = ["echo", "$USER", "$?"]
    result = expand_tokens(tokens, env, 7, 1)
    assert result == ["echo", "someone", str(7)]
    assert tokens == ["echo", "$USER", "$?"]