import pytest

from minishpy.tokenizer import has_unclosed_quotes, tokenize


def test_simple_words():
    assert tokenize("echo hello world") == ["echo", "hello", "world"]


def test_operators_without_spaces():
    assert tokenize("cat<in>>out|wc") == ["cat", "<", "in", ">>", "out", "|", "wc"]


def test_heredoc_operator():
    assert tokenize("cat <<EOF") == ["cat", "<<", "EOF"]


def test_only_whitespace():
    assert tokenize("  \t \n") == []


def test_empty_line():
    assert tokenize("") == []


def test_quoted_part_joins_word():
    assert tokenize('echo "a b"c') == ["echo", "a bc"]


def test_specials_inside_quotes_stay():
    assert tokenize("echo '|<>'") == ["echo", "|<>"]


def test_empty_quotes_give_empty_token():
    assert tokenize('echo ""') == ["echo", ""]


def test_unclosed_quote_takes_rest():
    assert tokenize("'abc") == ["abc"]


def test_single_redirect_operators():
    assert tokenize("a > b < c") == ["a", ">", "b", "<", "c"]


@pytest.mark.parametrize(
    "line, expected",
    [
        ("'a'", False),
        ('"a', True),
        ("'\"'", False),
        ("\"'\"'", True),
        ("plain", False),
        ("", False),
    ],
)
def test_has_unclosed_quotes(line, expected):
    assert has_unclosed_quotes(line) is expected


def test_balanced_line_tokenizes_without_quote_chars():
    line = "echo 'x' \"y\""
    assert not has_unclosed_quotes(line)
    assert all("'" not in t and '"' not in t for t in tokenize(line))