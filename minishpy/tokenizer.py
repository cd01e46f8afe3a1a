"""Splitting an input line into words and operators."""

from __future__ import annotations

_SPACES = frozenset(" \t\n\v\f\r")
_SPECIALS = frozenset("|<>")
_QUOTES = frozenset("'\"")
_DOUBLE_OPERATORS = (">>", "<<")


def has_unclosed_quotes(line: str) -> bool:
    """True when a single or double quote in ``line`` is never closed."""
    quote = ""
    for ch in line:
        if ch in _QUOTES and not quote:
            quote = ch
        elif ch == quote:
            quote = ""
    return bool(quote)


def _read_word(line: str, pos: int) -> tuple[str, int]:
    """Read one word starting at ``pos``; quoted parts lose their quotes."""
    parts: list[str] = []
    end = len(line)
    while pos < end and line[pos] not in _SPACES and line[pos] not in _SPECIALS:
        ch = line[pos]
        if ch in _QUOTES:
            close = line.find(ch, pos + 1)
            if close == -1:
                parts.append(line[pos + 1:])
                pos = end
            else:
                parts.append(line[pos + 1:close])
                pos = close + 1
        else:
            start = pos
            while (
                pos < end
                and line[pos] not in _SPACES
                and line[pos] not in _SPECIALS
                and line[pos] not in _QUOTES
            ):
                pos += 1
            parts.append(line[start:pos])
    return "".join(parts), pos


def tokenize(line: str) -> list[str]:
    """Split ``line`` into word and operator tokens."""
    tokens: list[str] = []
    pos = 0
    end = len(line)
    while pos < end:
        while pos < end and line[pos] in _SPACES:
            pos += 1
        if pos >= end:
            break
        if line.startswith(_DOUBLE_OPERATORS, pos):
            tokens.append(line[pos:pos + 2])
            pos += 2
        elif line[pos] in _SPECIALS:
            tokens.append(line[pos])
            pos += 1
        else:
            word, pos = _read_word(line, pos)
            tokens.append(word)
    return tokens