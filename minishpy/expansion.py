"""Variable expansion inside tokens."""

from __future__ import annotations

import os
from collections.abc import Iterable

from minishpy.env import Environment


def _is_alpha(ch: str) -> bool:
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z")


def _is_name_char(ch: str) -> bool:
    return _is_alpha(ch) or ("0" <= ch <= "9") or ch == "_"


def expand_token(
    token: str,
    env: Environment,
    last_status: int = 0,
    pid: int | None = None,
) -> str:
    """Expand ``$?``, ``$$`` and ``$NAME`` in ``token`` and drop quote characters.

    Single quotes suppress expansion; unknown variables expand to nothing.
    """
    if pid is None:
        pid = os.getpid()
    out: list[str] = []
    in_single = in_double = False
    pos = 0
    end = len(token)
    while pos < end:
        ch = token[pos]
        nxt = token[pos + 1] if pos + 1 < end else ""
        if ch == "'" and not in_double:
            in_single = not in_single
            pos += 1
        elif ch == '"' and not in_single:
            in_double = not in_double
            pos += 1
        elif ch == "$" and not in_single:
            if nxt == "?":
                out.append(str(last_status))
                pos += 2
            elif nxt == "$":
                out.append(str(pid))
                pos += 2
            elif _is_alpha(nxt) or nxt == "_":
                start = pos + 1
                pos = start
                while pos < end and _is_name_char(token[pos]):
                    pos += 1
                value = env.get(token[start:pos])
                if value is not None:
                    out.append(value)
            else:
                out.append(ch)
                pos += 1
        else:
            out.append(ch)
            pos += 1
    return "".join(out)


def expand_tokens(
    tokens: Iterable[str],
    env: Environment,
    last_status: int = 0,
    pid: int | None = None,
) -> list[str]:
    """Expand every token in ``tokens``."""
    if pid is None:
        pid = os.getpid()
    return [expand_token(token, env, last_status, pid) for token in tokens]