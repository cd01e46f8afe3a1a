"""Grouping tokens into simple commands with redirections."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

BUILTINS = frozenset({"cd", "echo", "pwd", "export", "unset", "env", "exit"})

_QUOTES = frozenset("'\"")


@dataclass
class Command:
    """One simple command of a pipeline."""

    args: list[str] = field(default_factory=list)
    infile: str | None = None
    outfile: str | None = None
    append: bool = False
    heredoc: bool = False
    heredoc_delim: str | None = None
    heredoc_input: str | None = None


def remove_quotes(text: str) -> str:
    """Drop matched quote characters, keeping the quoted contents."""
    out: list[str] = []
    quote = ""
    for ch in text:
        if ch in _QUOTES and not quote:
            quote = ch
        elif ch == quote:
            quote = ""
        else:
            out.append(ch)
    return "".join(out)


def parse_commands(tokens: Sequence[str]) -> list[Command]:
    """Split ``tokens`` on ``|`` and collect arguments and redirections."""
    commands: list[Command] = []
    pos = 0
    end = len(tokens)
    while pos < end:
        cmd = Command()
        while pos < end and tokens[pos] != "|":
            token = tokens[pos]
            has_target = pos + 1 < end
            if token == "<" and has_target:
                pos += 1
                cmd.infile = tokens[pos]
            elif token == ">" and has_target:
                pos += 1
                cmd.outfile = tokens[pos]
                cmd.append = False
            elif token == ">>" and has_target:
                pos += 1
                cmd.outfile = tokens[pos]
                cmd.append = True
            elif token == "<<" and has_target:
                pos += 1
                cmd.heredoc = True
                cmd.heredoc_delim = tokens[pos]
            else:
                cmd.args.append(remove_quotes(token))
            pos += 1
        commands.append(cmd)
        if pos < end and tokens[pos] == "|":
            pos += 1
    return commands


def is_builtin(name: str | None) -> bool:
    """True when ``name`` is one of the shell's built-in commands."""
    return name in BUILTINS