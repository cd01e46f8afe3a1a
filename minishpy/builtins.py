"""The shell's built-in commands.

Every builtin receives the full argument vector, ``args[0]`` being the
command name, and writes its normal output to ``out``. System errors are
reported on standard error, as ``perror`` would.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Sequence
from typing import TextIO

from minishpy.commands import Command
from minishpy.env import ShellState


def _perror(prefix: str, exc: OSError) -> None:
    message = exc.strerror or str(exc)
    print(f"{prefix}: {message}", file=sys.stderr)


def _is_alpha(ch: str) -> bool:
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z")


def _is_name_char(ch: str) -> bool:
    return _is_alpha(ch) or ("0" <= ch <= "9") or ch == "_"


def is_valid_varname(text: str | None) -> bool:
    """True when the part of ``text`` before any '=' is a valid variable name."""
    if not text or not (_is_alpha(text[0]) or text[0] == "_"):
        return False
    name = text.partition("=")[0]
    return all(_is_name_char(ch) for ch in name)


def _is_n_flag(arg: str) -> bool:
    return len(arg) >= 2 and arg[0] == "-" and set(arg[1:]) == {"n"}


def builtin_echo(args: Sequence[str], out: TextIO) -> int:
    """Print the arguments separated by spaces; leading ``-n`` flags drop the newline."""
    words = list(args[1:])
    newline = True
    while words and _is_n_flag(words[0]):
        newline = False
        words.pop(0)
    out.write(" ".join(words))
    if newline:
        out.write("\n")
    return 0


def builtin_cd(state: ShellState, args: Sequence[str], out: TextIO) -> int:
    """Change directory to ``args[1]`` or ``$HOME`` and update PWD and OLDPWD."""
    try:
        old_pwd: str | None = os.getcwd()
    except OSError:
        old_pwd = None
    if len(args) > 1:
        path = args[1]
    else:
        home = os.environ.get("HOME")
        if home is None:
            out.write("cd: HOME not set\n")
            return 1
        path = home
    try:
        os.chdir(path)
    except OSError as exc:
        _perror("cd", exc)
        return 1
    try:
        new_pwd = os.getcwd()
    except OSError as exc:
        _perror("getcwd", exc)
        return 1
    state.env.set("OLDPWD", old_pwd)
    state.env.set("PWD", new_pwd)
    return 0


def builtin_pwd(out: TextIO) -> int:
    """Print the current working directory."""
    try:
        cwd = os.getcwd()
    except OSError as exc:
        _perror("pwd", exc)
        return 1
    out.write(f"{cwd}\n")
    return 0


def builtin_env(state: ShellState, out: TextIO) -> int:
    """Print every variable that has a value as ``KEY=value``."""
    for key, value in state.env.items():
        if value is not None:
            out.write(f"{key}={value}\n")
    return 0


def _print_export(state: ShellState, out: TextIO) -> None:
    for key, value in state.env.items():
        if value is None:
            out.write(f"declare -x {key}\n")
        else:
            out.write(f'declare -x {key}="{value}"\n')


def builtin_export(state: ShellState, args: Sequence[str], out: TextIO) -> int:
    """Set variables from ``KEY[=value]`` arguments, or list them all."""
    if len(args) < 2:
        _print_export(state, out)
        return 0
    status = 0
    for arg in args[1:]:
        if not is_valid_varname(arg):
            out.write(f"minishell: export: `{arg}`: not a valid varname\n")
            status = 1
            continue
        key, sep, value = arg.partition("=")
        state.env.set(key, value if sep else None)
    return status


def builtin_unset(state: ShellState, args: Sequence[str], out: TextIO) -> int:
    """Remove the named variables."""
    status = 0
    for arg in args[1:]:
        if not is_valid_varname(arg):
            out.write(f"minishell: unset: `{arg}`: not a valid varname\n")
            status = 1
        else:
            state.env.unset(arg)
    return status


def builtin_exit(state: ShellState, out: TextIO) -> int:
    """Announce the exit and ask the shell loop to stop."""
    out.write("exit\n")
    state.should_exit = True
    return 0


_DISPATCH: dict[str, Callable[[ShellState, Sequence[str], TextIO], int]] = {
    "cd": builtin_cd,
    "echo": lambda state, args, out: builtin_echo(args, out),
    "pwd": lambda state, args, out: builtin_pwd(out),
    "export": builtin_export,
    "unset": builtin_unset,
    "env": lambda state, args, out: builtin_env(state, out),
    "exit": lambda state, args, out: builtin_exit(state, out),
}


def run_builtin(state: ShellState, command: Command, out: TextIO) -> int:
    """Run ``command`` as a builtin; 1 for an empty command, 0 for an unknown name."""
    if not command.args:
        return 1
    handler = _DISPATCH.get(command.args[0])
    if handler is None:
        return 0
    return handler(state, command.args, out)


def _open_outfile(path: str, append: bool) -> TextIO:
    flags = os.O_WRONLY | os.O_CREAT | (os.O_APPEND if append else os.O_TRUNC)
    fd = os.open(path, flags, 0o644)
    return os.fdopen(fd, "a" if append else "w")


def run_builtin_with_redirections(state: ShellState, command: Command, out: TextIO) -> int:
    """Run a builtin with its input and output files applied; -1 if a file fails to open."""
    if command.infile is not None:
        try:
            with open(command.infile, "rb"):
                pass
        except OSError as exc:
            _perror("open infile", exc)
            return -1
    if command.outfile is None:
        return run_builtin(state, command, out)
    try:
        target = _open_outfile(command.outfile, command.append)
    except OSError as exc:
        _perror("open outfile", exc)
        return -1
    with target:
        return run_builtin(state, command, target)