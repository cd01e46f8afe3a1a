"""The interactive read-evaluate loop."""

from __future__ import annotations

import contextlib
import os
import signal
import sys
from collections.abc import Sequence
from typing import TextIO

from minishpy.env import ShellState, parse_env
from minishpy.executor import ReadLine, parse_and_exec

PROMPT = "minishell$ "


def _read_input(prompt: str) -> str | None:
    try:
        return input(prompt)
    except EOFError:
        return None


def _enable_history() -> None:
    try:
        import readline
    except ImportError:
        return
    readline.set_auto_history(True)


def run(state: ShellState, read_line: ReadLine, out: TextIO) -> int:
    """Read and run lines until end of input or ``exit``; return the last status."""
    with contextlib.redirect_stdout(out):
        while True:
            try:
                line = read_line(PROMPT)
                if line is None:
                    out.write("exit\n")
                    break
                parse_and_exec(state, line, read_line)
            except KeyboardInterrupt:
                out.write("\n")
                continue
            if state.should_exit:
                break
    return state.last_exit_status


def main(argv: Sequence[str] | None = None) -> int:
    """Start the shell with the process environment."""
    state = ShellState(env=parse_env(f"{key}={value}" for key, value in os.environ.items()))
    _enable_history()
    if hasattr(signal, "SIGQUIT"):
        signal.signal(signal.SIGQUIT, signal.SIG_IGN)
    run(state, _read_input, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())