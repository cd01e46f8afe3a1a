"""Running parsed command lines: external programs, pipelines and heredocs."""

from __future__ import annotations

import contextlib
import io
import os
import subprocess
import sys
from collections.abc import Callable, Sequence
from typing import BinaryIO, Optional

from minishpy.builtins import run_builtin_with_redirections
from minishpy.commands import Command, is_builtin, parse_commands
from minishpy.env import Environment, ShellState
from minishpy.expansion import expand_tokens
from minishpy.tokenizer import has_unclosed_quotes, tokenize

ReadLine = Callable[[str], Optional[str]]

HEREDOC_PROMPT = "> "
EXIT_FAILURE = 1
EXIT_NOT_FOUND = 127


def _read_input(prompt: str) -> str | None:
    try:
        return input(prompt)
    except EOFError:
        return None


def _perror(prefix: str, exc: OSError) -> None:
    message = exc.strerror or str(exc)
    print(f"{prefix}: {message}", file=sys.stderr)


def find_command_path(name: str, env: Environment) -> str | None:
    """Locate ``name`` through the PATH variable; names with '/' are used as given."""
    if "/" in name:
        return name
    path = env.get("PATH")
    if path is None:
        return None
    for directory in filter(None, path.split(":")):
        candidate = f"{directory}/{name}"
        if os.access(candidate, os.X_OK):
            return candidate
    return None


def read_heredoc(delimiter: str | None, read_line: ReadLine) -> str:
    """Collect lines until ``delimiter`` or end of input; each line ends with a newline."""
    lines: list[str] = []
    while True:
        line = read_line(HEREDOC_PROMPT)
        if line is None or line == delimiter:
            break
        lines.append(line + "\n")
    return "".join(lines)


def process_heredocs(commands: Sequence[Command], read_line: ReadLine | None = None) -> None:
    """Read the heredoc body of every command that has one; clear it on the others."""
    reader = read_line or _read_input
    for command in commands:
        if command.heredoc:
            command.heredoc_input = read_heredoc(command.heredoc_delim, reader)
        else:
            command.heredoc_input = None


def _child_env(env: Environment) -> dict[str, str]:
    return {key: value for key, value in env.items() if value is not None}


def _open_outfile(path: str, append: bool) -> BinaryIO:
    flags = os.O_WRONLY | os.O_CREAT | (os.O_APPEND if append else os.O_TRUNC)
    fd = os.open(path, flags, 0o644)
    return os.fdopen(fd, "ab" if append else "wb")


def _inherited_stdout() -> int:
    """File descriptor behind ``sys.stdout``, or PIPE when it has none."""
    stream = sys.stdout
    try:
        stream.flush()
        return stream.fileno()
    except (AttributeError, OSError, ValueError):
        return subprocess.PIPE


def _write_output(data: bytes) -> None:
    if data:
        sys.stdout.write(data.decode(errors="replace"))
        sys.stdout.flush()


def _spawn(
    state: ShellState,
    command: Command,
    stdin_data: bytes | None,
    capture: bool,
) -> tuple[int | None, bytes]:
    """Start an external program; the status is None when it died from a signal."""
    source: BinaryIO | None = None
    if command.heredoc_input is not None:
        stdin_data = command.heredoc_input.encode()
    elif command.infile is not None:
        try:
            source = open(command.infile, "rb")
        except OSError as exc:
            _perror("open infile", exc)
            return EXIT_FAILURE, b""
        stdin_data = None
    with contextlib.ExitStack() as stack:
        if source is not None:
            stack.enter_context(source)
        sink: BinaryIO | None = None
        if command.outfile is not None:
            try:
                sink = stack.enter_context(_open_outfile(command.outfile, command.append))
            except OSError as exc:
                _perror("open outfile", exc)
                return EXIT_FAILURE, b""
        path = find_command_path(command.args[0], state.env)
        if path is None:
            print(f"{command.args[0]}: command not found", file=sys.stderr)
            return EXIT_NOT_FOUND, b""
        if sink is not None:
            stdout: int | BinaryIO = sink
        elif capture:
            stdout = subprocess.PIPE
        else:
            stdout = _inherited_stdout()
        try:
            proc = subprocess.run(
                command.args,
                executable=path,
                stdin=source,
                input=stdin_data,
                stdout=stdout,
                env=_child_env(state.env),
                check=False,
            )
        except OSError as exc:
            _perror("execve", exc)
            return EXIT_FAILURE, b""
    status = proc.returncode if proc.returncode >= 0 else None
    return status, proc.stdout or b""


def run_simple(state: ShellState, command: Command, read_line: ReadLine | None = None) -> None:
    """Run one command that is not part of a pipeline."""
    if not command.args and not command.heredoc:
        run_builtin_with_redirections(state, command, sys.stdout)
        return
    if command.heredoc:
        process_heredocs([command], read_line)
        if not command.args:
            return
    status, output = _spawn(state, command, None, capture=False)
    _write_output(output)
    if status is not None:
        state.last_exit_status = status


def _run_builtin_stage(state: ShellState, command: Command) -> tuple[int, bytes]:
    """Run a builtin inside a pipeline against a copy of the shell state."""
    scratch = ShellState(
        env=Environment(state.env.items()),
        last_exit_status=state.last_exit_status,
    )
    buffer = io.StringIO()
    status = run_builtin_with_redirections(scratch, command, buffer)
    return status, buffer.getvalue().encode()


def run_pipeline(state: ShellState, commands: Sequence[Command]) -> None:
    """Run the commands in order, each one's output feeding the next one's input."""
    data: bytes | None = None
    status: int | None = None
    output = b""
    last = len(commands) - 1
    for index, command in enumerate(commands):
        if not command.args or is_builtin(command.args[0]):
            status, output = _run_builtin_stage(state, command)
        else:
            status, output = _spawn(state, command, data, capture=index != last)
        data = output
    _write_output(output)
    if status is not None:
        state.last_exit_status = status


def execute(state: ShellState, commands: Sequence[Command], read_line: ReadLine | None = None) -> None:
    """Run a parsed line, as a pipeline when it has more than one command."""
    if not commands:
        return
    if len(commands) > 1:
        print("exec with pipes")
        process_heredocs(commands, read_line)
        run_pipeline(state, commands)
    else:
        print("exec without pipes")
        run_simple(state, commands[0], read_line)


def _print_commands(commands: Sequence[Command]) -> None:
    for index, command in enumerate(commands):
        print(f"Command {index}:")
        if command.args:
            print("  args: " + "".join(f"'{arg}' " for arg in command.args))
        else:
            print("  args: (null)")
        print(f"  infile: {command.infile if command.infile is not None else 'NULL'}")
        print(f"  outfile: {command.outfile if command.outfile is not None else 'NULL'}")
        print(f"  append: {int(command.append)}")
        print(f"  heredoc: {int(command.heredoc)}")
        delim = command.heredoc_delim if command.heredoc_delim is not None else "NULL"
        print(f"  heredoc_delim: {delim}")
        print()


def parse_and_exec(state: ShellState, line: str, read_line: ReadLine | None = None) -> None:
    """Tokenize, expand, parse and run one input line, tracing each stage."""
    if has_unclosed_quotes(line):
        sys.stderr.write("minishell: syntax error: unclosed quote\n")
        return
    state.tokens = tokenize(line)
    for index, token in enumerate(state.tokens):
        print(f"token[{index}] = '{token}'")
    state.tokens = expand_tokens(state.tokens, state.env, state.last_exit_status)
    for index, token in enumerate(state.tokens):
        print(f"token_expanded[{index}] = '{token}'")
    commands = parse_commands(state.tokens)
    _print_commands(commands)
    if len(commands) == 1 and commands[0].args and is_builtin(commands[0].args[0]):
        state.last_exit_status = run_builtin_with_redirections(state, commands[0], sys.stdout)
    else:
        execute(state, commands, read_line)