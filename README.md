# minishpy

A small interactive shell. It reads command lines at a `minishell$ ` prompt,
splits them into words and operators, expands variables and runs either a
builtin or an external program found through `PATH`.

## Installing

```
pip install .
```

## Running

```
minishpy
```

Type commands at the prompt. End input with Ctrl-D (the shell prints `exit`),
or run `exit`. Ctrl-C abandons the current line and shows a fresh prompt.
`SIGQUIT` is ignored. Lines are added to the line-editing history when the
`readline` module is available.

The shell traces its work: for every line it prints the tokens, the tokens
after expansion, a summary of each parsed command (arguments, input and
output files, append and heredoc flags) and, for anything that is not a lone
builtin, whether it runs `with pipes` or `without pipes`.

## What the shell understands

- Words separated by blanks; `'single'` and `"double"` quotes group text,
  and quoted parts join with the text next to them into one word.
- An unclosed quote is reported on standard error as
  `minishell: syntax error: unclosed quote` and the line is skipped.
- `$NAME` expands to the value of a shell variable, `$?` to the last exit
  status and `$$` to the shell's process id. Unknown variables expand to
  nothing. Nothing expands inside single quotes.
- Redirections: `< file`, `> file`, `>> file` and the heredoc `<< DELIM`,
  which reads lines at a `> ` prompt until one equals the delimiter or input
  ends. A heredoc with no command only reads its lines.
- `|` joins commands into a pipeline. The stages run one after another, each
  stage's output collected and handed to the next as its input; only the last
  stage's output is shown. Builtins inside a pipeline run against a copy of
  the shell's variables, so their changes do not last.
- A command that cannot be found prints `NAME: command not found` and sets
  the status to 127.

## Builtins

| Command  | Effect |
|----------|--------|
| `echo`   | prints its arguments; leading `-n` flags (and `-nnn`) suppress the newline |
| `cd`     | changes directory, to `$HOME` of the process environment when given no argument, and sets `PWD` and `OLDPWD` |
| `pwd`    | prints the working directory |
| `export` | sets variables (`NAME=value` or `NAME`); with no arguments lists them as `declare -x` |
| `unset`  | removes variables |
| `env`    | prints the variables that have a value |
| `exit`   | prints `exit` and leaves the shell |

## Using it from Python

The pieces are usable on their own:

```python
from minishpy.tokenizer import tokenize, has_unclosed_quotes
from minishpy.expansion import expand_tokens
from minishpy.commands import parse_commands, is_builtin
from minishpy.env import Environment, ShellState, parse_env

env = parse_env(["HOME=/home/example", "EMPTY"])
tokens = expand_tokens(tokenize('echo "$HOME" > out.txt'), env)
commands = parse_commands(tokens)
```

- `minishpy.env.Environment` keeps variables in insertion order; a variable
  may exist without a value. `ShellState` holds the environment, the last
  exit status and the exit flag.
- `minishpy.builtins` has one function per builtin, plus `run_builtin` and
  `run_builtin_with_redirections`, which write to a given text stream.
- `minishpy.executor.parse_and_exec` runs one line against a `ShellState`;
  `find_command_path`, `process_heredocs`, `run_simple`, `run_pipeline` and
  `execute` are the steps it uses.
- `minishpy.shell.run` drives the loop with any `read_line(prompt)` callable
  that returns `None` at end of input.

## What it does not do

There is no `;`, `&&`, `||`, subshells, wildcards, job control or background
commands. Pipeline stages do not run at the same time. `exit` takes no status
argument, and the shell reads no startup files.

## Tests

```
pip install .[test]
pytest
```