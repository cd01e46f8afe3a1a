"""Shell environment variables and mutable interpreter state."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field


def split_entry(entry: str) -> tuple[str, str | None]:
    """Split a ``KEY=value`` entry; the value is None when there is no '='."""
    key, sep, value = entry.partition("=")
    return key, (value if sep else None)


class Environment:
    """Ordered set of shell variables; a variable may exist without a value."""

    def __init__(
        self,
        initial: Mapping[str, str | None] | Iterable[tuple[str, str | None]] | None = None,
    ) -> None:
        self._vars: dict[str, str | None] = {}
        if initial is None:
            return
        pairs = initial.items() if isinstance(initial, Mapping) else initial
        for key, value in pairs:
            self.set(key, value)

    def get(self, key: str) -> str | None:
        """Return the value of ``key``, or None if unset or valueless."""
        return self._vars.get(key)

    def set(self, key: str, value: str | None) -> None:
        """Assign ``value`` to ``key``; new keys go to the end."""
        self._vars[key] = value

    def unset(self, key: str) -> None:
        """Remove ``key`` if present."""
        self._vars.pop(key, None)

    def items(self) -> list[tuple[str, str | None]]:
        """All variables in insertion order."""
        return list(self._vars.items())

    def to_envp(self) -> list[str]:
        """``KEY=value`` strings for every variable that has a value."""
        return [f"{key}={value}" for key, value in self._vars.items() if value is not None]

    def __contains__(self, key: object) -> bool:
        return key in self._vars

    def __iter__(self) -> Iterator[str]:
        return iter(self._vars)

    def __len__(self) -> int:
        return len(self._vars)

    def __repr__(self) -> str:
        return f"Environment({self._vars!r})"


def parse_env(envp: Iterable[str]) -> Environment:
    """Build an environment from ``KEY=value`` strings; the first duplicate wins."""
    env = Environment()
    for entry in envp:
        key, value = split_entry(entry)
        if key not in env:
            env.set(key, value)
    return env


@dataclass
class ShellState:
    """Everything the shell carries from one input line to the next."""

    env: Environment = field(default_factory=Environment)
    last_exit_status: int = 0
    should_exit: bool = False
    tokens: list[str] = field(default_factory=list)