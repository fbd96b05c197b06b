"""Command registry, reserved names and the command name prefix index."""

from __future__ import annotations

import bisect
import shlex
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

from .command import Command
from .errors import DuplicateCommandsError, InvalidNameError, ReservedNameError

RESERVED: tuple[tuple[str, str], ...] = (
    ("help", "Show this help message"),
    ("quit", "Quit repl"),
)
RESERVED_NAMES = frozenset(name for name, _ in RESERVED)


def split_args(line: str) -> list[str]:
    """Split a line into shell words; raise ValueError on bad quoting."""
    lexer = shlex.shlex(line, posix=True)
    lexer.whitespace_split = True
    lexer.commenters = ""
    return list(lexer)


class PrefixIndex:
    """Immutable sorted set of names answering prefix queries."""

    __slots__ = ("_names",)

    def __init__(self, names: Iterable[str] = ()):
        self._names: tuple[str, ...] = tuple(sorted(set(names)))

    def __contains__(self, name: object) -> bool:
        i = bisect.bisect_left(self._names, name)  # type: ignore[arg-type]
        return i < len(self._names) and self._names[i] == name

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def starting_with(self, prefix: str) -> list[str]:
        """Return all names starting with ``prefix``, sorted."""
        start = bisect.bisect_left(self._names, prefix)
        matches = []
        for name in self._names[start:]:
            if not name.startswith(prefix):
                break
            matches.append(name)
        return matches


class CommandRegistry:
    """Read-only mapping of command names to their ordered variants."""

    def __init__(self, commands: Mapping[str, tuple[Command, ...]], index: PrefixIndex):
        self._commands = MappingProxyType(dict(commands))
        self.index = index

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __len__(self) -> int:
        return len(self._commands)

    def variants(self, name: str) -> tuple[Command, ...]:
        """Return variants of ``name`` in registration order; KeyError if unknown."""
        return self._commands[name]

    def names(self) -> list[str]:
        """Return registered (non-reserved) command names, sorted."""
        return sorted(self._commands)

    def counts(self) -> dict[str, int]:
        return {name: len(variants) for name, variants in self._commands.items()}

    def items(self) -> Iterator[tuple[str, tuple[Command, ...]]]:
        for name in self.names():
            yield name, self._commands[name]


def _check_name(name: str) -> None:
    try:
        words = split_args(name)
    except ValueError as e:
        raise InvalidNameError(name) from e
    if len(words) != 1 or not name:
        raise InvalidNameError(name)
    if name in RESERVED_NAMES:
        raise ReservedNameError(name)


def build_registry(entries: Iterable[tuple[str, Command]]) -> CommandRegistry:
    """Build the registry from ``(name, command)`` pairs in order.

    Raises the first BuilderError encountered; nothing is returned in that
    case.
    """
    commands: dict[str, list[Command]] = {}
    names: list[str] = []

    for name, cmd in entries:
        _check_name(name)
        variants = commands.setdefault(name, [])
        if any(existing.arg_types() == cmd.arg_types() for existing in variants):
            raise DuplicateCommandsError(name)
        variants.append(cmd)
        names.append(name)

    names.extend(name for name, _ in RESERVED)
    return CommandRegistry(
        {name: tuple(variants) for name, variants in commands.items()},
        PrefixIndex(names),
    )
