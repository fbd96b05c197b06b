"""Custom exception hierarchy for minirepl."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator


class ReplError(Exception):
    """Base exception for REPL-specific failures."""


class BuilderError(ReplError):
    """Registry construction failures, raised before the REPL can run."""

    def __init__(self, name: str, message: str):
        super().__init__(message)
        self.name = name


class DuplicateCommandsError(BuilderError):
    """Two variants under one name share an identical argument signature."""

    def __init__(self, name: str):
        super().__init__(name, f"more than one command with name '{name}' added")


class InvalidNameError(BuilderError):
    """Command name is empty or does not tokenize to exactly one word."""

    def __init__(self, name: str):
        super().__init__(
            name,
            f"name '{name}' cannot be parsed correctly, thus would be impossible to call",
        )


class ReservedNameError(BuilderError):
    """Command name collides with a built-in command."""

    def __init__(self, name: str):
        super().__init__(name, f"'{name}' is a reserved command name")


class ArgsError(ValueError, ReplError):
    """Command arguments do not match the expected signature."""


class WrongNumberOfArgumentsError(ArgsError):
    def __init__(self, got: int, expected: int):
        super().__init__(f"wrong number of arguments: got {got}, expected {expected}")
        self.got = got
        self.expected = expected


class WrongArgumentValueError(ArgsError):
    def __init__(self, argument: str, error: str):
        super().__init__(f"failed to parse argument value '{argument}': {error}")
        self.argument = argument
        self.error = error


class NoVariantFoundError(ArgsError):
    def __init__(self) -> None:
        super().__init__("no command variant found for provided args")


class CriticalError(ReplError):
    """Failure that must not be handled by the REPL.

    The REPL prints and recovers from every other handler error. A
    CriticalError is instead propagated out of ``Repl.next``/``Repl.run``.
    The message is the message of the wrapped cause.
    """

    def __init__(self, cause: BaseException):
        super().__init__(str(cause))
        self.cause = cause
        self.__cause__ = cause


class BorrowError(ReplError):
    """Conflicting borrow of a shared state handle."""


def critical(error: BaseException) -> CriticalError:
    """Wrap an error so the REPL propagates it instead of recovering."""
    if isinstance(error, CriticalError):
        return error
    return CriticalError(error)


@contextmanager
def critical_errors(*error_types: type[BaseException]) -> Iterator[None]:
    """Re-raise matching exceptions from the block as CriticalError.

    With no arguments every ``Exception`` is treated as critical.
    """
    types = error_types or (Exception,)
    try:
        yield
    except CriticalError:
        raise
    except types as e:
        raise critical(e) from e
