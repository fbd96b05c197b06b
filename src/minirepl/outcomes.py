"""Typed outcomes exchanged between the dispatcher and the REPL loop."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal, TypeAlias

from .errors import ArgsError, CriticalError


class LoopStatus(Enum):
    """State of the REPL after one step."""

    CONTINUE = "continue"
    BREAK = "break"


@dataclass(slots=True, frozen=True)
class Done:
    """Command finished; keep reading lines."""

    kind: Literal["done"] = "done"


@dataclass(slots=True, frozen=True)
class Quit:
    """Command asked the REPL to stop."""

    kind: Literal["quit"] = "quit"


@dataclass(slots=True, frozen=True)
class ArgumentsRejected:
    """Arguments did not fit the variant; another overload may accept them."""

    error: ArgsError
    kind: Literal["arguments_rejected"] = "arguments_rejected"


@dataclass(slots=True, frozen=True)
class Failed:
    """Handler raised an ordinary error; report it and continue."""

    error: Exception
    kind: Literal["failed"] = "failed"


@dataclass(slots=True, frozen=True)
class Fatal:
    """Handler raised a critical error; it must leave the REPL."""

    error: CriticalError
    kind: Literal["fatal"] = "fatal"


ExecutionOutcome: TypeAlias = Done | Quit | ArgumentsRejected | Failed | Fatal
