"""Map execution outcomes to REPL loop decisions."""

from __future__ import annotations

from enum import Enum

from .outcomes import ArgumentsRejected, Done, ExecutionOutcome, Failed, Fatal, Quit


class Disposition(Enum):
    CONTINUE = "continue"
    BREAK = "break"
    RECOVERABLE = "recoverable"
    CRITICAL = "critical"


def classify(outcome: ExecutionOutcome) -> Disposition:
    """Return how the loop must react to ``outcome``."""
    if isinstance(outcome, Done):
        return Disposition.CONTINUE
    if isinstance(outcome, Quit):
        return Disposition.BREAK
    if isinstance(outcome, (ArgumentsRejected, Failed)):
        return Disposition.RECOVERABLE
    if isinstance(outcome, Fatal):
        return Disposition.CRITICAL
    raise TypeError(f"unknown execution outcome: {outcome!r}")
