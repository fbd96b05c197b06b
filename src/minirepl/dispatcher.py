"""Overload dispatch: run the first command variant that accepts the arguments."""

from __future__ import annotations

import inspect
from typing import Optional, Sequence

from .command import Command, CommandStatus
from .errors import ArgsError, CriticalError, NoVariantFoundError
from .outcomes import ArgumentsRejected, Done, ExecutionOutcome, Failed, Fatal, Quit
from .registry import CommandRegistry


def _outcome_for_status(status: Optional[CommandStatus]) -> ExecutionOutcome:
    if status is None or status is CommandStatus.DONE:
        return Done()
    if status is CommandStatus.QUIT:
        return Quit()
    raise TypeError(f"command handler returned {status!r}, expected CommandStatus or None")


async def invoke(cmd: Command, args: Sequence[str]) -> ExecutionOutcome:
    """Run one variant and turn whatever it returns or raises into an outcome."""
    try:
        result = cmd.execute(args)
        if inspect.isawaitable(result):
            result = await result
        return _outcome_for_status(result)
    except ArgsError as e:
        return ArgumentsRejected(e)
    except CriticalError as e:
        return Fatal(e)
    except Exception as e:
        return Failed(e)


async def dispatch(
    name: str, args: Sequence[str], registry: CommandRegistry
) -> ExecutionOutcome:
    """Try each variant of ``name`` in registration order.

    The first outcome that is not an argument rejection is returned. When
    every variant rejects its arguments the last rejection is returned.
    """
    last_rejection: Optional[ArgumentsRejected] = None
    for cmd in registry.variants(name):
        outcome = await invoke(cmd, args)
        if not isinstance(outcome, ArgumentsRejected):
            return outcome
        last_rejection = outcome

    if last_rejection is None:
        # Registered names always have at least one variant.
        return ArgumentsRejected(NoVariantFoundError())
    return last_rejection
