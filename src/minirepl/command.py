"""Command definitions, argument signatures and argument validation."""

from __future__ import annotations

import inspect
import math
import re
import struct
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Optional, Protocol, Sequence, Union

from .errors import ArgsError, WrongArgumentValueError, WrongNumberOfArgumentsError

I32_MIN = -(2**31)
I32_MAX = 2**31 - 1

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
_FLOAT_PATTERN = re.compile(
    r"[+-]?(?:inf|infinity|nan|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:e[+-]?[0-9]+)?)",
    re.IGNORECASE,
)


class ArgType(Enum):
    """Closed set of argument types a command can declare."""

    I32 = "i32"
    F32 = "f32"
    STRING = "String"
    CUSTOM = "Custom"

    def __str__(self) -> str:
        return self.value


class CommandStatus(Enum):
    """Return status of a successfully executed command."""

    DONE = "done"
    QUIT = "quit"


@dataclass(frozen=True, slots=True)
class ArgInfo:
    """Type and optional display name of one positional argument."""

    arg_type: ArgType
    name: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.name or ''}:{self.arg_type}"


HandlerResult = Union[CommandStatus, None, Awaitable[Optional[CommandStatus]]]


class CommandHandler(Protocol):
    """Executable behind a command variant.

    The handler validates its own arguments (usually with ``validate`` or
    ``check_args``) and raises ``ArgsError`` when they do not fit, so the
    dispatcher can move on to the next overload. Returning ``None`` is the
    same as returning ``CommandStatus.DONE``.
    """

    def execute(self, args: list[str], args_info: list[ArgInfo]) -> HandlerResult:
        ...


def _parse_i32(text: str) -> int:
    if not text:
        raise ValueError("cannot parse integer from empty string")
    if not _INTEGER_PATTERN.fullmatch(text):
        raise ValueError("invalid digit found in string")
    value = int(text)
    if value > I32_MAX:
        raise ValueError("number too large to fit in target type")
    if value < I32_MIN:
        raise ValueError("number too small to fit in target type")
    return value


def _parse_f32(text: str) -> float:
    if not text:
        raise ValueError("cannot parse float from empty string")
    if not _FLOAT_PATTERN.fullmatch(text):
        raise ValueError("invalid float literal")
    value = float(text)
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        # Past the largest single-precision value after rounding.
        return math.copysign(math.inf, value)


_PARSERS: dict[ArgType, Callable[[str], Any]] = {
    ArgType.I32: _parse_i32,
    ArgType.F32: _parse_f32,
    ArgType.STRING: str,
    ArgType.CUSTOM: str,
}


def parse_arg(text: str, arg_type: ArgType) -> Any:
    """Convert raw argument text to the Python value for its type."""
    try:
        return _PARSERS[arg_type](text)
    except ValueError as e:
        raise WrongArgumentValueError(text, str(e)) from e


def validate(args: Sequence[str], args_info: Sequence[ArgInfo]) -> Optional[ArgsError]:
    """Check raw arguments against a signature; return the error or None."""
    if len(args) != len(args_info):
        return WrongNumberOfArgumentsError(got=len(args), expected=len(args_info))

    for arg, info in zip(args, args_info):
        try:
            parse_arg(arg, info.arg_type)
        except WrongArgumentValueError as e:
            return e

    return None


def check_args(args: Sequence[str], args_info: Sequence[ArgInfo]) -> None:
    """Raise the validation error for ``args``, if any."""
    error = validate(args, args_info)
    if error is not None:
        raise error


class TrivialCommandHandler:
    """Handler that accepts any arguments and does nothing."""

    def execute(self, args: list[str], args_info: list[ArgInfo]) -> CommandStatus:
        return CommandStatus.DONE


@dataclass(slots=True)
class FunctionHandler:
    """Adapt a plain or async function into a command handler.

    Arguments are validated against the signature the command was registered
    with and converted before the call: ``I32`` to ``int``, ``F32`` to
    ``float`` rounded to single precision, ``STRING`` and ``CUSTOM`` stay
    text.
    """

    func: Callable[..., Any]

    async def execute(
        self, args: list[str], args_info: list[ArgInfo]
    ) -> Optional[CommandStatus]:
        check_args(args, args_info)
        values = [parse_arg(arg, info.arg_type) for arg, info in zip(args, args_info)]
        result = self.func(*values)
        if inspect.isawaitable(result):
            result = await result
        return result


@dataclass(slots=True)
class Command:
    """One variant of a named command."""

    description: str
    args_info: list[ArgInfo] = field(default_factory=list)
    handler: CommandHandler = field(default_factory=TrivialCommandHandler)

    def __post_init__(self) -> None:
        self.args_info = list(self.args_info)

    def arg_types(self) -> tuple[ArgType, ...]:
        """Return the type signature used to tell overloads apart."""
        return tuple(info.arg_type for info in self.args_info)

    def signature(self) -> str:
        """Return space-joined ``name:type`` descriptions of the arguments."""
        return " ".join(str(info) for info in self.args_info)

    def execute(self, args: Sequence[str]) -> HandlerResult:
        return self.handler.execute(list(args), list(self.args_info))


def command(
    description: str,
    args_info: Sequence[ArgInfo],
    func: Callable[..., Any],
) -> Command:
    """Build a command whose handler calls ``func`` with converted arguments."""
    return Command(description, list(args_info), FunctionHandler(func))
