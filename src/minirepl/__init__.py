"""minirepl: command resolution and dispatch for interactive line shells."""

from .command import (
    ArgInfo,
    ArgType,
    Command,
    CommandHandler,
    CommandStatus,
    FunctionHandler,
    TrivialCommandHandler,
    check_args,
    command,
    validate,
)
from .errors import (
    ArgsError,
    BorrowError,
    BuilderError,
    CriticalError,
    DuplicateCommandsError,
    InvalidNameError,
    NoVariantFoundError,
    ReplError,
    ReservedNameError,
    WrongArgumentValueError,
    WrongNumberOfArgumentsError,
    critical,
    critical_errors,
)
from .outcomes import LoopStatus
from .registry import RESERVED
from .repl import Repl, ReplBuilder, ReplConfig
from .state import Shared

__version__ = "0.1.0"

__all__ = [
    "RESERVED",
    "ArgInfo",
    "ArgType",
    "ArgsError",
    "BorrowError",
    "BuilderError",
    "Command",
    "CommandHandler",
    "CommandStatus",
    "CriticalError",
    "DuplicateCommandsError",
    "FunctionHandler",
    "InvalidNameError",
    "LoopStatus",
    "NoVariantFoundError",
    "Repl",
    "ReplBuilder",
    "ReplConfig",
    "ReplError",
    "ReservedNameError",
    "Shared",
    "TrivialCommandHandler",
    "WrongArgumentValueError",
    "WrongNumberOfArgumentsError",
    "__version__",
    "check_args",
    "command",
    "critical",
    "critical_errors",
    "validate",
]
