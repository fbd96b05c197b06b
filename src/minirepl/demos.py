"""Example REPLs shipped with minirepl and runnable from the command line."""

from __future__ import annotations

import ipaddress
import time
from pathlib import Path
from typing import Callable, Optional

from .command import ArgInfo, ArgType, Command, CommandStatus, check_args, command
from .editor import LineEditor
from .errors import WrongArgumentValueError, critical
from .repl import Repl, ReplBuilder
from .state import Shared


def _builder(editor: Optional[LineEditor]) -> ReplBuilder:
    builder = Repl.builder()
    if editor is not None:
        builder = builder.editor(editor)
    return builder


def minimal(editor: Optional[LineEditor] = None) -> Repl:
    def hello(name: str) -> None:
        print(f"Hello {name}")

    def add(x: int, y: int) -> None:
        print(f"{x} + {y} = {x + y}")

    return (
        _builder(editor)
        .add("hello", command("Say hello", [ArgInfo(ArgType.STRING, "name")], hello))
        .add(
            "add",
            command(
                "Add X to Y",
                [ArgInfo(ArgType.I32, "X"), ArgInfo(ArgType.I32, "Y")],
                add,
            ),
        )
        .build()
    )


class DescribeHandler:
    """One handler serving every overload of ``describe``.

    The dispatcher passes the signature of the variant being tried, so the
    same handler can tell the overloads apart.
    """

    def execute(self, args: list[str], args_info: list[ArgInfo]) -> CommandStatus:
        check_args(args, args_info)
        types = tuple(info.arg_type for info in args_info)
        if types == ():
            print("No arguments")
        elif types == (ArgType.I32, ArgType.I32):
            print(f"Got two integers: {int(args[0])} {int(args[1])}")
        elif types == (ArgType.I32, ArgType.STRING):
            print(f"An integer `{int(args[0])}` and a string `{args[1]}`")
        return CommandStatus.DONE


def overload(editor: Optional[LineEditor] = None) -> Repl:
    handler = DescribeHandler()
    return (
        _builder(editor)
        .add("describe", Command("Variant 1", [], handler))
        .add(
            "describe",
            Command("Variant 2", [ArgInfo(ArgType.I32, "a"), ArgInfo(ArgType.I32, "b")], handler),
        )
        .add(
            "describe",
            Command(
                "Variant 3", [ArgInfo(ArgType.I32, "a"), ArgInfo(ArgType.STRING, "b")], handler
            ),
        )
        .build()
    )


def _may_fail(description: str) -> None:
    raise OSError(description)


def errors(editor: Optional[LineEditor] = None, clock: Callable[[], int] = time.perf_counter_ns) -> Repl:
    def ok(name: str) -> None:
        return None

    def recoverable(text: str) -> None:
        _may_fail(text)

    def fatal(text: str) -> None:
        try:
            _may_fail(text)
        except OSError as e:
            raise critical(e) from e

    def roulette() -> None:
        cylinder = clock() % 6
        if cylinder == 0:
            fatal("Bang!")
        elif cylinder <= 2:
            recoverable("Blank cartridge?")

    return (
        _builder(editor)
        .add("ok", command("Run a command that just succeeds", [ArgInfo(ArgType.STRING, "name")], ok))
        .add(
            "error",
            command(
                "Command with recoverable error handled by the REPL",
                [ArgInfo(ArgType.STRING, "text")],
                recoverable,
            ),
        )
        .add(
            "critical",
            command(
                "Command returns a critical error that must be handled outside of REPL",
                [ArgInfo(ArgType.STRING, "text")],
                fatal,
            ),
        )
        .add("roulette", command("Feeling lucky?", [], roulette))
        .build()
    )


def state(editor: Optional[LineEditor] = None, outside_x: Optional[Shared[str]] = None) -> Repl:
    shared_x = outside_x if outside_x is not None else Shared("Out x")

    def count(x: int, y: int) -> None:
        print("".join(f" {i}" for i in range(x, y + 1)))

    def say(x: float) -> None:
        print(f"x is equal to {x}")

    def outx() -> None:
        print(shared_x.update(lambda value: value + "x"))

    return (
        _builder(editor)
        .description("Example REPL")
        .prompt("=> ")
        .text_width(60)
        .add(
            "count",
            command(
                "Count from X to Y",
                [ArgInfo(ArgType.I32, "X"), ArgInfo(ArgType.I32, "Y")],
                count,
            ),
        )
        .add("say", command("Say X", [ArgInfo(ArgType.F32, "X")], say))
        .add(
            "outx",
            command(
                "Use mutably outside var x. This command has a really long description "
                "so we need to wrap it somehow, it is interesting how actually the "
                "wrapping will be performed.",
                [],
                outx,
            ),
        )
        .build()
    )


def parse_ip(text: str) -> ipaddress.IPv4Address | ipaddress.IPv6Address:
    """Parse an IP address argument, rejecting it as an argument error."""
    try:
        return ipaddress.ip_address(text)
    except ValueError as e:
        raise WrongArgumentValueError(text, "invalid IP address syntax") from e


def from_str(editor: Optional[LineEditor] = None) -> Repl:
    def ls(directory: str) -> None:
        for entry in sorted(Path(directory).iterdir()):
            print(entry)

    def ipaddr(text: str) -> None:
        print(parse_ip(text))

    return (
        _builder(editor)
        .add("ls", command("List files in a directory", [ArgInfo(ArgType.CUSTOM, "dir")], ls))
        .add("ipaddr", command("Just parse and print the given IP address", [ArgInfo(ArgType.CUSTOM, "ip")], ipaddr))
        .build()
    )


DEMOS: dict[str, Callable[..., Repl]] = {
    "minimal": minimal,
    "overload": overload,
    "errors": errors,
    "state": state,
    "from-str": from_str,
}

