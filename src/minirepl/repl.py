"""Main REPL: builder, read-resolve-dispatch loop and help."""

from __future__ import annotations

import dataclasses
import logging
import sys
import time
from dataclasses import dataclass, field
from typing import Optional, TextIO

from .classifier import Disposition, classify
from .command import Command
from .dispatcher import dispatch
from .editor import LineEditor, PromptToolkitEditor
from .help import render_help
from .logging_utils import log_event, summarize_command_args
from .outcomes import ArgumentsRejected, Failed, Fatal, LoopStatus
from .registry import CommandRegistry, build_registry, split_args
from .resolver import resolve


@dataclass(slots=True)
class ReplConfig:
    """REPL settings; every field has a usable default."""

    description: str = ""
    prompt: str = "> "
    text_width: int = 80
    predict_commands: bool = True
    with_hints: bool = True
    with_completion: bool = True
    with_filename_completion: bool = False
    out: TextIO = field(default_factory=lambda: sys.stderr)

    def __post_init__(self) -> None:
        if self.text_width < 1:
            raise ValueError(f"text_width must be positive, got {self.text_width}")


class ReplBuilder:
    """Collects configuration and commands, then builds a Repl.

    Every setter returns the builder so calls can be chained::

        repl = (
            Repl.builder()
            .description("My REPL")
            .prompt("repl> ")
            .add("hello", command("Say hello", [ArgInfo(ArgType.STRING, "name")], hello))
            .build()
        )
    """

    def __init__(self) -> None:
        self._config = ReplConfig()
        self._commands: list[tuple[str, Command]] = []
        self._editor: Optional[LineEditor] = None

    def _set(self, **changes) -> "ReplBuilder":
        self._config = dataclasses.replace(self._config, **changes)
        return self

    def description(self, description: str) -> "ReplBuilder":
        """Text shown at the top of the help message."""
        return self._set(description=description)

    def prompt(self, prompt: str) -> "ReplBuilder":
        return self._set(prompt=prompt)

    def text_width(self, text_width: int) -> "ReplBuilder":
        """Width used to wrap the help message; must be positive."""
        return self._set(text_width=text_width)

    def predict_commands(self, enabled: bool) -> "ReplBuilder":
        """Run a command from a prefix when only one command name matches it."""
        return self._set(predict_commands=enabled)

    def with_hints(self, enabled: bool) -> "ReplBuilder":
        return self._set(with_hints=enabled)

    def with_completion(self, enabled: bool) -> "ReplBuilder":
        return self._set(with_completion=enabled)

    def with_filename_completion(self, enabled: bool) -> "ReplBuilder":
        return self._set(with_filename_completion=enabled)

    def out(self, stream: TextIO) -> "ReplBuilder":
        """Where REPL messages are written; defaults to stderr."""
        return self._set(out=stream)

    def editor(self, editor: LineEditor) -> "ReplBuilder":
        """Replace the default prompt_toolkit line editor."""
        self._editor = editor
        return self

    def add(self, name: str, cmd: Command) -> "ReplBuilder":
        """Add a command variant under ``name``; names may repeat for overloads."""
        self._commands.append((name, cmd))
        return self

    def build(self) -> "Repl":
        """Return the configured Repl; raise BuilderError on invalid commands."""
        registry = build_registry(self._commands)
        return Repl(registry, self._config, editor=self._editor)


class Repl:
    """Read-eval-print loop over a closed set of commands.

    Commands cannot be added or removed once the REPL is built. Use ``run``
    to loop until the user quits, or ``next`` to get control back after each
    step.
    """

    def __init__(
        self,
        registry: CommandRegistry,
        config: Optional[ReplConfig] = None,
        editor: Optional[LineEditor] = None,
    ):
        self.registry = registry
        self.config = config or ReplConfig()
        self._editor = editor
        self._started = False

    @staticmethod
    def builder() -> ReplBuilder:
        return ReplBuilder()

    @property
    def editor(self) -> LineEditor:
        if self._editor is None:
            self._editor = PromptToolkitEditor(
                self.registry.index,
                with_hints=self.config.with_hints,
                with_completion=self.config.with_completion,
                with_filename_completion=self.config.with_filename_completion,
            )
        return self._editor

    def _write(self, text: str) -> None:
        print(text, file=self.config.out)

    def help(self) -> str:
        """Return the formatted help message."""
        return render_help(self.registry, self.config.description, self.config.text_width)

    def _report_not_found(self, prefix: str, diagnostics: list[str], candidates: tuple[str, ...]) -> None:
        log_event("command_not_found", prefix=prefix, candidates=candidates)
        for line in diagnostics:
            self._write(line)

    def _report_error(
        self, name: str, args: list[str], outcome: ArgumentsRejected | Failed
    ) -> None:
        error = outcome.error
        log_event(
            "command_error",
            level=logging.WARNING,
            command=name,
            args_summary=summarize_command_args(args),
            error_type=type(error).__name__,
            error=str(error),
        )
        self._write(f"Error: {error}")
        if isinstance(outcome, ArgumentsRejected):
            self._write("Usage:")
            for cmd in self.registry.variants(name):
                self._write(f"  {name} {cmd.signature()}".rstrip())

    async def _execute(self, name: str, args: list[str]) -> LoopStatus:
        started = time.perf_counter()
        outcome = await dispatch(name, args, self.registry)
        log_event(
            "command_exec",
            command=name,
            args_summary=summarize_command_args(args),
            outcome=outcome.kind,
            elapsed_ms=round((time.perf_counter() - started) * 1000, 1),
        )

        disposition = classify(outcome)
        if disposition is Disposition.CONTINUE:
            return LoopStatus.CONTINUE
        if disposition is Disposition.BREAK:
            log_event("repl_stop", reason="command", command=name)
            return LoopStatus.BREAK
        if disposition is Disposition.CRITICAL and isinstance(outcome, Fatal):
            log_event(
                "repl_stop",
                level=logging.ERROR,
                reason="critical",
                command=name,
                error_type=type(outcome.error.cause).__name__,
                error=str(outcome.error),
            )
            raise outcome.error

        if isinstance(outcome, (ArgumentsRejected, Failed)):
            self._report_error(name, args, outcome)
        return LoopStatus.CONTINUE

    async def handle_line(self, line: str) -> LoopStatus:
        """Evaluate one input line without reading from the editor."""
        try:
            words = split_args(line)
        except ValueError as e:
            self._write(f"Error: {e}")
            return LoopStatus.CONTINUE
        if not words:
            return LoopStatus.CONTINUE

        prefix, args = words[0], words[1:]
        resolution = resolve(prefix, self.registry.index, predict=self.config.predict_commands)
        if resolution.name is None:
            self._report_not_found(prefix, resolution.diagnostics(), resolution.candidates)
            return LoopStatus.CONTINUE

        if resolution.name == "help":
            self._write(self.help())
            return LoopStatus.CONTINUE
        if resolution.name == "quit":
            log_event("repl_stop", reason="quit")
            return LoopStatus.BREAK

        return await self._execute(resolution.name, args)

    async def next(self) -> LoopStatus:
        """Run a single REPL step and report whether the loop should go on."""
        if not self._started:
            self._started = True
            log_event(
                "repl_start",
                prompt=self.config.prompt,
                command_count=len(self.registry),
                predict_commands=self.config.predict_commands,
            )

        try:
            line = await self.editor.read_line(self.config.prompt)
        except KeyboardInterrupt:
            log_event("repl_stop", reason="interrupt")
            self._write("CTRL-C")
            return LoopStatus.BREAK
        except EOFError:
            log_event("repl_stop", reason="eof")
            return LoopStatus.BREAK
        except Exception as e:
            log_event("editor_error", level=logging.ERROR, error_type=type(e).__name__, error=str(e))
            self._write(f"Error: {e!r}")
            return LoopStatus.CONTINUE

        if not line.strip():
            return LoopStatus.CONTINUE

        self.editor.add_history(line.strip())
        return await self.handle_line(line)

    async def run(self) -> None:
        """Run the loop until quit or end of input; critical errors propagate."""
        while await self.next() is LoopStatus.CONTINUE:
            pass
