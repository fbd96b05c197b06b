"""Line editor used by the REPL to read input."""

from __future__ import annotations

import sys
from typing import Optional, Protocol, TextIO

from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.output import create_output
from prompt_toolkit.shortcuts import CompleteStyle

from .completion import CommandCompleter, CommandHint
from .registry import PrefixIndex


class LineEditor(Protocol):
    """Source of input lines.

    ``read_line`` raises ``KeyboardInterrupt`` when the user interrupts and
    ``EOFError`` at end of input.
    """

    async def read_line(self, prompt: str) -> str:
        ...

    def add_history(self, line: str) -> None:
        ...


class ExplicitHistory(InMemoryHistory):
    """In-memory history that only keeps lines the REPL adds itself."""

    def append_string(self, string: str) -> None:
        # Accepted input is recorded by the REPL loop, trimmed and non-blank.
        return None

    def add(self, line: str) -> None:
        super().append_string(line)


class PromptToolkitEditor:
    """LineEditor backed by a prompt_toolkit PromptSession."""

    def __init__(
        self,
        index: PrefixIndex,
        *,
        with_hints: bool = True,
        with_completion: bool = True,
        with_filename_completion: bool = False,
        stream: Optional[TextIO] = None,
    ):
        self.history = ExplicitHistory()
        completer = None
        if with_completion:
            completer = CommandCompleter(index, with_filename_completion=with_filename_completion)
        self.session: PromptSession[str] = PromptSession(
            history=self.history,
            completer=completer,
            complete_style=CompleteStyle.READLINE_LIKE,
            auto_suggest=CommandHint(index) if with_hints else None,
            output=create_output(stdout=stream or sys.stderr),
        )

    async def read_line(self, prompt: str) -> str:
        return await self.session.prompt_async(prompt)

    def add_history(self, line: str) -> None:
        self.history.add(line)
