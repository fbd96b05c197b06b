"""Command name completion and inline hints for the prompt_toolkit editor."""

from __future__ import annotations

from typing import Iterable, Optional

from prompt_toolkit.auto_suggest import AutoSuggest, Suggestion
from prompt_toolkit.buffer import Buffer
from prompt_toolkit.completion import CompleteEvent, Completer, Completion, PathCompleter
from prompt_toolkit.document import Document

from .registry import PrefixIndex


def completion_candidates(index: PrefixIndex, prefix: str) -> list[str]:
    """Return command names starting with ``prefix``."""
    return index.starting_with(prefix)


def _is_first_word(text: str) -> bool:
    stripped = text.lstrip()
    return not any(ch.isspace() for ch in stripped)


class CommandCompleter(Completer):
    """Complete command names in first position, optionally filenames after."""

    def __init__(self, index: PrefixIndex, with_filename_completion: bool = False):
        self.index = index
        self._path_completer: Optional[PathCompleter] = (
            PathCompleter(expanduser=True) if with_filename_completion else None
        )

    def get_completions(
        self, document: Document, complete_event: CompleteEvent
    ) -> Iterable[Completion]:
        text = document.text_before_cursor
        if _is_first_word(text):
            prefix = text.lstrip()
            for name in completion_candidates(self.index, prefix):
                yield Completion(name, start_position=-len(prefix))
            return

        if self._path_completer is None:
            return
        word = document.get_word_before_cursor(WORD=True)
        yield from self._path_completer.get_completions(
            Document(word, cursor_position=len(word)), complete_event
        )


class CommandHint(AutoSuggest):
    """Suggest the rest of a command name when only one name fits.

    With commands ``move`` and ``make``, typing ``mo`` hints ``ve`` while
    typing ``m`` hints nothing.
    """

    def __init__(self, index: PrefixIndex):
        self.index = index

    def get_suggestion(self, buffer: Buffer, document: Document) -> Optional[Suggestion]:
        text = document.text
        if not text or not document.is_cursor_at_the_end or not _is_first_word(text):
            return None
        prefix = text.lstrip()
        candidates = completion_candidates(self.index, prefix)
        if len(candidates) != 1 or candidates[0] == prefix:
            return None
        return Suggestion(candidates[0][len(prefix):])
