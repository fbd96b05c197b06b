"""Tests for completion and editor history."""

from prompt_toolkit.completion import CompleteEvent
from prompt_toolkit.document import Document

from minirepl.completion import CommandCompleter, CommandHint, completion_candidates
from minirepl.editor import ExplicitHistory
from minirepl.registry import PrefixIndex


def _index():
    return PrefixIndex(["move", "make", "help", "quit"])


def _complete(completer, text):
    return list(completer.get_completions(Document(text), CompleteEvent()))


class TestCommandCompleter:
    """Test command name completion."""

    def test_candidates(self):
        assert completion_candidates(_index(), "m") == ["make", "move"]
        assert completion_candidates(_index(), "") == ["help", "make", "move", "quit"]

    def test_completes_first_word(self):
        completions = _complete(CommandCompleter(_index()), "mo")

        assert [c.text for c in completions] == ["move"]
        assert completions[0].start_position == -2

    def test_ignores_leading_whitespace(self):
        completions = _complete(CommandCompleter(_index()), "  ma")

        assert [c.text for c in completions] == ["make"]
        assert completions[0].start_position == -2

    def test_no_argument_completion_by_default(self):
        assert _complete(CommandCompleter(_index()), "move som") == []

    def test_filename_completion_for_arguments(self, tmp_path):
        (tmp_path / "notes.txt").write_text("x")
        completer = CommandCompleter(_index(), with_filename_completion=True)

        completions = _complete(completer, f"move {tmp_path}/no")

        assert [c.text for c in completions] == ["tes.txt"]

    def test_filename_completion_does_not_affect_first_word(self):
        completer = CommandCompleter(_index(), with_filename_completion=True)

        assert [c.text for c in _complete(completer, "q")] == ["quit"]


class TestCommandHint:
    """Test inline hints."""

    def test_unique_prefix_hints_remainder(self):
        suggestion = CommandHint(_index()).get_suggestion(None, Document("mo"))

        assert suggestion is not None
        assert suggestion.text == "ve"

    def test_ambiguous_prefix_has_no_hint(self):
        assert CommandHint(_index()).get_suggestion(None, Document("m")) is None

    def test_complete_name_has_no_hint(self):
        assert CommandHint(_index()).get_suggestion(None, Document("move")) is None

    def test_no_hint_for_arguments(self):
        assert CommandHint(_index()).get_suggestion(None, Document("move q")) is None

    def test_no_hint_unless_cursor_at_end(self):
        document = Document("mo", cursor_position=1)

        assert CommandHint(_index()).get_suggestion(None, document) is None

    def test_empty_input_has_no_hint(self):
        assert CommandHint(_index()).get_suggestion(None, Document("")) is None


class TestExplicitHistory:
    """Test that only lines added by the REPL reach history."""

    def test_session_appends_are_ignored(self):
        history = ExplicitHistory()

        history.append_string("  typed  ")
        history.add("typed")

        assert list(history.get_strings()) == ["typed"]

    def test_keeps_order(self):
        history = ExplicitHistory()

        history.add("first")
        history.add("second")

        assert list(history.get_strings()) == ["first", "second"]
