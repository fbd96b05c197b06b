"""Tests for registry module."""

import pytest

from minirepl.command import ArgInfo, ArgType, Command
from minirepl.errors import (
    BuilderError,
    DuplicateCommandsError,
    InvalidNameError,
    ReservedNameError,
)
from minirepl.registry import RESERVED, PrefixIndex, build_registry, split_args


def _cmd(*types, description="cmd"):
    return Command(description, [ArgInfo(t) for t in types])


class TestSplitArgs:
    """Test shell-word tokenization."""

    def test_plain_words(self):
        assert split_args("add 1  2") == ["add", "1", "2"]

    def test_quotes(self):
        assert split_args("hello 'big world' \"x y\"") == ["hello", "big world", "x y"]

    def test_hash_is_not_a_comment(self):
        assert split_args("say #1") == ["say", "#1"]

    def test_unterminated_quote_raises(self):
        with pytest.raises(ValueError):
            split_args('hello "world')


class TestPrefixIndex:
    """Test prefix queries."""

    def test_starting_with_is_sorted(self):
        index = PrefixIndex(["move", "make", "help", "mo"])
        assert index.starting_with("m") == ["make", "mo", "move"]
        assert index.starting_with("mo") == ["mo", "move"]
        assert index.starting_with("x") == []

    def test_empty_prefix_matches_everything(self):
        index = PrefixIndex(["b", "a"])
        assert index.starting_with("") == ["a", "b"]

    def test_membership_and_dedup(self):
        index = PrefixIndex(["a", "a", "b"])
        assert "a" in index
        assert "c" not in index
        assert len(index) == 2


class TestBuildRegistry:
    """Test registry construction."""

    def test_duplicate_signature_fails(self):
        with pytest.raises(DuplicateCommandsError) as exc_info:
            build_registry([
                ("name_x", _cmd(description="Command X")),
                ("name_x", _cmd(description="Command X 2")),
            ])

        assert exc_info.value.name == "name_x"
        assert str(exc_info.value) == "more than one command with name 'name_x' added"

    def test_duplicate_ignores_argument_names(self):
        with pytest.raises(DuplicateCommandsError):
            build_registry([
                ("x", Command("a", [ArgInfo(ArgType.I32, "a")])),
                ("x", Command("b", [ArgInfo(ArgType.I32, "b")])),
            ])

    def test_overload_with_distinct_signatures(self):
        registry = build_registry([
            ("name_x", _cmd()),
            ("name_x", _cmd(ArgType.I32)),
        ])

        assert registry.counts() == {"name_x": 2}

    def test_variants_keep_registration_order(self):
        first, second, third = _cmd(ArgType.I32), _cmd(), _cmd(ArgType.STRING)
        registry = build_registry([("x", first), ("x", second), ("x", third)])

        assert registry.variants("x") == (first, second, third)

    def test_empty_name_fails(self):
        with pytest.raises(InvalidNameError):
            build_registry([("", _cmd())])

    def test_name_with_spaces_fails(self):
        with pytest.raises(InvalidNameError) as exc_info:
            build_registry([("name-with spaces", _cmd())])

        assert "cannot be parsed correctly" in str(exc_info.value)

    def test_unparsable_name_fails(self):
        with pytest.raises(InvalidNameError):
            build_registry([('bad"quote', _cmd())])

    @pytest.mark.parametrize("name", ["help", "quit"])
    @pytest.mark.parametrize("types", [(), (ArgType.I32,), (ArgType.STRING, ArgType.F32)])
    def test_reserved_name_fails(self, name, types):
        with pytest.raises(ReservedNameError) as exc_info:
            build_registry([(name, _cmd(*types))])

        assert str(exc_info.value) == f"'{name}' is a reserved command name"

    def test_first_error_aborts_build(self):
        with pytest.raises(BuilderError) as exc_info:
            build_registry([("ok", _cmd()), ("help", _cmd()), ("", _cmd())])

        assert isinstance(exc_info.value, ReservedNameError)

    def test_index_contains_commands_and_reserved(self):
        registry = build_registry([("move", _cmd()), ("make", _cmd())])

        assert list(registry.index) == ["help", "make", "move", "quit"]
        assert "help" not in registry
        assert registry.names() == ["make", "move"]

    def test_reserved_only_registry(self):
        registry = build_registry([])

        assert len(registry) == 0
        assert list(registry.index) == sorted(name for name, _ in RESERVED)

    def test_round_trip_counts(self):
        types = [(), (ArgType.I32,), (ArgType.F32,), (ArgType.I32, ArgType.I32), (ArgType.STRING,)]
        expected = {"alpha": 5, "beta": 2, "gamma": 1}
        entries = [
            (name, _cmd(*types[i])) for name, count in expected.items() for i in range(count)
        ]

        registry = build_registry(entries)

        assert registry.counts() == expected
