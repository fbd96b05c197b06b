"""Pytest configuration and fixtures for minirepl tests."""

import io

import pytest

from minirepl import ArgInfo, ArgType, Command, Repl, command
from test_helpers import RecordingHandler, ScriptedEditor


@pytest.fixture
def out():
    """In-memory output sink for REPL messages."""
    return io.StringIO()


@pytest.fixture
def make_repl(out):
    """Build a REPL from (name, command) pairs writing to the ``out`` sink."""

    def _make(*entries, editor=None, **config):
        builder = Repl.builder().out(out)
        for key, value in config.items():
            builder = getattr(builder, key)(value)
        builder = builder.editor(editor if editor is not None else ScriptedEditor())
        for name, cmd in entries:
            builder = builder.add(name, cmd)
        return builder.build()

    return _make


@pytest.fixture
def adder_calls():
    """Calls observed by the ``add`` commands of ``calculator``."""
    return []


@pytest.fixture
def calculator(adder_calls):
    """Commands ``add`` (i32 i32) and ``add`` (f32 f32 f32)."""

    def add_ints(a, b):
        adder_calls.append((a, b))

    def add_floats(a, b, c):
        adder_calls.append((a, b, c))

    return [
        (
            "add",
            command(
                "Add two integers",
                [ArgInfo(ArgType.I32, "a"), ArgInfo(ArgType.I32, "b")],
                add_ints,
            ),
        ),
        (
            "add",
            command(
                "Add three floats",
                [ArgInfo(ArgType.F32, "a"), ArgInfo(ArgType.F32, "b"), ArgInfo(ArgType.F32, "c")],
                add_floats,
            ),
        ),
    ]


@pytest.fixture
def move_make():
    """Commands ``move`` and ``make`` sharing the prefix ``m``."""
    return [
        ("move", Command("Move", [], RecordingHandler())),
        ("make", Command("Make", [], RecordingHandler())),
    ]
