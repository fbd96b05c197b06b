"""Help text rendering for the REPL."""

from __future__ import annotations

import textwrap
from typing import Sequence

from .registry import RESERVED, CommandRegistry


def format_help_entries(entries: Sequence[tuple[str, str]], text_width: int) -> str:
    """Render ``(signature, description)`` rows as an aligned, wrapped table."""
    if not entries:
        return ""
    width = max(len(signature) for signature, _ in entries)
    indent = " " * (width + 4)
    lines = []
    for signature, description in entries:
        line = f"  {signature:<{width}}  {description}"
        lines.append(textwrap.fill(line, width=text_width, subsequent_indent=indent))
    return "".join(f"\n{line}" for line in lines)


def command_entries(registry: CommandRegistry) -> list[tuple[str, str]]:
    """Return one help row per variant, commands sorted by name."""
    entries = []
    for name, variants in registry.items():
        for cmd in variants:
            signature = f"{name} {cmd.signature()}".rstrip()
            entries.append((signature, cmd.description))
    return entries


def render_help(registry: CommandRegistry, description: str = "", text_width: int = 80) -> str:
    """Render the full help message."""
    message = (
        f"\n{description}\n\n"
        f"Available commands:\n{format_help_entries(command_entries(registry), text_width)}\n\n"
        f"Other commands:\n{format_help_entries(RESERVED, text_width)}\n"
    )
    return message.strip()
