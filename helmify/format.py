"""Text clean-ups applied to generated templates."""

from __future__ import annotations

import re

# Only the whitespace characters a YAML line break can be padded with.
_TRAILING_WHITESPACE = re.compile(r"([\t\n\f\r ]+)(\n|\Z)")


def fix_unterminated_quotes(text: str) -> str:
    """Join lines that were wrapped inside a double-quoted string."""
    lines = text.split("\n")
    last = len(lines) - 1
    parts: list[str] = []
    unterminated = False
    for position, line in enumerate(lines):
        if unterminated:
            line = " " + line.strip()
            unterminated = False
        else:
            unterminated = line.count('"') % 2 != 0
        parts.append(line)
        if not unterminated and position != last:
            parts.append("\n")
    return "".join(parts)


def remove_trailing_whitespaces(text: str) -> str:
    """Strip whitespace at the end of each line and of the text."""
    return _TRAILING_WHITESPACE.sub(r"\2", text)