"""Best-effort whitespace compaction for minified output."""

from __future__ import annotations

_LINE_BREAKS = ("\r\n", "\n", "\r")


def strip_whitespace(source: str) -> str:
    """Remove every line break, joining all lines into one.

    Runs of spaces and tabs are left alone. Comments must already be gone:
    once lines are joined a line comment would swallow the code after it.
    """
    cleaned = source
    for line_break in _LINE_BREAKS:
        cleaned = cleaned.replace(line_break, "")
    return cleaned


__all__ = ["strip_whitespace"]
