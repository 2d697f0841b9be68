"""Literal-aware lexical scanner for C-like source text.

The scanner splits text into contiguous spans classified as comments, string
literals, verbatim string literals or anything else. It is a small finite
state machine rather than a regular expression so that the rule "a comment
delimiter inside an open literal is literal text" is an explicit transition.

States::

    NORMAL          -> '"' or "'"    -> STRING
                    -> '@"' / '@$"'  -> VERBATIM_STRING
                    -> '//'          -> LINE_COMMENT
                    -> '/*'          -> BLOCK_COMMENT
    STRING          -> '\\'          -> STRING_ESCAPE
                    -> quote         -> NORMAL (span closed)
                    -> line break    -> NORMAL (unterminated, span closed)
    STRING_ESCAPE   -> any           -> STRING
    VERBATIM_STRING -> '""'          -> VERBATIM_STRING
                    -> '"'           -> NORMAL (span closed)
    LINE_COMMENT    -> line break    -> NORMAL (break is not part of the comment)
    BLOCK_COMMENT   -> '*/'          -> NORMAL (span closed)

Spans never overlap and cover every character of the input exactly once.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterator, List

from ..logging import get_logger
from ..models import ScanDiagnostics, Span, SpanKind

_LINE_BREAKS = frozenset("\r\n")

_logger = get_logger("scanner")


class _State(Enum):
    NORMAL = "normal"
    LINE_COMMENT = "line_comment"
    BLOCK_COMMENT = "block_comment"
    STRING = "string"
    STRING_ESCAPE = "string_escape"
    VERBATIM_STRING = "verbatim_string"


_KIND_BY_STATE = {
    _State.NORMAL: SpanKind.OTHER,
    _State.LINE_COMMENT: SpanKind.COMMENT,
    _State.BLOCK_COMMENT: SpanKind.COMMENT,
    _State.STRING: SpanKind.STRING,
    _State.STRING_ESCAPE: SpanKind.STRING,
    _State.VERBATIM_STRING: SpanKind.VERBATIM_STRING,
}


class LiteralAwareScanner:
    """Classifies source text into comment, literal and other spans.

    ``diagnostics`` is reset at the start of every :meth:`scan` and is complete
    once the returned iterator has been exhausted.
    """

    def __init__(self) -> None:
        self.diagnostics = ScanDiagnostics()

    def scan(self, source: str) -> Iterator[Span]:
        """Lazily yield spans covering ``source`` from start to end."""
        self.diagnostics = ScanDiagnostics()
        return self._scan(source, self.diagnostics)

    def spans(self, source: str) -> List[Span]:
        """Return every span of ``source`` as a list."""
        return list(self.scan(source))

    def _scan(self, source: str, diagnostics: ScanDiagnostics) -> Iterator[Span]:
        length = len(source)
        state = _State.NORMAL
        start = 0
        index = 0
        quote = '"'

        while index < length:
            char = source[index]
            following = source[index + 1] if index + 1 < length else ""

            if state is _State.NORMAL:
                opened = None
                width = 0
                if char == '"' or char == "'":
                    opened, width = _State.STRING, 1
                    quote = char
                elif char == "@" and following == '"':
                    opened, width = _State.VERBATIM_STRING, 2
                elif char == "@" and following == "$" and source.startswith('"', index + 2):
                    opened, width = _State.VERBATIM_STRING, 3
                elif char == "/" and following == "/":
                    opened, width = _State.LINE_COMMENT, 2
                elif char == "/" and following == "*":
                    opened, width = _State.BLOCK_COMMENT, 2

                if opened is None:
                    index += 1
                    continue
                if index > start:
                    yield Span(start, index, SpanKind.OTHER)
                start = index
                state = opened
                index += width

            elif state is _State.LINE_COMMENT:
                if char in _LINE_BREAKS:
                    yield Span(start, index, SpanKind.COMMENT)
                    start = index
                    state = _State.NORMAL
                else:
                    index += 1

            elif state is _State.BLOCK_COMMENT:
                if char == "*" and following == "/":
                    index += 2
                    yield Span(start, index, SpanKind.COMMENT)
                    start = index
                    state = _State.NORMAL
                else:
                    index += 1

            elif state is _State.STRING:
                if char == "\\":
                    state = _State.STRING_ESCAPE
                    index += 1
                elif char == quote:
                    index += 1
                    yield Span(start, index, SpanKind.STRING)
                    start = index
                    state = _State.NORMAL
                elif char in _LINE_BREAKS:
                    diagnostics.unterminated_strings += 1
                    _logger.debug("Unterminated string literal at offset %d", start)
                    yield Span(start, index, SpanKind.STRING)
                    start = index
                    state = _State.NORMAL
                else:
                    index += 1

            elif state is _State.STRING_ESCAPE:
                if char in _LINE_BREAKS:
                    # A backslash cannot escape the line break.
                    state = _State.STRING
                else:
                    state = _State.STRING
                    index += 1

            elif state is _State.VERBATIM_STRING:
                if char == '"' and following == '"':
                    index += 2
                elif char == '"':
                    index += 1
                    yield Span(start, index, SpanKind.VERBATIM_STRING)
                    start = index
                    state = _State.NORMAL
                else:
                    index += 1

        if start < length:
            self._record_unterminated(state, start, diagnostics)
            yield Span(start, length, _KIND_BY_STATE[state])

    @staticmethod
    def _record_unterminated(
        state: _State, start: int, diagnostics: ScanDiagnostics
    ) -> None:
        if state is _State.BLOCK_COMMENT:
            diagnostics.unterminated_block_comments += 1
            _logger.debug("Unterminated block comment at offset %d", start)
        elif state in (_State.STRING, _State.STRING_ESCAPE):
            diagnostics.unterminated_strings += 1
            _logger.debug("Unterminated string literal at offset %d", start)
        elif state is _State.VERBATIM_STRING:
            diagnostics.unterminated_verbatim_strings += 1
            _logger.debug("Unterminated verbatim string at offset %d", start)


def scan(source: str) -> Iterator[Span]:
    """Yield spans for ``source`` using a fresh scanner."""
    return LiteralAwareScanner().scan(source)


__all__ = ["LiteralAwareScanner", "scan"]
