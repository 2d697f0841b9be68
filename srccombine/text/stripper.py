"""Comment removal that leaves string and verbatim literals untouched."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..logging import get_logger
from ..models import ScanDiagnostics, SpanKind
from .scanner import LiteralAwareScanner

_logger = get_logger("stripper")


@dataclass
class StripResult:
    """Stripped text plus the oddities seen while scanning it."""

    text: str
    diagnostics: ScanDiagnostics = field(default_factory=ScanDiagnostics)
    removed_comments: int = 0


class CommentStripper:
    """Erases comment spans and copies every other span verbatim.

    Stripping is idempotent for valid C#. Input that only tokenizes after a
    comment is removed, such as ``@/**/"a\\"``, can join an ``@`` onto a
    regular string and be read as a verbatim string on a second pass.
    """

    def __init__(self, scanner: LiteralAwareScanner | None = None) -> None:
        self._scanner = scanner or LiteralAwareScanner()

    def strip(self, source: str) -> StripResult:
        pieces = []
        removed = 0
        for span in self._scanner.scan(source):
            if span.kind is SpanKind.COMMENT:
                removed += 1
                continue
            pieces.append(span.text(source))

        diagnostics = self._scanner.diagnostics
        if diagnostics.unterminated_block_comments:
            _logger.warning(
                "Unterminated block comment; discarded everything after it to end of input"
            )
        if diagnostics.unterminated_verbatim_strings:
            _logger.warning("Unterminated verbatim string kept to end of input")
        if diagnostics.unterminated_strings:
            _logger.debug(
                "%d string literal(s) ended at a line break", diagnostics.unterminated_strings
            )
        return StripResult(text="".join(pieces), diagnostics=diagnostics, removed_comments=removed)


def strip_comments(source: str) -> str:
    """Return ``source`` with every comment removed."""
    return CommentStripper().strip(source).text


__all__ = ["CommentStripper", "StripResult", "strip_comments"]
