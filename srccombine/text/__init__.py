"""Text transforms: literal-aware scanning, comment stripping and compaction."""

from .compactor import strip_whitespace
from .scanner import LiteralAwareScanner, scan
from .stripper import CommentStripper, StripResult, strip_comments


def minify(source: str) -> StripResult:
    """Strip comments, then remove line breaks from what is left."""
    result = CommentStripper().strip(source)
    result.text = strip_whitespace(result.text)
    return result


__all__ = [
    "CommentStripper",
    "LiteralAwareScanner",
    "StripResult",
    "minify",
    "scan",
    "strip_comments",
    "strip_whitespace",
]
