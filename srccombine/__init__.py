"""Combine the source files of one or more projects into a single file."""

__version__ = "1.0.0"

from .combiner import Combiner
from .discovery import ProjectDiscovery
from .imports import ImportExtractor, NamespaceSet
from .models import CombinedDocument, Span, SpanKind
from .orchestrator import CombineOutcome, Orchestrator
from .text import CommentStripper, LiteralAwareScanner, strip_comments, strip_whitespace

__all__ = [
    "CombineOutcome",
    "CombinedDocument",
    "Combiner",
    "CommentStripper",
    "ImportExtractor",
    "LiteralAwareScanner",
    "NamespaceSet",
    "Orchestrator",
    "ProjectDiscovery",
    "Span",
    "SpanKind",
    "__version__",
    "strip_comments",
    "strip_whitespace",
]
