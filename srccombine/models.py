"""Core data models shared across srccombine components."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import List, Tuple

MARKER_FMT = "//*** {tool} -> original file {name} ***"
TIMESTAMP_FMT = "%Y-%m-%d %H:%M:%S"


class SpanKind(str, Enum):
    """Classification of a region of scanned source text."""

    COMMENT = "comment"
    STRING = "string"
    VERBATIM_STRING = "verbatim_string"
    OTHER = "other"


@dataclass(frozen=True)
class Span:
    """Half-open region ``[start, end)`` of scanned text with its kind."""

    start: int
    end: int
    kind: SpanKind

    def text(self, source: str) -> str:
        return source[self.start : self.end]


@dataclass
class ScanDiagnostics:
    """Structural oddities tolerated while scanning."""

    unterminated_block_comments: int = 0
    unterminated_strings: int = 0
    unterminated_verbatim_strings: int = 0

    @property
    def total(self) -> int:
        return (
            self.unterminated_block_comments
            + self.unterminated_strings
            + self.unterminated_verbatim_strings
        )


@dataclass(frozen=True)
class SourceFile:
    """Read-only lines of one input file."""

    path: Path
    lines: Tuple[str, ...]

    @property
    def name(self) -> str:
        return self.path.name


@dataclass(frozen=True)
class ExtractedFile:
    """A source file split into its import names and remaining body lines."""

    path: Path
    namespaces: Tuple[str, ...]
    body: Tuple[str, ...]

    @property
    def name(self) -> str:
        return self.path.name


@dataclass(frozen=True)
class FileSection:
    """Body of one original file inside the combined document."""

    name: str
    lines: Tuple[str, ...]


@dataclass(frozen=True)
class CombinedDocument:
    """Header, hoisted imports and file sections of a combined output."""

    created_at: datetime
    file_count: int
    namespaces: Tuple[str, ...]
    sections: Tuple[FileSection, ...] = field(default_factory=tuple)
    tool_name: str = "srccombine"

    def header_lines(self) -> List[str]:
        return [
            "/*",
            f" * File generated by {self.tool_name} using {self.file_count} source files.",
            f" * Created On: {self.created_at.strftime(TIMESTAMP_FMT)}",
            "*/",
        ]

    def marker(self, name: str) -> str:
        return MARKER_FMT.format(tool=self.tool_name, name=name)

    def lines(self) -> List[str]:
        rendered = self.header_lines()
        rendered.extend(f"using {namespace};" for namespace in self.namespaces)
        for section in self.sections:
            rendered.append(self.marker(section.name))
            rendered.extend(section.lines)
        return rendered

    def render(self) -> str:
        """Return the document text, one line per entry with a trailing newline."""
        return "\n".join(self.lines()) + "\n"
