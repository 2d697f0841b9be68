"""Extraction and deduplication of ``using`` directives."""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Set

from .models import ExtractedFile, SourceFile

_DIRECTIVE_PREFIX = "using "
_DIRECTIVE_SUFFIX = ";"


def normalize_line(line: str) -> str:
    """Trim ``line`` and collapse doubled spaces in a single pass.

    Only pairs are collapsed, so three spaces become two.
    """
    return line.strip().replace("  ", " ")


class ImportExtractor:
    """Splits one file into the namespaces it imports and its remaining body.

    Holds no state between files, so instances can be shared across threads.
    """

    prefix = _DIRECTIVE_PREFIX
    suffix = _DIRECTIVE_SUFFIX

    def parse_line(self, line: str) -> Optional[str]:
        """Return the namespace named by an import line, or None for any other line."""
        normalized = normalize_line(line)
        if normalized.startswith(self.prefix) and normalized.endswith(self.suffix):
            return normalized[len(self.prefix) : len(normalized) - len(self.suffix)]
        return None

    def extract(self, source: SourceFile) -> ExtractedFile:
        namespaces: List[str] = []
        body: List[str] = []
        for line in source.lines:
            name = self.parse_line(line)
            if name is not None:
                namespaces.append(name)
                continue
            if not line.strip():
                continue
            body.append(line)
        return ExtractedFile(path=source.path, namespaces=tuple(namespaces), body=tuple(body))


class NamespaceSet:
    """Unique namespace names, rendered in ordinal order."""

    def __init__(self, names: Iterable[str] = ()) -> None:
        self._names: Set[str] = set()
        self.update(names)

    def add(self, name: str) -> None:
        self._names.add(name)

    def update(self, names: Iterable[str]) -> None:
        for name in names:
            self.add(name)

    def sorted(self) -> List[str]:
        return sorted(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(self.sorted())

    def __len__(self) -> int:
        return len(self._names)


__all__ = ["ImportExtractor", "NamespaceSet", "normalize_line"]
