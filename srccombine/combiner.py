"""Combination of many source files into one document."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from .imports import ImportExtractor, NamespaceSet
from .logging import get_logger
from .models import CombinedDocument, ExtractedFile, FileSection
from .storage import DEFAULT_ENCODING, read_source

DEFAULT_TOOL_NAME = "srccombine"

_logger = get_logger("combiner")


class Combiner:
    """Builds a :class:`CombinedDocument` from an ordered list of source paths.

    File order is taken from the caller and never re-sorted; only the hoisted
    ``using`` directives are sorted.
    """

    def __init__(
        self,
        *,
        extractor: ImportExtractor | None = None,
        clock: Callable[[], datetime] = datetime.now,
        max_workers: Optional[int] = None,
        encoding: str = DEFAULT_ENCODING,
        tool_name: str = DEFAULT_TOOL_NAME,
    ) -> None:
        self._extractor = extractor or ImportExtractor()
        self._clock = clock
        self._max_workers = max_workers
        self._encoding = encoding
        self._tool_name = tool_name

    def extract_all(self, paths: Sequence[Path]) -> List[ExtractedFile]:
        """Read and split every file, returning results in input order."""
        paths = [Path(path) for path in paths]
        workers = self._resolve_workers(len(paths))
        if workers <= 1:
            return [self._extract_one(path) for path in paths]

        _logger.debug("Extracting %d files with %d workers", len(paths), workers)
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="srccombine") as pool:
            # map() yields in submission order and re-raises the first failure.
            return list(pool.map(self._extract_one, paths))

    def build(self, paths: Sequence[Path]) -> CombinedDocument:
        extracted = self.extract_all(paths)

        namespaces = NamespaceSet()
        for item in extracted:
            namespaces.update(item.namespaces)

        sections = tuple(FileSection(name=item.name, lines=item.body) for item in extracted)
        _logger.info(
            "Combined %d files with %d unique using directives",
            len(sections),
            len(namespaces),
        )
        return CombinedDocument(
            created_at=self._clock(),
            file_count=len(extracted),
            namespaces=tuple(namespaces.sorted()),
            sections=sections,
            tool_name=self._tool_name,
        )

    def combine(self, paths: Sequence[Path]) -> str:
        return self.build(paths).render()

    def _extract_one(self, path: Path) -> ExtractedFile:
        source = read_source(path, self._encoding)
        extracted = self._extractor.extract(source)
        _logger.debug(
            "%s: %d using directives, %d body lines",
            source.name,
            len(extracted.namespaces),
            len(extracted.body),
        )
        return extracted

    def _resolve_workers(self, count: int) -> int:
        if count <= 1:
            return 1
        if self._max_workers is None:
            return 1
        return max(1, min(self._max_workers, count))


__all__ = ["Combiner", "DEFAULT_TOOL_NAME"]
