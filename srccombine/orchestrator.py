"""Pipeline orchestration: discover, combine, minify, persist."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

from .combiner import Combiner
from .config import CombinerConfig, load_config
from .discovery import ProjectDiscovery
from .logging import get_logger
from .models import ScanDiagnostics
from .storage import write_output
from .text import minify as minify_text


@dataclass
class CombineOutcome:
    """Result of a combine run."""

    path: Path
    file_count: int
    namespace_count: int
    minified: bool
    size: int
    diagnostics: ScanDiagnostics = field(default_factory=ScanDiagnostics)


class Orchestrator:
    """Coordinates a single combine run from project list to output file."""

    def __init__(
        self,
        config: CombinerConfig | None = None,
        discovery: ProjectDiscovery | None = None,
        combiner: Combiner | None = None,
    ) -> None:
        self._config = config
        self._discovery = discovery
        self._combiner = combiner
        self._logger = get_logger("orchestrator")

    def run(
        self,
        project_list: str | Path,
        output: str | Path,
        *,
        minify: Optional[bool] = None,
    ) -> CombineOutcome:
        """Expand ``project_list`` and write the combined source to ``output``."""
        list_path = Path(project_list)
        config = self._config or load_config(list_path)
        discovery = self._discovery or ProjectDiscovery(ignore_files=config.ignore_files)

        files = discovery.discover(list_path)
        return self.combine_files(files, output, minify=minify, config=config)

    def combine_files(
        self,
        files: Sequence[Path],
        output: str | Path,
        *,
        minify: Optional[bool] = None,
        config: CombinerConfig | None = None,
    ) -> CombineOutcome:
        """Combine an already ordered list of files and persist the result."""
        config = config or self._config or CombinerConfig(root=Path.cwd())
        combiner = self._combiner or Combiner(
            max_workers=config.max_workers,
            encoding=config.encoding,
        )
        should_minify = config.minify if minify is None else minify

        document = combiner.build(files)
        text = document.render()
        diagnostics = ScanDiagnostics()
        if should_minify:
            result = minify_text(text)
            text = result.text
            diagnostics = result.diagnostics
            self._logger.debug(
                "Removed %d comments while minifying", result.removed_comments
            )
            if diagnostics.total:
                self._logger.warning(
                    "Minified with %d structural oddities (unterminated comments or literals)",
                    diagnostics.total,
                )

        destination = write_output(Path(output), text, encoding=config.output_encoding)
        self._logger.info(
            "Wrote %s (%d files, %d chars%s)",
            destination,
            document.file_count,
            len(text),
            ", minified" if should_minify else "",
        )
        return CombineOutcome(
            path=destination,
            file_count=document.file_count,
            namespace_count=len(document.namespaces),
            minified=should_minify,
            size=len(text),
            diagnostics=diagnostics,
        )


__all__ = ["CombineOutcome", "Orchestrator"]
