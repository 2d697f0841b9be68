"""Expansion of a solution, project or list file into ordered source paths."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Iterable, List, Sequence, Set

from .config import DEFAULT_IGNORE_FILES
from .errors import DiscoveryError
from .logging import get_logger

_SOLUTION_PROJECT = re.compile(
    r'^Project\("\{[^}]*\}"\)\s*=\s*"(?P<name>[^"]*)"\s*,\s*"(?P<path>[^"]*)"'
)
_PROJECT_SUFFIX = ".csproj"
_SOURCE_GLOB = "*.cs"
_BUILD_OUTPUT_DIRS = {"bin", "obj"}

_logger = get_logger("discovery")


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _normalise(raw: str) -> str:
    return raw.strip().replace("\\", "/")


def _has_wildcard(pattern: str) -> bool:
    return any(char in pattern for char in "*?[")


class ProjectDiscovery:
    """Turns a project list into the absolute source paths to combine.

    ``ignore_files`` holds base names that are never returned, such as
    generated assembly metadata.
    """

    def __init__(self, ignore_files: Iterable[str] = DEFAULT_IGNORE_FILES) -> None:
        self.ignore_files: Set[str] = set(ignore_files)

    def discover(self, path: Path) -> List[Path]:
        list_path = Path(path).expanduser().resolve()
        if not list_path.is_file():
            raise DiscoveryError(f"Project list not found: {path}")

        suffix = list_path.suffix.lower()
        if suffix == ".sln":
            files = self._from_solution(list_path)
        elif suffix == _PROJECT_SUFFIX:
            files = self._from_project(list_path)
        else:
            files = self._from_list(list_path)

        kept = [file for file in files if file.name not in self.ignore_files]
        skipped = len(files) - len(kept)
        if skipped:
            _logger.debug("Ignored %d file(s) by name", skipped)
        _logger.info("Discovered %d source files from %s", len(kept), list_path.name)
        return kept

    def _from_solution(self, solution: Path) -> List[Path]:
        files: List[Path] = []
        for line in self._read_lines(solution):
            match = _SOLUTION_PROJECT.match(line.strip())
            if not match:
                continue
            relative = _normalise(match.group("path"))
            if not relative.lower().endswith(_PROJECT_SUFFIX):
                # Solution folders and non-C# projects.
                continue
            project = (solution.parent / relative).resolve()
            if not project.is_file():
                raise DiscoveryError(
                    f"Project {match.group('name')!r} listed in {solution.name} not found: {project}"
                )
            files.extend(self._from_project(project))
        return files

    def _from_project(self, project: Path) -> List[Path]:
        try:
            tree = ET.parse(project)
        except (OSError, ET.ParseError) as exc:
            raise DiscoveryError(f"Cannot parse project file {project}: {exc}") from exc

        includes: List[str] = []
        removes: List[str] = []
        for element in tree.getroot().iter():
            if _local_name(element.tag) != "Compile":
                continue
            includes.extend(self._split_items(element.get("Include")))
            removes.extend(self._split_items(element.get("Remove")))

        base = project.parent
        if includes:
            files = self._expand(base, includes)
        else:
            files = self._default_sources(base)

        if removes:
            removed = set(self._expand(base, removes))
            files = [file for file in files if file not in removed]
        _logger.debug("%s: %d compile items", project.name, len(files))
        return files

    def _from_list(self, list_path: Path) -> List[Path]:
        files: List[Path] = []
        base = list_path.parent
        for line in self._read_lines(list_path):
            entry = line.strip()
            if not entry or entry.startswith("#"):
                continue
            entry = _normalise(entry)
            if entry.lower().endswith(_PROJECT_SUFFIX):
                files.extend(self._from_project((base / entry).resolve()))
            else:
                files.extend(self._expand(base, [entry]))
        return files

    def _default_sources(self, base: Path) -> List[Path]:
        found = []
        for candidate in base.rglob(_SOURCE_GLOB):
            relative = candidate.relative_to(base)
            if any(part.lower() in _BUILD_OUTPUT_DIRS for part in relative.parts[:-1]):
                continue
            if candidate.is_file():
                found.append(candidate.resolve())
        return sorted(found, key=lambda item: item.relative_to(base).as_posix())

    def _expand(self, base: Path, patterns: Sequence[str]) -> List[Path]:
        files: List[Path] = []
        for pattern in patterns:
            if "$(" in pattern:
                _logger.debug("Skipping item with MSBuild property: %s", pattern)
                continue
            if pattern.endswith("**"):
                # MSBuild "dir\**" means every file below dir.
                pattern = f"{pattern}/*"
            if _has_wildcard(pattern):
                matches = [match.resolve() for match in base.glob(pattern) if match.is_file()]
                files.extend(sorted(matches))
            else:
                files.append((base / pattern).resolve())
        return files

    @staticmethod
    def _split_items(value: str | None) -> List[str]:
        if not value:
            return []
        return [_normalise(item) for item in value.split(";") if item.strip()]

    @staticmethod
    def _read_lines(path: Path) -> List[str]:
        try:
            return path.read_text(encoding="utf-8-sig").splitlines()
        except (OSError, UnicodeDecodeError) as exc:
            raise DiscoveryError(f"Cannot read {path}: {exc}") from exc


__all__ = ["ProjectDiscovery"]
