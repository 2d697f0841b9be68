"""Reading source files and persisting the combined output."""

from __future__ import annotations

import os
from pathlib import Path

from .errors import OutputWriteError, SourceReadError
from .logging import get_logger
from .models import SourceFile

DEFAULT_ENCODING = "utf-8-sig"

_logger = get_logger("storage")


def read_source(path: Path, encoding: str = DEFAULT_ENCODING) -> SourceFile:
    """Load ``path`` as immutable lines; any failure aborts the run."""
    try:
        text = Path(path).read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError, LookupError) as exc:
        raise SourceReadError(f"Cannot read source file {path}: {exc}") from exc
    _logger.debug("Read %s (%d chars)", path, len(text))
    return SourceFile(path=Path(path), lines=tuple(_split_lines(text)))


def _split_lines(text: str) -> list[str]:
    # read_text already folded \r\n and \r into \n; splitlines() would also
    # break on form feeds and other separators that do not end a line here.
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def write_output(path: Path, text: str, encoding: str = "utf-8") -> Path:
    """Write ``text`` to ``path`` in one step.

    The content goes to a sibling temporary file first and is moved over the
    destination with ``os.replace``, so the destination is either untouched or
    complete.
    """
    destination = Path(path).expanduser()
    tmp = destination.with_name(destination.name + ".tmp")
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        with tmp.open("w", encoding=encoding) as handle:
            handle.write(text)
        os.replace(tmp, destination)
    except (OSError, UnicodeError, LookupError) as exc:
        try:
            tmp.unlink()
        except FileNotFoundError:
            pass
        except OSError:
            _logger.debug("Could not remove temporary file %s", tmp)
        raise OutputWriteError(f"Cannot write output file {destination}: {exc}") from exc
    _logger.debug("Wrote %s (%d chars)", destination, len(text))
    return destination


__all__ = ["DEFAULT_ENCODING", "read_source", "write_output"]
