"""CLI entrypoint for srccombine."""

from __future__ import annotations

import argparse
import os
import subprocess
import sys
from pathlib import Path

from . import __version__
from .config import load_config
from .errors import CombineError
from .logging import configure_logging, get_logger
from .orchestrator import Orchestrator

HELP_TOKENS = frozenset({"help", "-help", "--help", "-h", "/?", "?"})

_DESCRIPTION = """\
Combine the C# files of one or more projects into a single consolidated
source file, for websites or online judges that only accept one file.
using directives are hoisted, deduplicated and sorted; each file body follows
a marker comment naming the original file."""

_EPILOG = """\
The project list may be a solution (.sln), a project (.csproj) or a plain
text file with one source path per line. Projects referenced by another
project but not listed are ignored.

Minifying is not a complete minification: only comments and line breaks are
removed."""


def _parse_flag(value: str | None) -> bool:
    """Return True only for a case-insensitive ``true``; anything else is False."""
    if value is None:
        return False
    return value.strip().lower() == "true"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="srccombine",
        description=_DESCRIPTION,
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "project_list",
        nargs="?",
        help="Solution, project or list file naming the sources to combine.",
    )
    parser.add_argument(
        "output",
        nargs="?",
        help="Path of the combined source file to write.",
    )
    parser.add_argument(
        "open_when_done",
        nargs="?",
        help="true to open the generated file afterwards (default false).",
    )
    parser.add_argument(
        "minify",
        nargs="?",
        help="true to strip comments and line breaks from the output (default false).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=False,
        help="Only report warnings and errors.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Write a DEBUG-level log of the run to this file.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a .srccombine.yml file (defaults to the one beside the project list).",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def _wants_help(argv: list[str]) -> bool:
    return len(argv) == 1 and argv[0] in HELP_TOKENS


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for srccombine."""
    argv = list(sys.argv[1:] if argv is None else argv)
    parser = _build_parser()
    if _wants_help(argv):
        parser.print_help()
        return

    args = parser.parse_args(argv)
    if not args.project_list or not args.output:
        parser.print_help()
        return

    configure_logging(
        verbose=bool(args.verbose), quiet=bool(args.quiet), log_file=args.log_file
    )
    logger = get_logger("cli")

    try:
        if args.config is not None:
            config = load_config(args.config, explicit=True)
        else:
            config = load_config(Path(args.project_list))
    except CombineError as exc:
        parser.exit(1, f"{exc}\n")

    open_when_done = (
        _parse_flag(args.open_when_done) if args.open_when_done is not None else config.open_when_done
    )
    minify = _parse_flag(args.minify) if args.minify is not None else config.minify

    try:
        outcome = Orchestrator(config=config).run(args.project_list, args.output, minify=minify)
    except CombineError as exc:
        parser.exit(1, f"srccombine failed: {exc}\nRun with --verbose for more details.\n")

    print(f"Combined {outcome.file_count} files into {_relativize(outcome.path)}")

    if open_when_done:
        try:
            _open_file(outcome.path)
        except OSError as exc:
            logger.warning("Could not open %s: %s", outcome.path, exc)


def _open_file(path: Path) -> None:
    if sys.platform.startswith("win"):
        os.startfile(str(path))  # type: ignore[attr-defined]
    elif sys.platform == "darwin":
        subprocess.Popen(["open", str(path)])
    else:
        subprocess.Popen(["xdg-open", str(path)])


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
