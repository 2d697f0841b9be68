"""Configuration loading for srccombine (.srccombine.yml)."""

from __future__ import annotations

import codecs
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .errors import ConfigError
from .storage import DEFAULT_ENCODING

CONFIG_FILENAME = ".srccombine.yml"
DEFAULT_IGNORE_FILES = ("AssemblyInfo.cs",)
DEFAULT_MAX_WORKERS = 4


@dataclass
class CombinerConfig:
    """Represents the settings defined in .srccombine.yml."""

    root: Path
    ignore_files: List[str] = field(default_factory=lambda: list(DEFAULT_IGNORE_FILES))
    encoding: str = DEFAULT_ENCODING
    output_encoding: str = "utf-8"
    max_workers: Optional[int] = DEFAULT_MAX_WORKERS
    minify: bool = False
    open_when_done: bool = False


def load_config(config_path: Path, *, explicit: bool = False) -> CombinerConfig:
    """Load configuration from disk, falling back to defaults when absent.

    With ``explicit`` the given file is read as-is and must exist; otherwise
    ``.srccombine.yml`` is looked up in, or beside, ``config_path``.
    """
    if explicit and not Path(config_path).expanduser().is_dir():
        config_file = Path(config_path).expanduser().resolve()
        if not config_file.is_file():
            raise ConfigError(f"Config file not found: {config_path}")
    else:
        config_file = _resolve_config_path(Path(config_path))
    root = config_file.parent.resolve()

    if not explicit and not config_file.exists():
        return CombinerConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    config = CombinerConfig(root=root)
    if "ignore_files" in data:
        config.ignore_files = _as_str_list(data.get("ignore_files"))

    encoding = _as_str(data.get("encoding"))
    if encoding:
        config.encoding = _check_encoding("encoding", encoding)
    output_encoding = _as_str(data.get("output_encoding"))
    if output_encoding:
        config.output_encoding = _check_encoding("output_encoding", output_encoding)

    if "max_workers" in data:
        workers = _as_int(data.get("max_workers"))
        if workers is not None and workers < 1:
            raise ConfigError("max_workers must be a positive integer")
        config.max_workers = workers

    minify = _as_bool(data.get("minify"))
    if minify is not None:
        config.minify = minify
    open_when_done = _as_bool(data.get("open_when_done"))
    if open_when_done is not None:
        config.open_when_done = open_when_done

    return config


def _check_encoding(key: str, name: str) -> str:
    try:
        codecs.lookup(name)
    except LookupError as exc:
        raise ConfigError(f"{key}: unknown encoding {name!r}") from exc
    return name


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.suffix not in {".yml", ".yaml"}:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = ["CONFIG_FILENAME", "CombinerConfig", "ConfigError", "load_config"]
