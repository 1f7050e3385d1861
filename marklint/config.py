"""Configuration loading for marklint (.marklint.yml)."""

from __future__ import annotations

import codecs
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .models import MarkerKind
from .patterns import DEFAULT_KEYWORDS, MarkerPatterns

CONFIG_FILENAME = ".marklint.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class MarkerConfig:
    """Represents the settings defined in .marklint.yml."""

    root: Path
    keywords: Dict[MarkerKind, str] = field(default_factory=lambda: dict(DEFAULT_KEYWORDS))
    exclude_paths: List[str] = field(default_factory=list)
    encoding: str = "utf-8"
    workers: Optional[int] = None

    def patterns(self) -> MarkerPatterns:
        """Compile the configured keywords. Raises ``InvalidPattern`` on bad keywords."""
        return MarkerPatterns.from_mapping(self.keywords)


def load_config(config_path: Path) -> MarkerConfig:
    """Load configuration from disk, returning defaults when no file exists."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return MarkerConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = MarkerConfig(root=root)

    keyword_data = _as_dict(data.get("keywords"))
    for kind in MarkerKind:
        keyword = _as_str(keyword_data.get(kind.value))
        if keyword:
            config.keywords[kind] = keyword

    config.exclude_paths = _as_str_list(data.get("exclude_paths"))

    encoding = _as_str(data.get("encoding"))
    if encoding:
        _check_encoding(encoding)
        config.encoding = encoding

    workers = _as_int(data.get("workers"))
    if workers is not None and workers > 0:
        config.workers = workers

    return config


def _check_encoding(encoding: str) -> None:
    # Lines are split on raw b"\n" before decoding, so the codec must be a text
    # codec that encodes newline as that single byte.
    try:
        codecs.lookup(encoding)
        b"".decode(encoding)
        newline = "\n".encode(encoding)
    except LookupError as exc:
        raise ConfigError(f"Unknown text encoding {encoding!r} in {CONFIG_FILENAME}") from exc
    if newline != b"\n":
        raise ConfigError(
            f"Encoding {encoding!r} in {CONFIG_FILENAME} is not line-compatible: "
            "newline must encode as a single \\n byte"
        )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


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


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = ["CONFIG_FILENAME", "ConfigError", "MarkerConfig", "load_config"]
