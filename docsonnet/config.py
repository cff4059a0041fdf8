"""Configuration loading for docsonnet (.docsonnet.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

CONFIG_FILENAME = ".docsonnet.yml"
DEFAULT_MARKER = "#"
DEFAULT_MAX_DEPTH = 64


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class DecoderConfig:
    """Conventions the decoder applies to the evaluated tree."""

    marker: str = DEFAULT_MARKER
    max_depth: int = DEFAULT_MAX_DEPTH


@dataclass
class LoggingConfig:
    """Console verbosity and optional log file."""

    verbose: bool = False
    log_file: Optional[Path] = None


@dataclass
class DocsonnetConfig:
    """Represents the settings defined in .docsonnet.yml."""

    root: Path
    decoder: DecoderConfig = field(default_factory=DecoderConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(config_path: Path) -> DocsonnetConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return DocsonnetConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    decoder = DecoderConfig()
    decoder_data = _as_dict(data.get("decoder"))
    if decoder_data:
        if "marker" in decoder_data:
            marker = _as_str(decoder_data.get("marker"))
            if not marker:
                raise ConfigError("decoder.marker must be a non-empty string")
            decoder.marker = marker
        if "max_depth" in decoder_data:
            depth = _as_int(decoder_data.get("max_depth"))
            if depth is None or depth < 1:
                raise ConfigError("decoder.max_depth must be a positive integer")
            decoder.max_depth = depth

    logging_config = LoggingConfig()
    logging_data = _as_dict(data.get("logging"))
    if logging_data:
        logging_config.verbose = _as_bool(logging_data.get("verbose")) or False
        log_file = _as_str(logging_data.get("log_file"))
        logging_config.log_file = root / log_file if log_file else None

    return DocsonnetConfig(root=root, decoder=decoder, logging=logging_config)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
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
    return value if isinstance(value, str) else None


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


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DecoderConfig",
    "DocsonnetConfig",
    "LoggingConfig",
    "load_config",
]
