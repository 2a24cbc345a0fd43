"""Configuration loading for dockter (.dockter.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .composer import DEFAULT_OUTPUT
from .errors import ConfigError

CONFIG_FILENAME = ".dockter.yml"

# Environment descriptions looked for, in order, when none is configured.
ENVIRON_CANDIDATES: tuple[str, ...] = ("environ.jsonld", "environ.json")


@dataclass
class GeneratorConfig:
    """Restricts which ecosystem generators may be selected."""

    enabled: List[str] = field(default_factory=list)


@dataclass
class DockterConfig:
    """Represents the settings defined in .dockter.yml."""

    root: Path
    comments: bool = True
    output: str = DEFAULT_OUTPUT
    environ: Optional[str] = None
    generators: GeneratorConfig = field(default_factory=GeneratorConfig)

    def environ_path(self) -> Optional[Path]:
        """Return the configured environment file, or the first candidate on disk."""
        if self.environ:
            return self.root / self.environ
        for candidate in ENVIRON_CANDIDATES:
            path = self.root / candidate
            if path.exists():
                return path
        return None


def load_config(config_path: Path) -> DockterConfig:
    """Load configuration from disk; a missing file yields defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return DockterConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = DockterConfig(root=root)

    comments = _as_bool(data.get("comments"))
    if comments is not None:
        config.comments = comments
    config.output = _as_str(data.get("output")) or DEFAULT_OUTPUT
    config.environ = _as_str(data.get("environ"))

    generator_data = _as_dict(data.get("generators"))
    if generator_data:
        config.generators.enabled = _as_str_list(generator_data.get("enabled"))

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return {} if loaded is None else loaded


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and value != "" else None


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


__all__ = ["CONFIG_FILENAME", "DockterConfig", "GeneratorConfig", "load_config"]
