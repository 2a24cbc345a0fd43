"""Ecosystem generators and selection utilities."""

from __future__ import annotations

from importlib import metadata
from typing import Iterable, List, Sequence, Set, Type

from ..folder import ProjectFolder
from ..logging import get_logger
from ..models import SoftwareEnvironment
from .base import BaseGenerator, Generator
from .python import PythonGenerator
from .r import RGenerator

_ENTRY_POINT_GROUP = "dockter.generators"

_BUILTIN_GENERATORS: dict[str, Type[BaseGenerator]] = {
    "r": RGenerator,
    "python": PythonGenerator,
}

logger = get_logger("generators")


def discover_generators(enabled: Sequence[str] | None = None) -> List[Type[BaseGenerator]]:
    """Return generator classes in priority order, honoring optional enabled names."""
    enabled_set: Set[str] | None = None
    if enabled is not None:
        enabled_set = {name.lower() for name in enabled}

    classes: List[Type[BaseGenerator]] = []
    seen: Set[str] = set()

    def _add(name: str, cls: object) -> None:
        key = name.lower()
        if enabled_set is not None and key not in enabled_set:
            return
        if key in seen:
            return
        if not (isinstance(cls, type) and issubclass(cls, BaseGenerator)):
            raise TypeError(f"Generator '{name}' must be a BaseGenerator subclass")
        classes.append(cls)
        seen.add(key)
        if enabled_set is not None:
            enabled_set.discard(key)

    for name, cls in _BUILTIN_GENERATORS.items():
        _add(name, cls)

    for entry in _iter_entry_points():
        try:
            loaded = entry.load()
        except Exception as exc:  # pragma: no cover - depends on installed plugins
            raise RuntimeError(f"Failed to load generator entry point '{entry.name}': {exc}") from exc
        _add(entry.name, loaded)

    if enabled_set:
        missing = ", ".join(sorted(enabled_set))
        raise ValueError(f"Unknown generators requested: {missing}")

    return classes


def select_generator(
    environ: SoftwareEnvironment,
    folder: ProjectFolder,
    enabled: Sequence[str] | None = None,
) -> Generator:
    """Return the first generator that applies, else the plain base generator."""
    for cls in discover_generators(enabled):
        generator = cls(environ, folder)
        if generator.applies():
            logger.debug("Selected %s generator", cls.name)
            return generator
    logger.info("No ecosystem generator applies; using the base image only")
    return BaseGenerator(environ, folder)


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points().select(group=_ENTRY_POINT_GROUP)


__all__ = [
    "BaseGenerator",
    "Generator",
    "PythonGenerator",
    "RGenerator",
    "discover_generators",
    "select_generator",
]
