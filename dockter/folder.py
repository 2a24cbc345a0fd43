"""File-system access scoped to a project directory."""

from __future__ import annotations

import os
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterator, List

from .logging import get_logger

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".venv",
    "venv",
    "node_modules",
    "__pycache__",
    ".pytest_cache",
    ".mypy_cache",
    ".idea",
    "renv",
    "packrat",
}

logger = get_logger("folder")


def _matches(rel_path: str, pattern: str) -> bool:
    if pattern.startswith("**/"):
        rest = pattern[3:]
        if "/" not in rest:
            return fnmatchcase(rel_path.rsplit("/", 1)[-1], rest)
        return fnmatchcase(rel_path, rest) or fnmatchcase(rel_path, pattern)
    if "/" not in pattern:
        return "/" not in rel_path and fnmatchcase(rel_path, pattern)
    return fnmatchcase(rel_path, pattern)


class ProjectFolder:
    """Answers ``exists``/``glob`` questions and persists generated files.

    All paths are POSIX-style and relative to ``root``. I/O errors are not
    caught here; they reach the caller unchanged.
    """

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root).expanduser().resolve()

    def path(self, relative: str) -> Path:
        return self.root / relative

    def exists(self, relative: str) -> bool:
        return self.path(relative).exists()

    def glob(self, pattern: str) -> List[str]:
        """Return matching files in sorted order."""
        return sorted(
            rel_path for rel_path in self._iter_files() if _matches(rel_path, pattern)
        )

    def read(self, relative: str) -> str:
        return self.path(relative).read_text(encoding="utf-8")

    def write(self, relative: str, content: str) -> Path:
        target = self.path(relative)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        logger.debug("Wrote %s (%d bytes)", relative, len(content))
        return target

    def _iter_files(self) -> Iterator[str]:
        for dirpath, dirnames, filenames in os.walk(self.root):
            current = Path(dirpath)
            rel_dir = current.relative_to(self.root).as_posix() if current != self.root else ""
            dirnames[:] = [name for name in dirnames if name not in _EXCLUDED_DIRS]
            for filename in filenames:
                yield f"{rel_dir}/{filename}" if rel_dir else filename


__all__ = ["ProjectFolder"]
