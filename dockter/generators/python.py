"""Dockerfile generator for Python environments."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import List, Optional, Sequence

from ..logging import get_logger
from ..models import EnvVar, FileCopy
from ..templates import render
from ..walk import find_native_packages, unique_names
from .base import BaseGenerator

logger = get_logger("generators.python")


class PythonGenerator(BaseGenerator):
    """Installs pip requirements for the non-root user."""

    name = "python"
    runtime_platform = "Python"

    def env_vars(self, base_id: str) -> Sequence[EnvVar]:
        return [EnvVar("PYTHONUNBUFFERED", "1")]

    def apt_packages(self, base_id: str) -> Sequence[str]:
        debs = find_native_packages(self.environ.software_requirements, self.runtime_platform)
        return unique_names(debs + ["python3", "python3-pip"])

    def install_files(self, base_id: str) -> Sequence[FileCopy]:
        if self.folder.exists("requirements.txt"):
            return [FileCopy("requirements.txt", "requirements.txt")]

        packages = self._package_names()
        if not packages:
            return []
        self.folder.write(
            ".requirements.txt",
            render(
                "requirements.txt",
                packages=packages,
                timestamp=datetime.now(UTC).isoformat(),
            ),
        )
        logger.info("No requirements.txt found; generated .requirements.txt")
        return [FileCopy(".requirements.txt", "requirements.txt")]

    def install_command(self, base_id: str) -> Optional[str]:
        # Mirrors install_files: a leftover .requirements.txt is never copied.
        if not (self.folder.exists("requirements.txt") or self._package_names()):
            return None
        return "pip3 install --user --requirement requirements.txt"

    def project_files(self, base_id: str) -> Sequence[FileCopy]:
        return [FileCopy(path, path) for path in self.folder.glob("**/*.py")]

    def run_command(self, base_id: str) -> Optional[str]:
        files = self.folder.glob("**/*.py")
        if not files:
            return None
        for candidate in ("main.py", "cmd.py"):
            if candidate in files:
                return f"python3 {candidate}"
        return f"python3 {files[0]}"

    def _package_names(self) -> List[str]:
        return unique_names(
            package.name or "" for package in self.filter_packages(self.runtime_platform)
        )


__all__ = ["PythonGenerator"]
