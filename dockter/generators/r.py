"""Dockerfile generator for R environments."""

from __future__ import annotations

import re
from datetime import UTC, date, datetime, timedelta
from typing import List, Optional, Sequence

from ..folder import ProjectFolder
from ..logging import get_logger
from ..models import EnvVar, FileCopy, SoftwareEnvironment
from ..templates import render
from ..walk import find_native_packages, unique_names
from .base import BaseGenerator, join_commands

logger = get_logger("generators.r")

MRAN_KEY = "51716619E084DAB9"
INSTALL_SCRIPT_URL = "https://unpkg.com/@stencila/dockter/src/install.R"


class RGenerator(BaseGenerator):
    """Builds R images from an MRAN snapshot matching the project's date."""

    name = "r"
    runtime_platform = "R"

    def __init__(
        self,
        environ: SoftwareEnvironment,
        folder: ProjectFolder,
        *,
        today: date | None = None,
    ) -> None:
        super().__init__(environ, folder)
        # MRAN snapshots lag by a day, so default to yesterday's snapshot.
        if environ.date_published:
            self.date = environ.date_published
        else:
            today = today or datetime.now(UTC).date()
            self.date = (today - timedelta(days=1)).isoformat()

    def base_version(self) -> str:
        # MRAN has no bionic repository for R 3.4, only xenial.
        return "16.04"

    def env_vars(self, base_id: str) -> Sequence[EnvVar]:
        return [
            # Avoids the Sys.timezone() warning.
            EnvVar("TZ", "Etc/UTC"),
            # Packages are installed by the non-root user.
            EnvVar("R_LIBS_USER", "~/R"),
        ]

    def apt_keys_command(self, base_id: str) -> Optional[str]:
        return f"apt-key adv --keyserver keyserver.ubuntu.com --recv-keys {MRAN_KEY}"

    def apt_repos(self, base_id: str) -> Sequence[str]:
        codename = self.base_version_name(base_id) or ""
        return [
            f"deb https://mran.microsoft.com/snapshot/{self.date}/bin/linux/ubuntu {codename}/"
        ]

    def apt_packages(self, base_id: str) -> Sequence[str]:
        debs = find_native_packages(self.environ.software_requirements, self.runtime_platform)
        return unique_names(debs + ["r-base"])

    def stencila_install(self, base_id: str) -> Optional[str]:
        return join_commands(
            "apt-get update",
            "apt-get install -y zlib1g-dev libxml2-dev pkg-config",
            "apt-get autoremove -y",
            "apt-get clean",
            "rm -rf /var/lib/apt/lists/*",
            "Rscript -e 'install.packages(\"devtools\")'",
            "Rscript -e 'source(\"https://bioconductor.org/biocLite.R\"); biocLite(\"graph\")'",
            "Rscript -e 'devtools::install_github(\"r-lib/pkgbuild\")'",
            "Rscript -e 'devtools::install_github(\"stencila/r\")'",
        )

    def install_files(self, base_id: str) -> Sequence[FileCopy]:
        if self.folder.exists("install.R"):
            return [FileCopy("install.R", "install.R")]
        if self.folder.exists("DESCRIPTION"):
            return [FileCopy("DESCRIPTION", "DESCRIPTION")]

        self.folder.write(".DESCRIPTION", self.description())
        logger.info("No install.R or DESCRIPTION found; generated .DESCRIPTION")
        return [FileCopy(".DESCRIPTION", "DESCRIPTION")]

    def description(self) -> str:
        """Render a DESCRIPTION file importing the project's R packages."""
        name = re.sub(r"[^a-zA-Z0-9]", "", self.environ.name or "") or "unnamed"
        packages = unique_names(
            package.name or "" for package in self.filter_packages(self.runtime_platform)
        )
        return render(
            "DESCRIPTION",
            name=name,
            date=self.date,
            imports=",\n  ".join(packages),
            timestamp=datetime.now(UTC).isoformat(),
        )

    def install_command(self, base_id: str) -> Optional[str]:
        if self.folder.exists("install.R"):
            return join_commands("mkdir ~/R", "Rscript install.R")
        return join_commands(
            "mkdir ~/R",
            f'bash -c "Rscript <(curl -sL {INSTALL_SCRIPT_URL})"',
        )

    def project_files(self, base_id: str) -> Sequence[FileCopy]:
        return [FileCopy(path, path) for path in self._r_files()]

    def run_command(self, base_id: str) -> Optional[str]:
        """Prefer ``main.R``, then ``cmd.R``, then the first ``*.R`` file."""
        files = self._r_files()
        if not files:
            return None
        if "main.R" in files:
            script = "main.R"
        elif "cmd.R" in files:
            script = "cmd.R"
        else:
            script = files[0]
        return f"Rscript {script}"

    def _r_files(self) -> List[str]:
        return self.folder.glob("**/*.R")


__all__ = ["RGenerator"]
