"""Contract implemented by every ecosystem generator."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from ..folder import ProjectFolder
from ..logging import get_logger
from ..models import EnvVar, FileCopy, SoftwareEnvironment, SoftwarePackage

logger = get_logger("generators")

UBUNTU_CODENAMES: dict[str, str] = {
    "14.04": "trusty",
    "16.04": "xenial",
    "18.04": "bionic",
    "20.04": "focal",
    "22.04": "jammy",
}


class Generator(ABC):
    """Questions the composer asks about one ecosystem.

    ``base_id`` is the resolved base image identifier (``ubuntu:18.04``).
    Implementations must be pure functions of the bound environment and the
    project folder contents.
    """

    @abstractmethod
    def applies(self) -> bool:
        """Return True when this ecosystem is relevant to the project."""

    @abstractmethod
    def base_name(self) -> str:
        """Name of the OS base image."""

    @abstractmethod
    def base_version(self) -> str:
        """Version tag of the OS base image, possibly empty."""

    @abstractmethod
    def base_identifier(self) -> str:
        """The ``name[:version]`` used in ``FROM``."""

    @abstractmethod
    def base_version_name(self, base_id: str) -> Optional[str]:
        """Release codename for the base image, None when unknown."""

    @abstractmethod
    def env_vars(self, base_id: str) -> Sequence[EnvVar]:
        """Environment variables to set in the image."""

    @abstractmethod
    def apt_keys_command(self, base_id: str) -> Optional[str]:
        """Shell command registering signing keys for extra repositories."""

    @abstractmethod
    def apt_repos(self, base_id: str) -> Sequence[str]:
        """Extra apt repository lines."""

    @abstractmethod
    def apt_packages(self, base_id: str) -> Sequence[str]:
        """System packages to install."""

    @abstractmethod
    def stencila_install(self, base_id: str) -> Optional[str]:
        """Bootstrap command run as root before dropping privileges."""

    @abstractmethod
    def install_files(self, base_id: str) -> Sequence[FileCopy]:
        """Files copied into the image before ``install_command`` runs."""

    @abstractmethod
    def install_command(self, base_id: str) -> Optional[str]:
        """Shell command installing ecosystem packages."""

    @abstractmethod
    def project_files(self, base_id: str) -> Sequence[FileCopy]:
        """Project source files copied into the image."""

    @abstractmethod
    def run_command(self, base_id: str) -> Optional[str]:
        """Default command for containers started from the image."""


class BaseGenerator(Generator):
    """Safe defaults: an Ubuntu image with nothing else in it.

    Used directly as the fallback when no ecosystem applies, and named
    explicitly by ecosystem generators that only override what differs.
    """

    name = "base"
    runtime_platform: Optional[str] = None

    def __init__(self, environ: SoftwareEnvironment, folder: ProjectFolder) -> None:
        self.environ = environ
        self.folder = folder

    def filter_packages(self, runtime: str) -> List[SoftwarePackage]:
        """Top-level requirements owned by ``runtime``."""
        return [
            package
            for package in self.environ.software_requirements
            if package.runtime_platform == runtime
        ]

    def applies(self) -> bool:
        if self.runtime_platform is None:
            return False
        return bool(self.filter_packages(self.runtime_platform))

    def base_name(self) -> str:
        return "ubuntu"

    def base_version(self) -> str:
        return "18.04"

    def base_identifier(self) -> str:
        version = self.base_version()
        joiner = ":" if version else ""
        return f"{self.base_name()}{joiner}{version}"

    def base_version_name(self, base_id: str) -> Optional[str]:
        _, _, version = base_id.partition(":")
        codename = UBUNTU_CODENAMES.get(version)
        if codename is None:
            logger.warning("No release codename known for base image %r", base_id)
        return codename

    def env_vars(self, base_id: str) -> Sequence[EnvVar]:
        return []

    def apt_keys_command(self, base_id: str) -> Optional[str]:
        return None

    def apt_repos(self, base_id: str) -> Sequence[str]:
        return []

    def apt_packages(self, base_id: str) -> Sequence[str]:
        return []

    def stencila_install(self, base_id: str) -> Optional[str]:
        return None

    def install_files(self, base_id: str) -> Sequence[FileCopy]:
        return []

    def install_command(self, base_id: str) -> Optional[str]:
        return None

    def project_files(self, base_id: str) -> Sequence[FileCopy]:
        return []

    def run_command(self, base_id: str) -> Optional[str]:
        return None


def join_commands(*commands: str) -> str:
    """Chain shell statements with ``&&`` over continuation lines."""
    return " \\\n && ".join(commands)


__all__ = ["BaseGenerator", "Generator", "UBUNTU_CODENAMES", "join_commands"]
