"""Assemble a Dockerfile from the answers of one generator."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Callable, List, Sequence

from .folder import ProjectFolder
from .generators.base import Generator
from .logging import get_logger
from .templates import render

DEFAULT_OUTPUT = ".Dockerfile"
MANAGED_MARKER = "# dockter"
USER_NAME = "dockteruser"
USER_UID = 1001

# Tools needed by `apt-add-repository` and key fetching.
REPO_TOOLS: tuple[str, ...] = (
    "apt-transport-https",
    "ca-certificates",
    "curl",
    "software-properties-common",
)

_CONTINUATION = " \\\n"


@dataclass(frozen=True)
class Section:
    """One unit of Dockerfile output; an empty body is omitted entirely."""

    name: str
    comment: str
    body: str

    @property
    def emitted(self) -> bool:
        return bool(self.body)

    def render(self, comments: bool) -> str:
        text = ""
        if comments and self.comment:
            text += "".join(f"# {line}\n" for line in self.comment.splitlines())
        return text + self.body + "\n"


def _apt_install(packages: Sequence[str], *, cleanup: bool) -> str:
    steps = [
        "RUN apt-get update",
        " && DEBIAN_FRONTEND=noninteractive apt-get install -y",
        *(f"      {package}" for package in packages),
    ]
    if cleanup:
        steps += [
            " && apt-get autoremove -y",
            " && apt-get clean",
            " && rm -rf /var/lib/apt/lists/*",
        ]
    return _CONTINUATION.join(steps)


class Composer:
    """Runs the fixed section pipeline against a generator.

    The version string and clock only affect the header comment, so output
    composed with ``comments=False`` is byte-for-byte reproducible.
    """

    def __init__(
        self,
        generator: Generator,
        folder: ProjectFolder,
        *,
        version: str,
        clock: Callable[[], datetime] | None = None,
        output: str = DEFAULT_OUTPUT,
    ) -> None:
        self.generator = generator
        self.folder = folder
        self.version = version
        self.clock = clock or (lambda: datetime.now(UTC))
        self.output = output
        self.logger = get_logger("composer")

    def compose(self, comments: bool = True) -> str:
        """Build the Dockerfile text, write it to ``output`` and return it."""
        sections = self.sections()
        emitted = [section.name for section in sections if section.emitted]
        self.logger.debug("Emitting sections: %s", ", ".join(emitted))
        dockerfile = self.render(sections, comments)
        self.folder.write(self.output, dockerfile)
        return dockerfile

    def render(self, sections: Sequence[Section], comments: bool) -> str:
        blocks: List[str] = []
        if comments:
            blocks.append(
                render(
                    "header",
                    version=self.version,
                    timestamp=self.clock().isoformat(),
                    rename_to="Dockerfile",
                )
            )
        blocks.extend(section.render(comments) for section in sections if section.emitted)
        return "\n".join(blocks)

    def sections(self) -> List[Section]:
        """Return every section in output order, empty ones included."""
        generator = self.generator
        base_id = generator.base_identifier()

        sections = [
            Section("base", "This tells Docker which base image to use.", f"FROM {base_id}")
        ]
        if not generator.applies():
            return sections

        env_vars = generator.env_vars(base_id)
        sections.append(
            Section(
                "env",
                "This section sets environment variables within the image.",
                "ENV " + " \\\n    ".join(var.render() for var in env_vars) if env_vars else "",
            )
        )

        apt_repos = generator.apt_repos(base_id)
        apt_keys_command = generator.apt_keys_command(base_id)
        sections.append(
            Section(
                "repo_tools",
                "This section installs system packages needed to add extra system repositories.",
                _apt_install(REPO_TOOLS, cleanup=False) if apt_repos or apt_keys_command else "",
            )
        )
        sections.append(
            Section(
                "repos",
                "This section adds system repositories required to install extra system packages.",
                "RUN "
                + " \\\n && ".join(f'apt-add-repository "{repo}"' for repo in apt_repos)
                if apt_repos
                else "",
            )
        )
        sections.append(
            Section(
                "repo_keys",
                "",
                f"RUN {apt_keys_command}" if apt_keys_command else "",
            )
        )

        apt_packages = generator.apt_packages(base_id)
        sections.append(
            Section(
                "packages",
                "This section installs system packages required for your project\n"
                "If you need extra system packages add them here.",
                _apt_install(apt_packages, cleanup=True) if apt_packages else "",
            )
        )

        stencila_install = generator.stencila_install(base_id)
        sections.append(
            Section(
                "stencila",
                "This section runs commands to install Stencila execution hosts.",
                f"RUN {stencila_install}" if stencila_install else "",
            )
        )

        # Everything above runs as root; everything below as the new user.
        sections.append(
            Section(
                "user",
                "It's good practice to run Docker images as a non-root user.\n"
                "This section creates a new user, sets it as the user for the image, and its\n"
                "home directory as the working directory.",
                f"RUN useradd --create-home --uid {USER_UID} -s /bin/bash {USER_NAME}\n"
                f"USER {USER_NAME}\n"
                f"WORKDIR /home/{USER_NAME}",
            )
        )

        # Install files first: generators may synthesise descriptors the
        # install command then relies on.
        install_files = generator.install_files(base_id)
        install_command = generator.install_command(base_id)
        project_files = generator.project_files(base_id)
        run_command = generator.run_command(base_id)

        sections.append(
            Section(
                "marker",
                "This is a special comment to tell Dockter to manage the build from here on",
                MANAGED_MARKER if install_command else "",
            )
        )
        sections.append(
            Section(
                "install_files",
                "This section copies package requirement files into the image",
                "\n".join(copy.render() for copy in install_files),
            )
        )
        sections.append(
            Section(
                "install",
                "This section runs commands to install the packages specified in the requirement file/s",
                f"RUN {install_command}" if install_command else "",
            )
        )
        sections.append(
            Section(
                "project_files",
                "This section copies your project's files into the image",
                "\n".join(copy.render() for copy in project_files),
            )
        )
        sections.append(
            Section(
                "cmd",
                "This tells Docker the default command to run when the container is started",
                f"CMD {run_command}" if run_command else "",
            )
        )
        return sections


__all__ = ["Composer", "DEFAULT_OUTPUT", "MANAGED_MARKER", "Section"]
