"""Pipeline orchestration for the compose and which flows."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from . import __version__
from .composer import Composer
from .config import DockterConfig, load_config
from .folder import ProjectFolder
from .generators import Generator, select_generator
from .logging import get_logger
from .models import SoftwareEnvironment


@dataclass
class ComposeOutcome:
    """Result of composing a project's Dockerfile."""

    path: Path
    dockerfile: str
    generator: str


class Orchestrator:
    """Wires configuration, environment loading, generator selection and composition."""

    def __init__(self, version: str = __version__) -> None:
        self.version = version
        self.logger = get_logger("orchestrator")

    def run_compose(
        self,
        path: str,
        *,
        comments: Optional[bool] = None,
        environ: Optional[str] = None,
        output: Optional[str] = None,
    ) -> ComposeOutcome:
        """Compose the Dockerfile for the project at ``path``.

        Explicit arguments override the values from ``.dockter.yml``.
        """
        config = self._load_config(path)
        folder = ProjectFolder(config.root)
        generator = self._select(config, folder, environ)

        composer = Composer(
            generator,
            folder,
            version=self.version,
            output=output or config.output,
        )
        dockerfile = composer.compose(config.comments if comments is None else comments)
        target = folder.path(composer.output)
        self.logger.info("Wrote %s", target)
        return ComposeOutcome(path=target, dockerfile=dockerfile, generator=_generator_name(generator))

    def run_which(self, path: str, *, environ: Optional[str] = None) -> str:
        """Return the name of the generator that would be used for ``path``."""
        config = self._load_config(path)
        folder = ProjectFolder(config.root)
        return _generator_name(self._select(config, folder, environ))

    def load_environ(self, config: DockterConfig, environ: Optional[str] = None) -> SoftwareEnvironment:
        if environ is not None:
            environ_path = Path(environ)
            if not environ_path.is_absolute():
                environ_path = config.root / environ_path
        else:
            environ_path = config.environ_path()

        if environ_path is None:
            self.logger.warning(
                "No environment description found in %s; composing the base image only",
                config.root,
            )
            return SoftwareEnvironment()

        self.logger.debug("Loading environment from %s", environ_path)
        return SoftwareEnvironment.from_file(environ_path)

    def _load_config(self, path: str) -> DockterConfig:
        repo_path = Path(path).expanduser().resolve()
        if not repo_path.is_dir():
            raise FileNotFoundError(f"Project directory not found: {path}")
        return load_config(repo_path)

    def _select(
        self, config: DockterConfig, folder: ProjectFolder, environ: Optional[str]
    ) -> Generator:
        software_environ = self.load_environ(config, environ)
        return select_generator(
            software_environ, folder, enabled=config.generators.enabled or None
        )


def _generator_name(generator: Generator) -> str:
    return str(getattr(generator, "name", type(generator).__name__))


__all__ = ["ComposeOutcome", "Orchestrator"]
