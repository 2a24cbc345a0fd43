"""Core data models shared across dockter components."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import EnvironError

# Tag used by `runtimePlatform` for packages installed with the OS package manager.
NATIVE_PLATFORM = "deb"


class SoftwarePackage(BaseModel):
    """A node in the dependency forest of a software environment."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: Optional[str] = None
    runtime_platform: Optional[str] = Field(default=None, alias="runtimePlatform")
    software_requirements: List[SoftwarePackage] = Field(
        default_factory=list, alias="softwareRequirements"
    )

    @field_validator("software_requirements", mode="before")
    @classmethod
    def null_requirements_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    def is_native(self, native: str = NATIVE_PLATFORM) -> bool:
        return self.runtime_platform == native


class SoftwareEnvironment(BaseModel):
    """Project description handed to a generator.

    Mirrors the ``SoftwareEnvironment`` JSON-LD type; unknown keys such as
    ``@context`` or ``type`` are ignored.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: Optional[str] = None
    date_published: Optional[str] = Field(default=None, alias="datePublished")
    software_requirements: List[SoftwarePackage] = Field(
        default_factory=list, alias="softwareRequirements"
    )

    @field_validator("software_requirements", mode="before")
    @classmethod
    def null_requirements_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SoftwareEnvironment:
        """Validate a decoded JSON mapping."""
        try:
            return cls.model_validate(dict(data))
        except ValidationError as exc:
            raise EnvironError(f"Invalid software environment: {exc}") from exc

    @classmethod
    def from_file(cls, path: Path) -> SoftwareEnvironment:
        """Load an environment from a JSON or JSON-LD file.

        Missing or unreadable files raise the underlying ``OSError``.
        """
        text = path.read_text(encoding="utf-8")
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise EnvironError(f"Failed to parse {path.name}: {exc}") from exc
        if not isinstance(data, dict):
            raise EnvironError(f"{path.name} must contain a JSON object at the root")
        return cls.from_dict(data)


SoftwarePackage.model_rebuild()


@dataclass(frozen=True)
class EnvVar:
    """An environment variable exported in the image."""

    key: str
    value: str

    def render(self) -> str:
        """Return ``KEY="value"`` with the value safe inside double quotes."""
        escaped = self.value.replace("\\", "\\\\").replace('"', '\\"')
        return f'{self.key}="{escaped}"'


@dataclass(frozen=True)
class FileCopy:
    """A ``source -> destination`` pair copied into the image."""

    source: str
    destination: str

    def render(self) -> str:
        return f"COPY {self.source} {self.destination}"


__all__ = [
    "EnvVar",
    "FileCopy",
    "NATIVE_PLATFORM",
    "SoftwareEnvironment",
    "SoftwarePackage",
]
