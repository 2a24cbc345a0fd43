"""Generator discovery and selection tests."""

from __future__ import annotations

import pytest

from dockter.generators import (
    BaseGenerator,
    PythonGenerator,
    RGenerator,
    discover_generators,
    select_generator,
)
from tests._fixtures.project_builder import ProjectBuilder, environ


def test_discover_generators_returns_builtins_in_priority_order() -> None:
    classes = discover_generators(["r", "python"])

    assert classes == [RGenerator, PythonGenerator]


def test_discover_generators_respects_enabled_subset() -> None:
    assert discover_generators(["Python"]) == [PythonGenerator]


def test_discover_generators_rejects_unknown_names() -> None:
    with pytest.raises(ValueError, match="julia"):
        discover_generators(["r", "julia"])


def test_select_generator_picks_first_applicable(project_builder: ProjectBuilder) -> None:
    folder = project_builder.folder()

    r_env = environ({"name": "ggplot2", "runtimePlatform": "R"})
    py_env = environ({"name": "pandas", "runtimePlatform": "Python"})

    assert isinstance(select_generator(r_env, folder), RGenerator)
    assert isinstance(select_generator(py_env, folder), PythonGenerator)


def test_select_generator_falls_back_to_base(project_builder: ProjectBuilder) -> None:
    folder = project_builder.folder()
    r_env = environ({"name": "ggplot2", "runtimePlatform": "R"})

    generator = select_generator(r_env, folder, enabled=["python"])

    assert type(generator) is BaseGenerator
    assert generator.applies() is False
