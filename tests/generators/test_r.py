"""Tests for the R generator."""

from __future__ import annotations

from datetime import date

from dockter.generators.r import RGenerator
from dockter.models import FileCopy
from tests._fixtures.project_builder import ProjectBuilder, environ

GGPLOT = {"name": "ggplot2", "runtimePlatform": "R"}


def _generator(project_builder: ProjectBuilder, *packages, **fields) -> RGenerator:
    fields.setdefault("datePublished", "2018-10-05")
    return RGenerator(environ(*packages, **fields), project_builder.folder())


def test_applies_only_with_r_packages(project_builder: ProjectBuilder) -> None:
    assert _generator(project_builder, GGPLOT).applies() is True
    assert _generator(project_builder, {"name": "numpy", "runtimePlatform": "Python"}).applies() is False
    assert _generator(project_builder).applies() is False


def test_single_package_without_install_files(project_builder: ProjectBuilder) -> None:
    project_builder.write({"analysis.R": "library(ggplot2)\n", "main.R": "source('analysis.R')\n"})
    generator = _generator(project_builder, GGPLOT)
    base_id = generator.base_identifier()

    assert base_id == "ubuntu:16.04"
    assert "r-base" in generator.apt_packages(base_id)
    command = generator.install_command(base_id)
    assert command is not None
    assert command.startswith("mkdir ~/R")
    assert "curl -sL https://unpkg.com/@stencila/dockter/src/install.R" in command
    assert generator.project_files(base_id) == [
        FileCopy("analysis.R", "analysis.R"),
        FileCopy("main.R", "main.R"),
    ]
    assert generator.run_command(base_id) == "Rscript main.R"


def test_apt_packages_include_nested_native_packages(project_builder: ProjectBuilder) -> None:
    generator = _generator(
        project_builder,
        {
            "name": "xml2",
            "runtimePlatform": "R",
            "softwareRequirements": [
                {"name": "libxml2-dev", "runtimePlatform": "deb"},
                {
                    "name": "rvest",
                    "runtimePlatform": "R",
                    "softwareRequirements": [
                        {"name": "libcurl4-openssl-dev", "runtimePlatform": "deb"},
                        {"runtimePlatform": "deb"},
                    ],
                },
            ],
        },
        {
            "name": "sf",
            "runtimePlatform": "R",
            "softwareRequirements": [{"name": "libxml2-dev", "runtimePlatform": "deb"}],
        },
    )

    assert generator.apt_packages("ubuntu:16.04") == [
        "libxml2-dev",
        "libcurl4-openssl-dev",
        "r-base",
    ]


def test_mran_repository_uses_date_and_codename(project_builder: ProjectBuilder) -> None:
    generator = _generator(project_builder, GGPLOT)

    assert generator.apt_repos("ubuntu:16.04") == [
        "deb https://mran.microsoft.com/snapshot/2018-10-05/bin/linux/ubuntu xenial/"
    ]
    assert "51716619E084DAB9" in (generator.apt_keys_command("ubuntu:16.04") or "")


def test_unknown_base_version_leaves_codename_blank(project_builder: ProjectBuilder) -> None:
    generator = _generator(project_builder, GGPLOT)

    assert generator.apt_repos("ubuntu:99.04") == [
        "deb https://mran.microsoft.com/snapshot/2018-10-05/bin/linux/ubuntu /"
    ]


def test_missing_date_defaults_to_yesterday(project_builder: ProjectBuilder) -> None:
    generator = RGenerator(environ(GGPLOT), project_builder.folder(), today=date(2019, 3, 1))

    assert generator.date == "2019-02-28"


def test_install_script_takes_precedence(project_builder: ProjectBuilder) -> None:
    project_builder.write({"install.R": "install.packages('ggplot2')\n", "DESCRIPTION": "Package: x\n"})
    generator = _generator(project_builder, GGPLOT)

    assert generator.install_files("ubuntu:16.04") == [FileCopy("install.R", "install.R")]
    assert generator.install_command("ubuntu:16.04") == "mkdir ~/R \\\n && Rscript install.R"


def test_description_takes_precedence_over_synthesis(project_builder: ProjectBuilder) -> None:
    project_builder.write({"DESCRIPTION": "Package: x\n"})
    generator = _generator(project_builder, GGPLOT)

    assert generator.install_files("ubuntu:16.04") == [FileCopy("DESCRIPTION", "DESCRIPTION")]
    assert not (project_builder.root / ".DESCRIPTION").exists()


def test_description_is_synthesised_when_missing(project_builder: ProjectBuilder) -> None:
    generator = _generator(
        project_builder,
        GGPLOT,
        {"name": "dplyr", "runtimePlatform": "R"},
        {"name": "numpy", "runtimePlatform": "Python"},
        name="my-project_2",
    )

    files = generator.install_files("ubuntu:16.04")

    assert files == [FileCopy(".DESCRIPTION", "DESCRIPTION")]
    text = (project_builder.root / ".DESCRIPTION").read_text(encoding="utf-8")
    assert text.startswith("Package: myproject2\nVersion: 1.0.0\nDate: 2018-10-05\n")
    assert "Imports:\n  ggplot2,\n  dplyr\n" in text
    assert "numpy" not in text
    assert 'rename it to "DESCRIPTION"' in text


def test_synthesised_description_without_packages_has_no_imports(
    project_builder: ProjectBuilder,
) -> None:
    generator = _generator(project_builder)

    generator.install_files("ubuntu:16.04")

    text = (project_builder.root / ".DESCRIPTION").read_text(encoding="utf-8")
    assert text.startswith("Package: unnamed\n")
    assert "Imports" not in text


def test_run_command_prefers_cmd_then_first_file(project_builder: ProjectBuilder) -> None:
    generator = _generator(project_builder, GGPLOT)
    assert generator.run_command("ubuntu:16.04") is None

    project_builder.write({"b.R": "", "a.R": ""})
    assert generator.run_command("ubuntu:16.04") == "Rscript a.R"

    project_builder.write({"cmd.R": ""})
    assert generator.run_command("ubuntu:16.04") == "Rscript cmd.R"


def test_env_vars_configure_timezone_and_library(project_builder: ProjectBuilder) -> None:
    generator = _generator(project_builder, GGPLOT)

    rendered = [var.render() for var in generator.env_vars("ubuntu:16.04")]

    assert rendered == ['TZ="Etc/UTC"', 'R_LIBS_USER="~/R"']
