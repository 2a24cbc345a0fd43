"""Jinja templates for generated comments and synthesised descriptor files."""

from __future__ import annotations

from typing import Any

from jinja2 import DictLoader, Environment

_TEMPLATES: dict[str, str] = {
    "header": (
        "# Generated by Dockter {{ version }} at {{ timestamp }}\n"
        "# To stop Dockter generating this file and start editing it yourself,\n"
        '# rename it to "{{ rename_to }}".\n'
    ),
    "DESCRIPTION": (
        "Package: {{ name }}\n"
        "Version: 1.0.0\n"
        "Date: {{ date }}\n"
        "{% if imports %}\n"
        "Imports:\n"
        "  {{ imports }}\n"
        "{% endif %}\n"
        "Description: Generated by Dockter {{ timestamp }}.\n"
        "  To stop Dockter generating this file and start editing it yourself,"
        ' rename it to "DESCRIPTION".\n'
    ),
    "requirements.txt": (
        "# Generated by Dockter {{ timestamp }}.\n"
        "# To stop Dockter generating this file and start editing it yourself,"
        ' rename it to "requirements.txt".\n'
        "{% for package in packages %}\n"
        "{{ package }}\n"
        "{% endfor %}\n"
    ),
}

_env = Environment(
    loader=DictLoader(_TEMPLATES),
    autoescape=False,
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)


def render(template: str, /, **context: Any) -> str:
    """Render one of the bundled templates."""
    return _env.get_template(template).render(**context)


__all__ = ["render"]
