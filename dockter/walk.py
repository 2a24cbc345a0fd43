"""Dependency tree walk that collects native system packages."""

from __future__ import annotations

from typing import Iterable, List

from .models import NATIVE_PLATFORM, SoftwarePackage


def find_native_packages(
    packages: Iterable[SoftwarePackage],
    runtime: str,
    native: str = NATIVE_PLATFORM,
) -> List[str]:
    """Return names of native packages reachable through ``runtime`` packages.

    Descends only while the current node belongs to ``runtime``; a subtree
    rooted at a package of another ecosystem is never scanned. Names are
    returned in traversal order, with duplicates kept and missing names
    reported as ``""``.
    """
    found: List[str] = []

    def visit(package: SoftwarePackage) -> None:
        if package.runtime_platform != runtime:
            return
        for child in package.software_requirements:
            if child.is_native(native):
                found.append(child.name or "")
            else:
                visit(child)

    for package in packages:
        visit(package)
    return found


def unique_names(names: Iterable[str]) -> List[str]:
    """Drop empty names and duplicates, keeping first occurrences."""
    seen: set[str] = set()
    result: List[str] = []
    for name in names:
        if not name or name in seen:
            continue
        seen.add(name)
        result.append(name)
    return result


__all__ = ["find_native_packages", "unique_names"]
