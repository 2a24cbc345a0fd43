"""Generate Dockerfiles from a project's software environment description."""

__version__ = "0.4.0"

__all__ = ["__version__"]
