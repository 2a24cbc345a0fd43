"""CLI entrypoints for dockter commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .errors import DockterError
from .logging import configure_logging
from .orchestrator import Orchestrator


def _add_logging_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    default: object = argparse.SUPPRESS if suppress_default else False
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=default,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=default,
        help="Only log warnings and errors.",
    )


def _add_project_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project directory (defaults to current directory).",
    )
    parser.add_argument(
        "--environ",
        default=None,
        help="Environment description file (defaults to environ.jsonld or environ.json).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dockter",
        description="Generate Dockerfiles from a project's software environment.",
    )
    _add_logging_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    compose_parser = subparsers.add_parser(
        "compose",
        help="Write a .Dockerfile for the project.",
    )
    _add_logging_options(compose_parser, suppress_default=True)
    _add_project_arguments(compose_parser)
    compose_parser.add_argument(
        "--no-comments",
        dest="comments",
        action="store_false",
        default=None,
        help="Leave explanatory comments out of the generated file.",
    )
    compose_parser.add_argument(
        "--output",
        default=None,
        help="Output path relative to the project (defaults to .Dockerfile).",
    )
    compose_parser.add_argument(
        "--stdout",
        action="store_true",
        help="Also print the generated Dockerfile.",
    )

    which_parser = subparsers.add_parser(
        "which",
        help="Show which ecosystem generator applies to the project.",
    )
    _add_logging_options(which_parser, suppress_default=True)
    _add_project_arguments(which_parser)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for dockter commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), quiet=bool(args.quiet))

    orchestrator = Orchestrator()

    if args.command == "compose":
        try:
            outcome = orchestrator.run_compose(
                args.path,
                comments=args.comments,
                environ=args.environ,
                output=args.output,
            )
        except (DockterError, FileNotFoundError) as exc:
            parser.exit(1, f"dockter compose failed: {exc}\n")
        if args.stdout:
            sys.stdout.write(outcome.dockerfile)
        else:
            print(f"Dockerfile ({outcome.generator}) written to {_relativize(outcome.path)}")
    elif args.command == "which":
        try:
            name = orchestrator.run_which(args.path, environ=args.environ)
        except (DockterError, FileNotFoundError) as exc:
            parser.exit(1, f"dockter which failed: {exc}\n")
        print(name)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
