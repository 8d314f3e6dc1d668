"""CLI entrypoints for apireadme commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError
from .extractor import ExtractionError
from .logging import configure_logging
from .orchestrator import Orchestrator


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="apireadme",
        description="Keep the API tables of a TypeScript package README in sync with its exports.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log output to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    update_parser = subparsers.add_parser(
        "update",
        help="Regenerate the API tables between the README markers.",
    )
    _add_verbose_option(update_parser, suppress_default=True)
    update_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the package root (defaults to current directory).",
    )
    mode = update_parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--dry-run",
        action="store_true",
        help="Preview README changes without writing.",
    )
    mode.add_argument(
        "--check",
        action="store_true",
        help="Exit with status 1 when the README is out of date; never writes.",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for apireadme commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    orchestrator = Orchestrator()

    if args.command == "update":
        dry_run = bool(args.dry_run or args.check)
        try:
            result = orchestrator.run_update(args.path, dry_run=dry_run)
        except FileNotFoundError as exc:
            parser.exit(1, f"{exc}\n")
        except (ConfigError, ExtractionError) as exc:
            parser.exit(1, f"apireadme update failed: {exc}\n")
        except Exception as exc:  # pragma: no cover - defensive guard
            parser.exit(1, f"apireadme update failed: {exc}\nRun with --verbose for more details.\n")

        if not result.changed:
            print("README already up to date")
        elif args.check:
            parser.exit(1, f"{_relativize(result.path)} is out of date; run `apireadme update`.\n")
        elif dry_run:
            print("README changes (dry-run):")
            print(result.diff or "(no diff)")
        else:
            print(f"README updated at {_relativize(result.path)}")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
