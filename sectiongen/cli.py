"""CLI entrypoint for sectiongen."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import DEFAULT_URL, build_config
from .errors import GeneratorError
from .logging import configure_logging, get_logger
from .models import GenerationReport
from .orchestrator import Orchestrator
from .postproc.formatter import FORMATTER_NAMES


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sectiongen",
        description=(
            "Generate a GraphQL fragment, Vue component and TypeScript types "
            "for a CMS component."
        ),
    )
    parser.add_argument(
        "-i",
        "--component",
        required=True,
        help="Component identifier, e.g. sections.hero-banner.",
    )
    parser.add_argument(
        "--url",
        default=None,
        help=f"Base URL of the CMS (defaults to {DEFAULT_URL}).",
    )
    parser.add_argument(
        "--dir",
        default=".",
        help="Project root under which components/ and graphql/ are created.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a .sectiongen.yml file (defaults to <dir>/.sectiongen.yml).",
    )
    parser.add_argument(
        "--formatter",
        choices=FORMATTER_NAMES,
        default=None,
        help="Formatter applied to generated code (defaults to tidy).",
    )
    parser.add_argument(
        "--prettier-command",
        default=None,
        help="Command used to invoke Prettier, e.g. 'npx prettier'.",
    )
    parser.add_argument(
        "--templates-dir",
        default=None,
        help="Directory with template overrides.",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help="Maximum nesting depth of components.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="HTTP timeout in seconds.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show which files would be written without touching disk.",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write detailed logs to this file.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint; returns the process exit code."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose),
        log_file=Path(args.log_file) if args.log_file else None,
    )
    logger = get_logger("cli")

    try:
        config = build_config(
            args.component,
            project_dir=args.dir,
            config_path=Path(args.config) if args.config else None,
            overrides={
                "url": args.url,
                "formatter": args.formatter,
                "prettier_command": args.prettier_command,
                "templates_dir": args.templates_dir,
                "max_depth": args.max_depth,
                "timeout": args.timeout,
            },
            dry_run=bool(args.dry_run),
        )
        report = Orchestrator(config).run()
    except GeneratorError as exc:
        logger.error("%s", exc)
        return 1
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Filesystem error: %s", exc)
        return 1

    _print_report(report)
    return 0


def _print_report(report: GenerationReport) -> None:
    if report.dry_run:
        print(f"{report.names.display_name} (dry-run):")
    for outcome in report.outcomes:
        print(f"{outcome.status:<9} {_relativize(outcome.path)}")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
