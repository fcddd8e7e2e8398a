"""CLI entrypoints for componentlens commands."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from .config import ConfigError, ConfigManager
from .errors import ComponentNotFoundError
from .logging import configure_logging
from .models import to_jsonable
from .orchestrator import Orchestrator


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    kwargs["default"] = argparse.SUPPRESS if suppress_default else False
    parser.add_argument("-v", "--verbose", **kwargs)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="componentlens",
        description="Discover UI components and summarise their props, styles and design tokens.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only log warnings and errors.",
    )
    parser.add_argument("--log-file", default=None, help="Also write log records to this file.")
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a JSON or YAML config file (defaults to componentlens.config.json in the root).",
    )
    parser.add_argument(
        "--root",
        default=".",
        help="Project root that relative scan paths resolve against (defaults to current directory).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    scan_parser = subparsers.add_parser("scan", help="List component files that would be analyzed.")
    _add_verbose_option(scan_parser, suppress_default=True)

    list_parser = subparsers.add_parser("list", help="Summarise discovered components.")
    _add_verbose_option(list_parser, suppress_default=True)
    list_parser.add_argument("--category", help="Only include components in this category.")
    list_parser.add_argument("--framework", help="Only include components for this framework.")

    show_parser = subparsers.add_parser("show", help="Show full metadata for one component.")
    _add_verbose_option(show_parser, suppress_default=True)
    show_parser.add_argument("name", help="Component name.")

    similar_parser = subparsers.add_parser("similar", help="Find components similar to NAME.")
    _add_verbose_option(similar_parser, suppress_default=True)
    similar_parser.add_argument("name", help="Component name.")
    similar_parser.add_argument("--threshold", type=float, default=0.3, help="Minimum score (0-1).")
    similar_parser.add_argument("--max-results", type=int, default=None, help="Limit the number of matches.")

    design_parser = subparsers.add_parser("design-system", help="Aggregate design tokens.")
    _add_verbose_option(design_parser, suppress_default=True)
    design_parser.add_argument("--category", help="Only aggregate components in this category.")

    categories_parser = subparsers.add_parser("categories", help="List categories with counts.")
    _add_verbose_option(categories_parser, suppress_default=True)

    validate_parser = subparsers.add_parser("validate", help="Validate the configuration.")
    _add_verbose_option(validate_parser, suppress_default=True)

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP service.")
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to bind.")

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint for componentlens commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose),
        level=logging.WARNING if args.quiet else None,
        log_file=Path(args.log_file) if args.log_file else None,
    )

    try:
        config_manager = ConfigManager(args.config, root=args.root)
        if args.command == "validate":
            result = config_manager.validate()
            _emit({"valid": result.valid, "errors": result.errors, "warnings": result.warnings})
            return 0 if result.valid else 1

        orchestrator = Orchestrator(config_manager)
        if args.command == "scan":
            _emit(orchestrator.scanner.scan())
        elif args.command == "list":
            _emit(orchestrator.list_components(args.category, args.framework))
        elif args.command == "show":
            _emit(orchestrator.get_component_details(args.name))
        elif args.command == "similar":
            _emit(orchestrator.find_similar(args.name, args.threshold, args.max_results))
        elif args.command == "design-system":
            _emit(orchestrator.get_design_system(args.category))
        elif args.command == "categories":
            _emit(orchestrator.get_categories())
        elif args.command == "serve":  # pragma: no cover - long-running
            from .service.app import run_service

            run_service(lambda: orchestrator, host=args.host, port=args.port)
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except ConfigError as exc:
        details = "".join(f"  - {error}\n" for error in exc.errors)
        parser.exit(1, f"componentlens: {exc}\n{details}")
    except ComponentNotFoundError as exc:
        parser.exit(1, f"componentlens: {exc}\n")
    except RuntimeError as exc:
        parser.exit(1, f"componentlens {args.command} failed: {exc}\nRun with --verbose for more details.\n")
    return 0


def _emit(payload: Any) -> None:
    print(json.dumps(to_jsonable(payload), indent=2))


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
