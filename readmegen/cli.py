"""CLI entrypoints for readmegen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import PROVIDERS, ConfigError, load_config, save_config
from .discovery import list_modules, locate_module
from .generator import ReadmeGenerator
from .llm.client import LLMError
from .logging import configure_logging
from .manifest import ManifestError
from .module_scanner import ModuleScanner


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS if suppress_default else False,
        help="Increase log verbosity for troubleshooting.",
    )


def _add_config_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        default=".",
        help="Path to .readmegen.yml or the directory holding it (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="readmegen",
        description="Scan Drupal modules and generate README files with an AI provider.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    scan_parser = subparsers.add_parser(
        "scan",
        help="Print the structural metadata extracted from a module.",
    )
    _add_verbose_option(scan_parser, suppress_default=True)
    scan_parser.add_argument("path", help="Path to the module directory.")
    scan_parser.add_argument(
        "-o",
        "--output",
        help="Write the JSON report to this file instead of stdout.",
    )

    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate README.md for a module.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    _add_config_option(generate_parser)
    generate_parser.add_argument(
        "module",
        nargs="?",
        help="Machine name of a module under modules/custom or modules/contrib.",
    )
    generate_parser.add_argument(
        "--root",
        default=".",
        help="Drupal root used to locate MODULE (defaults to current directory).",
    )
    generate_parser.add_argument(
        "--path",
        help="Module directory to document; overrides MODULE lookup.",
    )
    generate_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the generated README instead of writing it.",
    )

    list_parser = subparsers.add_parser(
        "list",
        help="List top-level custom and contrib modules.",
    )
    _add_verbose_option(list_parser, suppress_default=True)
    _add_config_option(list_parser)
    list_parser.add_argument(
        "--root",
        default=".",
        help="Drupal root to search (defaults to current directory).",
    )

    configure_parser = subparsers.add_parser(
        "configure",
        help="Store AI provider settings in .readmegen.yml.",
    )
    _add_verbose_option(configure_parser, suppress_default=True)
    _add_config_option(configure_parser)
    configure_parser.add_argument("--provider", choices=sorted(PROVIDERS))
    configure_parser.add_argument("--api-key")
    configure_parser.add_argument("--model")

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service (requires the service extra).",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for readmegen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), quiet=args.command == "scan")

    try:
        if args.command == "scan":
            _run_scan(args)
        elif args.command == "generate":
            _run_generate(parser, args)
        elif args.command == "list":
            _run_list(args)
        elif args.command == "configure":
            _run_configure(args)
        elif args.command == "serve":
            _run_serve(args)
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except (FileNotFoundError, NotADirectoryError) as exc:
        parser.exit(1, f"{exc}\n")
    except (ManifestError, ConfigError, LLMError, OSError) as exc:
        parser.exit(1, f"readmegen {args.command} failed: {exc}\nRun with --verbose for more details.\n")


def _run_scan(args: argparse.Namespace) -> None:
    report = ModuleScanner().scan(args.path)
    output = report.to_json()
    if args.output:
        Path(args.output).write_text(output + "\n", encoding="utf-8")
        print(f"Report written to {_relativize(Path(args.output).resolve())}")
    else:
        print(output)


def _run_generate(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    config = load_config(Path(args.config))
    if args.path:
        module_path = Path(args.path)
    elif args.module:
        module_path = locate_module(Path(args.root), args.module, config.module_dirs)
    else:
        parser.exit(2, "generate requires MODULE or --path\n")

    result = ReadmeGenerator(config).generate(module_path, dry_run=bool(args.dry_run))
    if result.written:
        print(f"README.md generated at: {_relativize(result.path)}")
    else:
        print(result.content)


def _run_list(args: argparse.Namespace) -> None:
    config = load_config(Path(args.config))
    modules = list_modules(Path(args.root), config.module_dirs)
    if not modules:
        print("No modules found")
        return
    width = max(len(name) for name in modules)
    for machine_name, display_name in modules.items():
        print(f"{machine_name.ljust(width)}  {display_name}")


def _run_configure(args: argparse.Namespace) -> None:
    config = load_config(Path(args.config), use_env=False)
    ai = config.ai
    if args.provider:
        ai.apply_provider(args.provider)
    if args.api_key:
        ai.api_key = args.api_key
    if args.model:
        ai.model = args.model
    path = save_config(Path(args.config), ai)
    state = "complete" if ai.is_complete() else "incomplete"
    print(f"Configuration saved to {_relativize(path)} ({state})")


def _run_serve(args: argparse.Namespace) -> None:
    from .service import run_service

    run_service(host=args.host, port=args.port)


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
