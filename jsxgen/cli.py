"""CLI entrypoints for jsxgen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .logging import configure_logging
from .orchestrator import Converter
from .parser import parse_directory


def _add_logging_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    kwargs["default"] = argparse.SUPPRESS if suppress_default else False
    parser.add_argument("-v", "--verbose", **kwargs)
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=argparse.SUPPRESS if suppress_default else False,
        help="Only report warnings and errors.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=argparse.SUPPRESS if suppress_default else None,
        help="Also write detailed logs to this file.",
    )


def _add_config_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        default=".",
        help="Path to .jsxgen.yml or the directory containing it (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jsxgen",
        description="Convert parsed HTML trees into componentized React JSX.",
    )
    _add_logging_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    parse_parser = subparsers.add_parser(
        "parse",
        help="Parse HTML files into tree JSON documents.",
    )
    _add_logging_options(parse_parser, suppress_default=True)
    _add_config_option(parse_parser)
    parse_parser.add_argument(
        "html_dir",
        nargs="?",
        default=None,
        help="Directory of .html files (defaults to paths.html_input).",
    )
    parse_parser.add_argument(
        "ast_dir",
        nargs="?",
        default=None,
        help="Directory for *_ast.json output (defaults to paths.asts).",
    )

    convert_parser = subparsers.add_parser(
        "convert",
        help="Generate components and pages from tree JSON documents.",
    )
    _add_logging_options(convert_parser, suppress_default=True)
    _add_config_option(convert_parser)
    convert_parser.add_argument(
        "ast_dir",
        nargs="?",
        default=None,
        help="Directory of *_ast.json files (defaults to paths.asts).",
    )
    convert_parser.add_argument(
        "--no-format",
        action="store_true",
        help="Write generated modules without running Prettier.",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP conversion service.",
    )
    _add_logging_options(serve_parser, suppress_default=True)
    _add_config_option(serve_parser)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for jsxgen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose),
        quiet=bool(args.quiet),
        log_file=args.log_file,
    )

    try:
        config = load_config(Path(args.config))
    except ConfigError as exc:
        parser.exit(1, f"Invalid configuration: {exc}\n")

    if args.command == "parse":
        html_dir = Path(args.html_dir) if args.html_dir else config.html_dir
        ast_dir = Path(args.ast_dir) if args.ast_dir else config.asts_dir
        try:
            parsed = parse_directory(html_dir, ast_dir)
        except FileNotFoundError as exc:
            parser.exit(1, f"{exc}\n")
        print(f"Parsed {len(parsed)} HTML file(s) into {_relativize(ast_dir)}")
    elif args.command == "convert":
        if args.no_format:
            config.formatting.enabled = False
        converter = Converter(config)
        try:
            report = converter.run(Path(args.ast_dir) if args.ast_dir else None)
        except FileNotFoundError as exc:
            parser.exit(1, f"{exc}\n")
        except Exception as exc:  # pragma: no cover - unexpected failure
            parser.exit(1, f"jsxgen convert failed: {exc}\nRun with --verbose for more details.\n")
        print(
            f"Generated {report.components} component(s) and {report.pages} page(s) "
            f"in {_relativize(config.output_dir)}"
        )
        if report.skipped:
            print(f"Skipped: {', '.join(report.skipped)}")
    elif args.command == "serve":  # pragma: no cover - blocking server
        from .service import run_service

        run_service(host=args.host, port=args.port, config=config)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
