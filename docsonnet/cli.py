"""CLI entrypoints for docsonnet commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from .config import ConfigError, load_config
from .decoder import Decoder
from .errors import DecodeError
from .logging import configure_logging, get_logger

logger = get_logger("cli")


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
        prog="docsonnet",
        description="Check documentation annotations in evaluated configuration trees.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--config",
        default=".",
        help="Path to .docsonnet.yml or its directory (defaults to current directory).",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write logs to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser(
        "check",
        help="Decode an evaluated JSON tree and report annotation problems.",
    )
    _add_verbose_option(check_parser, suppress_default=True)
    check_parser.add_argument(
        "path",
        help="JSON file produced by the configuration evaluator, or '-' for stdin.",
    )
    check_parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail when decoding produced diagnostics (e.g. objects without children).",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for docsonnet commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(Path(args.config))
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    configure_logging(
        verbose=bool(args.verbose) or config.logging.verbose,
        log_file=args.log_file or config.logging.log_file,
    )

    if args.command == "check":
        try:
            tree = _read_tree(args.path)
        except (OSError, ValueError) as exc:
            parser.exit(1, f"cannot read {args.path}: {exc}\n")

        decoder = Decoder(config.decoder)
        try:
            pkg = decoder.decode(tree)
        except DecodeError as exc:
            logger.debug("Decode failed", exc_info=True)
            parser.exit(1, f"docsonnet check failed: {exc}\n")

        logger.info(
            "Decoded package %s (%s): %d fields, %d sub-packages, %d diagnostics",
            pkg.name,
            pkg.import_path,
            pkg.count_fields(),
            len(pkg.sub),
            len(decoder.diagnostics),
        )
        if args.strict and decoder.diagnostics:
            parser.exit(2, f"{len(decoder.diagnostics)} diagnostics reported in strict mode\n")
        print(f"{pkg.name}: ok")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _read_tree(path: str) -> Any:
    if path == "-":
        return json.load(sys.stdin)
    return json.loads(Path(path).read_text(encoding="utf-8"))


if __name__ == "__main__":
    main(sys.argv[1:])
