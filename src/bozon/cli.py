"""Command-line interface for bozon."""

from __future__ import annotations

import argparse
import logging
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TextIO

from bozon.errors import ParseError, SpanRangeError
from bozon.parser import DEFAULT_MAX_DEPTH


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_files: list[Path]
    max_depth: int
    check: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="bozon",
        description="Parse bozon source files and dump their syntax trees",
    )
    p.add_argument("inputs", nargs="+", metavar="FILE", help="Source file(s) to parse")
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover bozon.toml)",
    )
    p.add_argument(
        "--max-depth",
        type=int,
        default=None,
        metavar="N",
        help=f"Maximum list nesting depth (default: {DEFAULT_MAX_DEPTH})",
    )
    p.add_argument("--check", action="store_true", help="Only report syntax errors")
    p.add_argument("--debug", action="store_true", help="Log parser and cache activity to stderr")
    return p


def parse_max_depth(value: Any) -> int:
    """Validate a max_depth setting from config or CLI."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise argparse.ArgumentTypeError(f"invalid max_depth (expected positive integer): {value!r}")
    return value


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file.

    An auto-discovered ``bozon.toml`` that does not exist yields an empty dict;
    an explicit *config_path* must exist.
    """
    if config_path is None:
        config_path = input_dir / "bozon.toml"
        if not config_path.is_file():
            return {}

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    input_files = [Path(p) for p in args.inputs]
    input_dir = input_files[0].parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    try:
        config = load_config(config_path, input_dir)
    except tomllib.TOMLDecodeError as exc:
        raise argparse.ArgumentTypeError(f"invalid config file: {exc}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise argparse.ArgumentTypeError(f"cannot read config file: {exc}") from exc

    max_depth = DEFAULT_MAX_DEPTH
    cfg_parser = config.get("parser")
    if isinstance(cfg_parser, dict) and "max_depth" in cfg_parser:
        max_depth = parse_max_depth(cfg_parser["max_depth"])
    if args.max_depth is not None:
        max_depth = parse_max_depth(args.max_depth)

    return CliOptions(
        input_files=input_files,
        max_depth=max_depth,
        check=args.check,
        debug=args.debug,
    )


def parse_files(options: CliOptions, out: TextIO | None = None) -> int:
    """Parse every input, dumping each tree unless checking. Returns exit code."""
    from bozon.debug import dump_ast
    from bozon.queries import Database

    out = out if out is not None else sys.stdout
    db = Database(max_depth=options.max_depth)

    for path in options.input_files:
        try:
            db.set_source(path, path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as exc:
            print(f"error: cannot read {path}: {exc}", file=sys.stderr)
            return 2

    status = 0
    for path in options.input_files:
        try:
            atoms = db.parse(path)
        except ParseError as exc:
            print(exc.format(str(path)), file=sys.stderr)
            status = 1
            continue
        except SpanRangeError as exc:
            print(exc.format(db.source(path), str(path)), file=sys.stderr)
            status = 1
            continue

        if options.check:
            continue
        if len(options.input_files) > 1:
            out.write(f"==> {path} <==\n")
        dump_ast(atoms, file=out)

    return status


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if options.debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(name)s: %(message)s",
            stream=sys.stderr,
        )

    return parse_files(options)
