"""Command-line interface for relayout."""

from __future__ import annotations

import argparse
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from loguru import logger

from relayout.errors import ParseError, TextGenError
from relayout.log import configure_logging
from relayout.table import SymbolTable, from_config


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path | None
    table: SymbolTable
    debug: bool
    verbose: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability).

    Arguments it does not recognise are ``--name value`` variable pairs,
    handled by parse_variable_args().
    """
    p = argparse.ArgumentParser(
        prog="relayout",
        description="Substitute ${name} and ${...file} placeholders, preserving layout",
        usage="%(prog)s input [options] [--NAME VALUE ...]",
        allow_abbrev=False,
    )
    p.add_argument("input", help="Input text file")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "-f",
        "--file",
        action="append",
        default=[],
        metavar="NAME=PATH",
        help="Bind NAME to a file for ${...NAME} (repeatable)",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover relayout.toml)",
    )
    p.add_argument("--debug", action="store_true", help="Dump tokens and symbols to stderr")
    p.add_argument("-v", "--verbose", action="store_true", help="Log pipeline stages to stderr")
    return p


def parse_file_arg(s: str) -> tuple[str, str]:
    """Parse a NAME=PATH string into (name, path)."""
    if "=" not in s:
        raise argparse.ArgumentTypeError(f"invalid file binding (expected NAME=PATH): {s}")
    name, _, path = s.partition("=")
    return name, path


def parse_variable_args(args: list[str]) -> dict[str, str]:
    """Parse ``--name value`` pairs into a variable mapping.

    A value opening with ``"`` runs until an argument closing with ``"``;
    the arguments are joined with single spaces and the quotes dropped.
    """
    variables: dict[str, str] = {}
    i = 0
    while i < len(args):
        flag = args[i]
        if not flag.startswith("--") or len(flag) == 2:
            raise argparse.ArgumentTypeError(f"expected --NAME before value: {flag}")
        if i + 1 >= len(args):
            raise argparse.ArgumentTypeError(f"missing value for {flag}")
        i += 1
        value = args[i]
        if value.startswith('"'):
            while len(value) < 2 or not value.endswith('"'):
                i += 1
                if i >= len(args):
                    raise argparse.ArgumentTypeError(f"unterminated quoted value for {flag}")
                value += " " + args[i]
            value = value[1:-1]
        variables[flag[2:]] = value
        i += 1
    return variables


def split_variable_args(
    argv: list[str], option_strings: set[str]
) -> tuple[list[str], list[str]]:
    """Separate ``--name value`` pairs from the arguments argparse understands.

    Any ``--name`` that is not one of option_strings takes the next argument
    as its value (through a closing ``"`` for quoted values), even when that
    value looks like an option.
    """
    known: list[str] = []
    pairs: list[str] = []
    i = 0
    while i < len(argv):
        arg = argv[i]
        if not arg.startswith("--") or len(arg) == 2 or arg.partition("=")[0] in option_strings:
            known.append(arg)
            i += 1
            continue
        end = min(i + 2, len(argv))
        if end == i + 2 and argv[i + 1].startswith('"'):
            value = argv[i + 1]
            while (len(value) < 2 or not value.endswith('"')) and end < len(argv):
                value += " " + argv[end]
                end += 1
        pairs.extend(argv[i:end])
        i = end
    return known, pairs


def load_config(config_path: Path | None, input_dir: Path) -> tuple[dict[str, Any], Path]:
    """Load a TOML config file, returning it with its directory.

    A missing file yields an empty dict.
    """
    path = config_path if config_path is not None else input_dir / "relayout.toml"

    if not path.is_file():
        return {}, input_dir

    with open(path, "rb") as f:
        return tomllib.load(f), path.parent


def resolve_options(args: argparse.Namespace, extra: list[str]) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config, config_dir = load_config(config_path, input_dir)

    files = dict(parse_file_arg(raw) for raw in args.file)
    cli_table = SymbolTable(parse_variable_args(extra), files)
    table = from_config(config, config_dir).merged(cli_table)

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        table=table,
        debug=args.debug,
        verbose=args.verbose,
    )


def process_file(options: CliOptions) -> str:
    """Read, tokenize, parse, emit, and render the input document."""
    from relayout import tokenize_file
    from relayout.backend import emit
    from relayout.debug import dump_symbols, dump_tokens
    from relayout.parser import parse
    from relayout.render import render

    tokens = tokenize_file(options.input_file)
    symbols = parse(tokens, options.table)

    if options.debug:
        dump_tokens(tokens)
        dump_symbols(symbols)

    return render(emit(symbols, options.table))


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    option_strings = {s for action in parser._actions for s in action.option_strings}
    known, pairs = split_variable_args(sys.argv[1:] if argv is None else argv, option_strings)
    args, extra = parser.parse_known_args(known)

    try:
        options = resolve_options(args, extra + pairs)
    except (argparse.ArgumentTypeError, tomllib.TOMLDecodeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    configure_logging(options.verbose)
    logger.debug("processing {} with {!r}", options.input_file, options.table)

    filename = str(options.input_file)
    try:
        text = process_file(options)
    except ParseError as exc:
        print(exc.format(filename), file=sys.stderr)
        return 1
    except TextGenError as exc:
        print(exc.format(filename), file=sys.stderr)
        return 2

    if options.output_file:
        options.output_file.write_text(text + "\n", encoding="utf-8")
    else:
        sys.stdout.write(text + "\n")

    return 0
