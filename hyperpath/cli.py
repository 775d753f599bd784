"""Command-line front door for hyperpath.

Parses CLI options, merges them over the persisted config, and pipes stdin
to stdout through the path linker.
"""

from __future__ import annotations

import argparse
import os
import sys
from dataclasses import replace

from .config import CONFIG_PATH, LinkerConfig, load_linker_config, normalize_prefix
from .context import ProcessContext
from .stream import InputReadError, run_filter


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hyperpath",
        description="Turn file paths in piped terminal output into clickable OSC 8 hyperlinks.",
    )
    parser.add_argument(
        "--prefix",
        action="append",
        default=[],
        metavar="PATH",
        help="Extra top-level absolute root (e.g. /nix) to link without checking the working directory (repeatable).",
    )
    parser.add_argument(
        "--check-absolute",
        action="store_true",
        help="Only link absolute paths that exist on disk.",
    )
    parser.add_argument(
        "--buffered",
        action="store_true",
        help="Flush output in blocks instead of after every line.",
    )
    parser.add_argument(
        "--no-config",
        action="store_true",
        help=f"Ignore the config file ({CONFIG_PATH}).",
    )
    return parser


def resolve_config(args: argparse.Namespace) -> LinkerConfig:
    """Merge CLI flags over the persisted (or default) config."""
    for prefix in args.prefix:
        if normalize_prefix(prefix) is None:
            raise SystemExit(f"hyperpath: --prefix must be a single top-level directory like /nix, got {prefix!r}")
    config = LinkerConfig() if args.no_config else load_linker_config()
    config = config.with_extra_prefixes(args.prefix)
    if args.check_absolute:
        config = replace(config, check_absolute_exists=True)
    if args.buffered:
        config = replace(config, flush_each_line=False)
    return config


def _silence_stdout() -> None:
    """Point stdout at devnull so the interpreter's exit flush cannot fail."""
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, sys.stdout.fileno())
    os.close(devnull)


def main(argv: list[str] | None = None) -> None:
    """Run the filter over stdin/stdout.

    A closed downstream pipe ends the run quietly with status 0; a failure
    reading stdin exits with a diagnostic.
    """
    args = _build_parser().parse_args(argv)
    config = resolve_config(args)
    context = ProcessContext()

    try:
        run_filter(sys.stdin.buffer, sys.stdout.buffer, context, config)
    except InputReadError as exc:
        raise SystemExit(f"hyperpath: error reading input: {exc}") from exc
    except OSError:
        # Downstream reader went away (BrokenPipeError and friends).
        _silence_stdout()
        raise SystemExit(0)


if __name__ == "__main__":
    main()
