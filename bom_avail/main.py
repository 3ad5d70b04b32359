#!/usr/bin/env python3
"""
BOM Availability Enricher - CLI Entry Point

Reads a BOM in tab-separated format and adds stock and price-break columns
for every distributor column it recognizes.

Recognized headers:
    Key      must be the header of the first column
    DigiKey  order code at http://www.digikey.com/
    Avnet    order code at http://avnetexpress.avnet.com/
All other columns are removed from the table; capitalisation matters.

Generated columns, always following the matching distributor:
    <Distributor>_Avail  number of items in stock
    <Distributor>_<n>    unit price at the price break for n pieces
"""

import argparse
import contextlib
import logging
import os
import shutil
import signal
import sys
import tempfile
from typing import Iterator, Optional, TextIO

# Add current directory to path for imports
sys.path.insert(0, os.path.dirname(__file__))

from src.config import load_config, CURRENCIES
from src.processor import enrich
from src.table_loader import TableError


def setup_logging(log_file: str = "", verbose: bool = False):
    """
    Setup logging configuration with dual output (stderr + file).

    Standard output carries the table, so console logging goes to stderr.

    Args:
        log_file: Path to log file (blank = no file)
        verbose: Log debug messages
    """
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=handlers,
        force=True
    )
    # Keep urllib3 connection chatter out of debug logs
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    """Command-line parser: [--USD|--EUR] [<input> [<output>]]."""
    parser = argparse.ArgumentParser(
        prog="bom-avail",
        description="Add distributor stock and price-break columns to a tab-separated BOM.",
        epilog="A missing <input> or <output>, or '-', means stdin / stdout. "
               "<output> may be the same file as <input>.",
    )
    unit = parser.add_mutually_exclusive_group()
    for code in CURRENCIES:
        unit.add_argument(
            f"--{code}",
            dest="currency",
            action="store_const",
            const=code,
            help=f"quote prices in {code}",
        )
    parser.add_argument("input", nargs="?", default="-", help="input table (default: stdin)")
    parser.add_argument("output", nargs="?", default="-", help="output table (default: stdout)")
    parser.add_argument("--config", help="JSON configuration file")
    parser.add_argument("--log-file", help="also write the log to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug messages")
    return parser


def _remove_quietly(path: str) -> None:
    try:
        os.remove(path)
    except OSError as e:
        logging.debug(f"Could not remove temporary file {path}: {e}")


@contextlib.contextmanager
def open_output(path: str) -> Iterator[TextIO]:
    """
    Open the output table.

    File output goes to a temporary file beside the target, which replaces
    the target only when the body finishes without error. This makes
    in-place edits (output == input) safe, and a failed or interrupted run
    leaves no partial output behind.

    Args:
        path: Output path, or "-" for stdout
    """
    if path == "-":
        yield sys.stdout
        sys.stdout.flush()
        return

    target = os.path.abspath(path)
    fd, tmp = tempfile.mkstemp(prefix=os.path.basename(target) + ".", dir=os.path.dirname(target))
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            yield f
        if os.path.exists(target):
            shutil.copymode(target, tmp)
        else:
            umask = os.umask(0)
            os.umask(umask)
            os.chmod(tmp, 0o666 & ~umask)
        os.replace(tmp, target)
    except BaseException:
        _remove_quietly(tmp)
        raise


def _raise_exit(signum, frame):
    raise SystemExit(128 + signum)


def install_signal_handlers() -> None:
    """Turn SIGTERM / SIGHUP into SystemExit so temporary files get removed."""
    for name in ("SIGTERM", "SIGHUP", "SIGQUIT"):
        sig = getattr(signal, name, None)
        if sig is not None:
            signal.signal(sig, _raise_exit)


def main(argv: Optional[list] = None) -> int:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.config and not os.path.isfile(args.config):
        parser.error(f"config file not found: {args.config}")

    cfg = load_config(args.config)
    setup_logging(args.log_file or cfg.get("log_file", ""), args.verbose)

    currency = args.currency or cfg.get("currency") or "EUR"
    if currency not in CURRENCIES:
        parser.error(f"unsupported currency in config: {currency}")

    install_signal_handlers()

    source = sys.stdin if args.input == "-" else args.input
    try:
        with open_output(args.output) as sink:
            enrich(source, sink, currency=currency, config=cfg)
        return 0

    except TableError as e:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: {e}", file=sys.stderr)
        return 1

    except OSError as e:
        print(f"{parser.prog}: error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print(f"{parser.prog}: interrupted", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
