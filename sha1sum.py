#!/usr/bin/env python3
# sha1sum.py
# Print SHA-1 message digests of files, standard input or strings.

from __future__ import annotations

import argparse
import logging
import os
import sys
import typing as t

from sha1_engine import hash_bytes, hash_file, hash_stream
from sha1_utils import format_line

PROGRAM_NAME: str = "sha1sum"
STDIN_LABEL: str = "-"
DEBUG_ENV_VAR: str = "SHA1SUM_DEBUG"

EX_SUCCESS: int = 0
EX_FAILURE: int = 1

log = logging.getLogger(PROGRAM_NAME)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROGRAM_NAME,
        description="Print SHA-1 (160-bit) checksums. With no FILE, or when "
        "FILE is -, read standard input.",
    )
    parser.add_argument(
        "-s",
        "--string",
        dest="strings",
        action="append",
        default=[],
        metavar="TEXT",
        help="digest the bytes of TEXT (may be repeated)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="trace every message block and round on stderr "
        f"(also enabled by a non-empty {DEBUG_ENV_VAR})",
    )
    parser.add_argument("files", nargs="*", metavar="FILE")
    return parser


def configure_logging(debug: bool) -> None:
    if not (debug or os.environ.get(DEBUG_ENV_VAR)):
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(name)s: %(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def digest_input(name: str) -> str:
    # standard input belongs to the process, it is read but never closed
    if name == STDIN_LABEL:
        return hash_stream(sys.stdin.buffer)
    return hash_file(name)


def main(argv: t.Optional[t.Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.debug)

    status = EX_SUCCESS

    for text in args.strings:
        sys.stdout.write(format_line(hash_bytes(os.fsencode(text)), f'"{text}"'))

    files = args.files
    if not files and not args.strings:
        files = [STDIN_LABEL]

    for name in files:
        try:
            hexdigest = digest_input(name)
        except OSError as exc:
            sys.stderr.write(f"{PROGRAM_NAME}: {name}: {exc.strerror or exc}\n")
            log.debug("failed to digest %r", name, exc_info=True)
            status = EX_FAILURE
            continue
        sys.stdout.write(format_line(hexdigest, name))

    sys.stdout.flush()
    return status


if __name__ == "__main__":
    sys.exit(main())
