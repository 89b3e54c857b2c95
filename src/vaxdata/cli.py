from __future__ import annotations

import argparse
import logging
import sys
from typing import Dict, List, Optional, Sequence, Type

from vaxdata.errors import VaxDataError
from vaxdata.io import FFloatReader, GFloatReader, VaxFloatReader, write_f_floats, write_g_floats

logger = logging.getLogger(__name__)

READERS: Dict[str, Type[VaxFloatReader]] = {"f": FFloatReader, "g": GFloatReader}
WRITERS = {"f": write_f_floats, "g": write_g_floats}


def build_shared_parser():
    parser = argparse.ArgumentParser(description="Shared conversion arguments. This should never be seen.", add_help=False)
    parser.add_argument("format", type=str.lower, choices=sorted(READERS), help="The VAX format; 'f' for F_floating (4 bytes), 'g' for G_floating (8 bytes).")
    parser.add_argument("input_path", type=str, help="The file to read from.")
    parser.add_argument("-e", "--error", action='store_true', required=False, help="Execution will stop on the first conversion error. (False by default, failed values are replaced and reported.)")
    parser.add_argument("-v", "--verbose", action='store_true', required=False, help="Print debug information.")
    parser.add_argument("-x", "-q", "--squelch", "--quiet", action='store_true', required=False, help="Only errors will be printed, unless -v/--verbose is specified.")
    return parser


SharedParser = build_shared_parser()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="vaxdata", description="Convert VAX F_floating / G_floating data to and from IEEE floating point.")
    commands = parser.add_subparsers(dest="command", required=True)

    decode = commands.add_parser("decode", parents=[SharedParser], help="Convert a binary VAX file to text, one value per line.")
    decode.add_argument("-o", "--output", type=str, required=False, help="The text file to write to. (stdout by default.)")
    decode.set_defaults(func=run_decode)

    encode = commands.add_parser("encode", parents=[SharedParser], help="Convert a text file (one value per line) to binary VAX.")
    encode.add_argument("-o", "--output", type=str, required=True, help="The binary file to write to.")
    encode.set_defaults(func=run_encode)
    return parser


def read_text_values(path: str) -> List[float]:
    with open(path, "r") as handle:
        return [float(line) for line in handle if line.strip()]


def run_decode(args: argparse.Namespace) -> None:
    strict = args.error
    with open(args.input_path, "rb") as stream:
        reader = READERS[args.format](stream)
        values = reader.read_all(strict)
    lines = [repr(value) for value in values]

    if args.output:
        with open(args.output, "w") as handle:
            handle.writelines(line + "\n" for line in lines)
    else:
        for line in lines:
            print(line)
    logger.info("Read %d value(s) from \"%s\" (%d conversion error(s))", len(values), args.input_path, reader.errors)


def run_encode(args: argparse.Namespace) -> None:
    strict = args.error
    values = read_text_values(args.input_path)
    with open(args.output, "wb") as stream:
        written = WRITERS[args.format](stream, values, strict)
    logger.info("Wrote %d value(s) (%d bytes) to \"%s\"", len(values), written, args.output)


def _log_level(args: argparse.Namespace) -> int:
    if args.verbose:
        return logging.DEBUG
    elif args.squelch:
        return logging.ERROR
    else:
        return logging.INFO


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=_log_level(args), format="%(levelname)s: %(message)s")
    try:
        args.func(args)
    except (VaxDataError, EOFError, ValueError, OSError) as e:
        logger.error("ERROR \"%s\"", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
