#!/usr/bin/env python3
"""CLI for the COBS codec."""

import argparse
import logging
import sys
from typing import Optional

from .codec import buffer_size, encode, decode, decode_in_place
from .errors import CobsError

log = logging.getLogger(__name__)


def read_payload(args: argparse.Namespace) -> bytes:
    """Payload from the HEX argument, the --input file, or stdin."""
    if args.data is not None:
        return bytes.fromhex(args.data)
    if args.input and args.input != "-":
        with open(args.input, "rb") as f:
            return f.read()
    return sys.stdin.buffer.read()


def write_payload(args: argparse.Namespace, data: bytes) -> None:
    to_file = args.output and args.output != "-"
    if args.hex:
        text = data.hex(" ")
        if to_file:
            with open(args.output, "w") as f:
                f.write(text + "\n")
        else:
            print(text)
    elif to_file:
        with open(args.output, "wb") as f:
            f.write(data)
    else:
        sys.stdout.buffer.write(data)
        sys.stdout.buffer.flush()


def cmd_size(args: argparse.Namespace) -> None:
    print(buffer_size(args.length, not args.no_delimiter))


def cmd_encode(args: argparse.Namespace) -> None:
    payload = read_payload(args)
    encoded = encode(payload, not args.no_delimiter)
    log.debug("encoded %d bytes into %d", len(payload), len(encoded))
    write_payload(args, encoded)


def cmd_decode(args: argparse.Namespace) -> None:
    payload = read_payload(args)
    if args.in_place:
        buf = bytearray(payload)
        n = decode_in_place(buf)
        decoded = bytes(buf[:n])
    else:
        decoded = decode(payload)
    log.debug("decoded %d bytes into %d", len(payload), len(decoded))
    write_payload(args, decoded)


def add_io_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "data",
        nargs="?",
        default=None,
        help="Payload as hex (e.g. '11 22 00 33'); omit to read --input or stdin",
    )
    p.add_argument("-i", "--input", help="Read payload from file ('-' for stdin)")
    p.add_argument("-o", "--output", help="Write result to file ('-' for stdout)")
    p.add_argument(
        "--hex", action="store_true", help="Print result as space-separated hex"
    )


def main(argv: Optional[list] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="python -m cobsbuf",
        description="Consistent Overhead Byte Stuffing encoder/decoder",
        usage="""python -m cobsbuf <command> [options]
        python -m cobsbuf size 254
        python -m cobsbuf encode '11 22 00 33' --hex
        python -m cobsbuf encode -i packet.bin -o packet.cobs
        python -m cobsbuf decode '03 11 22 02 33 00' --hex
        python -m cobsbuf decode --in-place < packet.cobs""",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    sub = parser.add_subparsers(dest="command", required=True)

    p_size = sub.add_parser("size", help="Print the worst-case encoded size")
    p_size.add_argument("length", type=int, help="Raw payload length in bytes")
    p_size.add_argument(
        "--no-delimiter",
        action="store_true",
        help="Do not count the trailing 0x00 delimiter",
    )

    p_encode = sub.add_parser("encode", help="COBS-encode a payload")
    add_io_arguments(p_encode)
    p_encode.add_argument(
        "--no-delimiter",
        action="store_true",
        help="Do not append the trailing 0x00 delimiter",
    )

    p_decode = sub.add_parser("decode", help="Decode a COBS-encoded payload")
    add_io_arguments(p_decode)
    p_decode.add_argument(
        "--in-place",
        action="store_true",
        help="Decode over the input buffer instead of a separate one",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "size":
            cmd_size(args)
        elif args.command == "encode":
            cmd_encode(args)
        elif args.command == "decode":
            cmd_decode(args)
    except (CobsError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
