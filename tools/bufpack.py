# SPDX-License-Identifier: GPL-3.0-or-later OR LicenseRef-Commercial

from __future__ import annotations

import argparse
import re
import struct
import sys

from bufstream.buffer import BufferStream, allocate
from bufstream.caps import caps_to_turtle, describe
from bufstream.errors import StreamError

FLOAT_CODES = frozenset("efd")
BYTES_CODES = frozenset("csp")

# Optional repeat count followed by a struct format code.
FORMAT_ITEM = re.compile(r"(\d*)([xcbB?hHiIlLqQnNefdspP])")


def format_codes(fmt: str) -> list[str]:
    """Return one code per value the format consumes."""
    codes: list[str] = []
    for count, code in FORMAT_ITEM.findall(fmt):
        if code == "x":
            continue
        if code in "sp":
            # The count is a length here; the field takes one bytes value.
            codes.append(code)
        else:
            codes.extend(code * int(count or 1))
    return codes


def parse_value(code: str, text: str) -> int | float | bool | bytes:
    if code in FLOAT_CODES:
        return float(text)
    if code in BYTES_CODES:
        return text.encode()
    if code == "?":
        return text.lower() not in ("0", "false", "no", "")
    return int(text, 0)


def parse_values(fmt: str, raw: list[str]) -> list[int | float | bool | bytes]:
    codes = format_codes(fmt)
    return [
        parse_value(codes[i] if i < len(codes) else "", text) for i, text in enumerate(raw)
    ]


def build_stream(args: argparse.Namespace) -> BufferStream:
    capacity = args.capacity
    if capacity is None:
        capacity = max(args.offset, 0) + struct.calcsize(args.format)
    if capacity < 0:
        raise ValueError(f"capacity must not be negative: {capacity}")
    return allocate(capacity)


def pack_into(stream: BufferStream, offset: int, payload: bytes) -> None:
    """Write `payload` at `offset`, raising the stream error on failure."""
    _, error = stream.seek(offset)
    if error is not None:
        raise error
    _, error = stream.write(payload)
    if error is not None:
        raise error


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Pack values into a fixed-size buffer with a struct format."
    )
    parser.add_argument("format", help="struct format string, e.g. '<BBB'.")
    parser.add_argument("values", nargs="*", help="Values to pack.")
    parser.add_argument(
        "--capacity",
        type=int,
        default=None,
        help="Buffer size in bytes (default: offset + struct.calcsize(format)).",
    )
    parser.add_argument(
        "--offset", type=int, default=0, help="Offset to start packing at (default: 0)."
    )
    parser.add_argument(
        "--caps", action="store_true", help="Print the buffer's capabilities as Turtle."
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    try:
        payload = struct.pack(args.format, *parse_values(args.format, args.values))
    except (struct.error, ValueError) as error:
        print(f"[error] {error}", file=sys.stderr)
        return 1

    try:
        stream = build_stream(args)
        pack_into(stream, args.offset, payload)
    except (StreamError, ValueError) as error:
        print(f"[error] {error}", file=sys.stderr)
        return 1

    if args.caps:
        print(caps_to_turtle(describe(stream)))
        return 0

    print(" ".join(str(b) for b in stream.content()))
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
