"""Pure-Python COBS (Consistent Overhead Byte Stuffing) encoder/decoder.

The ``*_into`` functions and ``decode_in_place`` work over caller-supplied
buffers and return the number of bytes written. ``encode`` and ``decode``
wrap them for callers that just want ``bytes`` back.
"""

import logging
from typing import Optional

from .errors import InsufficientBuffer, TruncatedInput

log = logging.getLogger(__name__)

SENTINEL = 0x00
MAX_CODE = 0xFF
MAX_RUN = MAX_CODE - 1  # literal bytes in a full block


def _readable(data) -> memoryview:
    try:
        return memoryview(data).cast("B")
    except TypeError:
        raise TypeError(
            f"expected a bytes-like object, got {type(data).__name__}"
        ) from None


def _writable(buf) -> memoryview:
    view = _readable(buf)
    if view.readonly:
        raise TypeError(f"output buffer is read-only ({type(buf).__name__})")
    return view


def _effective_end(view: memoryview) -> int:
    """Index of the first sentinel byte, or the length if there is none."""
    for i, b in enumerate(view):
        if b == SENTINEL:
            return i
    return len(view)


def buffer_size(input_size: int, with_trailing_delimiter: bool = True) -> int:
    """Worst-case encoded length for ``input_size`` raw bytes.

    Overhead is at least one byte and at most one byte per 254 input bytes,
    plus the delimiter if one is requested.
    """
    if input_size < 0:
        raise ValueError(f"input size must be non-negative, got {input_size}")
    size = input_size + input_size // MAX_RUN + 1
    if with_trailing_delimiter:
        size += 1
    return size


def encode_into(data, output, add_trailing_delimiter: bool = True) -> int:
    """Encode ``data`` into ``output`` and return the number of bytes written.

    Raises InsufficientBuffer, without writing, if ``output`` is shorter than
    ``buffer_size(len(data), add_trailing_delimiter)``.
    """
    src = _readable(data)
    out = _writable(output)
    required = buffer_size(len(src), add_trailing_delimiter)
    if len(out) < required:
        log.debug("encode rejected: %d byte buffer, %d required", len(out), required)
        raise InsufficientBuffer(required, len(out))

    last = len(src) - 1
    code_idx = 0
    write_idx = 1
    code = 1

    def finish_block():
        nonlocal code_idx, write_idx, code
        out[code_idx] = code
        code_idx = write_idx
        write_idx += 1
        code = 1

    for i, b in enumerate(src):
        if b == SENTINEL:
            finish_block()
        else:
            out[write_idx] = b
            write_idx += 1
            code += 1
            # a full run on the final byte closes with code 0xFF at the end
            if code == MAX_CODE and i < last:
                finish_block()

    out[code_idx] = code
    if add_trailing_delimiter:
        out[write_idx] = SENTINEL
        write_idx += 1
    return write_idx


def _decode_blocks(src: memoryview, out: memoryview, end: int) -> int:
    # src and out may be views of the same memory: every block consumes
    # code bytes and produces at most code bytes, so writes never overtake reads
    read_idx = 0
    write_idx = 0
    while True:
        code = src[read_idx]
        if read_idx + code > end:
            code = end - read_idx
        read_idx += 1

        run = code - 1
        if run > 0:
            out[write_idx : write_idx + run] = src[read_idx : read_idx + run]
            read_idx += run
            write_idx += run

        if read_idx >= end:
            break
        if code < MAX_CODE:
            out[write_idx] = SENTINEL
            write_idx += 1
    return write_idx


def decode_into(data, output) -> int:
    """Decode COBS ``data`` into ``output`` and return the decoded length.

    Decoding stops at the first 0x00 in ``data`` or at its end, whichever
    comes first. Code bytes that point past that boundary are clamped, so
    corrupted input can decode to wrong bytes but never overruns ``output``.

    Raises:
        TruncatedInput: ``data`` is shorter than two bytes.
        InsufficientBuffer: ``output`` is empty or shorter than
            ``len(data) - 1``.
    """
    src = _readable(data)
    out = _writable(output)
    if len(src) < 2:
        log.debug("decode rejected: %d byte input", len(src))
        raise TruncatedInput(len(src))
    required = len(src) - 1
    if len(out) < required:
        log.debug("decode rejected: %d byte buffer, %d required", len(out), required)
        raise InsufficientBuffer(required, len(out))

    return _decode_blocks(src, out, _effective_end(src))


def decode_in_place(buffer, length: Optional[int] = None) -> int:
    """Decode the COBS bytes held in ``buffer`` back into ``buffer``.

    ``length`` is the encoded length at the start of ``buffer`` (all of it by
    default). The decoded bytes end up in ``buffer[:n]`` where ``n`` is the
    return value; bytes past ``n`` are left in an unspecified state.
    """
    buf = _writable(buffer)
    if length is None:
        length = len(buf)
    elif not 0 <= length <= len(buf):
        raise ValueError(f"length {length} outside buffer of {len(buf)} bytes")
    if length < 2:
        log.debug("in-place decode rejected: %d byte input", length)
        raise TruncatedInput(length)

    span = buf[:length]
    return _decode_blocks(span, span, _effective_end(span))


def encode(data, add_trailing_delimiter: bool = True) -> bytes:
    out = bytearray(buffer_size(len(_readable(data)), add_trailing_delimiter))
    n = encode_into(data, out, add_trailing_delimiter)
    return bytes(out[:n])


def decode(data) -> bytes:
    out = bytearray(max(len(_readable(data)) - 1, 1))
    n = decode_into(data, out)
    return bytes(out[:n])
