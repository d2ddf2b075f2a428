from .codec import (
    buffer_size,
    encode_into,
    decode_into,
    decode_in_place,
    encode,
    decode,
    SENTINEL,
    MAX_CODE,
    MAX_RUN,
)
from .errors import CobsError, InsufficientBuffer, TruncatedInput

__all__ = [
    "buffer_size",
    "encode_into",
    "decode_into",
    "decode_in_place",
    "encode",
    "decode",
    "CobsError",
    "InsufficientBuffer",
    "TruncatedInput",
    "SENTINEL",
    "MAX_CODE",
    "MAX_RUN",
]
