"""Exceptions raised by the COBS codec."""


class CobsError(ValueError):
    """Base class for codec failures."""


class InsufficientBuffer(CobsError):
    """Raised when an output buffer is too small for the worst-case result.

    Detected from lengths alone, before any byte is written, so the caller's
    buffer is untouched when this is raised.
    """

    def __init__(self, required: int, available: int):
        super().__init__(
            f"output buffer too small: need {required} bytes, got {available}"
        )
        self.required = required
        self.available = available


class TruncatedInput(CobsError):
    """Raised when an encoded span is shorter than the two-byte minimum."""

    def __init__(self, length: int):
        super().__init__(f"encoded input too short: {length} byte(s), need at least 2")
        self.length = length
