"""
TLV Record Definition
=====================

This module defines the Record type, the fundamental building block of
every TLV stream handled by tlvkit.

Record Format
-------------
Each record is stored as a fixed 8-byte header followed by the value:

    Offset  Size    Description
    ------  ----    -----------
    0       4       Tag (signed 32-bit, little-endian)
    4       4       Length of the value (signed 32-bit, little-endian)
    8       n       Value (raw bytes, no padding)

A stream of records is the plain concatenation of their encodings,
with no overall header, count or terminator.

Records are immutable. The length is always derived from the value,
so a Record can never carry a length that disagrees with its payload.
"""

from dataclasses import dataclass
from typing import Optional, Union
import io
import struct


# =============================================================================
# Format Constants
# =============================================================================

HEADER_FORMAT = "<ii"
HEADER_SIZE = struct.calcsize(HEADER_FORMAT)  # 8 bytes

FIELD_FORMAT = "<i"
FIELD_SIZE = struct.calcsize(FIELD_FORMAT)  # 4 bytes

TAG_MIN = -(2 ** 31)
TAG_MAX = 2 ** 31 - 1

# Length is a signed 32-bit field, so this is the largest encodable value
MAX_LENGTH = 2 ** 31 - 1

BytesLike = Union[bytes, bytearray, memoryview]


# =============================================================================
# Record
# =============================================================================

@dataclass(frozen=True)
class Record:
    """
    A single Tag-Length-Value record.

    The value is copied into a new bytes object on construction, so
    changing the caller's buffer afterwards does not affect the record.

    Attributes:
        tag: Record identifier (signed 32-bit integer)
        value: Record payload

    Example:
        >>> rec = Record(1, b"hello")
        >>> rec.length
        5
        >>> rec.to_bytes().hex()
        '010000000500000068656c6c6f'
    """
    tag: int
    value: bytes = b""

    def __post_init__(self) -> None:
        """Validate the tag and take an owned copy of the value."""
        if isinstance(self.tag, bool) or not isinstance(self.tag, int):
            raise TypeError(f"Tag must be int, got {type(self.tag).__name__}")
        if not TAG_MIN <= self.tag <= TAG_MAX:
            raise ValueError(f"Tag must fit in 32 bits (signed), got {self.tag}")

        if not isinstance(self.value, (bytes, bytearray, memoryview)):
            raise TypeError(f"Value must be bytes, got {type(self.value).__name__}")
        value = bytes(self.value)
        if len(value) > MAX_LENGTH:
            raise ValueError(f"Value too long: {len(value)} bytes (max {MAX_LENGTH})")

        # frozen dataclass: bypass __setattr__ to store the owned copy
        object.__setattr__(self, "value", value)

    @property
    def length(self) -> int:
        """Length of the value in bytes."""
        return len(self.value)

    @property
    def encoded_size(self) -> int:
        """Total size of this record on the wire (header + value)."""
        return HEADER_SIZE + len(self.value)

    def header_bytes(self) -> bytes:
        """Serialize the 8-byte header (tag and length)."""
        return struct.pack(HEADER_FORMAT, self.tag, self.length)

    def to_bytes(self) -> bytes:
        """Serialize the record to its wire format."""
        return self.header_bytes() + self.value

    @classmethod
    def from_bytes(cls, data: BytesLike) -> "Record":
        """
        Decode a single record from the start of a buffer.

        Trailing bytes after the first record are ignored.

        Args:
            data: Buffer containing at least one complete record

        Returns:
            The decoded Record

        Raises:
            TLVReadError: If the buffer does not hold a complete record
        """
        from tlvkit.codec import read_record

        return read_record(io.BytesIO(bytes(data)))

    def describe(self, preview: int = 16) -> str:
        """
        Get a short human-readable summary of the record.

        Printable ASCII values are shown as text, anything else as hex.
        Values longer than ``preview`` bytes are cut and marked with "...".
        """
        shown = self.value[:preview]
        if shown and all(0x20 <= b < 0x7F for b in shown):
            text = repr(shown.decode("ascii"))
        else:
            text = shown.hex()
        if len(self.value) > preview:
            text += "..."
        return f"tag={self.tag} length={self.length} value={text}"


# =============================================================================
# Equality
# =============================================================================

def records_equal(first: Optional[Record], second: Optional[Record]) -> bool:
    """
    Compare two possibly absent records.

    Two absent records are equal; an absent and a present record are not.
    Present records are equal when tag, length and value all match.

    Args:
        first: A record, or None
        second: A record, or None

    Returns:
        True if the records are equal
    """
    if first is None or second is None:
        return first is None and second is None
    return (
        first.tag == second.tag
        and first.length == second.length
        and first.value == second.value
    )
