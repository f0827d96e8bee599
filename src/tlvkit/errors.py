"""
tlvkit Error Hierarchy
======================

This module defines the exception hierarchy for the whole toolkit.
All exceptions inherit from TLVError, allowing callers to catch every
codec-related error with a single except clause if desired.

Exception Hierarchy
-------------------
TLVError (base)
├── TLVReadError - reading a record failed or was short
│   ├── EndOfStream - source exhausted at a record or field boundary
│   ├── TruncatedRecordError - source ended inside a record header
│   ├── RecordFormatError - header declares an impossible length
│   └── ShortValueError - value shorter than its declared length
├── TLVWriteError - writing a record failed or was short
│   └── ShortWriteError - sink accepted fewer bytes than requested
└── TagNotFoundError - lookup found no record with the tag

ShortValueError is also a TLVWriteError: older readers classified a
truncated value as a write error, and code written against that
behaviour keeps working.

EndOfStream is not a failure for RecordList.read(), which treats it as
the normal end of the list. It only surfaces from direct read_record()
calls.
"""

from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class TLVError(Exception):
    """
    Base exception for all tlvkit errors.

        try:
            records = RecordList.read_file("data.tlv")
        except TLVError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Read Exceptions
# =============================================================================

class TLVReadError(TLVError):
    """
    Error reading a TLV record from a source.

    Attributes:
        message: The error description
        offset: Stream offset of the start of the record (optional)
        tag: The record tag, when it was decoded before the failure (optional)
    """

    def __init__(
        self,
        message: str = "TLV read error",
        offset: Optional[int] = None,
        tag: Optional[int] = None,
    ):
        self.message = message
        self.offset = offset
        self.tag = tag
        super().__init__(self._format_message())
        # ShortValueError routes through TLVWriteError, which sets message too
        self.message = message

    def _format_message(self) -> str:
        parts = [self.message]
        if self.tag is not None:
            parts.append(f"tag={self.tag}")
        if self.offset is not None:
            parts.append(f"offset={self.offset}")
        if len(parts) == 1:
            return self.message
        return f"{parts[0]} ({', '.join(parts[1:])})"


class EndOfStream(TLVReadError):
    """
    The source has no more records.

    Raised when a read finds the source exhausted where the next record
    would start, or (unless strict_eof is set) right after a complete tag
    or a complete header with no value bytes.
    """

    def __init__(self, offset: Optional[int] = None):
        super().__init__("end of stream", offset=offset)


class TruncatedRecordError(TLVReadError):
    """
    The source ended part-way through a record header.

    Raised when only some of the 4 tag bytes or 4 length bytes could be
    read, or, with strict_eof, when the stream stops between the tag and
    the length.
    """
    pass


class RecordFormatError(TLVReadError):
    """
    The record header is not acceptable.

    Raised for a negative length field or a length above the configured
    maximum. Detected before any buffer is allocated for the value.
    """
    pass


# =============================================================================
# Write Exceptions
# =============================================================================

class TLVWriteError(TLVError):
    """
    Error writing a TLV record to a sink.

    Raised when the sink raises OSError. Never retried.
    """

    def __init__(self, message: str = "TLV write error"):
        self.message = message
        super().__init__(message)


class ShortWriteError(TLVWriteError):
    """
    The sink accepted fewer bytes than were handed to it.

    Attributes:
        expected: Number of bytes passed to write()
        written: Number of bytes the sink reported as written
    """

    def __init__(self, expected: int, written: int):
        self.expected = expected
        self.written = written
        super().__init__(f"short write: {written} of {expected} bytes accepted")


class ShortValueError(TLVReadError, TLVWriteError):
    """
    The value of a record is shorter than its length field.

    The stream ended inside the value. The partial record is discarded.

    Attributes:
        expected: Declared value length
        received: Number of value bytes actually read
    """

    def __init__(
        self,
        expected: int,
        received: int,
        offset: Optional[int] = None,
        tag: Optional[int] = None,
    ):
        self.expected = expected
        self.received = received
        super().__init__(
            f"short value: read {received} of {expected} bytes",
            offset=offset,
            tag=tag,
        )


# =============================================================================
# Lookup Exceptions
# =============================================================================

class TagNotFoundError(TLVError, LookupError):
    """
    No record with the requested tag.

    This is the normal outcome when probing for optional fields:

        try:
            name = records.get(TAG_NAME).value
        except TagNotFoundError:
            name = b""
    """

    def __init__(self, tag: int):
        self.tag = tag
        super().__init__(f"tag not found: {tag}")
