"""
TLV Stream Codec
================

This module moves single records between Record objects and byte
streams. It is the only place that talks to sinks and sources; the
RecordList builds on it for whole-stream I/O.

Sinks and Sources
-----------------
The codec depends only on two small capabilities, not on any concrete
file or network type:

- **ByteSink**: ``write(data) -> int | None``. Returning a number smaller
  than ``len(data)`` reports a short write. Returning None (as some
  wrappers do) means the whole chunk was taken.
- **ByteSource**: ``read(n) -> bytes``. Returning ``b""`` signals end of
  stream. Short reads are fine; the codec keeps reading until it has
  what it needs or the source runs dry.

Regular files opened in binary mode, io.BytesIO, pipes and socket
``makefile("rb")`` wrappers all qualify.

Decoding Outcomes
-----------------
    Situation                                   Result
    ---------                                   ------
    no bytes where a record would start         EndOfStream
    stream ends between tag and length          EndOfStream
    stream ends after the header, value empty   EndOfStream
    1-3 bytes of tag or length                  TruncatedRecordError
    negative or too-large length                RecordFormatError
    some but not all value bytes                ShortValueError
    OSError from the source                     TLVReadError

A stream may stop on any 4-byte field boundary. The partial record is
dropped and the list ends there. With ``CodecConfig(strict_eof=True)``
only the first row is a clean end: a missing length raises
TruncatedRecordError and a missing value raises ShortValueError.
"""

from typing import Iterator, Optional, Protocol
import logging
import struct

from tlvkit.config import CodecConfig, get_default_config
from tlvkit.errors import (
    EndOfStream,
    RecordFormatError,
    ShortValueError,
    ShortWriteError,
    TLVReadError,
    TLVWriteError,
    TruncatedRecordError,
)
from tlvkit.records import FIELD_FORMAT, FIELD_SIZE, Record

# Configure module logger
logger = logging.getLogger(__name__)


# =============================================================================
# Collaborator Protocols
# =============================================================================

class ByteSink(Protocol):
    """Anything accepting sequential binary writes."""

    def write(self, data: bytes) -> Optional[int]:
        ...


class ByteSource(Protocol):
    """Anything offering sequential binary reads, ``b""`` at end of stream."""

    def read(self, size: int = -1) -> bytes:
        ...


# =============================================================================
# Low-level Helpers
# =============================================================================

def _tell(stream: object) -> Optional[int]:
    """Current position of a stream, or None when it cannot say."""
    tell = getattr(stream, "tell", None)
    if tell is None:
        return None
    try:
        return tell()
    except (OSError, ValueError):
        return None


def _write_all(sink: ByteSink, data: bytes) -> None:
    """Write one chunk, treating any shortfall as an error."""
    try:
        written = sink.write(data)
    except OSError as e:
        raise TLVWriteError(f"TLV write error: {e}") from e

    if written is not None and written != len(data):
        raise ShortWriteError(expected=len(data), written=written)


def _read_exact(source: ByteSource, size: int, offset: Optional[int] = None) -> bytes:
    """
    Read up to ``size`` bytes, stopping early only at end of stream.

    Returns fewer than ``size`` bytes only when the source is exhausted.
    """
    if size == 0:
        return b""

    buffer = bytearray()
    while len(buffer) < size:
        try:
            chunk = source.read(size - len(buffer))
        except OSError as e:
            raise TLVReadError(f"TLV read error: {e}", offset=offset) from e

        if chunk is None:
            # Non-blocking source with nothing ready
            raise TLVReadError("source has no data available", offset=offset)
        if not chunk:
            break
        buffer.extend(chunk)

    return bytes(buffer)


# =============================================================================
# Record Encoding
# =============================================================================

def write_record(record: Record, sink: ByteSink) -> None:
    """
    Encode one record onto a sink.

    Writes the tag, the length and the value as three separate writes.
    Nothing is rolled back on failure: the sink may hold part of the
    record.

    Args:
        record: The record to encode
        sink: Destination for the encoded bytes

    Raises:
        ShortWriteError: If the sink accepted fewer bytes than requested
        TLVWriteError: If the sink raised OSError
    """
    _write_all(sink, struct.pack(FIELD_FORMAT, record.tag))
    _write_all(sink, struct.pack(FIELD_FORMAT, record.length))
    _write_all(sink, record.value)

    logger.debug("Wrote record tag=%d length=%d", record.tag, record.length)


# =============================================================================
# Record Decoding
# =============================================================================

def read_record(source: ByteSource, config: Optional[CodecConfig] = None) -> Record:
    """
    Decode one record from a source.

    A record is decoded completely or not at all; on any error the
    bytes consumed so far are lost.

    Args:
        source: Stream positioned at the start of a record
        config: Decoder settings (default: get_default_config())

    Returns:
        The decoded Record

    Raises:
        EndOfStream: If the source is exhausted at a record or field boundary
        TruncatedRecordError: If the source ends inside a header field
        RecordFormatError: If the length is negative or above the limit
        ShortValueError: If the source ends inside the value
        TLVReadError: If the source raised OSError
    """
    if config is None:
        config = get_default_config()

    offset = _tell(source)

    # Tag
    raw = _read_exact(source, FIELD_SIZE, offset)
    if not raw:
        raise EndOfStream(offset=offset)
    if len(raw) < FIELD_SIZE:
        raise TruncatedRecordError(
            f"truncated tag: got {len(raw)} of {FIELD_SIZE} bytes", offset=offset
        )
    (tag,) = struct.unpack(FIELD_FORMAT, raw)

    # Length
    raw = _read_exact(source, FIELD_SIZE, offset)
    if not raw:
        if not config.strict_eof:
            logger.debug("Stream ended after tag %d, treating as end of stream", tag)
            raise EndOfStream(offset=offset)
        raise TruncatedRecordError("missing length field", offset=offset, tag=tag)
    if len(raw) < FIELD_SIZE:
        raise TruncatedRecordError(
            f"truncated length: got {len(raw)} of {FIELD_SIZE} bytes",
            offset=offset,
            tag=tag,
        )
    (length,) = struct.unpack(FIELD_FORMAT, raw)

    if length < 0:
        raise RecordFormatError(f"negative length {length}", offset=offset, tag=tag)
    if length > config.max_value_length:
        raise RecordFormatError(
            f"length {length} exceeds limit of {config.max_value_length} bytes",
            offset=offset,
            tag=tag,
        )

    # Value
    value = _read_exact(source, length, offset)
    if len(value) != length:
        if not value and not config.strict_eof:
            logger.debug("Stream ended after header of tag %d, treating as end of stream", tag)
            raise EndOfStream(offset=offset)
        raise ShortValueError(expected=length, received=len(value), offset=offset, tag=tag)

    logger.debug("Read record tag=%d length=%d", tag, length)
    return Record(tag, value)


def iter_records(source: ByteSource, config: Optional[CodecConfig] = None) -> Iterator[Record]:
    """
    Decode records from a source until it is exhausted.

    End of stream ends the iteration quietly; every other read error
    propagates to the caller.

    Example:
        >>> with open("data.tlv", "rb") as f:
        ...     for rec in iter_records(f):
        ...         print(rec.describe())
    """
    if config is None:
        config = get_default_config()

    while True:
        try:
            record = read_record(source, config)
        except EndOfStream:
            return
        yield record
