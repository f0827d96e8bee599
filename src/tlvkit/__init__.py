"""
tlvkit - Tag-Length-Value Records for Binary Formats
====================================================

This package encodes and decodes Tag-Length-Value (TLV) records and
ordered collections of them, for use in binary file formats and wire
protocols.

Main Components
---------------
- **records**: The immutable Record type and record equality
- **codec**: Reading and writing single records on byte streams
- **tlvlist**: RecordList, an ordered collection with tag lookup
- **config**: Decoder limits and end-of-stream policy
- **errors**: Exception hierarchy

Quick Start
-----------
Build a list and save it:
    >>> from tlvkit import RecordList
    >>> records = RecordList()
    >>> _ = records.add(1, b"hello")
    >>> _ = records.add(2, b"world")
    >>> records.write_file("greeting.tlv")

Read it back:
    >>> records = RecordList.read_file("greeting.tlv")
    >>> records.get(2).value
    b'world'

Or use the command-line tool:
    $ tlvtool list greeting.tlv
    $ tlvtool get greeting.tlv 2

Wire Format
-----------
    tag     4 bytes, signed little-endian
    length  4 bytes, signed little-endian
    value   length bytes

Records are concatenated with no header or terminator.
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from tlvkit.records import (
    HEADER_SIZE,
    MAX_LENGTH,
    TAG_MAX,
    TAG_MIN,
    Record,
    records_equal,
)
from tlvkit.codec import (
    ByteSink,
    ByteSource,
    iter_records,
    read_record,
    write_record,
)
from tlvkit.tlvlist import RecordList
from tlvkit.config import CodecConfig, get_default_config, set_default_config
from tlvkit.errors import (
    TLVError,
    TLVReadError,
    TLVWriteError,
    EndOfStream,
    TruncatedRecordError,
    RecordFormatError,
    ShortValueError,
    ShortWriteError,
    TagNotFoundError,
)

__all__ = [
    # Version info
    "__version__",
    # Records
    "Record",
    "records_equal",
    "HEADER_SIZE",
    "MAX_LENGTH",
    "TAG_MIN",
    "TAG_MAX",
    # Codec
    "ByteSink",
    "ByteSource",
    "read_record",
    "write_record",
    "iter_records",
    # Collection
    "RecordList",
    # Configuration
    "CodecConfig",
    "get_default_config",
    "set_default_config",
    # Exception hierarchy
    "TLVError",
    "TLVReadError",
    "TLVWriteError",
    "EndOfStream",
    "TruncatedRecordError",
    "RecordFormatError",
    "ShortValueError",
    "ShortWriteError",
    "TagNotFoundError",
]
