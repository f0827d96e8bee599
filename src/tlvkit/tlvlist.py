"""
TLV Record List
===============

This module provides RecordList, an ordered collection of TLV records
with tag-based lookup and removal, and whole-stream serialization.

Ordering and Duplicates
-----------------------
Records keep the order in which they were added. That order decides
both the serialization order and which record get() returns when a tag
appears more than once. Duplicate tags, and fully duplicate records,
are allowed.

Usage Examples
--------------
Building and writing a list:
    >>> from tlvkit import RecordList
    >>> records = RecordList()
    >>> alice = records.add(1, b"alice")
    >>> flags = records.add(2, b"\\x00\\x01")
    >>> records.write_file("people.tlv")

Reading it back:
    >>> records = RecordList.read_file("people.tlv")
    >>> records.get(1).value
    b'alice'

Thread Safety
-------------
A RecordList must not be mutated from several threads at once. Callers
that share one across threads are responsible for locking around it.
Records themselves are immutable and can be shared freely.
"""

from pathlib import Path
from typing import Any, Iterable, Iterator, Optional, Union, overload
import io
import logging
import shutil

from tlvkit.codec import ByteSink, ByteSource, iter_records, write_record
from tlvkit.config import CodecConfig
from tlvkit.errors import TagNotFoundError, TLVReadError
from tlvkit.records import BytesLike, Record, records_equal

# Configure module logger
logger = logging.getLogger(__name__)


class RecordList:
    """
    Ordered, mutable collection of TLV records.

    Example:
        >>> records = RecordList()
        >>> _ = records.add(7, b"first")
        >>> _ = records.add(8, b"other")
        >>> _ = records.add(7, b"second")
        >>> records.get(7).value
        b'first'
        >>> [r.value for r in records.get_all(7)]
        [b'first', b'second']
        >>> records.remove(7)
        2
        >>> len(records)
        1
    """

    def __init__(self, records: Optional[Iterable[Record]] = None):
        self._records: list[Record] = []
        if records is not None:
            for record in records:
                self.add_record(record)

    # =========================================================================
    # Container Protocol
    # =========================================================================

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self._records)

    @overload
    def __getitem__(self, index: int) -> Record: ...

    @overload
    def __getitem__(self, index: slice) -> list[Record]: ...

    def __getitem__(self, index):
        return self._records[index]

    def __contains__(self, item: object) -> bool:
        if not isinstance(item, Record):
            return False
        return any(records_equal(record, item) for record in self._records)

    def __bool__(self) -> bool:
        return bool(self._records)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RecordList):
            return NotImplemented
        return len(self) == len(other) and all(
            records_equal(a, b) for a, b in zip(self._records, other._records)
        )

    def __repr__(self) -> str:
        return f"RecordList({len(self._records)} records)"

    def length(self) -> int:
        """Get the number of records in the list."""
        return len(self._records)

    # =========================================================================
    # Adding Records
    # =========================================================================

    def add(self, tag: int, value: BytesLike = b"") -> Record:
        """
        Build a record from a tag and value and append it.

        The value is copied, so the caller may reuse its buffer.

        Returns:
            The newly created Record
        """
        record = Record(tag, value)
        self._records.append(record)
        return record

    def add_record(self, record: Record) -> None:
        """
        Append an existing record.

        Raises:
            TypeError: If record is not a Record
        """
        if not isinstance(record, Record):
            raise TypeError(f"Expected Record, got {type(record).__name__}")
        self._records.append(record)

    # =========================================================================
    # Lookup
    # =========================================================================

    def get(self, tag: int) -> Record:
        """
        Get the first record with the given tag.

        Records are scanned in insertion order, so when a tag appears more
        than once the earliest one is returned.

        Raises:
            TagNotFoundError: If no record has the tag
        """
        for record in self._records:
            if record.tag == tag:
                return record
        raise TagNotFoundError(tag)

    def get_all(self, tag: int) -> list[Record]:
        """
        Get every record with the given tag, in insertion order.

        Returns an empty list when the tag is absent.
        """
        return [record for record in self._records if record.tag == tag]

    def has_tag(self, tag: int) -> bool:
        """Check whether any record has the given tag."""
        return any(record.tag == tag for record in self._records)

    def tags(self) -> list[int]:
        """Get the tag of each record in insertion order (duplicates kept)."""
        return [record.tag for record in self._records]

    # =========================================================================
    # Removal
    # =========================================================================

    def remove(self, tag: int) -> int:
        """
        Remove every record with the given tag.

        Surviving records keep their relative order.

        Returns:
            Number of records removed (0 if none matched)
        """
        kept = [record for record in self._records if record.tag != tag]
        removed = len(self._records) - len(kept)
        self._records = kept
        if removed:
            logger.debug("Removed %d record(s) with tag %d", removed, tag)
        return removed

    def remove_record(self, record: Record) -> int:
        """
        Remove every record equal to the given one.

        Matching compares tag, length and value, so a record with the same
        tag but a different value is left in place.

        Returns:
            Number of records removed (0 if none matched)
        """
        kept = [r for r in self._records if not records_equal(r, record)]
        removed = len(self._records) - len(kept)
        self._records = kept
        if removed:
            logger.debug("Removed %d record(s) equal to tag %d", removed, record.tag)
        return removed

    def clear(self) -> None:
        """Remove all records."""
        self._records.clear()

    # =========================================================================
    # Stream I/O
    # =========================================================================

    def write(self, sink: ByteSink) -> None:
        """
        Encode every record onto a sink in insertion order.

        Stops at the first failed write and raises it. Records already
        written stay in the sink, so after an error the sink may hold a
        truncated prefix of the list.

        Raises:
            TLVWriteError: If a write fails or is short
        """
        for record in self._records:
            write_record(record, sink)
        logger.debug("Wrote %d record(s)", len(self._records))

    @classmethod
    def read(cls, source: ByteSource, config: Optional[CodecConfig] = None) -> "RecordList":
        """
        Build a list by decoding records until the source is exhausted.

        A clean end of stream finishes the list. Any other read error is
        raised and the records decoded so far are discarded.

        Args:
            source: Stream positioned at the first record
            config: Decoder settings (default: get_default_config())

        Raises:
            TLVReadError: If the stream is malformed or cannot be read
        """
        records = cls()
        try:
            for record in iter_records(source, config):
                records._records.append(record)
        except TLVReadError:
            logger.warning("Read aborted after %d record(s)", len(records))
            raise
        logger.debug("Read %d record(s)", len(records))
        return records

    def to_bytes(self) -> bytes:
        """Serialize the whole list."""
        buffer = io.BytesIO()
        self.write(buffer)
        return buffer.getvalue()

    @classmethod
    def from_bytes(cls, data: BytesLike, config: Optional[CodecConfig] = None) -> "RecordList":
        """Decode a whole list from a buffer."""
        return cls.read(io.BytesIO(bytes(data)), config)

    def write_file(self, filepath: Union[str, Path]) -> int:
        """
        Write the list to a file, replacing its contents.

        The list is written to a temporary file in the same directory,
        which then replaces the target. If writing fails the existing
        file is left untouched.

        Returns:
            Number of bytes written
        """
        filepath = Path(filepath)
        temp_path = filepath.with_name(f".{filepath.name}.tmp")
        try:
            with temp_path.open("wb") as f:
                self.write(f)
                size = f.tell()
            if filepath.exists():
                shutil.copymode(filepath, temp_path)
        except Exception:
            temp_path.unlink(missing_ok=True)
            raise

        temp_path.replace(filepath)
        logger.debug("Wrote %d bytes to %s", size, filepath)
        return size

    @classmethod
    def read_file(cls, filepath: Union[str, Path], config: Optional[CodecConfig] = None) -> "RecordList":
        """
        Read a list from a file.

        Raises:
            FileNotFoundError: If the file doesn't exist
            TLVReadError: If the file is malformed
        """
        filepath = Path(filepath)
        with filepath.open("rb") as f:
            return cls.read(f, config)

    # =========================================================================
    # Summary
    # =========================================================================

    def get_encoded_size(self) -> int:
        """Get the number of bytes the list occupies when serialized."""
        return sum(record.encoded_size for record in self._records)

    def get_info(self) -> dict[str, Any]:
        """
        Get summary information about the list.

        Returns:
            Dictionary with record_count, distinct_tags (sorted list),
            value_bytes and encoded_size
        """
        return {
            "record_count": len(self._records),
            "distinct_tags": sorted(set(self.tags())),
            "value_bytes": sum(record.length for record in self._records),
            "encoded_size": self.get_encoded_size(),
        }
