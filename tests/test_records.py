"""
Record Unit Tests
=================

Tests for the Record type and record equality.

Test Categories
---------------
1. Construction: value copying, derived length, validation
2. Immutability: frozen attributes
3. Serialization: wire layout of single records
4. Equality: present and absent records
5. Description: human-readable summaries
"""

import pytest

from tlvkit.errors import ShortValueError, TLVReadError
from tlvkit.records import (
    HEADER_SIZE,
    MAX_LENGTH,
    TAG_MAX,
    TAG_MIN,
    Record,
    records_equal,
)


# =============================================================================
# Construction Tests
# =============================================================================

class TestRecordConstruction:
    """Tests for building records."""

    def test_length_matches_value(self):
        """Length should be derived from the value."""
        rec = Record(1, b"hello")
        assert rec.tag == 1
        assert rec.value == b"hello"
        assert rec.length == 5

    def test_empty_value(self):
        """A record may carry no value at all."""
        rec = Record(9)
        assert rec.value == b""
        assert rec.length == 0

    def test_value_is_copied(self):
        """Changing the caller's buffer must not change the record."""
        buffer = bytearray(b"abc")
        rec = Record(1, buffer)
        buffer[0] = ord("z")

        assert rec.value == b"abc"
        assert type(rec.value) is bytes

    def test_memoryview_value(self):
        """Any bytes-like value is accepted."""
        rec = Record(1, memoryview(b"\x01\x02\x03")[1:])
        assert rec.value == b"\x02\x03"
        assert rec.length == 2

    def test_tag_range_limits(self):
        """Tags at both ends of the signed 32-bit range are valid."""
        assert Record(TAG_MIN).tag == -(2 ** 31)
        assert Record(TAG_MAX).tag == 2 ** 31 - 1

    @pytest.mark.parametrize("tag", [TAG_MAX + 1, TAG_MIN - 1, 2 ** 40])
    def test_tag_out_of_range(self, tag):
        """Tags that do not fit in 32 bits are rejected."""
        with pytest.raises(ValueError, match="32 bits"):
            Record(tag, b"x")

    @pytest.mark.parametrize("tag", ["1", 1.0, None, True])
    def test_tag_must_be_int(self, tag):
        """Only real integers are valid tags."""
        with pytest.raises(TypeError, match="Tag must be int"):
            Record(tag, b"x")

    def test_value_must_be_bytes(self):
        """Text values must be encoded by the caller."""
        with pytest.raises(TypeError, match="Value must be bytes"):
            Record(1, "text")

    def test_max_length_constant(self):
        """The largest length is the largest signed 32-bit number."""
        assert MAX_LENGTH == 2 ** 31 - 1
        assert HEADER_SIZE == 8


# =============================================================================
# Immutability Tests
# =============================================================================

class TestRecordImmutability:
    """Records cannot be changed after construction."""

    def test_tag_is_frozen(self):
        rec = Record(1, b"abc")
        with pytest.raises(AttributeError):
            rec.tag = 2

    def test_value_is_frozen(self):
        rec = Record(1, b"abc")
        with pytest.raises(AttributeError):
            rec.value = b"abcd"

    def test_length_is_not_settable(self):
        rec = Record(1, b"abc")
        with pytest.raises(AttributeError):
            rec.length = 10
        assert rec.length == 3

    def test_records_are_hashable(self):
        """Equal records hash equally, so they can live in sets."""
        assert len({Record(1, b"a"), Record(1, b"a"), Record(2, b"a")}) == 2


# =============================================================================
# Serialization Tests
# =============================================================================

class TestRecordSerialization:
    """Tests for the wire layout of a single record."""

    def test_to_bytes_layout(self):
        """Tag and length are little-endian, followed by the raw value."""
        rec = Record(1, b"abc")
        assert rec.to_bytes() == b"\x01\x00\x00\x00" b"\x03\x00\x00\x00" b"abc"

    def test_negative_tag_layout(self):
        """Negative tags use two's complement."""
        rec = Record(-1)
        assert rec.to_bytes() == b"\xff\xff\xff\xff\x00\x00\x00\x00"

    def test_header_bytes(self):
        rec = Record(0x01020304, b"\x00" * 0x10)
        assert rec.header_bytes() == b"\x04\x03\x02\x01\x10\x00\x00\x00"

    def test_encoded_size(self):
        assert Record(1, b"hello").encoded_size == HEADER_SIZE + 5
        assert Record(1).encoded_size == HEADER_SIZE

    @pytest.mark.parametrize("value", [
        b"",
        b"\x00" * 256,
        b"\xff" * 256,
        bytes(range(256)),
        b"This is a test description.",
    ])
    def test_from_bytes_restores_record(self, value):
        """Decoding an encoded record gives an equal record."""
        rec = Record(42, value)
        decoded = Record.from_bytes(rec.to_bytes())

        assert decoded == rec
        assert records_equal(decoded, rec)
        assert decoded.length == len(value)

    def test_from_bytes_ignores_trailing_data(self):
        """Only the first record in the buffer is decoded."""
        data = Record(1, b"one").to_bytes() + Record(2, b"two").to_bytes()
        assert Record.from_bytes(data) == Record(1, b"one")

    def test_from_bytes_truncated(self):
        """A buffer cut inside the value is an error."""
        data = Record(1, b"hello").to_bytes()[:-2]
        with pytest.raises(ShortValueError):
            Record.from_bytes(data)

    def test_from_bytes_empty(self):
        """An empty buffer holds no record."""
        with pytest.raises(TLVReadError):
            Record.from_bytes(b"")


# =============================================================================
# Equality Tests
# =============================================================================

class TestRecordsEqual:
    """Tests for records_equal() with present and absent records."""

    def test_both_absent(self):
        assert records_equal(None, None) is True

    def test_one_absent(self):
        rec = Record(1, b"x")
        assert records_equal(rec, None) is False
        assert records_equal(None, rec) is False

    def test_identical_records(self):
        assert records_equal(Record(1, b"foo bar"), Record(1, b"foo bar")) is True

    def test_different_tag(self):
        assert records_equal(Record(1, b"x"), Record(2, b"x")) is False

    def test_different_value_same_length(self):
        assert records_equal(Record(1, b"abc"), Record(1, b"abd")) is False

    def test_different_length(self):
        assert records_equal(Record(1, b"abc"), Record(1, b"abcd")) is False

    def test_matches_dunder_eq(self):
        """records_equal agrees with == for present records."""
        pairs = [
            (Record(1, b"a"), Record(1, b"a")),
            (Record(1, b"a"), Record(1, b"b")),
            (Record(1, b""), Record(2, b"")),
        ]
        for first, second in pairs:
            assert records_equal(first, second) == (first == second)


# =============================================================================
# Description Tests
# =============================================================================

class TestRecordDescribe:
    """Tests for Record.describe()."""

    def test_text_value(self):
        assert Record(1, b"hello").describe() == "tag=1 length=5 value='hello'"

    def test_binary_value(self):
        assert Record(2, b"\x00\xff").describe() == "tag=2 length=2 value=00ff"

    def test_long_value_is_cut(self):
        rec = Record(3, b"a" * 20)
        assert rec.describe(preview=4) == "tag=3 length=20 value='aaaa'..."

    def test_empty_value(self):
        assert Record(4).describe() == "tag=4 length=0 value="
