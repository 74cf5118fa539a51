"""Unit tests for packed message models."""

from __future__ import annotations

from typing import ClassVar, Optional

import pytest
from pydantic import ValidationError

from tmplpack import (
    DecodeError,
    EncodeError,
    Packed,
    PackedBytes,
    PackedFloat,
    PackedInt,
    PackedMessage,
    PackedStr,
    SchemaError,
    decode,
    encode,
)
from tmplpack.codec.schema import MessageSchema


class Header(PackedMessage):
    """Fixed-layout header."""

    magic: int = PackedInt("N")
    version: int = PackedInt("C", ge=1, le=3)
    name: str = PackedStr(8)


class Reading(PackedMessage):
    """Sensor reading with mixed field kinds."""

    sensor: int = PackedInt("v")
    offset: int = PackedInt("s")
    value: float = PackedFloat("g")
    digest: str = Packed("H8")
    raw: bytes = PackedBytes(4)


class TestFieldHelpers:
    """Test field helper functions."""

    def test_directive_stored(self) -> None:
        """Test that helpers record their directive."""
        assert Header.model_fields["magic"].json_schema_extra == {"directive": "N"}
        assert Header.model_fields["name"].json_schema_extra == {"directive": "A8"}
        assert Reading.model_fields["raw"].json_schema_extra == {"directive": "a4"}

    def test_extra_schema_preserved(self) -> None:
        """Test that user json_schema_extra entries are kept."""
        field = Packed("C", json_schema_extra={"unit": "m"})
        assert field.json_schema_extra == {"unit": "m", "directive": "C"}

    def test_invalid_string_directive(self) -> None:
        """Test that string helpers reject non-string directives."""
        with pytest.raises(ValueError, match="directive must be one of"):
            PackedStr(4, directive="C")
        with pytest.raises(ValueError, match="directive must be one of"):
            PackedBytes(4, directive="H")

    def test_bounds_validated(self) -> None:
        """Test that ge/le bounds apply on construction."""
        with pytest.raises(ValidationError):
            Header(magic=1, version=4, name="x")

    def test_bytes_length_validated(self) -> None:
        """Test that PackedBytes rejects values longer than the field."""
        with pytest.raises(ValidationError):
            Reading(sensor=1, offset=0, value=0.0, digest="00", raw=b"12345")

    def test_extra_fields_forbidden(self) -> None:
        """Test that unknown fields are rejected."""
        with pytest.raises(ValidationError):
            Header(magic=1, version=1, name="x", other=1)  # type: ignore[call-arg]


class TestSchema:
    """Test schema introspection."""

    def test_template(self) -> None:
        """Test that fields map to directives in declaration order."""
        schema = MessageSchema.from_model(Header)
        assert schema.template == "N C A8"
        assert [field.name for field in schema.fields] == ["magic", "version", "name"]

    def test_field_schema(self) -> None:
        """Test parsed field information."""
        schema = MessageSchema.from_model(Reading)
        digest = schema.fields[3]
        assert digest.directive.char == "H"
        assert digest.directive.count == 8
        assert digest.is_str
        assert digest.required

    def test_optional_unwrapped(self) -> None:
        """Test that Optional fields are unwrapped and marked not required."""

        class WithOptional(PackedMessage):
            flag: Optional[int] = PackedInt("C", default=None)

        (field,) = MessageSchema.from_model(WithOptional).fields
        assert field.python_type is int
        assert not field.required

    def test_missing_directive(self) -> None:
        """Test that a field without a directive raises SchemaError."""

        class Bare(PackedMessage):
            value: int = 0

        with pytest.raises(SchemaError, match="has no directive"):
            MessageSchema.from_model(Bare)

    @pytest.mark.parametrize(
        "directive,message",
        [
            ("C2", "repeats"),
            ("n*", "repeats"),
            ("x", "carries no value"),
            ("C C", "exactly one directive"),
            ("", "exactly one directive"),
            ("C_", "invalid directive"),
        ],
    )
    def test_unsuitable_directive(self, directive: str, message: str) -> None:
        """Test directives that do not map to exactly one value."""

        class Bad(PackedMessage):
            value: int = Packed(directive)

        with pytest.raises(SchemaError, match=message):
            MessageSchema.from_model(Bad)

    def test_complex_union(self) -> None:
        """Test that unions of several types are rejected."""

        class Union3(PackedMessage):
            value: Optional[int | str] = Packed("C", default=None)

        with pytest.raises(SchemaError, match="complex Union"):
            MessageSchema.from_model(Union3)


class TestEncodeDecode:
    """Test encode() and decode()."""

    def test_encode_layout(self) -> None:
        """Test the bytes produced for a header."""
        data = encode(Header(magic=0xCAFEBABE, version=2, name="probe"))
        assert data == b"\xca\xfe\xba\xbe\x02probe   "

    def test_roundtrip(self) -> None:
        """Test that decode inverts encode."""
        msg = Reading(sensor=513, offset=-5, value=1.5, digest="deadbeef", raw=b"ab")
        data = encode(msg)
        assert len(data) == 2 + 2 + 4 + 4 + 4

        decoded = decode(Reading, data)
        assert decoded.sensor == 513
        assert decoded.offset == -5
        assert decoded.value == 1.5
        assert decoded.digest == "deadbeef"
        assert decoded.raw == b"ab\x00\x00"

    def test_str_roundtrip_strips_padding(self) -> None:
        """Test that padded text decodes without padding."""
        msg = Header(magic=1, version=1, name="auv")
        assert decode(Header, encode(msg)) == msg

    def test_none_field(self) -> None:
        """Test that a None value cannot be encoded."""

        class WithOptional(PackedMessage):
            flag: Optional[int] = PackedInt("C", default=None)

        with pytest.raises(EncodeError, match="flag is None"):
            encode(WithOptional())

    def test_value_out_of_range(self) -> None:
        """Test that codec errors are wrapped in EncodeError."""

        class Char(PackedMessage):
            codepoint: int = Packed("U")

        with pytest.raises(EncodeError, match="out of range"):
            encode(Char(codepoint=-1))

    def test_max_bytes(self) -> None:
        """Test that tmplpack_max_bytes is enforced."""

        class Small(PackedMessage):
            value: int = PackedInt("N")

            tmplpack_max_bytes: ClassVar[Optional[int]] = 2

        with pytest.raises(EncodeError, match="exceeds tmplpack_max_bytes=2"):
            encode(Small(value=1))

    def test_truncated(self) -> None:
        """Test that missing bytes raise DecodeError."""
        with pytest.raises(DecodeError, match="Truncated data while decoding field magic"):
            decode(Header, b"\x00\x00")
        with pytest.raises(DecodeError, match="field version"):
            decode(Header, b"\x00\x00\x00\x01")

    def test_truncated_trailing_str(self) -> None:
        """Test that a short trailing text field raises DecodeError."""

        class Record(PackedMessage):
            kind: int = PackedInt("C")
            name: str = PackedStr(4)

        with pytest.raises(DecodeError, match="Truncated data while decoding field name"):
            decode(Record, b"\x01ab")
        with pytest.raises(DecodeError, match="field name"):
            decode(Record, b"\x01")
        assert decode(Record, b"\x01ab  ").name == "ab"

    def test_truncated_trailing_bytes(self) -> None:
        """Test that a short trailing bytes field raises DecodeError."""

        class Blob(PackedMessage):
            kind: int = PackedInt("C")
            raw: bytes = PackedBytes(4)

        with pytest.raises(DecodeError, match="Truncated data while decoding field raw"):
            decode(Blob, b"\x01")
        with pytest.raises(DecodeError, match="field raw"):
            decode(Blob, b"\x01\x00\x00\x00")

    def test_truncated_hex_field(self) -> None:
        """Test that a short hex field raises DecodeError."""
        data = encode(Reading(sensor=1, offset=0, value=0.0, digest="deadbeef", raw=b"ab"))
        with pytest.raises(DecodeError, match="field digest"):
            decode(Reading, data[:10])

    def test_null_terminated_field_full_width(self) -> None:
        """Test that a Z field with an early NUL still consumes its width."""

        class Tagged(PackedMessage):
            tag: str = PackedStr(4, directive="Z")
            kind: int = PackedInt("C")

        decoded = decode(Tagged, b"ab\x00\x00\x07")
        assert decoded.tag == "ab"
        assert decoded.kind == 7

    def test_variable_field_missing(self) -> None:
        """Test that a codepoint field past the end raises DecodeError."""

        class Char(PackedMessage):
            kind: int = PackedInt("C")
            codepoint: int = Packed("U")

        with pytest.raises(DecodeError, match="field codepoint"):
            decode(Char, b"\x01")

    def test_invalid_utf8(self) -> None:
        """Test that undecodable text raises DecodeError."""
        with pytest.raises(DecodeError, match="invalid UTF-8"):
            decode(Header, b"\x00\x00\x00\x01\x01\xff\xfe\xfd     ")

    def test_validation_failure(self) -> None:
        """Test that out-of-bounds decoded values raise DecodeError."""
        with pytest.raises(DecodeError, match="Failed to construct Header"):
            decode(Header, b"\x00\x00\x00\x01\x09name    ")

    def test_malformed_data(self) -> None:
        """Test that codec errors on decode are wrapped in DecodeError."""

        class Char(PackedMessage):
            codepoint: int = Packed("U")

        with pytest.raises(DecodeError, match="malformed UTF-8"):
            decode(Char, b"\x80")
