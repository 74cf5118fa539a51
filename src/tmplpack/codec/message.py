"""Packing and unpacking of PackedMessage models.

encode() packs the field values of a message with the template derived from
its schema; decode() unpacks bytes with the same template and validates the
result by constructing the model.
"""

from __future__ import annotations

from typing import Any, Optional, TypeVar

from pydantic import BaseModel

from ..config import CodecConfig
from ..exceptions import DecodeError, EncodeError, TmplpackError
from .decoder import unpack_groups
from .encoder import pack
from .schema import MessageSchema

T = TypeVar("T", bound=BaseModel)


def encode(message: BaseModel, *, config: Optional[CodecConfig] = None) -> bytes:
    """Encode a packed message to bytes.

    Args:
        message: Message instance to encode
        config: Codec configuration (default: host configuration)

    Returns:
        Packed bytes

    Raises:
        SchemaError: If the message schema is invalid
        EncodeError: If a field value cannot be packed or the result is too large

    Examples:
        ```python
        from tmplpack import PackedInt, PackedMessage, PackedStr, encode

        class Status(PackedMessage):
            vehicle_id: int = PackedInt("C")
            depth_cm: int = PackedInt("n", ge=0, le=10000)
            name: str = PackedStr(4)

        encode(Status(vehicle_id=42, depth_cm=1500, name="auv"))
        # b"*\\x05\\xdcauv "
        ```
    """
    schema = MessageSchema.from_model(type(message))

    values: list[Any] = []
    for field_schema in schema.fields:
        value = getattr(message, field_schema.name)
        if value is None:
            raise EncodeError(f"Field {field_schema.name} is None and has no packed form")
        values.append(value)

    try:
        encoded = pack(values, schema.template, config=config)
    except TmplpackError as e:
        raise EncodeError(f"Error encoding {type(message).__name__}: {e}") from e

    max_bytes = getattr(type(message), "tmplpack_max_bytes", None)
    if max_bytes is not None and len(encoded) > max_bytes:
        raise EncodeError(
            f"Encoded message size ({len(encoded)} bytes) exceeds tmplpack_max_bytes={max_bytes}"
        )

    return encoded


def decode(message_class: type[T], data: bytes, *, config: Optional[CodecConfig] = None) -> T:
    """Decode bytes to a packed message.

    Args:
        message_class: Message class to decode to
        data: Packed bytes
        config: Codec configuration (default: host configuration)

    Returns:
        Decoded message instance

    Raises:
        SchemaError: If the message schema is invalid
        DecodeError: If data is truncated, malformed, or fails validation
    """
    schema = MessageSchema.from_model(message_class)

    try:
        groups = unpack_groups(data, schema.template, config=config)
    except TmplpackError as e:
        raise DecodeError(f"Error decoding {message_class.__name__}: {e}") from e

    field_values: dict[str, Any] = {}
    start = 0
    # Each field maps to exactly one value-producing directive
    for field_schema, (values, end) in zip(schema.fields, groups):
        size = field_schema.directive.byte_size
        if not values or values[0] is None or (size is not None and end - start < size):
            raise DecodeError(f"Truncated data while decoding field {field_schema.name}")
        value = values[0]
        start = end

        if field_schema.is_str and isinstance(value, bytes):
            try:
                value = value.decode("utf-8")
            except UnicodeDecodeError as e:
                raise DecodeError(
                    f"Field {field_schema.name}: invalid UTF-8 encoding: {e}"
                ) from e
        field_values[field_schema.name] = value

    try:
        return message_class(**field_values)
    except Exception as e:
        raise DecodeError(f"Failed to construct {message_class.__name__}: {e}") from e
