"""Schema introspection for packed Pydantic models.

This module analyzes PackedMessage subclasses and builds the template their
fields are packed with, one directive per field in declaration order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Type, get_args, get_origin

from pydantic import BaseModel
from pydantic.fields import FieldInfo

from ..exceptions import SchemaError, TmplpackError
from .directives import CodecKind, Directive
from .template import Template


@dataclass(frozen=True)
class FieldSchema:
    """Schema information for a single field.

    Attributes:
        name: Field name
        python_type: Python type annotation (Optional unwrapped)
        directive_text: Directive group as written, e.g. ``"n"`` or ``"a8"``
        directive: Parsed directive
        required: Whether field is required (not Optional)
    """

    name: str
    python_type: Type[Any]
    directive_text: str
    directive: Directive
    required: bool

    @property
    def is_str(self) -> bool:
        return self.python_type is str


class MessageSchema:
    """Schema information for an entire packed message.

    Example:
        >>> schema = MessageSchema.from_model(Header)
        >>> schema.template
        'N n a8'
    """

    def __init__(self, model_class: Type[BaseModel]) -> None:
        """Initialize schema from a Pydantic model.

        Args:
            model_class: Pydantic model class to introspect

        Raises:
            SchemaError: If a field has no directive or an unsuitable one
        """
        self.model_class = model_class
        self.fields: List[FieldSchema] = []
        self._introspect()

    @classmethod
    def from_model(cls, model_class: Type[BaseModel]) -> MessageSchema:
        """Create a schema from a Pydantic model."""
        return cls(model_class)

    @property
    def template(self) -> str:
        """Template packing every field in declaration order."""
        return " ".join(field.directive_text for field in self.fields)

    def _introspect(self) -> None:
        for field_name, field_info in self.model_class.model_fields.items():
            self.fields.append(self._extract_field_schema(field_name, field_info))

    def _extract_field_schema(self, name: str, field_info: FieldInfo) -> FieldSchema:
        annotation = field_info.annotation
        if annotation is None:
            raise SchemaError(f"Field {name} has no type annotation")

        # Unwrap Optional[T]
        is_optional = False
        args = get_args(annotation)
        if get_origin(annotation) is not None and type(None) in args:
            non_none_args = [arg for arg in args if arg is not type(None)]
            if len(non_none_args) != 1:
                raise SchemaError(f"Field {name}: complex Union types not supported")
            annotation = non_none_args[0]
            is_optional = True

        directive_text = _directive_of(field_info)
        if directive_text is None:
            raise SchemaError(
                f"Field {name} has no directive. Declare it with Packed(...) or a Packed* helper."
            )

        try:
            directives = list(Template(directive_text))
        except TmplpackError as e:
            raise SchemaError(f"Field {name}: invalid directive {directive_text!r}: {e}") from e

        if len(directives) != 1:
            raise SchemaError(
                f"Field {name}: expected exactly one directive, got {directive_text!r}"
            )
        directive = directives[0]
        _check_single_value(name, directive)

        return FieldSchema(
            name=name,
            python_type=annotation,
            directive_text=directive_text,
            directive=directive,
            required=field_info.is_required() and not is_optional,
        )


def _directive_of(field_info: FieldInfo) -> Optional[str]:
    extra = field_info.json_schema_extra
    if isinstance(extra, dict):
        directive = extra.get("directive")
        if isinstance(directive, str):
            return directive
    return None


def _check_single_value(name: str, directive: Directive) -> None:
    """Reject directives that do not map to exactly one value."""
    if directive.kind in (CodecKind.NOOP, CodecKind.NULL):
        raise SchemaError(f"Field {name}: directive {directive.char!r} carries no value")

    if directive.count_is_width:
        return

    if directive.count != 1:
        raise SchemaError(
            f"Field {name}: directive {directive} repeats; numeric fields take a count of 1"
        )
