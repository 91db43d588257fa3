"""Data models for SmartEntity."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Mapping, Optional, Union


class SchemaDraft(Enum):
    DRAFT7 = "draft7"
    DRAFT2020_12 = "draft2020-12"


# (JSON Schema keyword, hint attribute), in emission order
CONSTRAINT_KEYS = (
    ("minLength", "min_length"),
    ("maxLength", "max_length"),
    ("minimum", "minimum"),
    ("maximum", "maximum"),
    ("pattern", "pattern"),
)


@dataclass(frozen=True)
class EntityConfig:
    """Serialization and validation settings shared by an entity class."""
    mask_char: str = "*"
    indent: int = 2
    ensure_ascii: bool = False
    reserved_prefix: str = "_"
    schema_draft: SchemaDraft = SchemaDraft.DRAFT7
    check_schema: bool = True

    def __post_init__(self):
        if not isinstance(self.mask_char, str) or len(self.mask_char) != 1:
            raise ValueError(f"mask_char must be a single character: {self.mask_char!r}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> EntityConfig:
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")

        values = dict(data)
        if "schema_draft" in values:
            values["schema_draft"] = SchemaDraft(values["schema_draft"])
        return cls(**values)

    def to_dict(self) -> dict:
        return {
            "mask_char": self.mask_char,
            "indent": self.indent,
            "ensure_ascii": self.ensure_ascii,
            "reserved_prefix": self.reserved_prefix,
            "schema_draft": self.schema_draft.value,
            "check_schema": self.check_schema,
        }


@dataclass
class SchemaHint:
    """Declarative constraints for a single entity field."""
    type: str = "string"
    nullable: Optional[bool] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    pattern: Optional[str] = None

    def constraints(self) -> dict:
        """Return the JSON Schema constraint keywords that are set."""
        result = {}
        for keyword, attr in CONSTRAINT_KEYS:
            value = getattr(self, attr)
            if value is not None:
                result[keyword] = value
        return result


@dataclass
class SchemaRef:
    """
    Reference to a nested schema.

    Either a precompiled ``schema`` dict, or an ``entity`` class whose schema
    is derived on demand and whose instances are rebuilt on deserialization.
    """
    schema: Optional[dict] = None
    entity: Optional[type] = None


@dataclass
class ArrayHint(SchemaHint):
    """Hint for array fields with a uniform item constraint."""
    type: str = "array"
    items: Optional[Union[SchemaHint, SchemaRef]] = None


@dataclass
class ObjectHint(SchemaHint):
    """Hint for object fields backed by a nested schema."""
    type: str = "object"
    schema: Optional[dict] = field(default=None, repr=False)
    entity: Optional[type] = None


def hint_from_dict(raw: Mapping[str, Any]) -> SchemaHint:
    """
    Build a hint from a dict written with JSON Schema style keys.

    Args:
        raw: Mapping such as ``{"type": "string", "minLength": 1}``

    Returns:
        SchemaHint, ArrayHint or ObjectHint
    """
    if "type" not in raw:
        raise ValueError(f"Hint has no 'type': {dict(raw)!r}")

    hint_type = raw["type"]
    nullable = raw.get("nullable")
    constraints = {attr: raw[key] for key, attr in CONSTRAINT_KEYS if key in raw}

    if hint_type == "array" and raw.get("items") is not None:
        return ArrayHint(
            nullable=nullable,
            items=_items_from_raw(raw["items"]),
            **constraints
        )

    if hint_type == "object" and (raw.get("schema") or raw.get("entity")):
        return ObjectHint(
            nullable=nullable,
            schema=raw.get("schema"),
            entity=raw.get("entity"),
            **constraints
        )

    return SchemaHint(type=hint_type, nullable=nullable, **constraints)


def _items_from_raw(items: Any) -> Union[SchemaHint, SchemaRef]:
    if isinstance(items, (SchemaHint, SchemaRef)):
        return items
    if isinstance(items, Mapping):
        if "schema" in items or "entity" in items:
            return SchemaRef(schema=items.get("schema"), entity=items.get("entity"))
        return hint_from_dict(items)
    raise ValueError(f"Unsupported items descriptor: {items!r}")


def coerce_hint(value: Any) -> SchemaHint:
    """Accept a hint dataclass or its dict form."""
    if isinstance(value, SchemaHint):
        return value
    if isinstance(value, Mapping):
        return hint_from_dict(value)
    raise ValueError(f"Unsupported schema hint: {value!r}")
