"""Base entity with schema validation, masked serialization and cloning."""

from __future__ import annotations

import json
import logging
from copy import deepcopy
from dataclasses import field, fields, is_dataclass
from typing import Any, ClassVar, Mapping, Optional, Sequence, TypeVar

from .models import EntityConfig, ArrayHint, ObjectHint, SchemaHint, SchemaRef, coerce_hint
from .schema import SchemaCompiler, build_validator, collect_errors
from .masker import Masker
from .exceptions import (
    ParseError,
    ValidationError,
    EncodingError,
    SchemaDefinitionError,
)

logger = logging.getLogger(__name__)

E = TypeVar("E", bound="SmartEntity")

# dataclass field metadata key holding the JSON key of a field
WIRE_NAME = "json"


def wire_field(name: str, **kwargs) -> Any:
    """
    Declare a dataclass field whose JSON key differs from its attribute name.

    Usage:
        postal_code: Optional[str] = wire_field("postalCode", default=None)
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[WIRE_NAME] = name
    return field(metadata=metadata, **kwargs)


class SmartEntity:
    """
    Base class for entities driven by class-level declarations.

    Subclasses are usually dataclasses; their fields are the serialized
    fields, keyed by their wire names (see ``wire_field``). Declarations,
    all keyed by wire name:

    - ``schema_hints``: field name -> SchemaHint (or its dict form)
    - ``required_fields``: names that must be present to validate
    - ``maskable_fields``: names replaced by mask strings when masking
    - ``config``: EntityConfig shared by the class

    Usage:
        @dataclass
        class Address(SmartEntity):
            maskable_fields = ("postalCode",)
            required_fields = ("postalCode",)
            schema_hints = {"postalCode": SchemaHint("string")}

            postal_code: Optional[str] = wire_field("postalCode", default=None)

        address = Address.from_json('{"postalCode": "123-4567"}')
        address.to_json(mask_sensitive=True)  # '{"postalCode":"********"}'
    """

    maskable_fields: ClassVar[Sequence[str]] = ()
    required_fields: ClassVar[Sequence[str]] = ()
    schema_hints: ClassVar[Mapping[str, Any]] = {}
    config: ClassVar[EntityConfig] = EntityConfig()

    @classmethod
    def wire_names(cls) -> Optional[dict[str, str]]:
        """Attribute name -> wire name, or None when not a dataclass."""
        if is_dataclass(cls):
            return {f.name: f.metadata.get(WIRE_NAME, f.name) for f in fields(cls)}
        return None

    @classmethod
    def field_names(cls) -> Optional[list[str]]:
        """Declared wire names, or None when the class is not a dataclass."""
        names = cls.wire_names()
        if names is None:
            return None
        return list(names.values())

    def serializable_items(self) -> list[tuple[str, Any]]:
        """Return (wire name, value) pairs of the entity's own fields."""
        names = type(self).wire_names()
        if names is None:
            return list(vars(self).items())
        return [(wire, getattr(self, attr)) for attr, wire in names.items()]

    @classmethod
    def derive_schema(cls) -> dict:
        """
        Generate the JSON schema for the entity.

        Returns:
            Object schema with ``additionalProperties: false``

        Raises:
            SchemaDefinitionError: If the declarations are inconsistent or
                an entity reference leads back to an entity being derived
        """
        return cls._derive_schema(())

    @classmethod
    def _derive_schema(cls, stack: tuple[type, ...]) -> dict:
        compiler = SchemaCompiler(
            cls.__name__, cls.config.reserved_prefix, stack=stack + (cls,)
        )
        return compiler.compile(cls.schema_hints, cls.required_fields, cls.field_names())

    @classmethod
    def from_json(cls: type[E], text: str) -> E:
        """
        Create an entity from JSON text.

        Raises:
            ParseError: If the text is not valid JSON
            ValidationError: If the data does not match the schema
        """
        try:
            data = json.loads(text)
        except (TypeError, ValueError) as e:
            raise ParseError(text, str(e)) from e

        return cls._validated(data)

    @classmethod
    def from_dict(cls: type[E], data: Any) -> E:
        """
        Create an entity from already parsed data.

        The data is copied, so the entity never shares structures with the
        caller.

        Raises:
            ValidationError: If the data does not match the schema
        """
        return cls._validated(deepcopy(data))

    @classmethod
    def _validated(cls: type[E], data: Any) -> E:
        validator = build_validator(cls.derive_schema(), cls.config, cls.__name__)
        errors = collect_errors(validator, data)

        if errors:
            logger.debug("%s failed validation with %d error(s)", cls.__name__, len(errors))
            raise ValidationError(errors, cls.__name__)

        return cls._build(data)

    @classmethod
    def _build(cls: type[E], data: Mapping[str, Any]) -> E:
        """Construct an instance from validated data."""
        hints = {key: coerce_hint(raw) for key, raw in cls.schema_hints.items()}
        values = {key: _rebuild(hints.get(key), value) for key, value in data.items()}

        names = cls.wire_names()
        if names is None:
            instance = cls()
            for key, value in values.items():
                setattr(instance, key, value)
            return instance

        attrs = {wire: attr for attr, wire in names.items()}
        try:
            return cls(**{attrs.get(key, key): value for key, value in values.items()})
        except TypeError as e:
            raise SchemaDefinitionError(cls.__name__, str(e)) from e

    def to_dict(self, mask_sensitive: bool = False) -> dict:
        """Serialize the entity into a JSON-compatible dict."""
        return Masker().serialize(self, mask_sensitive)

    def to_json(self, pretty: bool = False, mask_sensitive: bool = False) -> str:
        """
        Serialize the entity to JSON text.

        Args:
            pretty: Indent the output
            mask_sensitive: Replace maskable fields with mask strings

        Raises:
            EncodingError: If the entity cannot be encoded
        """
        tree = self.to_dict(mask_sensitive)
        config = type(self).config

        try:
            if pretty:
                return json.dumps(
                    tree,
                    indent=config.indent,
                    ensure_ascii=config.ensure_ascii,
                    allow_nan=False
                )
            return json.dumps(
                tree,
                separators=(",", ":"),
                ensure_ascii=config.ensure_ascii,
                allow_nan=False
            )
        except (TypeError, ValueError) as e:
            raise EncodingError(str(e)) from e

    def clone(self: E) -> E:
        """Create a deep copy of the entity through a JSON round trip."""
        return type(self).from_json(self.to_json())

    def validate(self) -> None:
        """
        Validate the entity against its schema.

        Raises:
            ValidationError: If the entity does not match the schema
        """
        self.clone()

    @classmethod
    def example(cls: type[E]) -> E:
        """Return a canonical sample instance."""
        raise NotImplementedError(f"{cls.__name__} does not provide an example")


def _rebuild(hint: Optional[SchemaHint], value: Any) -> Any:
    """Rebuild nested entities for hints that reference an entity class."""
    if isinstance(hint, ObjectHint) and hint.entity is not None:
        if isinstance(value, Mapping):
            return hint.entity._build(value)
        return value

    if isinstance(hint, ArrayHint) and isinstance(hint.items, SchemaRef):
        entity = hint.items.entity
        if entity is not None and isinstance(value, list):
            return [entity._build(item) if isinstance(item, Mapping) else item for item in value]

    return value
