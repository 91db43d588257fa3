"""Schema derivation and validator construction for SmartEntity."""

from __future__ import annotations

import logging
from copy import deepcopy
from functools import lru_cache
from typing import Any, Iterable, Mapping, Optional

from jsonschema import Draft7Validator, Draft202012Validator, validators
from jsonschema.exceptions import SchemaError

from .models import (
    EntityConfig,
    SchemaDraft,
    SchemaHint,
    SchemaRef,
    ObjectHint,
    coerce_hint,
)
from .exceptions import SchemaDefinitionError

logger = logging.getLogger(__name__)

_DRAFTS = {
    SchemaDraft.DRAFT7: Draft7Validator,
    SchemaDraft.DRAFT2020_12: Draft202012Validator,
}


class SchemaCompiler:
    """
    Compiles field hints into a closed JSON Schema object.

    Every hint whose name does not start with the reserved prefix becomes one
    property. The result always carries the declared ``required`` list and
    ``additionalProperties: false``.
    """

    def __init__(
        self,
        entity: str = "entity",
        reserved_prefix: str = "_",
        stack: tuple[type, ...] = ()
    ):
        self.entity = entity
        self.reserved_prefix = reserved_prefix
        # entity classes whose schemas are being derived, outermost first
        self.stack = stack

    def compile(
        self,
        hints: Mapping[str, Any],
        required: Iterable[str],
        field_names: Optional[Iterable[str]] = None
    ) -> dict:
        """
        Derive the object schema.

        Args:
            hints: Field name -> SchemaHint (or its dict form)
            required: Names of fields that must be present
            field_names: Declared entity fields; when given, every hint must
                name one of them

        Returns:
            Object schema dict
        """
        properties = self.build_properties(hints)
        required = list(required)

        missing = [name for name in required if name not in properties]
        if missing:
            raise SchemaDefinitionError(
                self.entity,
                f"required fields without a schema hint: {', '.join(missing)}"
            )

        if field_names is not None:
            declared = set(field_names)
            unknown = [name for name in properties if name not in declared]
            if unknown:
                raise SchemaDefinitionError(
                    self.entity,
                    f"schema hints for undeclared fields: {', '.join(unknown)}"
                )

        logger.debug(
            "Derived schema for %s: %d properties, %d required",
            self.entity, len(properties), len(required)
        )

        return {
            "type": "object",
            "properties": properties,
            "required": required,
            "additionalProperties": False,
        }

    def build_properties(self, hints: Mapping[str, Any]) -> dict:
        """Build the ``properties`` section, preserving hint order."""
        properties = {}

        for key, raw in hints.items():
            if key.startswith(self.reserved_prefix):
                continue
            try:
                hint = coerce_hint(raw)
            except ValueError as e:
                raise SchemaDefinitionError(self.entity, f"field '{key}': {e}")
            properties[key] = self.build_property(hint)

        return properties

    def build_property(self, hint: SchemaHint) -> dict:
        """Build the schema of a single property."""
        items = getattr(hint, "items", None)
        if hint.type == "array" and items is not None:
            return {"type": "array", "items": self._build_items(items)}

        if hint.type == "object" and isinstance(hint, ObjectHint):
            if hint.schema is not None:
                return deepcopy(hint.schema)
            if hint.entity is not None:
                schema = self._derive_nested(hint.entity)
                schema["nullable"] = bool(hint.nullable)
                return schema

        return self._build_primitive(hint)

    def _build_items(self, items: SchemaHint | SchemaRef) -> dict:
        if isinstance(items, SchemaRef):
            if items.schema is not None:
                return deepcopy(items.schema)
            if items.entity is not None:
                return self._derive_nested(items.entity)
            raise SchemaDefinitionError(self.entity, "items reference has no schema")
        return self._build_primitive(items)

    def _derive_nested(self, entity: type) -> dict:
        """Derive a referenced entity's schema, rejecting reference cycles."""
        if entity in self.stack:
            chain = " -> ".join(cls.__name__ for cls in self.stack + (entity,))
            raise SchemaDefinitionError(self.entity, f"recursive entity reference: {chain}")
        return entity._derive_schema(self.stack)

    @staticmethod
    def _build_primitive(hint: SchemaHint) -> dict:
        prop = {"type": hint.type, "nullable": bool(hint.nullable)}
        prop.update(hint.constraints())
        return prop


def derive_schema(
    hints: Mapping[str, Any],
    required: Iterable[str],
    reserved_prefix: str = "_"
) -> dict:
    """
    Convenience function to derive an object schema from hints.

    Args:
        hints: Field name -> SchemaHint (or its dict form)
        required: Names of required fields
        reserved_prefix: Hints whose name starts with this are skipped

    Returns:
        Object schema dict
    """
    return SchemaCompiler(reserved_prefix=reserved_prefix).compile(hints, required)


def _nullable_type(base_type):
    """Wrap a ``type`` validator so ``nullable: true`` admits null."""
    def check(validator, types, instance, schema):
        if instance is None and schema.get("nullable") is True:
            return
        yield from base_type(validator, types, instance, schema)
    return check


@lru_cache(maxsize=None)
def validator_class(draft: SchemaDraft):
    """Return the jsonschema validator class for a draft, with ``nullable``."""
    base = _DRAFTS[draft]
    return validators.extend(base, {"type": _nullable_type(base.VALIDATORS["type"])})


def build_validator(
    schema: dict,
    config: Optional[EntityConfig] = None,
    entity: str = "entity"
):
    """
    Compile a schema into a validator.

    Args:
        schema: Object schema from SchemaCompiler
        config: Entity configuration (draft and schema checking)
        entity: Entity name used in error messages

    Returns:
        jsonschema validator instance
    """
    config = config or EntityConfig()
    cls = validator_class(config.schema_draft)

    if config.check_schema:
        try:
            cls.check_schema(schema)
        except SchemaError as e:
            raise SchemaDefinitionError(entity, e.message)

    return cls(schema)


def collect_errors(validator, data: Any) -> list[dict]:
    """Run the validator and return every failure as ``{path, message}``."""
    errors = sorted(validator.iter_errors(data), key=lambda e: e.json_path)
    return [{"path": e.json_path, "message": e.message} for e in errors]
