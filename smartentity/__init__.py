"""
SmartEntity - Schema-validated entities with masked JSON serialization

A base class for data entities that derives a JSON Schema from per-field
hints, validates JSON input against it, serializes to JSON with optional
masking of sensitive fields, and deep-clones through a JSON round trip.
"""

import logging

from .entity import SmartEntity, wire_field
from .models import (
    EntityConfig,
    SchemaDraft,
    SchemaHint,
    ArrayHint,
    ObjectHint,
    SchemaRef,
)
from .schema import (
    SchemaCompiler,
    derive_schema,
    build_validator,
)
from .config import load_config
from .exceptions import (
    SmartEntityError,
    ParseError,
    ValidationError,
    EncodingError,
    SchemaDefinitionError,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
__all__ = [
    # Entity
    "SmartEntity",
    "wire_field",
    # Hints
    "SchemaHint",
    "ArrayHint",
    "ObjectHint",
    "SchemaRef",
    # Schema
    "SchemaCompiler",
    "derive_schema",
    "build_validator",
    # Config
    "EntityConfig",
    "SchemaDraft",
    "load_config",
    # Errors
    "SmartEntityError",
    "ParseError",
    "ValidationError",
    "EncodingError",
    "SchemaDefinitionError",
]
