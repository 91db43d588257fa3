"""Custom exceptions for SmartEntity."""

from __future__ import annotations

from typing import Optional


class SmartEntityError(Exception):
    """Base exception for SmartEntity errors."""
    pass


class ParseError(SmartEntityError):
    """Raised when input text is not valid JSON."""
    def __init__(self, text, reason: str = None):
        super().__init__(f"Invalid JSON data: {text}")
        self.text = text
        self.reason = reason


class ValidationError(SmartEntityError):
    """Raised when parsed data does not match the entity schema."""
    def __init__(self, errors: list[dict], entity: str = None):
        joined = ", ".join(f"{e['path']} {e['message']}" for e in errors)
        message = f"Validation failed: {joined}"
        super().__init__(message)
        self.message = message
        self.errors = errors
        self.entity = entity


class EncodingError(SmartEntityError):
    """Raised when an entity cannot be encoded as JSON text."""
    def __init__(self, reason: str, path: Optional[str] = None):
        if path:
            super().__init__(f"Cannot encode entity at {path}: {reason}")
        else:
            super().__init__(f"Cannot encode entity: {reason}")
        self.reason = reason
        self.path = path


class SchemaDefinitionError(SmartEntityError):
    """Raised when an entity's declarations are inconsistent."""
    def __init__(self, entity: str, message: str):
        super().__init__(f"Invalid schema for '{entity}': {message}")
        self.entity = entity
        self.message = message
