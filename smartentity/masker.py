"""Recursive masking serializer for SmartEntity."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Collection, Mapping

from .models import EntityConfig
from .exceptions import EncodingError
from .utils import build_path, is_sequence, mask_value

logger = logging.getLogger(__name__)


def is_entity(value: Any) -> bool:
    """Check if a value is an entity instance (not an entity class)."""
    return (
        not isinstance(value, type)
        and hasattr(value, "serializable_items")
        and hasattr(value, "maskable_fields")
    )


class Masker:
    """
    Converts an entity into a plain JSON-compatible tree.

    Masking rules:
    - A nested entity is serialized with its own maskable fields and
      inherits the mask flag
    - A sequence under a maskable field has every element masked by its own
      string length; elements are not recursed into
    - A mapping is recursed into; its keys are only masked when the field
      holding the mapping is maskable
    - A primitive under a maskable field becomes a mask string
    """

    def __init__(self):
        self.masked_count = 0
        self._active: set[int] = set()

    def serialize(self, entity: Any, mask_sensitive: bool = False) -> dict:
        """
        Serialize an entity tree.

        Args:
            entity: Root entity
            mask_sensitive: Whether to mask maskable fields

        Returns:
            Dict ready for JSON encoding
        """
        self.masked_count = 0
        self._active = set()

        tree = self._serialize_entity(entity, mask_sensitive, "$")

        if mask_sensitive:
            logger.debug(
                "Masked %d value(s) in %s", self.masked_count, type(entity).__name__
            )
        return tree

    @contextmanager
    def _visiting(self, container: Any, path: str):
        """Track containers on the current path to detect cycles."""
        marker = id(container)
        if marker in self._active:
            raise EncodingError("circular reference", path)
        self._active.add(marker)
        try:
            yield
        finally:
            self._active.discard(marker)

    def _serialize_entity(self, entity: Any, mask: bool, path: str) -> dict:
        config: EntityConfig = type(entity).config
        maskable = frozenset(entity.maskable_fields)

        with self._visiting(entity, path):
            result = {}
            for key, value in entity.serializable_items():
                if key.startswith(config.reserved_prefix):
                    continue
                result[key] = self._process_value(
                    value, key, mask, maskable, config.mask_char, build_path(path, key)
                )
            return result

    def _process_value(
        self,
        value: Any,
        key: Any,
        mask: bool,
        maskable: Collection[str],
        mask_char: str,
        path: str
    ) -> Any:
        """Process a single value, applying masking if necessary."""
        if is_entity(value):
            return self._serialize_entity(value, mask, path)

        if is_sequence(value):
            if mask and key in maskable:
                self.masked_count += len(value)
                return [mask_value(item, mask_char) for item in value]

            with self._visiting(value, path):
                return [
                    self._process_value(
                        item, key, mask, maskable, mask_char, build_path(path, i)
                    )
                    for i, item in enumerate(value)
                ]

        if isinstance(value, Mapping):
            child_mask = mask and key in maskable
            with self._visiting(value, path):
                return {
                    sub_key: self._process_value(
                        sub_value, sub_key, child_mask, maskable, mask_char,
                        build_path(path, str(sub_key))
                    )
                    for sub_key, sub_value in value.items()
                }

        if mask and key in maskable:
            self.masked_count += 1
            return mask_value(value, mask_char)

        return value
