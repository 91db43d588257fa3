"""Postal address entity."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..entity import SmartEntity, wire_field
from ..models import SchemaHint


@dataclass
class Address(SmartEntity):
    maskable_fields = ("postalCode", "address")
    required_fields = ("postalCode", "address")
    schema_hints = {
        "postalCode": SchemaHint("string"),
        "address": SchemaHint("string"),
    }

    postal_code: Optional[str] = wire_field("postalCode", default=None)
    address: Optional[str] = None

    @classmethod
    def example(cls) -> Address:
        return cls("123-4567", "tokyo")
