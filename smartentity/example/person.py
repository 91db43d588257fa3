"""Person entity with a nested address."""

from __future__ import annotations

import random
import time
import uuid
from dataclasses import dataclass, field
from typing import Optional

from ..entity import SmartEntity, wire_field
from ..models import SchemaHint, ArrayHint, ObjectHint
from .address import Address


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class Person(SmartEntity):
    maskable_fields = ("name",)
    required_fields = ("name",)
    schema_hints = {
        "id": SchemaHint("string"),
        "name": SchemaHint("string", min_length=1),
        "age": SchemaHint("number", nullable=True, minimum=0),
        "isActive": SchemaHint("boolean", nullable=False),
        "createAt": SchemaHint("number"),
        "hobbies": ArrayHint(items=SchemaHint("string")),
        "address": ObjectHint(entity=Address, nullable=True),
    }

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    name: Optional[str] = None
    age: Optional[int] = None
    is_active: bool = wire_field("isActive", default=True)
    create_at: int = wire_field("createAt", default_factory=_now_ms)
    hobbies: list[str] = field(default_factory=list)
    address: Optional[Address] = None

    @classmethod
    def example(cls) -> Person:
        return cls(
            str(uuid.uuid4()),
            "Alice",
            random.randint(1, 100),
            True,
            _now_ms(),
            ["reading", "video game"],
            Address.example(),
        )
