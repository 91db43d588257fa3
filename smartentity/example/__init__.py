"""Example entities built on SmartEntity."""

from .address import Address
from .person import Person

__all__ = ["Address", "Person"]
