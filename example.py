"""Example usage of SmartEntity."""

import json
import logging

from smartentity import ValidationError
from smartentity.example import Person

person_json = json.dumps(
    {
        "id": "b46021c4-2cf2-4167-a31c-50c9d297e6b8",
        "name": "Alice",
        "age": 1,
        "isActive": False,
        "createAt": 1742483906966,
        "hobbies": ["Reading", "video game"],
        "address": {"postalCode": "123-4567", "address": "tokyo"},
    },
    indent=2
)


def main():
    print("=" * 60)
    print("SmartEntity - Example")
    print("=" * 60)

    person = Person.example()

    print("\nPerson instance to compact JSON:")
    print(person.to_json())
    print("\nPerson instance to pretty JSON:")
    print(person.to_json(pretty=True))
    print("\nPerson instance to pretty and masked JSON:")
    print(person.to_json(pretty=True, mask_sensitive=True))

    print("\n" + "-" * 60)
    print("Clone a Person instance")
    clone = person.clone()
    print(clone.to_json())
    print(f"Equal: {clone == person}, same object: {clone is person}")

    print("\n" + "-" * 60)
    print("Create a Person instance from JSON")
    print(person_json)
    restored = Person.from_json(person_json)
    print(restored.to_json())


def example_with_invalid_json():
    """Example that demonstrates aggregated validation errors."""
    print("\n" + "=" * 60)
    print("Example with Validation Errors")
    print("=" * 60)

    try:
        Person.from_json('{"age": -1, "nickname": "ally"}')
    except ValidationError as e:
        print(f"\n{e.message}")
        for error in e.errors:
            print(f"  - {error['path']}: {error['message']}")


def example_with_schema():
    """Print the derived JSON schema."""
    print("\n" + "=" * 60)
    print("Derived JSON Schema")
    print("=" * 60)
    print(json.dumps(Person.derive_schema(), indent=2))


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG, format="%(name)s - %(levelname)s - %(message)s")
    main()
    example_with_invalid_json()
    example_with_schema()
