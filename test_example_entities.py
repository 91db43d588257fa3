"""Tests for the example Address and Person entities."""

import json

import pytest
from smartentity import ValidationError
from smartentity.example import Address, Person

PERSON_ID = "4c581c64-94fc-4880-b6e1-6130fbdc7fab"


class TestAddress:
    """Test the Address entity."""

    def setup_method(self):
        self.address = Address("123-4567", "tokyo")

    def test_to_json(self):
        """Test compact serialization."""
        assert self.address.to_json() == '{"postalCode":"123-4567","address":"tokyo"}'

    def test_to_json_masked(self):
        """Test that both maskable fields are masked by length."""
        assert self.address.to_json(False, True) == '{"postalCode":"********","address":"*****"}'

    def test_pretty(self):
        """Test pretty serialization."""
        text = self.address.to_json(pretty=True)

        assert text == '{\n  "postalCode": "123-4567",\n  "address": "tokyo"\n}'

    def test_from_json(self):
        """Test creating an Address from JSON."""
        address = Address.from_json('{"postalCode": "000-0000", "address": "osaka"}')

        assert isinstance(address, Address)
        assert address.postal_code == "000-0000"
        assert address.address == "osaka"

    def test_from_json_missing_required(self):
        """Test that a missing required field is reported."""
        with pytest.raises(ValidationError, match="'address' is a required property"):
            Address.from_json('{"postalCode": "000-0000"}')

    def test_from_json_misspelled_field(self):
        """Test that an unknown field is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            Address.from_json('{"postalCod": "000-0000", "address": "osaka"}')

        message = exc_info.value.message
        assert "'postalCode' is a required property" in message
        assert "'postalCod' was unexpected" in message

    def test_clone(self):
        """Test that clone is an equal, separate instance."""
        clone = self.address.clone()

        assert clone == self.address
        assert clone is not self.address

    def test_schema(self):
        """Test the derived schema."""
        schema = Address.derive_schema()

        assert schema == {
            "type": "object",
            "properties": {
                "postalCode": {"type": "string", "nullable": False},
                "address": {"type": "string", "nullable": False},
            },
            "required": ["postalCode", "address"],
            "additionalProperties": False,
        }

    def test_validate(self):
        """Test validation of valid and default instances."""
        Address.example().validate()

        with pytest.raises(ValidationError):
            Address().validate()


class TestPerson:
    """Test the Person entity."""

    def setup_method(self):
        self.person = Person(
            PERSON_ID,
            "Alice",
            30,
            True,
            1,
            ["reading", "video game"],
            Address("123-4567", "tokyo"),
        )
        self.expected = {
            "id": PERSON_ID,
            "name": "Alice",
            "age": 30,
            "isActive": True,
            "createAt": 1,
            "hobbies": ["reading", "video game"],
            "address": {"postalCode": "123-4567", "address": "tokyo"},
        }

    def test_to_json(self):
        """Test serialization including the nested address."""
        assert json.loads(self.person.to_json()) == self.expected
        assert json.loads(self.person.to_json(pretty=True)) == self.expected

    def test_to_json_masked(self):
        """Test that the nested address masks its own fields."""
        masked = json.loads(self.person.to_json(mask_sensitive=True))

        assert masked["name"] == "*****"
        assert masked["address"] == {"postalCode": "********", "address": "*****"}
        assert masked["age"] == 30
        assert masked["hobbies"] == ["reading", "video game"]

    def test_from_json(self):
        """Test that the nested address is rebuilt as an Address."""
        person = Person.from_json(json.dumps(self.expected))

        assert person == self.person
        assert isinstance(person.address, Address)
        assert person.is_active is True
        assert person.create_at == 1
        assert person.address.postal_code == "123-4567"

    def test_from_json_null_address(self):
        """Test that the address may be null."""
        data = dict(self.expected, address=None)
        assert Person.from_json(json.dumps(data)).address is None

    def test_from_json_constraints(self):
        """Test minLength and minimum constraints."""
        with pytest.raises(ValidationError) as exc_info:
            Person.from_json('{"name": "", "age": -1}')

        paths = [e["path"] for e in exc_info.value.errors]
        assert paths == ["$.age", "$.name"]

    def test_from_json_nested_violation(self):
        """Test that the address schema is enforced."""
        data = dict(self.expected, address={"postalCode": "123-4567"})

        with pytest.raises(ValidationError, match="'address' is a required property"):
            Person.from_json(json.dumps(data))

    def test_hobby_items_must_be_strings(self):
        """Test array item constraint."""
        data = dict(self.expected, hobbies=["reading", 3])

        with pytest.raises(ValidationError) as exc_info:
            Person.from_json(json.dumps(data))

        assert exc_info.value.errors[0]["path"] == "$.hobbies[1]"

    def test_clone(self):
        """Test that clone copies the nested address."""
        clone = self.person.clone()

        assert clone == self.person
        assert clone.address is not self.person.address
        assert clone.hobbies is not self.person.hobbies

    def test_example(self):
        """Test the example factory produces a valid person."""
        person = Person.example()

        assert person.name == "Alice"
        assert 1 <= person.age <= 100
        assert person.address == Address.example()
        person.validate()

    def test_default_person_is_invalid(self):
        """Test that a person without a name does not validate."""
        with pytest.raises(ValidationError, match="name"):
            Person().validate()

    def test_schema(self):
        """Test the derived schema of the nested address."""
        schema = Person.derive_schema()

        assert schema["required"] == ["name"]
        assert schema["properties"]["age"] == {"type": "number", "nullable": True, "minimum": 0}
        assert schema["properties"]["hobbies"] == {
            "type": "array",
            "items": {"type": "string", "nullable": False},
        }
        assert schema["properties"]["address"]["nullable"] is True
        assert schema["properties"]["address"]["required"] == ["postalCode", "address"]
