"""The persisted record exchanged with record stores.

An Item is an immutable snapshot of one row in a key-value document
table: named attributes holding strings, integers, or string-to-int
maps, one of which is the primary key.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, TypeAlias

AttributeValue: TypeAlias = str | int | Mapping[str, int]


@dataclass(frozen=True)
class Item:
    """A single key-value record.

    Builder methods return a new Item; an existing Item never changes.
    """

    attributes: dict[str, AttributeValue] | MappingProxyType[str, AttributeValue] = field(
        default_factory=dict
    )  # converted to proxy in __post_init__
    primary_key_name: str | None = None

    def __post_init__(self) -> None:
        """Freeze attributes, including nested maps."""
        frozen = {
            name: MappingProxyType(dict(value)) if isinstance(value, Mapping) else value
            for name, value in self.attributes.items()
        }
        object.__setattr__(self, "attributes", MappingProxyType(frozen))
        if self.primary_key_name is not None and self.primary_key_name not in frozen:
            raise ValueError(
                f"Primary key attribute {self.primary_key_name!r} is not set"
            )

    @property
    def primary_key(self) -> str | None:
        """Value of the primary key attribute, or None if no key is set."""
        if self.primary_key_name is None:
            return None
        return self.get_string(self.primary_key_name)

    def _with(self, name: str, value: AttributeValue, primary_key_name: str | None) -> "Item":
        attributes = dict(self.attributes)
        attributes[name] = value
        return Item(attributes=attributes, primary_key_name=primary_key_name)

    def with_primary_key(self, name: str, value: str) -> "Item":
        """Return a copy with the named string attribute as primary key."""
        if not isinstance(value, str):
            raise TypeError(f"Primary key {name!r} must be a str, got {type(value).__name__}")
        return self._with(name, value, name)

    def with_string(self, name: str, value: str) -> "Item":
        if not isinstance(value, str):
            raise TypeError(f"Attribute {name!r} must be a str, got {type(value).__name__}")
        return self._with(name, value, self.primary_key_name)

    def with_int(self, name: str, value: int) -> "Item":
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Attribute {name!r} must be an int, got {type(value).__name__}")
        return self._with(name, value, self.primary_key_name)

    def with_map(self, name: str, value: Mapping[str, int]) -> "Item":
        return self._with(name, dict(value), self.primary_key_name)

    def has_attribute(self, name: str) -> bool:
        return name in self.attributes

    def _get(self, name: str) -> Any:
        try:
            return self.attributes[name]
        except KeyError:
            raise KeyError(f"Item has no attribute {name!r}") from None

    def get_string(self, name: str) -> str:
        """Return a string attribute.

        Raises:
            KeyError: If the attribute is missing.
            TypeError: If the attribute is not a string.
        """
        value = self._get(name)
        if not isinstance(value, str):
            raise TypeError(f"Attribute {name!r} is not a string: {value!r}")
        return value

    def get_int(self, name: str) -> int:
        """Return an integer attribute.

        Raises:
            KeyError: If the attribute is missing.
            TypeError: If the attribute is not an integer.
        """
        value = self._get(name)
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Attribute {name!r} is not an integer: {value!r}")
        return value

    def get_map(self, name: str) -> Mapping[str, int]:
        """Return a read-only string-to-int map attribute.

        Raises:
            KeyError: If the attribute is missing.
            TypeError: If the attribute is not a map.
        """
        value = self._get(name)
        if not isinstance(value, Mapping):
            raise TypeError(f"Attribute {name!r} is not a map: {value!r}")
        return value

    def to_dict(self) -> dict[str, Any]:
        """Plain, JSON-compatible copy of the attributes."""
        return {
            name: dict(value) if isinstance(value, Mapping) else value
            for name, value in self.attributes.items()
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], primary_key_name: str | None = None) -> "Item":
        """Rebuild an Item from the output of to_dict()."""
        return cls(attributes=dict(data), primary_key_name=primary_key_name)
