"""Shared checks for record store adapters."""

import re

from prefstore.core.records import Item

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def validate_table_name(table_name: str) -> str:
    """Ensure a table name is safe to interpolate into SQL."""
    if not _IDENTIFIER.match(table_name):
        raise ValueError(f"Invalid table name: {table_name!r}")
    return table_name


def item_key(item: Item, key_attribute: str) -> str:
    """Return the item's primary key, checking it matches the table's key attribute."""
    if item.primary_key_name is None:
        raise ValueError("Item has no primary key")
    if item.primary_key_name != key_attribute:
        raise ValueError(
            f"Item primary key {item.primary_key_name!r} does not match "
            f"table key attribute {key_attribute!r}"
        )
    key = item.primary_key
    assert key is not None
    return key
