"""Port interfaces for prefstore.

These abstract base classes define the boundaries between core
domain logic and external adapters. Implementations live in the
adapters/ package.

- RecordStorePort: get and put raw items by primary key
- PreferenceStorePort: load and save Preference objects
"""

from abc import ABC, abstractmethod

from .models import Preference, PreferenceCategory
from .records import Item


class RecordStorePort(ABC):
    """Port for a key-value document table.

    Adapters implementing this port store whole Items keyed by their
    primary key. Querying, scanning, and provisioning beyond creating
    a missing table are not part of the contract.
    """

    @abstractmethod
    async def get_item(self, key: str) -> Item | None:
        """Retrieve an item by primary key.

        Args:
            key: Primary key value.

        Returns:
            The stored Item, or None if no item has that key.

        Raises:
            Exception: If the backing store is unavailable.
        """

    @abstractmethod
    async def put_item(self, item: Item) -> None:
        """Create or replace an item.

        Args:
            item: Item to store. Must have a primary key.

        Raises:
            ValueError: If the item has no primary key.
            Exception: If the backing store is unavailable.
        """

    @abstractmethod
    async def close(self) -> None:
        """Release any connections held by the store."""


class PreferenceStorePort(ABC):
    """Port for persisting Preference objects."""

    @abstractmethod
    async def get(
        self, preference_id: str, category: PreferenceCategory
    ) -> Preference | None:
        """Retrieve a preference by raw identifier and category.

        Returns:
            The Preference, or None if it has never been saved.
        """

    @abstractmethod
    async def save(self, preference: Preference) -> None:
        """Create or replace a preference."""
