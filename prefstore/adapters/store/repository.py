"""Preference repository over a record store.

Implements PreferenceStorePort by converting with PreferenceItemAdapter
and delegating storage to any RecordStorePort.
"""

import logging

from prefstore.adapters.record.preference import PreferenceItemAdapter
from prefstore.core.keys import CompositeKey
from prefstore.core.models import Preference, PreferenceCategory
from prefstore.core.ports import PreferenceStorePort, RecordStorePort

logger = logging.getLogger(__name__)


class PreferenceRepository(PreferenceStorePort):
    """Loads and saves Preferences as Items in a record store."""

    def __init__(self, records: RecordStorePort):
        self.records = records

    async def get(
        self, preference_id: str, category: PreferenceCategory
    ) -> Preference | None:
        key = CompositeKey.build(preference_id, category)
        item = await self.records.get_item(key)
        if item is None:
            logger.debug(f"No preference stored under {key!r}")
            return None
        return PreferenceItemAdapter().with_db_model(item).to_object()

    async def save(self, preference: Preference) -> None:
        item = PreferenceItemAdapter().with_object(preference).to_db_model()
        await self.records.put_item(item)
        logger.debug(
            f"Saved preference {item.primary_key!r} with "
            f"{len(preference.correlations)} correlations"
        )
