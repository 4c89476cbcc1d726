"""Record adapter for Preference objects.

Maps a Preference to the Item stored in the preferences table and
back. The attribute names below are the stored schema and must not
change.
"""

import logging

from prefstore.core.keys import CompositeKey
from prefstore.core.models import Preference, PreferenceCategory, PreferenceCorrelation
from prefstore.core.records import Item

logger = logging.getLogger(__name__)

PREFERENCE_ID_ATTRIBUTE = "PreferenceID"
POPULARITY_ATTRIBUTE = "Popularity"
CORRELATIONS_ATTRIBUTE = "Correlations"


class AdapterStateError(RuntimeError):
    """Raised when a conversion is requested before its source is set."""


def build_db_string_from_components(raw_id: str, category: PreferenceCategory) -> str:
    """Composite key used for stored preferences and correlation targets."""
    return CompositeKey.build(raw_id, category)


class PreferenceItemAdapter:
    """Single-use converter between a Preference and its stored Item.

    Holds at most one source at a time: setting an object clears any
    record and vice versa. Not safe to share across threads.

    Example:
        item = PreferenceItemAdapter().with_object(preference).to_db_model()
        preference = PreferenceItemAdapter().with_db_model(item).to_object()
    """

    def __init__(self) -> None:
        self._object: Preference | None = None
        self._db_model: Item | None = None

    def with_object(self, preference: Preference) -> "PreferenceItemAdapter":
        """Set the Preference to serialize."""
        self._object = preference
        self._db_model = None
        return self

    def with_db_model(self, item: Item) -> "PreferenceItemAdapter":
        """Set the Item to deserialize."""
        self._db_model = item
        self._object = None
        return self

    def to_db_model(self) -> Item:
        """Convert the source Preference to an Item.

        Raises:
            AdapterStateError: If no Preference was set.
        """
        if self._object is None:
            raise AdapterStateError(
                "Cannot build an Item: no Preference was set with with_object()"
            )

        preference = self._object
        correlations = {
            correlation.to_preference_id: correlation.weight
            for correlation in preference.correlations
        }
        return (
            Item()
            .with_primary_key(
                PREFERENCE_ID_ATTRIBUTE,
                CompositeKey.build(preference.id, preference.category),
            )
            .with_int(POPULARITY_ATTRIBUTE, preference.popularity)
            .with_map(CORRELATIONS_ATTRIBUTE, correlations)
        )

    def to_object(self) -> Preference:
        """Convert the source Item to a Preference.

        Correlation targets are stored already composed, so they are
        copied verbatim rather than split.

        Raises:
            AdapterStateError: If no Item was set.
            ValueError: If the Item is missing attributes or holds invalid data.
        """
        if self._db_model is None:
            raise AdapterStateError(
                "Cannot build a Preference: no Item was set with with_db_model()"
            )

        item = self._db_model
        try:
            preference_id, category = CompositeKey.split(
                item.get_string(PREFERENCE_ID_ATTRIBUTE)
            )
            popularity = item.get_int(POPULARITY_ATTRIBUTE)

            correlations: list[PreferenceCorrelation] = []
            if item.has_attribute(CORRELATIONS_ATTRIBUTE):
                correlations = [
                    PreferenceCorrelation(to_preference_id=target, weight=weight)
                    for target, weight in item.get_map(CORRELATIONS_ATTRIBUTE).items()
                ]

            return Preference(
                id=preference_id,
                category=category,
                popularity=popularity,
                correlations=correlations,
            )
        except (KeyError, TypeError, ValueError) as e:
            logger.error(
                f"Failed to convert item {item.attributes.get(PREFERENCE_ID_ATTRIBUTE)!r}: {e}"
            )
            raise ValueError(f"Item conversion failed: {e}") from e
