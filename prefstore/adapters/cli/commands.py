"""CLI command implementations for prefstore.

Maps get/put commands to PreferenceStorePort operations and shapes
the results as JSON-ready dictionaries.
"""

import logging
from typing import Any

from prefstore.core.keys import CompositeKey
from prefstore.core.models import Preference, PreferenceCategory, PreferenceCorrelation
from prefstore.core.ports import PreferenceStorePort

logger = logging.getLogger(__name__)


def _parse_category(value: Any) -> PreferenceCategory:
    try:
        return PreferenceCategory(str(value).upper())
    except ValueError:
        valid = ", ".join(c.value for c in PreferenceCategory)
        raise ValueError(f"Unknown category {value!r}. Valid categories: {valid}") from None


def _parse_correlation(entry: Any) -> PreferenceCorrelation:
    """Parse one correlation entry.

    Accepts either a composed target ({"to_preference_id", "weight"})
    or its parts ({"id", "category", "weight"}).
    """
    if not isinstance(entry, dict):
        raise ValueError(f"Correlation must be an object, got {entry!r}")
    if "weight" not in entry:
        raise ValueError(f"Correlation is missing 'weight': {entry!r}")
    if "to_preference_id" in entry:
        target = entry["to_preference_id"]
        if not isinstance(target, str):
            raise ValueError(f"to_preference_id must be a string, got {target!r}")
        CompositeKey.split(target)
    elif "id" in entry and "category" in entry:
        target = CompositeKey.build(entry["id"], _parse_category(entry["category"]))
    else:
        raise ValueError(
            f"Correlation needs 'to_preference_id' or 'id' and 'category': {entry!r}"
        )
    return PreferenceCorrelation(to_preference_id=target, weight=entry["weight"])


def preference_from_document(document: dict[str, Any]) -> Preference:
    """Build a Preference from a JSON document.

    Raises:
        ValueError: If the document is missing fields or holds invalid values.
    """
    missing = [name for name in ("id", "category", "popularity") if name not in document]
    if missing:
        raise ValueError(f"Missing required fields: {', '.join(missing)}")
    correlations = document.get("correlations", [])
    if not isinstance(correlations, list):
        raise ValueError("'correlations' must be a list")
    return Preference(
        id=document["id"],
        category=_parse_category(document["category"]),
        popularity=document["popularity"],
        correlations=[_parse_correlation(entry) for entry in correlations],
    )


def preference_to_document(preference: Preference) -> dict[str, Any]:
    """Render a Preference as a JSON document, correlations sorted by target."""
    return {
        "id": preference.id,
        "category": preference.category.value,
        "popularity": preference.popularity,
        "correlations": [
            {"to_preference_id": c.to_preference_id, "weight": c.weight}
            for c in sorted(preference.correlations, key=lambda c: c.to_preference_id)
        ],
    }


class PreferenceCommandHandler:
    """Handles CLI commands by delegating to PreferenceStorePort."""

    def __init__(self, store: PreferenceStorePort):
        """Initialize the CLI command handler.

        Args:
            store: PreferenceStorePort implementation to execute commands.
        """
        self.store = store

    async def get_preference(self, preference_id: str, category: str) -> dict[str, Any]:
        """Fetch a preference via CLI.

        Returns:
            Dictionary with status and, on success, the preference document.
        """
        try:
            parsed_category = _parse_category(category)
            preference = await self.store.get(preference_id, parsed_category)
        except ValueError as e:
            logger.error(f"Failed to get preference: {e}")
            return {
                "status": "error",
                "operation": "get",
                "preference_id": preference_id,
                "message": str(e),
            }

        if preference is None:
            return {
                "status": "not_found",
                "operation": "get",
                "preference_id": preference_id,
                "message": f"No {parsed_category.value} preference {preference_id!r}",
            }

        return {
            "status": "success",
            "operation": "get",
            "preference": preference_to_document(preference),
        }

    async def put_preference(self, document: dict[str, Any]) -> dict[str, Any]:
        """Save a preference described by a JSON document via CLI.

        Returns:
            Dictionary with status and message.
        """
        try:
            preference = preference_from_document(document)
        except ValueError as e:
            logger.error(f"Failed to put preference: {e}")
            return {
                "status": "error",
                "operation": "put",
                "preference_id": document.get("id"),
                "message": str(e),
            }

        await self.store.save(preference)
        logger.info(f"Saved {preference.category.value} preference {preference.id!r}")
        return {
            "status": "success",
            "operation": "put",
            "preference_id": preference.id,
            "message": (
                f"Preference {preference.id!r} saved with "
                f"{len(preference.correlations)} correlations"
            ),
        }
