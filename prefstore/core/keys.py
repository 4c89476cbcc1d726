"""Composite key encoding for stored preferences.

A stored preference is keyed by its raw identifier joined to its
category name. The same encoding names correlation targets.

Example:
    ('Lord of the Rings', BOOKS) -> 'Lord of the Rings#BOOKS'
"""

from .models import PreferenceCategory

KEY_SEPARATOR = "#"


class CompositeKey:
    """Builds and splits composite preference keys.

    All methods are static as the class carries no state.
    """

    @staticmethod
    def build(raw_id: str, category: PreferenceCategory) -> str:
        """Join a raw identifier and a category into a composite key."""
        if not isinstance(raw_id, str) or not raw_id.strip():
            raise ValueError(f"raw_id must be a non-empty string, got {raw_id!r}")
        return f"{raw_id}{KEY_SEPARATOR}{category.value}"

    @staticmethod
    def split(key: str) -> tuple[str, PreferenceCategory]:
        """Split a composite key back into (raw_id, category).

        Splits on the last separator. Category names never contain the
        separator, so raw identifiers that do still decode unchanged.
        """
        raw_id, separator, category_name = key.rpartition(KEY_SEPARATOR)
        if not separator:
            raise ValueError(f"Composite key {key!r} has no {KEY_SEPARATOR!r} separator")
        if not raw_id:
            raise ValueError(f"Composite key {key!r} has an empty identifier")
        try:
            category = PreferenceCategory(category_name)
        except ValueError as e:
            raise ValueError(
                f"Composite key {key!r} has unknown category {category_name!r}"
            ) from e
        return raw_id, category
