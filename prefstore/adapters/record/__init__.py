"""Adapters converting domain objects to and from stored Items."""

from .preference import (
    CORRELATIONS_ATTRIBUTE,
    POPULARITY_ATTRIBUTE,
    PREFERENCE_ID_ATTRIBUTE,
    AdapterStateError,
    PreferenceItemAdapter,
    build_db_string_from_components,
)

__all__ = [
    "CORRELATIONS_ATTRIBUTE",
    "POPULARITY_ATTRIBUTE",
    "PREFERENCE_ID_ATTRIBUTE",
    "AdapterStateError",
    "PreferenceItemAdapter",
    "build_db_string_from_components",
]
