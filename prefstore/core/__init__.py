"""Core domain logic for prefstore.

This package contains zero external dependencies. Persistence
and the command line live in the adapters package.
"""

from .keys import KEY_SEPARATOR, CompositeKey
from .models import Preference, PreferenceCategory, PreferenceCorrelation
from .records import Item

__all__ = [
    "KEY_SEPARATOR",
    "CompositeKey",
    "Item",
    "Preference",
    "PreferenceCategory",
    "PreferenceCorrelation",
]
