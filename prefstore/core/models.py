"""Domain models for prefstore.

All models in this module use only Python standard library types,
ensuring zero external dependencies in the core domain.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum


class PreferenceCategory(Enum):
    """Category a preference belongs to.

    Identifiers are only unique within a category, so the category
    is part of every stored key.
    """

    BOOKS = "BOOKS"
    MOVIES = "MOVIES"
    MUSIC = "MUSIC"
    TELEVISION = "TELEVISION"
    VIDEO_GAMES = "VIDEO_GAMES"


@dataclass(frozen=True)
class PreferenceCorrelation:
    """A weighted association from one preference to another."""

    to_preference_id: str  # composite key of the target preference
    weight: int

    def __post_init__(self) -> None:
        """Validate correlation invariants on creation."""
        if not isinstance(self.to_preference_id, str) or not self.to_preference_id:
            raise ValueError("to_preference_id must be a non-empty string")
        if isinstance(self.weight, bool) or not isinstance(self.weight, int):
            raise ValueError(f"weight must be an int, got {self.weight!r}")


@dataclass(frozen=True)
class Preference:
    """An item a user can favor.

    Correlations are unordered and keyed by target, so they are held
    as a frozenset and compared without regard to order.
    """

    id: str
    category: PreferenceCategory
    popularity: int
    correlations: frozenset[PreferenceCorrelation] | Iterable[PreferenceCorrelation] = field(
        default_factory=frozenset
    )  # converted to frozenset in __post_init__

    def __post_init__(self) -> None:
        """Validate preference invariants and freeze correlations."""
        if not isinstance(self.id, str) or not self.id.strip():
            raise ValueError("id must be a non-empty string")
        if not isinstance(self.category, PreferenceCategory):
            raise ValueError(f"category must be a PreferenceCategory, got {self.category!r}")
        if isinstance(self.popularity, bool) or not isinstance(self.popularity, int):
            raise ValueError(f"popularity must be an int, got {self.popularity!r}")
        if self.popularity < 0:
            raise ValueError(
                f"popularity must be non-negative, got {self.popularity}"
            )

        correlations = tuple(self.correlations)
        targets = [c.to_preference_id for c in correlations]
        if len(set(targets)) != len(targets):
            duplicates = sorted({t for t in targets if targets.count(t) > 1})
            raise ValueError(f"Duplicate correlation targets: {duplicates}")
        object.__setattr__(self, "correlations", frozenset(correlations))

    def get_correlation(self, to_preference_id: str) -> PreferenceCorrelation | None:
        """Return the correlation to the given composite target, if any."""
        for correlation in self.correlations:
            if correlation.to_preference_id == to_preference_id:
                return correlation
        return None
