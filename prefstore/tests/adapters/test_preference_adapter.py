"""Tests for the Preference record adapter.

Covers both conversion directions and the two precondition checks:
an adapter must be given a Preference before to_db_model() and an
Item before to_object().
"""

import pytest

from prefstore.adapters.record.preference import (
    CORRELATIONS_ATTRIBUTE,
    POPULARITY_ATTRIBUTE,
    PREFERENCE_ID_ATTRIBUTE,
    AdapterStateError,
    PreferenceItemAdapter,
    build_db_string_from_components,
)
from prefstore.core.models import Preference, PreferenceCategory, PreferenceCorrelation
from prefstore.core.records import Item

PREFERENCE_CATEGORY = PreferenceCategory.BOOKS
PREFERENCE_ID = "Lord of the Rings"
PREFERENCE_POPULARITY = 20
CORRELATION_PREFERENCE_ID = "Harry Potter"
CORRELATION_WEIGHT = 10


# ============================================================================
# Test Fixtures
# ============================================================================


@pytest.fixture
def correlation() -> PreferenceCorrelation:
    return PreferenceCorrelation(
        to_preference_id=build_db_string_from_components(
            CORRELATION_PREFERENCE_ID, PREFERENCE_CATEGORY
        ),
        weight=CORRELATION_WEIGHT,
    )


@pytest.fixture
def preference(correlation: PreferenceCorrelation) -> Preference:
    return Preference(
        id=PREFERENCE_ID,
        category=PREFERENCE_CATEGORY,
        popularity=PREFERENCE_POPULARITY,
        correlations=[correlation],
    )


@pytest.fixture
def item(correlation: PreferenceCorrelation) -> Item:
    return (
        Item()
        .with_primary_key(
            PREFERENCE_ID_ATTRIBUTE,
            build_db_string_from_components(PREFERENCE_ID, PREFERENCE_CATEGORY),
        )
        .with_map(CORRELATIONS_ATTRIBUTE, {correlation.to_preference_id: correlation.weight})
        .with_int(POPULARITY_ATTRIBUTE, PREFERENCE_POPULARITY)
    )


def _sorted(correlations) -> list[PreferenceCorrelation]:
    return sorted(correlations, key=lambda c: c.to_preference_id)


# ============================================================================
# Preconditions
# ============================================================================


def test_missing_model() -> None:
    """to_object() without an Item is an illegal state."""
    with pytest.raises(AdapterStateError):
        PreferenceItemAdapter().to_object()


def test_missing_object() -> None:
    """to_db_model() without a Preference is an illegal state."""
    with pytest.raises(AdapterStateError):
        PreferenceItemAdapter().to_db_model()


def test_state_error_is_runtime_error() -> None:
    assert issubclass(AdapterStateError, RuntimeError)


def test_setters_return_adapter(preference: Preference, item: Item) -> None:
    adapter = PreferenceItemAdapter()

    assert adapter.with_object(preference) is adapter
    assert adapter.with_db_model(item) is adapter


def test_setting_record_clears_object(preference: Preference, item: Item) -> None:
    adapter = PreferenceItemAdapter().with_object(preference).with_db_model(item)

    with pytest.raises(AdapterStateError):
        adapter.to_db_model()


def test_setting_object_clears_record(preference: Preference, item: Item) -> None:
    adapter = PreferenceItemAdapter().with_db_model(item).with_object(preference)

    with pytest.raises(AdapterStateError):
        adapter.to_object()


# ============================================================================
# Conversions
# ============================================================================


def test_to_db_model(preference: Preference, item: Item) -> None:
    result = PreferenceItemAdapter().with_object(preference).to_db_model()

    assert result.get_string(PREFERENCE_ID_ATTRIBUTE) == item.get_string(PREFERENCE_ID_ATTRIBUTE)
    assert result.get_string(PREFERENCE_ID_ATTRIBUTE) == "Lord of the Rings#BOOKS"
    assert result.primary_key_name == PREFERENCE_ID_ATTRIBUTE
    assert result.get_int(POPULARITY_ATTRIBUTE) == PREFERENCE_POPULARITY
    assert dict(result.get_map(CORRELATIONS_ATTRIBUTE)) == {"Harry Potter#BOOKS": CORRELATION_WEIGHT}


def test_to_object(preference: Preference, item: Item) -> None:
    result = PreferenceItemAdapter().with_db_model(item).to_object()

    assert result.id == PREFERENCE_ID
    assert result.category == PREFERENCE_CATEGORY
    assert result.popularity == PREFERENCE_POPULARITY

    expected = _sorted(preference.correlations)
    actual = _sorted(result.correlations)
    assert len(actual) == len(expected)
    for want, got in zip(expected, actual):
        assert got.to_preference_id == want.to_preference_id
        assert got.weight == want.weight


def test_to_db_model_without_correlations() -> None:
    preference = Preference("Dune", PreferenceCategory.BOOKS, 0)

    result = PreferenceItemAdapter().with_object(preference).to_db_model()

    assert dict(result.get_map(CORRELATIONS_ATTRIBUTE)) == {}
    assert result.get_int(POPULARITY_ATTRIBUTE) == 0


def test_to_object_without_correlations_attribute() -> None:
    item = (
        Item()
        .with_primary_key(PREFERENCE_ID_ATTRIBUTE, "Dune#BOOKS")
        .with_int(POPULARITY_ATTRIBUTE, 4)
    )

    result = PreferenceItemAdapter().with_db_model(item).to_object()

    assert result == Preference("Dune", PreferenceCategory.BOOKS, 4)


def test_round_trip_many_correlations() -> None:
    correlations = [
        PreferenceCorrelation(build_db_string_from_components(name, category), weight)
        for name, category, weight in [
            ("Harry Potter", PreferenceCategory.BOOKS, 10),
            ("The Hobbit", PreferenceCategory.MOVIES, 7),
            ("Howard Shore", PreferenceCategory.MUSIC, 3),
            ("Elden Ring", PreferenceCategory.VIDEO_GAMES, 1),
        ]
    ]
    preference = Preference(PREFERENCE_ID, PREFERENCE_CATEGORY, 99, correlations)

    item = PreferenceItemAdapter().with_object(preference).to_db_model()
    result = PreferenceItemAdapter().with_db_model(item).to_object()

    assert result == preference


def test_conversion_is_repeatable(preference: Preference) -> None:
    adapter = PreferenceItemAdapter().with_object(preference)

    assert adapter.to_db_model() == adapter.to_db_model()


def test_correlation_targets_copied_verbatim() -> None:
    item = (
        Item()
        .with_primary_key(PREFERENCE_ID_ATTRIBUTE, "Dune#BOOKS")
        .with_int(POPULARITY_ATTRIBUTE, 1)
        .with_map(CORRELATIONS_ATTRIBUTE, {"opaque-target": 5})
    )

    result = PreferenceItemAdapter().with_db_model(item).to_object()

    assert result.correlations == frozenset({PreferenceCorrelation("opaque-target", 5)})


# ============================================================================
# Malformed records
# ============================================================================


@pytest.mark.parametrize(
    "item",
    [
        Item().with_int(POPULARITY_ATTRIBUTE, 1),
        Item().with_primary_key(PREFERENCE_ID_ATTRIBUTE, "Dune#BOOKS"),
        Item()
        .with_primary_key(PREFERENCE_ID_ATTRIBUTE, "Dune")
        .with_int(POPULARITY_ATTRIBUTE, 1),
        Item()
        .with_primary_key(PREFERENCE_ID_ATTRIBUTE, "Dune#BOOKS")
        .with_string(POPULARITY_ATTRIBUTE, "high"),
        Item()
        .with_primary_key(PREFERENCE_ID_ATTRIBUTE, "Dune#BOOKS")
        .with_int(POPULARITY_ATTRIBUTE, -3),
        Item()
        .with_primary_key(PREFERENCE_ID_ATTRIBUTE, "Dune#BOOKS")
        .with_int(POPULARITY_ATTRIBUTE, 1)
        .with_int(CORRELATIONS_ATTRIBUTE, 2),
    ],
    ids=[
        "missing-key",
        "missing-popularity",
        "undecodable-key",
        "string-popularity",
        "negative-popularity",
        "scalar-correlations",
    ],
)
def test_malformed_item_raises_value_error(item: Item) -> None:
    with pytest.raises(ValueError, match="Item conversion failed"):
        PreferenceItemAdapter().with_db_model(item).to_object()
