"""
Unit tests for catalogue filtering and price bucket generation.
"""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest

from resort_booking.services.catalog_filter import (
    ALL_LOCATIONS,
    ALL_PRICES,
    ALL_TYPES,
    ListingFilter,
    PriceBucket,
    build_filter_options,
    fallback_filter_options,
    filter_listings,
    generate_price_buckets,
)


@pytest.fixture
def listings() -> list[dict[str, Any]]:
    return [
        {"name": "Sea Pearl Beach Resort", "service_type": "Resort", "location": "Cox's Bazar", "price": 100},
        {"name": "Hill View Cottage", "service_type": "Cottage", "location": "Sylhet", "price": 350},
        {"name": "Riverside Deluxe Room", "service_type": "Hotel", "location": "Dhaka", "price": 600},
        {"name": "Palm Beach Villa", "service_type": "Resort", "location": "Dhaka", "price": 220},
    ]


# =============================================================================
# Price buckets
# =============================================================================


@pytest.mark.unit
def test_buckets_for_spread_of_prices() -> None:
    buckets = generate_price_buckets([100, 350, 600])

    assert [b.label for b in buckets] == [
        "Under 200",
        "100-200",
        "200-300",
        "300-400",
        "400-500",
        "Over 500",
    ]


@pytest.mark.unit
def test_bucket_step_rounds_up() -> None:
    """(1000 - 10) / 5 = 198 exactly; (1001 - 10) / 5 = 198.2 rounds to 199."""
    assert generate_price_buckets([10, 1000])[0].label == "Under 208"
    assert generate_price_buckets([10, 1001])[0].label == "Under 209"


@pytest.mark.unit
def test_buckets_when_all_prices_equal() -> None:
    buckets = generate_price_buckets([500, 500, 500])

    assert [b.label for b in buckets] == ["Under 250", "Over 250"]


@pytest.mark.unit
def test_buckets_for_equal_odd_prices_round_half_up() -> None:
    assert [b.label for b in generate_price_buckets([75])] == ["Under 38", "Over 38"]


@pytest.mark.unit
def test_no_buckets_for_empty_data() -> None:
    assert generate_price_buckets([]) == []


@pytest.mark.unit
def test_no_buckets_when_all_prices_zero() -> None:
    assert generate_price_buckets([0, 0]) == []


@pytest.mark.unit
def test_bucket_bounds() -> None:
    under = PriceBucket("Under 200", high=200)
    band = PriceBucket("100-200", low=100, high=200)
    over = PriceBucket("Over 500", low=500)

    assert under.contains(199.99)
    assert not under.contains(200)
    assert band.contains(100)
    assert band.contains(200)
    assert not band.contains(200.01)
    assert over.contains(501)
    assert not over.contains(500)


# =============================================================================
# Filtering
# =============================================================================


@pytest.mark.unit
def test_no_criteria_returns_everything(listings: list[dict[str, Any]]) -> None:
    assert filter_listings(listings, ListingFilter()) == listings


@pytest.mark.unit
def test_search_is_case_insensitive_substring(listings: list[dict[str, Any]]) -> None:
    result = filter_listings(listings, ListingFilter(search="BEACH"))

    assert [item["name"] for item in result] == ["Sea Pearl Beach Resort", "Palm Beach Villa"]


@pytest.mark.unit
def test_type_and_location_are_exact_matches(listings: list[dict[str, Any]]) -> None:
    result = filter_listings(listings, ListingFilter(service_type="Resort", location="Dhaka"))

    assert [item["name"] for item in result] == ["Palm Beach Villa"]


@pytest.mark.unit
def test_all_sentinels_disable_criteria(listings: list[dict[str, Any]]) -> None:
    criteria = ListingFilter(service_type="all", location="", price_range=ALL_PRICES)

    assert len(filter_listings(listings, criteria)) == len(listings)


@pytest.mark.unit
def test_price_range_closed_band(listings: list[dict[str, Any]]) -> None:
    result = filter_listings(listings, ListingFilter(price_range="200-300"))

    assert [item["price"] for item in result] == [220]


@pytest.mark.unit
def test_price_range_under_is_strict(listings: list[dict[str, Any]]) -> None:
    result = filter_listings(listings, ListingFilter(price_range="Under 200"))

    assert [item["price"] for item in result] == [100]


@pytest.mark.unit
def test_price_range_over_is_strict(listings: list[dict[str, Any]]) -> None:
    result = filter_listings(listings, ListingFilter(price_range="Over 500"))

    assert [item["price"] for item in result] == [600]


@pytest.mark.unit
def test_unknown_price_label_places_no_constraint(listings: list[dict[str, Any]]) -> None:
    result = filter_listings(listings, ListingFilter(price_range="Under 1"))

    assert result == listings


@pytest.mark.unit
def test_criteria_are_combined(listings: list[dict[str, Any]]) -> None:
    criteria = ListingFilter(search="beach", service_type="Resort", price_range="Under 200")

    assert [item["name"] for item in filter_listings(listings, criteria)] == [
        "Sea Pearl Beach Resort"
    ]


@pytest.mark.unit
def test_filter_accepts_objects() -> None:
    items = [
        SimpleNamespace(name="Lake House", service_type="Villa", location="Sylhet", price=300),
        SimpleNamespace(name="City Inn", service_type="Hotel", location="Dhaka", price=80),
    ]

    result = filter_listings(items, ListingFilter(location="Sylhet"))

    assert [item.name for item in result] == ["Lake House"]


@pytest.mark.unit
def test_filter_empty_listing_set() -> None:
    assert filter_listings([], ListingFilter(price_range="Under 200")) == []


# =============================================================================
# Dropdown options
# =============================================================================


@pytest.mark.unit
def test_filter_options_lead_with_all_entries(listings: list[dict[str, Any]]) -> None:
    options = build_filter_options(listings)

    assert options["service_types"] == [ALL_TYPES, "Resort", "Cottage", "Hotel"]
    assert options["locations"] == [ALL_LOCATIONS, "Cox's Bazar", "Sylhet", "Dhaka"]
    assert options["price_ranges"][0] == ALL_PRICES
    assert options["price_ranges"][1:] == [b.label for b in generate_price_buckets([100, 350, 600, 220])]


@pytest.mark.unit
def test_filter_options_without_services() -> None:
    assert build_filter_options([]) == fallback_filter_options()
