"""
Listing filters for the public catalogue.

Four independent criteria are ANDed: name search, service type, location
and price range. Price ranges are not hardcoded; they are derived from the
lowest and highest price in the data set so the dropdown always spans the
listings actually on offer.
"""

from __future__ import annotations

from dataclasses import dataclass
from math import ceil
from typing import Any, Iterable, Mapping, Optional, Sequence

ALL_TYPES = "All Types"
ALL_LOCATIONS = "All Locations"
ALL_PRICES = "All Prices"

BUCKET_COUNT = 5


@dataclass(frozen=True)
class PriceBucket:
    """
    A labelled price band.

    low is None for the open-ended "Under" band and high is None for the
    "Over" band. Closed bands include both ends.
    """

    label: str
    low: Optional[float] = None
    high: Optional[float] = None

    def contains(self, price: float) -> bool:
        if self.low is None and self.high is not None:
            return price < self.high
        if self.high is None and self.low is not None:
            return price > self.low
        return self.low is not None and self.high is not None and self.low <= price <= self.high


@dataclass
class ListingFilter:
    """Filter criteria as selected in the catalogue search bar."""

    search: str = ""
    service_type: str = ALL_TYPES
    location: str = ALL_LOCATIONS
    price_range: str = ALL_PRICES


def _fmt(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:g}"


def _is_all(value: Optional[str], sentinel: str) -> bool:
    return not value or value == sentinel or value.lower() == "all"


def generate_price_buckets(prices: Iterable[float]) -> list[PriceBucket]:
    """
    Derive price bands from the observed prices.

    With a spread of prices, step = ceil((max - min) / 5) and the bands are
    "Under min+step", four closed bands starting at min, and
    "Over max-step". When every price is the same the data is split at
    half the price instead.

    Example:
        >>> [b.label for b in generate_price_buckets([100, 350, 600])]
        ['Under 200', '100-200', '200-300', '300-400', '400-500', 'Over 500']
    """
    values = list(prices)
    if not values:
        return []

    min_price = min(values)
    max_price = max(values)

    if min_price == 0 and max_price == 0:
        return []

    if max_price > min_price:
        step = ceil((max_price - min_price) / BUCKET_COUNT)
        buckets = [PriceBucket(f"Under {_fmt(min_price + step)}", high=min_price + step)]
        for i in range(BUCKET_COUNT - 1):
            low = min_price + step * i
            high = min_price + step * (i + 1)
            buckets.append(PriceBucket(f"{_fmt(low)}-{_fmt(high)}", low=low, high=high))
        buckets.append(PriceBucket(f"Over {_fmt(max_price - step)}", low=max_price - step))
        return buckets

    half = ceil(max_price / 2)
    return [
        PriceBucket(f"Under {_fmt(half)}", high=half),
        PriceBucket(f"Over {_fmt(half)}", low=half),
    ]


def _price_of(listing: Any) -> float:
    return float(_field(listing, "price"))


def _field(listing: Any, name: str) -> Any:
    if isinstance(listing, Mapping):
        return listing.get(name)
    return getattr(listing, name, None)


def matches_listing(
    listing: Any, criteria: ListingFilter, buckets: Sequence[PriceBucket]
) -> bool:
    """
    Check one listing against every active criterion.

    An unknown price_range label places no constraint on price.
    """
    name = _field(listing, "name") or ""
    if criteria.search and criteria.search.lower() not in name.lower():
        return False

    if not _is_all(criteria.service_type, ALL_TYPES):
        if _field(listing, "service_type") != criteria.service_type:
            return False

    if not _is_all(criteria.location, ALL_LOCATIONS):
        if _field(listing, "location") != criteria.location:
            return False

    if not _is_all(criteria.price_range, ALL_PRICES):
        bucket = next((b for b in buckets if b.label == criteria.price_range), None)
        if bucket is not None and not bucket.contains(_price_of(listing)):
            return False

    return True


def filter_listings(
    listings: Sequence[Any],
    criteria: ListingFilter,
    buckets: Optional[Sequence[PriceBucket]] = None,
) -> list[Any]:
    """
    Return the listings matching all criteria, preserving input order.

    Listings may be dicts or objects exposing name, service_type, location
    and price.

    Args:
        listings: Full listing set shown in the catalogue
        criteria: Selected filters
        buckets: Price bands to resolve criteria.price_range against
            (default: generated once from the full listing set)

    Returns:
        list: Matching listings
    """
    if buckets is None:
        buckets = generate_price_buckets(_price_of(listing) for listing in listings)
    return [listing for listing in listings if matches_listing(listing, criteria, buckets)]


def _distinct(values: Iterable[Any]) -> list[Any]:
    seen: dict[Any, None] = {}
    for value in values:
        if value is not None:
            seen.setdefault(value, None)
    return list(seen)


def build_filter_options(services: Sequence[Any]) -> dict[str, list[str]]:
    """
    Dropdown options for the catalogue search bar.

    Types and locations are listed in first-seen order, each list led by its
    "All ..." entry.
    """
    buckets = generate_price_buckets(_price_of(s) for s in services)
    return {
        "service_types": [ALL_TYPES, *_distinct(_field(s, "service_type") for s in services)],
        "locations": [ALL_LOCATIONS, *_distinct(_field(s, "location") for s in services)],
        "price_ranges": [ALL_PRICES, *(b.label for b in buckets)],
    }


def fallback_filter_options() -> dict[str, list[str]]:
    return {
        "service_types": [ALL_TYPES],
        "locations": [ALL_LOCATIONS],
        "price_ranges": [ALL_PRICES],
    }
