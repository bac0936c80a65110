"""
Prometheus metrics for bookings, authentication and image hosting.

Metrics are exposed via the /metrics endpoint for scraping by Prometheus.

Example:
    >>> from resort_booking.metrics import booking_submissions
    >>> booking_submissions.labels(outcome="created").inc()
"""

from __future__ import annotations

from prometheus_client import Counter, Histogram

# =============================================================================
# Booking Metrics
# =============================================================================

booking_submissions = Counter(
    "resort_booking_submissions_total",
    "Booking form submissions by outcome",
    ["outcome"],
)
"""
Counter for booking submissions.

Labels:
    outcome: created, rejected (domain error) or failed (database error)
"""

payment_record_failures = Counter(
    "resort_booking_payment_record_failures_total",
    "Payment records that could not be written (reservation kept)",
)

# =============================================================================
# Auth Metrics
# =============================================================================

session_cache_hits = Counter(
    "resort_booking_session_cache_hits_total",
    "Sessions served from the in-memory cache",
)

session_cache_misses = Counter(
    "resort_booking_session_cache_misses_total",
    "Sessions resolved through the auth provider",
)

auth_provider_requests = Counter(
    "resort_booking_auth_provider_requests_total",
    "Requests made to the hosted auth provider",
    ["endpoint", "status_code"],
)
"""
Counter for auth provider calls.

Labels:
    endpoint: token, signup, logout, user, settings
    status_code: HTTP status code, or "error" when no response was received
"""

auth_provider_latency = Histogram(
    "resort_booking_auth_provider_latency_seconds",
    "Auth provider request latency in seconds",
    ["endpoint"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, float("inf")),
)

# =============================================================================
# Image Host Metrics
# =============================================================================

image_operations = Counter(
    "resort_booking_image_operations_total",
    "Image host operations",
    ["operation", "status"],
)
"""
Counter for Cloudinary operations.

Labels:
    operation: upload or delete
    status: success or failure
"""
