"""Public catalogue routes: browse, filter and price services."""

from typing import Any

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.engine import Engine

from resort_booking.db.readers.services import get_available_services, get_service_by_id
from resort_booking.dependencies import get_db_engine
from resort_booking.routes._helpers import found_or_404, internal_error
from resort_booking.schemas.services import (
    FilterOptions,
    QuoteRequest,
    QuoteResponse,
    ServiceListResponse,
    ServiceRead,
)
from resort_booking.services.catalog_filter import (
    ALL_LOCATIONS,
    ALL_PRICES,
    ALL_TYPES,
    ListingFilter,
    build_filter_options,
    fallback_filter_options,
    filter_listings,
)
from resort_booking.services.pricing import InvalidStayError, calculate_total_price, count_nights

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("/services", response_model=ServiceListResponse)
def list_services(
    search: str = Query("", description="Case-insensitive match on the service name"),
    service_type: str = Query(ALL_TYPES, description="Category or 'All Types'"),
    location: str = Query(ALL_LOCATIONS, description="Location or 'All Locations'"),
    price_range: str = Query(ALL_PRICES, description="Label from /services/filters"),
    db_engine: Engine = Depends(get_db_engine),
) -> dict[str, Any]:
    """
    List available services matching the catalogue filters.

    Price range labels are resolved against bands derived from all available
    services, the same bands /services/filters offers.
    """
    try:
        with db_engine.connect() as conn:
            services = get_available_services(conn)

        criteria = ListingFilter(
            search=search,
            service_type=service_type,
            location=location,
            price_range=price_range,
        )
        matched = filter_listings(services, criteria)

        logger.info("services_listed", total=len(services), matched=len(matched))
        return {"services": matched, "total": len(services), "matched": len(matched)}

    except Exception as e:
        logger.exception("services_list_failed", error=str(e))
        raise internal_error()


@router.get("/services/filters", response_model=FilterOptions)
def filter_options(db_engine: Engine = Depends(get_db_engine)) -> dict[str, list[str]]:
    """
    Dropdown options for the catalogue search bar.

    Falls back to the "All ..." entries alone if the services can't be read.
    """
    try:
        with db_engine.connect() as conn:
            services = get_available_services(conn)
    except Exception as e:
        logger.exception("filter_options_failed", error=str(e))
        return fallback_filter_options()

    return build_filter_options(services)


@router.get("/services/{service_id}", response_model=ServiceRead)
def get_service(service_id: int, db_engine: Engine = Depends(get_db_engine)) -> dict[str, Any]:
    try:
        with db_engine.connect() as conn:
            service = get_service_by_id(conn, service_id)
        return found_or_404(service, "Service", service_id)

    except HTTPException:
        raise
    except Exception as e:
        logger.exception("service_fetch_failed", service_id=service_id, error=str(e))
        raise internal_error()


@router.post("/services/{service_id}/quote", response_model=QuoteResponse)
def quote_service(
    service_id: int,
    payload: QuoteRequest,
    db_engine: Engine = Depends(get_db_engine),
) -> dict[str, Any]:
    """
    Price a stay before booking it.

    Returns:
        dict: nightly price, nights and total price
    """
    try:
        with db_engine.connect() as conn:
            service = found_or_404(get_service_by_id(conn, service_id), "Service", service_id)

        nightly_price = float(service["price"])
        return {
            "service_id": service_id,
            "nightly_price": nightly_price,
            "nights": count_nights(payload.check_in, payload.check_out),
            "total_price": calculate_total_price(nightly_price, payload.check_in, payload.check_out),
        }

    except InvalidStayError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("quote_failed", service_id=service_id, error=str(e))
        raise internal_error()
