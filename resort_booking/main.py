import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from resort_booking.config import ALLOWED_ORIGINS
from resort_booking.logging_config import setup_logging
from resort_booking.middleware import RequestIDMiddleware
from resort_booking.routes.admin_services import router as admin_services_router
from resort_booking.routes.admins import router as admins_router
from resort_booking.routes.auth import router as auth_router
from resort_booking.routes.bookings import router as bookings_router
from resort_booking.routes.customers import router as customers_router
from resort_booking.routes.dashboard import router as dashboard_router
from resort_booking.routes.health import router as health_router
from resort_booking.routes.images import router as images_router
from resort_booking.routes.metrics import router as metrics_router
from resort_booking.routes.reservations import router as reservations_router
from resort_booking.routes.services import router as services_router

# Initialize structured logging
setup_logging()
logger = structlog.get_logger(__name__)

app = FastAPI(
    title="Resort Booking API",
    description="Browse resort services, book stays and manage the catalogue",
    version="1.0.0",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS if "*" not in ALLOWED_ORIGINS else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestIDMiddleware)

# Register routers
app.include_router(health_router, tags=["Health"])
app.include_router(metrics_router, tags=["Metrics"])
app.include_router(services_router, tags=["Services"])
app.include_router(bookings_router, tags=["Bookings"])
app.include_router(auth_router, prefix="/auth", tags=["Auth"])
app.include_router(dashboard_router, prefix="/admin", tags=["Admin"])
app.include_router(admin_services_router, prefix="/admin", tags=["Admin"])
app.include_router(customers_router, prefix="/admin", tags=["Admin"])
app.include_router(reservations_router, prefix="/admin", tags=["Admin"])
app.include_router(admins_router, prefix="/admin", tags=["Admin"])
app.include_router(images_router, prefix="/api", tags=["Images"])


@app.on_event("startup")
def startup_event() -> None:
    logger.info("FastAPI application starting up...")
