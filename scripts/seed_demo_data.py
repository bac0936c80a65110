import logging
import sys
from datetime import date

from resort_booking.db.engine import engine
from resort_booking.db.readers.admins import get_admin_by_email
from resort_booking.db.readers.services import get_services
from resort_booking.db.writers.admins import create_admin
from resort_booking.db.writers.services import create_service
from resort_booking.logging_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)

DEMO_SERVICES = [
    {
        "name": "Sea Pearl Beach Resort",
        "service_type": "Resort",
        "location": "Cox's Bazar",
        "price": 12000,
        "description": "Beachfront resort with infinity pool and spa.",
        "amenities": ["Pool", "Spa", "Free WiFi", "Breakfast"],
        "rating": 4.6,
    },
    {
        "name": "Hill View Cottage",
        "service_type": "Cottage",
        "location": "Sylhet",
        "price": 4500,
        "description": "Quiet cottage surrounded by tea gardens.",
        "amenities": ["Garden", "Parking"],
        "rating": 4.2,
    },
    {
        "name": "Riverside Deluxe Room",
        "service_type": "Hotel",
        "location": "Dhaka",
        "price": 7800,
        "description": "Deluxe double room overlooking the river.",
        "amenities": ["Free WiFi", "Air Conditioning", "Room Service"],
        "rating": 4.0,
    },
    {
        "name": "Lakeside Banquet Hall",
        "service_type": "Event Hall",
        "location": "Dhaka",
        "price": 60000,
        "description": "Hall for up to 400 guests with catering.",
        "amenities": ["Catering", "Stage", "Parking"],
        "rating": 4.4,
    },
    {
        "name": "Sundarbans Eco Lodge",
        "service_type": "Resort",
        "location": "Khulna",
        "price": 3000,
        "description": "Eco lodge at the edge of the mangrove forest.",
        "amenities": ["Guided Tours", "Breakfast"],
        "rating": 4.1,
    },
]


def main() -> None:
    """
    Create a demo admin (email from the first argument) and, when the catalogue
    is empty, a handful of demo services owned by that admin.
    """
    admin_email = sys.argv[1] if len(sys.argv) > 1 else "admin@example.com"

    with engine.begin() as conn:
        admin = get_admin_by_email(conn, admin_email)
        if admin is None:
            admin = create_admin(conn, {"name": "Demo Admin", "email": admin_email})
            logger.info("Created admin %s (id=%s)", admin_email, admin["id"])

        if get_services(conn):
            logger.info("Services already present, skipping demo catalogue")
            return

        for service in DEMO_SERVICES:
            create_service(
                conn,
                {
                    **service,
                    "status": "available",
                    "check_in": date.today(),
                    "admin_id": admin["id"],
                },
            )
        logger.info("Seeded %s demo services", len(DEMO_SERVICES))


if __name__ == "__main__":
    main()
