import logging

from app.database import engine, Base
# Import all models to ensure they are registered with Base.metadata
from app.models import (  # noqa: F401
    HallBooking, ServiceBooking,
    Hall, ServiceProvider, HallReview, ServiceProviderReview,
    Notification
)

logger = logging.getLogger(__name__)

def create_tables():
    logger.info("Creating tables in database...")
    Base.metadata.create_all(bind=engine)
    logger.info("Tables created successfully")

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    create_tables()
