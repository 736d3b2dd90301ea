import logging

from django.conf import settings
from django.db import connection

logger = logging.getLogger(__name__)


def check_database_connection():
    # Check if the database is configured correctly
    if not settings.DATABASES:
        logger.error("DATABASES setting is not configured !!")
        raise ValueError("DATABASES setting is not configured")

    try:
        connection.ensure_connection()
        logger.info("Database connection established")
        return True
    except Exception as e:
        logger.error(f"Database connection error: {e}")
        raise ValueError(f"Database connection error: {e}")
