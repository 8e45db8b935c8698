"""
Database connection management.
"""
import logging

from pymongo import MongoClient
from pymongo.database import Database

from config.settings import settings
from .schema import register_grades_validator, create_grades_indexes

logger = logging.getLogger(__name__)

# MongoClient connects lazily, on the first operation.
client = MongoClient(
    settings.atlas_uri or None,
    serverSelectionTimeoutMS=settings.mongo_timeout_ms,
)


def get_database() -> Database:
    """Return the application database handle."""
    return client[settings.database_name]


def init_db(db: Database = None):
    """Register the grades validator and create the grades indexes."""
    db = db if db is not None else get_database()
    register_grades_validator(db)
    indexes = create_grades_indexes(db)
    logger.info("Ensured grades indexes: %s", ", ".join(indexes))


def get_db() -> Database:
    """
    Get database handle.
    Use as dependency injection in FastAPI.
    """
    return get_database()
