"""Database module."""
from .models import (
    Campus,
    CAMPUSES,
    Learner,
    Grade,
    Score,
    LEARNERS_COLLECTION,
    GRADES_COLLECTION,
    MIN_ENROLLMENT_YEAR,
)
from .schema import SCHEMA_VERSION, GRADES_VALIDATOR, GRADES_INDEXES
from .connection import client, get_database, get_db, init_db

__all__ = [
    "Campus",
    "CAMPUSES",
    "Learner",
    "Grade",
    "Score",
    "LEARNERS_COLLECTION",
    "GRADES_COLLECTION",
    "MIN_ENROLLMENT_YEAR",
    "SCHEMA_VERSION",
    "GRADES_VALIDATOR",
    "GRADES_INDEXES",
    "client",
    "get_database",
    "get_db",
    "init_db",
]
