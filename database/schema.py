"""
Store-side schema definitions.

The grades validator is registered with MongoDB at startup in warn mode:
non-conforming writes are logged by the server, not rejected. Bump
SCHEMA_VERSION whenever GRADES_VALIDATOR changes.
"""
import logging
from typing import List, Tuple

from pymongo import ASCENDING
from pymongo.database import Database

from .models import GRADES_COLLECTION, MAX_CLASS_ID

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1

VALIDATION_ACTION = "warn"

GRADES_VALIDATOR = {
    "$jsonSchema": {
        "bsonType": "object",
        "title": f"grades v{SCHEMA_VERSION}",
        "required": ["class_id", "learner_id"],
        "properties": {
            "class_id": {
                "bsonType": "int",
                "minimum": 0,
                "maximum": MAX_CLASS_ID,
                "description": f"class_id must be an integer between 0 and {MAX_CLASS_ID}",
            },
            "learner_id": {
                "bsonType": "int",
                "minimum": 0,
                "description": "learner_id must be an integer greater than or equal to 0",
            },
        },
    }
}

# (name, keys) pairs for the grades collection.
GRADES_INDEXES: List[Tuple[str, list]] = [
    ("class_id_1", [("class_id", ASCENDING)]),
    ("learner_id_1", [("learner_id", ASCENDING)]),
    ("learner_id_1_class_id_1", [("learner_id", ASCENDING), ("class_id", ASCENDING)]),
]


def register_grades_validator(db: Database) -> None:
    """Create the grades collection with its validator, or update it in place."""
    if GRADES_COLLECTION in db.list_collection_names():
        db.command(
            "collMod",
            GRADES_COLLECTION,
            validator=GRADES_VALIDATOR,
            validationAction=VALIDATION_ACTION,
        )
    else:
        db.create_collection(
            GRADES_COLLECTION,
            validator=GRADES_VALIDATOR,
            validationAction=VALIDATION_ACTION,
        )
    logger.info("Registered %s validator v%d", GRADES_COLLECTION, SCHEMA_VERSION)


def create_grades_indexes(db: Database) -> List[str]:
    """Create the grades indexes. Existing indexes are left untouched."""
    collection = db[GRADES_COLLECTION]
    return [collection.create_index(keys, name=name) for name, keys in GRADES_INDEXES]
