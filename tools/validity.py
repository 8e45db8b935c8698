"""
Learner validity checks.

A learner is invalid when any rule in INVALID_LEARNER_RULES matches it.
Rules only report; nothing here modifies the store.
"""
import logging
from typing import Any, Callable, Dict, List, Tuple

from bson import Decimal128, ObjectId
from fastapi.encoders import jsonable_encoder
from pymongo.database import Database

from database import CAMPUSES, LEARNERS_COLLECTION, MIN_ENROLLMENT_YEAR

logger = logging.getLogger(__name__)

Rule = Callable[[Dict[str, Any]], bool]

BSON_ENCODERS = {
    ObjectId: str,
    Decimal128: str,
}


def _as_number(value: Any) -> Any:
    """Numeric value for comparison, or None for non-numeric BSON values."""
    if isinstance(value, Decimal128):
        number = value.to_decimal()
        return None if number.is_nan() else number
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    return None


def missing_name(doc: Dict[str, Any]) -> bool:
    return "name" not in doc


def missing_enrolled(doc: Dict[str, Any]) -> bool:
    return "enrolled" not in doc


def missing_year(doc: Dict[str, Any]) -> bool:
    return "year" not in doc


def missing_campus(doc: Dict[str, Any]) -> bool:
    return "campus" not in doc


def year_before_1995(doc: Dict[str, Any]) -> bool:
    # Non-numeric years do not compare, same as a store-side $lt.
    year = _as_number(doc.get("year"))
    return year is not None and year < MIN_ENROLLMENT_YEAR


def campus_not_allowed(doc: Dict[str, Any]) -> bool:
    campus = doc.get("campus")
    return not isinstance(campus, str) or campus not in CAMPUSES


INVALID_LEARNER_RULES: List[Tuple[str, Rule]] = [
    ("missing_name", missing_name),
    ("missing_enrolled", missing_enrolled),
    ("missing_year", missing_year),
    ("missing_campus", missing_campus),
    ("year_before_1995", year_before_1995),
    ("campus_not_allowed", campus_not_allowed),
]


def failed_rules(doc: Dict[str, Any]) -> List[str]:
    """Names of the validity rules a learner document breaks."""
    return [name for name, rule in INVALID_LEARNER_RULES if rule(doc)]


def is_invalid_learner(doc: Dict[str, Any]) -> bool:
    return any(rule(doc) for _, rule in INVALID_LEARNER_RULES)


def serialize_learner(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Make a learner document JSON-friendly, BSON types included."""
    return jsonable_encoder(doc, custom_encoder=BSON_ENCODERS)


def find_invalid_learners(db: Database) -> List[Dict[str, Any]]:
    """
    Scan all learners and return the ones failing at least one rule.

    Args:
        db: Database handle

    Returns:
        Serialized invalid learner documents, in store order. Empty when
        every learner is valid.
    """
    invalid = [
        serialize_learner(doc)
        for doc in db[LEARNERS_COLLECTION].find({})
        if is_invalid_learner(doc)
    ]
    logger.debug("Found %d invalid learners", len(invalid))
    return invalid
