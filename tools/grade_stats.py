"""
Grade statistics for the Learner Grades system.

Both aggregations report how many learners (or score entries) sit above the
passing threshold, the total they are measured against, and the percentage.
The counting runs in MongoDB as aggregation pipelines; this module builds
the pipelines and shapes their single result row.
"""
import logging
import math
import re
from typing import Any, Dict, List, Union

from pymongo.database import Database

from database import GRADES_COLLECTION
from .exceptions import GradeStatsNotFound

logger = logging.getLogger(__name__)

PASSING_THRESHOLD = 70

ClassId = Union[int, float]

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

_DECIMAL_LITERAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INFINITY_LITERAL = re.compile(r"[+-]?Infinity")
_RADIX_LITERALS = [
    (re.compile(r"0[xX][0-9a-fA-F]+"), 16),
    (re.compile(r"0[oO][0-7]+"), 8),
    (re.compile(r"0[bB][01]+"), 2),
]


def build_global_stats_pipeline() -> List[Dict]:
    """
    Count score entries above the threshold across all grade records.

    Records take part when one of their scores is a double. The group runs
    after the threshold match, so the total equals the above-threshold count.
    """
    return [
        {"$match": {"scores.score": {"$exists": True, "$type": "double"}}},
        {"$unwind": "$scores"},
        {"$match": {"scores.score": {"$gt": PASSING_THRESHOLD}}},
        {"$group": {
            "_id": None,
            "total_learners": {"$sum": 1},
            "learners_above_70": {"$sum": 1},
        }},
        {"$project": {
            "_id": 0,
            "total_learners": 1,
            "learners_above_70": 1,
            "percentage_above_70": {
                "$multiply": [{"$divide": ["$learners_above_70", "$total_learners"]}, 100]
            },
        }},
    ]


def build_class_stats_pipeline(class_id: ClassId) -> List[Dict]:
    """
    Count records of one class whose average score is above the threshold.

    Scores are converted to double; values that are missing or do not
    convert are left out of the average. A record without any usable score
    has a null average and stays in the total only.
    """
    return [
        {"$match": {"class_id": {"$eq": class_id}}},
        {"$project": {
            "avg": {"$avg": {"$map": {
                "input": {"$cond": [{"$isArray": "$scores"}, "$scores", []]},
                "as": "entry",
                "in": {"$convert": {
                    "input": "$$entry.score",
                    "to": "double",
                    "onError": None,
                    "onNull": None,
                }},
            }}},
        }},
        {"$facet": {
            "learners_above_70": [
                {"$match": {"avg": {"$gt": PASSING_THRESHOLD}}},
                {"$count": "count"},
            ],
            "total_learners": [
                {"$count": "count"},
            ],
        }},
        {"$project": {
            "total_learners": {"$ifNull": [{"$arrayElemAt": ["$total_learners.count", 0]}, 0]},
            "learners_above_70": {"$ifNull": [{"$arrayElemAt": ["$learners_above_70.count", 0]}, 0]},
        }},
        {"$project": {
            "total_learners": 1,
            "learners_above_70": 1,
            "percentage_above_70": {
                "$cond": {
                    "if": {"$eq": ["$total_learners", 0]},
                    "then": 0,
                    "else": {"$multiply": [{"$divide": ["$learners_above_70", "$total_learners"]}, 100]},
                }
            },
        }},
    ]


def shape_stats(row: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "total_learners": row["total_learners"],
        "learners_above_70": row["learners_above_70"],
        "percentage_above_70": row["percentage_above_70"],
    }


def global_stats_from_rows(rows: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Raises:
        GradeStatsNotFound: If the pipeline produced no row
    """
    if not rows:
        raise GradeStatsNotFound("all classes")
    return shape_stats(rows[0])


def class_stats_from_rows(rows: List[Dict[str, Any]], scope: str = "class") -> Dict[str, Any]:
    """
    The facet always yields one row; an empty class shows up as a zero total.

    Raises:
        GradeStatsNotFound: If no record of the class entered the pipeline
    """
    if not rows or not rows[0].get("total_learners"):
        raise GradeStatsNotFound(scope)
    return shape_stats(rows[0])


def coerce_class_id(raw: str) -> ClassId:
    """
    Turn a path parameter into a class id the way a JavaScript Number() would.

    Decimal, exponent, hex, octal and binary literals are numbers, blank text
    is 0, and anything else is NaN, which matches no record. Integral values
    that fit in a 64-bit integer come back as int; the rest stay float.
    """
    text = raw.strip()
    if not text:
        return 0

    if _DECIMAL_LITERAL.fullmatch(text):
        value = float(text)
    elif _INFINITY_LITERAL.fullmatch(text):
        value = -math.inf if text.startswith("-") else math.inf
    else:
        for pattern, base in _RADIX_LITERALS:
            if pattern.fullmatch(text):
                value = float(int(text[2:], base))
                break
        else:
            return math.nan

    if value.is_integer() and INT64_MIN <= value <= INT64_MAX:
        return int(value)
    return value


def get_global_grade_stats(db: Database) -> Dict[str, Any]:
    """Pass-rate statistics over every grade record."""
    rows = list(db[GRADES_COLLECTION].aggregate(build_global_stats_pipeline()))
    return global_stats_from_rows(rows)


def get_class_grade_stats(db: Database, class_id: ClassId) -> Dict[str, Any]:
    """
    Pass-rate statistics for one class.

    Args:
        db: Database handle
        class_id: Class identifier, usually from coerce_class_id

    Returns:
        Dictionary with total_learners, learners_above_70, percentage_above_70
    """
    if isinstance(class_id, float) and math.isnan(class_id):
        # The store treats NaN as equal to NaN; a non-numeric id must match nothing.
        logger.debug("Class id is not a number, nothing can match")
        raise GradeStatsNotFound("class NaN")

    rows = list(db[GRADES_COLLECTION].aggregate(build_class_stats_pipeline(class_id)))
    return class_stats_from_rows(rows, scope=f"class {class_id}")
