"""
Tools module for the Learner Grades system.

Read-only operations over the learner and grade collections.
"""
from .exceptions import GradeStatsNotFound

from .validity import (
    INVALID_LEARNER_RULES,
    failed_rules,
    is_invalid_learner,
    find_invalid_learners,
    serialize_learner,
)

from .grade_stats import (
    PASSING_THRESHOLD,
    build_global_stats_pipeline,
    build_class_stats_pipeline,
    global_stats_from_rows,
    class_stats_from_rows,
    coerce_class_id,
    get_global_grade_stats,
    get_class_grade_stats,
)

__all__ = [
    # Exceptions
    "GradeStatsNotFound",
    # Validity
    "INVALID_LEARNER_RULES",
    "failed_rules",
    "is_invalid_learner",
    "find_invalid_learners",
    "serialize_learner",
    # Grade statistics
    "PASSING_THRESHOLD",
    "build_global_stats_pipeline",
    "build_class_stats_pipeline",
    "global_stats_from_rows",
    "class_stats_from_rows",
    "coerce_class_id",
    "get_global_grade_stats",
    "get_class_grade_stats",
]
