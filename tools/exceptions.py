"""
Custom exceptions for the Learner Grades system.
"""


class GradeStatsNotFound(Exception):
    """Raised when a statistics aggregation produces no rows at all."""

    def __init__(self, scope: str):
        self.scope = scope
        super().__init__(f"No grade statistics for {scope}")
