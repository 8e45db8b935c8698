"""API module for the Learner Grades system."""
from .routes import learners_router, grades_router
from .schemas import GradeStatsResponse, HealthResponse

__all__ = [
    "learners_router",
    "grades_router",
    "GradeStatsResponse",
    "HealthResponse",
]
