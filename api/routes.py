"""
API routes for the Learner Grades system.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from pymongo.database import Database
from pymongo.errors import PyMongoError

from database import get_db
from tools import (
    find_invalid_learners,
    get_global_grade_stats,
    get_class_grade_stats,
    coerce_class_id,
    GradeStatsNotFound,
)
from .schemas import GradeStatsResponse

logger = logging.getLogger(__name__)


# Router for learner endpoints
learners_router = APIRouter(tags=["Learners"])

# Router for grade statistics endpoints
grades_router = APIRouter(prefix="/grades", tags=["Grades"])


def _store_error(action: str) -> HTTPException:
    logger.exception("Error %s", action)
    return HTTPException(status_code=500, detail="Internal Server Error")


# ============== Learner Endpoints ==============

@learners_router.get("/")
def get_invalid_learners(db: Database = Depends(get_db)):
    """
    List learners failing at least one validity rule.

    Responds 204 and still carries the list as its body.
    """
    try:
        invalid = find_invalid_learners(db)
    except PyMongoError:
        raise _store_error("finding invalid documents")

    response = JSONResponse(status_code=204, content=invalid)
    # Starlette omits the length on 204; without it the server refuses the body.
    response.headers["content-length"] = str(len(response.body))
    return response


# ============== Grade Statistics Endpoints ==============

@grades_router.get("/stats", response_model=GradeStatsResponse)
def get_grade_stats(db: Database = Depends(get_db)):
    """
    Share of score entries above 70 across all grade records.

    Returns 404 when no entry qualifies.
    """
    try:
        result = get_global_grade_stats(db)
    except GradeStatsNotFound:
        raise HTTPException(status_code=404, detail="Not found")
    except PyMongoError:
        raise _store_error("computing grade statistics")
    return GradeStatsResponse(**result)


@grades_router.get("/stats/{class_id}", response_model=GradeStatsResponse)
def get_class_stats(class_id: str, db: Database = Depends(get_db)):
    """
    Share of learners in a class whose average score is above 70.

    Non-numeric class ids match nothing and return 404.
    """
    try:
        result = get_class_grade_stats(db, coerce_class_id(class_id))
    except GradeStatsNotFound:
        raise HTTPException(status_code=404, detail="Not found")
    except PyMongoError:
        raise _store_error(f"computing statistics for class {class_id!r}")
    return GradeStatsResponse(**result)
