"""
Document models for the Learner Grades system.

Learners and grades live in MongoDB as plain documents. These models state
the field constraints a well-formed record satisfies; they are applied to
records this service writes, never to records read back from the store.
"""
from enum import Enum as PyEnum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


LEARNERS_COLLECTION = "learners"
GRADES_COLLECTION = "grades"

MIN_ENROLLMENT_YEAR = 1995
MAX_CLASS_ID = 300


class Campus(str, PyEnum):
    """Campuses a learner can be enrolled at."""
    REMOTE = "Remote"
    BOSTON = "Boston"
    NEW_YORK = "New York"
    DENVER = "Denver"
    LOS_ANGELES = "Los Angeles"
    SEATTLE = "Seattle"
    DALLAS = "Dallas"


CAMPUSES = frozenset(c.value for c in Campus)


class Learner(BaseModel):
    """
    Learner record.

    Attributes:
        name: Learner's full name
        enrolled: Whether the learner is currently enrolled
        year: Enrollment year (1995 or later)
        avg: Optional stored average
        campus: One of the Campus values
    """
    model_config = ConfigDict(use_enum_values=True)

    name: str = Field(..., min_length=1)
    enrolled: bool
    year: int = Field(..., ge=MIN_ENROLLMENT_YEAR)
    avg: Optional[float] = None
    campus: Campus

    def to_document(self) -> dict:
        """Convert to a document ready for insertion."""
        return self.model_dump(exclude_none=True)


class Score(BaseModel):
    """A single scored item within a grade record (exam, quiz, homework...)."""
    type: str = Field(..., min_length=1)
    score: float


class Grade(BaseModel):
    """
    Grade record - all scores of one learner in one class.

    Attributes:
        class_id: Class identifier (0-300)
        learner_id: Learner identifier (not a foreign key)
        scores: Ordered list of scored items
    """
    class_id: int = Field(..., ge=0, le=MAX_CLASS_ID)
    learner_id: int = Field(..., ge=0)
    scores: List[Score] = Field(default_factory=list)

    def to_document(self) -> dict:
        """Convert to a document ready for insertion."""
        return self.model_dump()
