"""
Pydantic schemas for API responses.
"""
from pydantic import BaseModel, ConfigDict, Field


class GradeStatsResponse(BaseModel):
    """Pass-rate statistics, serialized under human-readable field names."""
    model_config = ConfigDict(populate_by_name=True)

    total_learners: int = Field(..., alias="Total Number of Learners")
    learners_above_70: int = Field(..., alias="Number of Learners With Grade Above 70")
    percentage_above_70: float = Field(..., alias="Percentage of Learners With Grade Above 70")


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
