"""Ranker output for a single job."""

from pydantic import BaseModel, Field

from models.schemas.features import FeatureVector


class RankedJob(BaseModel):
    job_id: int
    final_score: float = Field(..., ge=0.0, le=1.0)
    features: FeatureVector
    explanation: str = ""
