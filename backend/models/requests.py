from typing import Literal

from pydantic import BaseModel, Field

from models.schemas.candidate import CandidateProfile
from models.schemas.features import FeatureVector, SimilarityScores
from models.schemas.job import RankableJob

InteractionType = Literal["view", "click", "save", "apply"]


class RankRequest(BaseModel):
    candidate: CandidateProfile
    jobs: list[RankableJob] = Field(..., description="Jobs to rank; bounded by max_jobs_per_request")
    similarity: dict[int, SimilarityScores] | None = Field(
        None, description="Precomputed scores keyed by job_id"
    )


class InteractionRequest(BaseModel):
    candidate_id: str
    job_id: int
    interaction_type: InteractionType
    features: FeatureVector = Field(..., description="Features shown at decision time")
    relevance: float | None = Field(
        None, ge=0.0, le=1.0, description="Overrides the configured label for interaction_type"
    )
