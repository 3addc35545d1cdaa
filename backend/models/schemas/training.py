"""Online-adaptation samples and model statistics."""

from pydantic import BaseModel, Field

from models.schemas.features import FeatureVector, ModelWeights


class TrainingSample(BaseModel):
    pair_id: str  # "<candidate_id>:<job_id>"
    features: FeatureVector
    label: float = Field(..., ge=0.0, le=1.0)


class ModelStats(BaseModel):
    buffered_samples: int = 0
    is_adapted: bool = False
    weights: ModelWeights = ModelWeights()
