"""Fixed-arity feature vector and the matching weight record.

The linear model depends on positional alignment between feature names and
weight names, so both records share FEATURE_NAMES as their single source of
ordering.
"""

import numpy as np
from pydantic import BaseModel, Field


class FeatureVector(BaseModel):
    """Ten normalized sub-scores describing one candidate-job pair."""
    semantic_similarity: float = Field(0.0, ge=0.0, le=1.0)
    skill_match: float = Field(0.5, ge=0.0, le=1.0)
    experience_alignment: float = Field(0.5, ge=0.0, le=1.0)
    location_fit: float = Field(0.5, ge=0.0, le=1.0)
    work_type_fit: float = Field(0.5, ge=0.0, le=1.0)
    salary_fit: float = Field(0.5, ge=0.0, le=1.0)
    company_trust: float = Field(0.5, ge=0.0, le=1.0)
    recency: float = Field(0.5, ge=0.0, le=1.0)
    engagement: float = Field(0.5, ge=0.0, le=1.0)
    personalization: float = Field(0.5, ge=0.0, le=1.0)

    def as_array(self) -> np.ndarray:
        return np.array([getattr(self, name) for name in FEATURE_NAMES], dtype=float)


FEATURE_NAMES: tuple[str, ...] = tuple(FeatureVector.model_fields)

assert len(FEATURE_NAMES) == 10, "FeatureVector must have exactly 10 fields"


# Bounds for adapted feature weights. Hand-tuned defaults may sit below MIN_WEIGHT.
MIN_WEIGHT = 0.05
MAX_WEIGHT = 0.4


class ModelWeights(BaseModel):
    """Per-feature weights plus bias. Defaults are the hand-tuned starting point."""
    semantic_similarity: float = 0.25
    skill_match: float = 0.20
    experience_alignment: float = 0.10
    location_fit: float = 0.08
    work_type_fit: float = 0.07
    salary_fit: float = 0.08
    company_trust: float = 0.07
    recency: float = 0.08
    engagement: float = 0.04
    personalization: float = 0.03
    bias: float = 0.0

    def as_array(self) -> np.ndarray:
        """Feature weights in FEATURE_NAMES order (bias excluded)."""
        return np.array([getattr(self, name) for name in FEATURE_NAMES], dtype=float)


assert tuple(n for n in ModelWeights.model_fields if n != "bias") == FEATURE_NAMES


class SimilarityScores(BaseModel):
    """Precomputed per-job scores supplied by the embedding collaborator."""
    semantic: float | None = None
    skill_match: float | None = None
