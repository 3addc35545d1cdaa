"""Pydantic contracts shared by the ranking engine and the API."""

from models.schemas.candidate import CandidateProfile
from models.schemas.features import FEATURE_NAMES, FeatureVector, ModelWeights, SimilarityScores
from models.schemas.job import RankableJob
from models.schemas.ranked_job import RankedJob
from models.schemas.training import ModelStats, TrainingSample

__all__ = [
    "CandidateProfile",
    "FEATURE_NAMES",
    "FeatureVector",
    "ModelStats",
    "ModelWeights",
    "RankableJob",
    "RankedJob",
    "SimilarityScores",
    "TrainingSample",
]
