"""Ranker: extract features, score, explain and sort a list of jobs.

Everything except semantic similarity is computed here from the job and
candidate records; semantic scores must already be resolved by the caller
(see services.similarity.build_similarity_map). Ranking is synchronous and
has no side effects of its own.
"""

import logging

from models.schemas.candidate import CandidateProfile
from models.schemas.features import FeatureVector, ModelWeights, SimilarityScores
from models.schemas.job import RankableJob
from models.schemas.ranked_job import RankedJob
from models.schemas.training import ModelStats
from services.ranking.feature_extractor import FeatureExtractor
from services.ranking.ranking_model import RankingModel

logger = logging.getLogger(__name__)

MAX_POSITIVES = 2
MAX_CAVEATS = 1


def explain(features: FeatureVector) -> str:
    """Short rationale built by thresholding individual feature values."""
    positives: list[str] = []
    caveats: list[str] = []

    if features.semantic_similarity > 0.7:
        positives.append("strong semantic match")
    elif features.semantic_similarity < 0.4:
        caveats.append("limited semantic match")

    if features.skill_match > 0.6:
        positives.append("good skill alignment")
    elif features.skill_match < 0.3:
        caveats.append("skill gap")

    if features.location_fit > 0.8:
        positives.append("great location fit")
    if features.work_type_fit > 0.8:
        positives.append("matches work preference")
    if features.company_trust > 0.8:
        positives.append("trusted company")
    if features.recency > 0.7:
        positives.append("recently posted")

    parts = []
    if positives:
        parts.append("✓ " + ", ".join(positives[:MAX_POSITIVES]))
    if caveats:
        parts.append("△ " + ", ".join(caveats[:MAX_CAVEATS]))
    return " | ".join(parts) or "General match"


class Ranker:
    def __init__(self, model: RankingModel, extractor: FeatureExtractor | None = None) -> None:
        self.model = model
        self.extractor = extractor or FeatureExtractor()

    def rank(
        self,
        jobs: list[RankableJob],
        candidate: CandidateProfile,
        similarity: dict[int, SimilarityScores] | None = None,
    ) -> list[RankedJob]:
        """Order jobs by predicted relevance for one candidate.

        Ties keep their input order (sorted() is stable).
        """
        similarity = similarity or {}
        ranked: list[RankedJob] = []

        for job in jobs:
            scores = similarity.get(job.job_id) or SimilarityScores()
            features = self.extractor.extract(
                job,
                candidate,
                semantic_score=scores.semantic,
                skill_match_score=scores.skill_match,
            )
            ranked.append(RankedJob(
                job_id=job.job_id,
                final_score=self.model.predict(features),
                features=features,
                explanation=explain(features),
            ))

        logger.debug("Ranked %d jobs for candidate %s", len(ranked), candidate.candidate_id)
        return sorted(ranked, key=lambda r: r.final_score, reverse=True)

    def record_interaction(
        self,
        candidate_id: str,
        job_id: int,
        interaction_type: str,
        features: FeatureVector,
        relevance: float,
    ) -> bool:
        return self.model.record_interaction(candidate_id, job_id, interaction_type, features, relevance)

    def get_weights(self) -> ModelWeights:
        return self.model.get_weights()

    def get_stats(self) -> ModelStats:
        return self.model.get_stats()
