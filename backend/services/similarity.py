"""Semantic similarity between candidate and job texts.

The ranking engine only consumes a cosine similarity in [0, 1]; where the
vectors come from is up to the Embedder passed in. A lazily loaded
SentenceTransformer adapter is provided for local use.
"""

import logging
from typing import Protocol, Sequence

import numpy as np
from sklearn.metrics.pairwise import cosine_similarity as sklearn_cosine

from models.schemas.candidate import CandidateProfile
from models.schemas.features import SimilarityScores
from models.schemas.job import RankableJob

logger = logging.getLogger(__name__)


class Embedder(Protocol):
    """Text -> fixed-length vector. Nothing more is assumed."""

    def encode(self, text: str) -> Sequence[float]: ...


class SentenceTransformerEmbedder:
    """Embedder backed by sentence-transformers, loaded on first use."""

    def __init__(self, model_name: str = "TechWolf/JobBERT-v2") -> None:
        self.model_name = model_name
        self._model = None

    def _get_model(self):
        if self._model is None:
            from sentence_transformers import SentenceTransformer

            self._model = SentenceTransformer(self.model_name)
            logger.info("Embedding model loaded: %s", self.model_name)
        return self._model

    def encode(self, text: str) -> Sequence[float]:
        return self._get_model().encode(text, convert_to_numpy=True)


def cosine_similarity(vec_a: Sequence[float], vec_b: Sequence[float]) -> float:
    """Cosine similarity of two embedding vectors, clamped to [0, 1].

    Mismatched dimensions, empty vectors and zero vectors contribute 0.0
    (with a warning) instead of raising.
    """
    a = np.asarray(vec_a, dtype=float).ravel()
    b = np.asarray(vec_b, dtype=float).ravel()

    if a.size == 0 or b.size == 0:
        logger.warning("Empty embedding vector, similarity treated as 0")
        return 0.0
    if a.shape != b.shape:
        logger.warning(
            "Embedding dimension mismatch (%d vs %d), similarity treated as 0",
            a.size, b.size,
        )
        return 0.0
    if not np.any(a) or not np.any(b):
        return 0.0

    score = float(sklearn_cosine(a.reshape(1, -1), b.reshape(1, -1))[0][0])
    if not np.isfinite(score):
        return 0.0
    return min(max(score, 0.0), 1.0)


def candidate_text(candidate: CandidateProfile) -> str:
    """Text representation of a candidate used for embedding."""
    parts = [candidate.experience]
    if candidate.skills:
        parts.append("Skills: " + ", ".join(candidate.skills))
    if candidate.industry:
        parts.append("Industry: " + candidate.industry)
    return "\n".join(p for p in parts if p)


def job_text(job: RankableJob) -> str:
    """Text representation of a job posting used for embedding."""
    parts = [job.title, job.description]
    if job.skills:
        parts.append("Skills: " + ", ".join(job.skills))
    if job.requirements:
        parts.append("Requirements: " + "; ".join(job.requirements))
    return "\n".join(p for p in parts if p)


def build_similarity_map(
    jobs: list[RankableJob],
    candidate: CandidateProfile,
    embedder: Embedder,
) -> dict[int, SimilarityScores]:
    """Precompute semantic similarity for each job against one candidate.

    The candidate is embedded once. A job whose embedding fails gets no
    entry, so its semantic feature stays at the "not computed" value of 0.
    """
    text = candidate_text(candidate)
    if not text:
        return {}

    try:
        candidate_vec = embedder.encode(text)
    except Exception as e:
        logger.warning("Candidate embedding failed for %s: %s", candidate.candidate_id, e)
        return {}

    scores: dict[int, SimilarityScores] = {}
    for job in jobs:
        text = job_text(job)
        if not text:
            continue
        try:
            job_vec = embedder.encode(text)
        except Exception as e:
            logger.warning("Job embedding failed for %s: %s", job.job_id, e)
            continue
        scores[job.job_id] = SimilarityScores(semantic=cosine_similarity(candidate_vec, job_vec))
    return scores
