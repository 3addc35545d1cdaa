"""Shared dependencies for API routes."""

from config import settings
from services.ranking.ranker import Ranker
from services.ranking.ranking_model import RankingModel
from services.ranking.weights_store import JsonFileWeightsStore
from services.similarity import Embedder, SentenceTransformerEmbedder

_ranker: Ranker | None = None
_embedder: Embedder | None = None


def build_ranker() -> Ranker:
    store = JsonFileWeightsStore(settings.weights_file)
    model = RankingModel(
        store,
        batch_size=settings.adaptation_batch_size,
        min_samples=settings.min_adaptation_samples,
    )
    return Ranker(model)


def get_ranker() -> Ranker:
    global _ranker
    if _ranker is None:
        _ranker = build_ranker()
    return _ranker


def get_embedder() -> Embedder | None:
    """Local embedder, or None when semantic scoring is left to the caller."""
    global _embedder
    if not settings.semantic_scoring:
        return None
    if _embedder is None:
        _embedder = SentenceTransformerEmbedder(settings.embedding_model)
    return _embedder
