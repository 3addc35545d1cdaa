from fastapi import APIRouter, Depends, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_embedder, get_ranker
from config import settings
from models.requests import InteractionRequest, RankRequest
from models.responses import InteractionResponse, RankResponse
from models.schemas.features import ModelWeights
from models.schemas.training import ModelStats
from services.ranking.ranker import Ranker
from services.similarity import Embedder, build_similarity_map

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


@router.get("/health")
async def health(ranker: Ranker = Depends(get_ranker)):
    return {
        "status": "ok",
        "is_adapted": ranker.get_stats().is_adapted,
    }


@router.post("/rank", response_model=RankResponse)
@limiter.limit(settings.rank_rate_limit)
def rank(
    request: Request,
    body: RankRequest,
    ranker: Ranker = Depends(get_ranker),
    embedder: Embedder | None = Depends(get_embedder),
):
    if len(body.jobs) > settings.max_jobs_per_request:
        raise HTTPException(
            status_code=400,
            detail=f"Too many jobs. Max per request: {settings.max_jobs_per_request}",
        )
    similarity = body.similarity
    if similarity is None and embedder is not None:
        similarity = build_similarity_map(body.jobs, body.candidate, embedder)

    return RankResponse(results=ranker.rank(body.jobs, body.candidate, similarity))


@router.post("/interactions", response_model=InteractionResponse)
def record_interaction(body: InteractionRequest, ranker: Ranker = Depends(get_ranker)):
    relevance = body.relevance
    if relevance is None:
        relevance = settings.relevance_labels.get(body.interaction_type)
    if relevance is None:
        raise HTTPException(
            status_code=400,
            detail=f"No relevance label configured for '{body.interaction_type}'",
        )

    adapted = ranker.record_interaction(
        body.candidate_id,
        body.job_id,
        body.interaction_type,
        body.features,
        relevance,
    )
    return InteractionResponse(
        adapted=adapted,
        buffered_samples=ranker.get_stats().buffered_samples,
    )


@router.get("/weights", response_model=ModelWeights)
def weights(ranker: Ranker = Depends(get_ranker)):
    return ranker.get_weights()


@router.get("/stats", response_model=ModelStats)
def stats(ranker: Ranker = Depends(get_ranker)):
    return ranker.get_stats()
