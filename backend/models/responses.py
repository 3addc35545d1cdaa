from pydantic import BaseModel

from models.schemas.ranked_job import RankedJob


class RankResponse(BaseModel):
    results: list[RankedJob] = []


class InteractionResponse(BaseModel):
    adapted: bool = False  # this interaction triggered a re-weighting pass
    buffered_samples: int = 0
