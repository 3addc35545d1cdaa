"""Job posting as seen by the ranking engine."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel

WorkType = Literal["remote", "hybrid", "onsite"]

# Sources that mean the posting was created on the platform itself
PLATFORM_SOURCES = frozenset({"platform", "internal"})


class RankableJob(BaseModel):
    """A job posting with every field the feature extractor reads.

    Only ``job_id`` is required; anything else that is missing resolves to a
    neutral feature value instead of counting as a mismatch.
    """
    job_id: int
    title: str = ""
    company: str = ""
    description: str = ""
    skills: list[str] = []
    requirements: list[str] = []
    experience_level: str | None = None  # intern, junior, mid, senior, ...
    work_type: WorkType | None = None
    location: str | None = None
    salary_min: float | None = None
    salary_max: float | None = None
    source: str | None = None  # "platform"/"internal" or an external board
    created_at: datetime | None = None
    application_count: int = 0
    trust_score: float | None = None  # 0-100

    @property
    def is_platform_sourced(self) -> bool:
        return (self.source or "").lower() in PLATFORM_SOURCES
