"""Candidate profile consumed by the ranking engine."""

from pydantic import BaseModel

from models.schemas.job import WorkType


class CandidateProfile(BaseModel):
    candidate_id: str
    skills: list[str] = []
    experience: str = ""  # level tag ("senior") or free-text description
    experience_years: float | None = None
    work_type: WorkType | None = None
    location: str | None = None
    salary_min: float | None = None
    salary_max: float | None = None
    industry: str | None = None
