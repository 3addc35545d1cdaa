"""Shared fixtures: fixed clock, in-memory weights store, sample records."""

from datetime import datetime, timedelta, timezone

import pytest

from models.schemas.candidate import CandidateProfile
from models.schemas.job import RankableJob
from services.ranking.feature_extractor import FeatureExtractor
from services.ranking.ranker import Ranker
from services.ranking.ranking_model import RankingModel
from services.ranking.weights_store import InMemoryWeightsStore

NOW = datetime(2026, 6, 1, 12, 0, tzinfo=timezone.utc)


def days_ago(days: float) -> datetime:
    return NOW - timedelta(days=days)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def extractor() -> FeatureExtractor:
    return FeatureExtractor(clock=lambda: NOW)


@pytest.fixture
def store() -> InMemoryWeightsStore:
    return InMemoryWeightsStore()


@pytest.fixture
def model(store) -> RankingModel:
    return RankingModel(store)


@pytest.fixture
def ranker(model, extractor) -> Ranker:
    return Ranker(model, extractor)


@pytest.fixture
def candidate() -> CandidateProfile:
    return CandidateProfile(
        candidate_id="cand-1",
        skills=["Python", "react.js", "Docker"],
        experience="senior",
        experience_years=7,
        work_type="remote",
        location="Austin, TX",
        salary_min=120_000,
        salary_max=160_000,
        industry="fintech",
    )


@pytest.fixture
def job() -> RankableJob:
    return RankableJob(
        job_id=1,
        title="Senior Backend Engineer",
        company="Acme Payments",
        description="Build payment APIs in Python.",
        skills=["Python", "Django", "PostgreSQL"],
        experience_level="senior",
        work_type="remote",
        location="Remote",
        salary_min=130_000,
        salary_max=150_000,
        source="platform",
        created_at=days_ago(2),
        application_count=25,
    )
