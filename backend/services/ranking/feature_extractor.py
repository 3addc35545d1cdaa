"""Feature extraction for candidate-job pairs.

Each sub-score is an independent pure function returning a value in [0, 1].
Missing data resolves to a neutral 0.5 so that absent fields are never read
as a mismatch. Semantic similarity is the exception: without a score it is
0, meaning "not computed".
"""

import math
import re
from datetime import datetime, timezone
from typing import Callable

from models.schemas.candidate import CandidateProfile
from models.schemas.features import FeatureVector
from models.schemas.job import RankableJob
from services.skill_normalizer import get_related_skills, normalize_skills

NEUTRAL = 0.5

# Credit for a candidate skill that is a parent of a job skill (Python -> Django)
PARTIAL_SKILL_CREDIT = 0.5
MIN_SUBSTRING_LEN = 2

# Seniority ordinal scale
LEVELS: dict[str, int] = {
    "intern": 1,
    "entry": 2,
    "junior": 2,
    "mid": 3,
    "senior": 4,
    "lead": 5,
    "manager": 5,
    "principal": 6,
    "staff": 6,
    "director": 7,
}
DEFAULT_LEVEL = LEVELS["mid"]

_LEVEL_PATTERN = re.compile(r"\b(" + "|".join(LEVELS) + r")\b")

# (upper bound in years, level) for candidates that only state years
_YEARS_TO_LEVEL: list[tuple[float, int]] = [
    (1, LEVELS["intern"]),
    (3, LEVELS["junior"]),
    (5, LEVELS["mid"]),
    (8, LEVELS["senior"]),
    (12, LEVELS["lead"]),
]

MAJOR_CITIES = (
    "san francisco",
    "new york",
    "seattle",
    "austin",
    "boston",
    "los angeles",
    "chicago",
)

WELL_KNOWN_COMPANIES = (
    "google",
    "apple",
    "microsoft",
    "amazon",
    "meta",
    "netflix",
    "stripe",
    "airbnb",
    "uber",
    "salesforce",
)

# (max age in days, score), checked in order
_RECENCY_STEPS: list[tuple[float, float]] = [
    (1, 1.0),
    (3, 0.9),
    (7, 0.8),
    (14, 0.6),
    (30, 0.4),
]
STALE_SCORE = 0.2

# (max application count, score): fewer applicants means less competition
_COMPETITION_STEPS: list[tuple[int, float]] = [
    (10, 1.0),
    (50, 0.8),
    (100, 0.6),
    (500, 0.4),
]
CROWDED_SCORE = 0.2


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    if math.isnan(value):
        return low
    return min(max(value, low), high)


# ---------------------------------------------------------------------------
# Individual sub-scores
# ---------------------------------------------------------------------------

def semantic_similarity(score: float | None) -> float:
    if score is None:
        return 0.0
    return _clamp(float(score))


def _contains(a: str, b: str) -> bool:
    """Equal, or the shorter token (at least MIN_SUBSTRING_LEN chars) is inside the longer."""
    if a == b:
        return True
    shorter, longer = (a, b) if len(a) <= len(b) else (b, a)
    return len(shorter) >= MIN_SUBSTRING_LEN and shorter in longer


def skill_match(job_skills: list[str], candidate_skills: list[str]) -> float:
    """Jaccard-style overlap of normalized skills, scaled by 2 and capped at 1.

    A candidate skill counts fully when it equals a job skill or one is a
    substring of the other (single-letter skills such as C or R only match
    exactly), and half when it is a parent of one of the job's
    skills. Scaling by 2 rewards a small but complete overlap more than a
    raw Jaccard ratio would.
    """
    job_norm = normalize_skills(job_skills)
    candidate_norm = normalize_skills(candidate_skills)
    if not job_norm or not candidate_norm:
        return NEUTRAL

    job_lower = [s.lower() for s in job_norm]
    job_set = set(job_lower)

    matches = 0.0
    for skill in candidate_norm:
        cs = skill.lower()
        if any(_contains(js, cs) for js in job_lower):
            matches += 1.0
        elif any(child.lower() in job_set for child in get_related_skills(skill)):
            matches += PARTIAL_SKILL_CREDIT

    union = job_set | {s.lower() for s in candidate_norm}
    return _clamp(matches / len(union) * 2)


def level_from_text(text: str | None) -> int | None:
    """Map a level tag or free-text description onto the ordinal scale."""
    if not text or not text.strip():
        return None
    lowered = text.strip().lower()
    if lowered in LEVELS:
        return LEVELS[lowered]
    found = _LEVEL_PATTERN.search(lowered)
    if found:
        return LEVELS[found.group(1)]
    return None


def level_from_years(years: float | None) -> int | None:
    if years is None or years < 0:
        return None
    for upper, level in _YEARS_TO_LEVEL:
        if years < upper:
            return level
    return LEVELS["principal"]


def experience_alignment(job_level: str | None, candidate: CandidateProfile) -> float:
    if not job_level or not job_level.strip():
        return NEUTRAL

    has_text = bool(candidate.experience and candidate.experience.strip())
    if not has_text and candidate.experience_years is None:
        return NEUTRAL

    job_num = level_from_text(job_level) or DEFAULT_LEVEL
    candidate_num = (
        level_from_text(candidate.experience)
        or level_from_years(candidate.experience_years)
        or DEFAULT_LEVEL
    )
    return max(0.0, 1 - 0.25 * abs(job_num - candidate_num))


def location_fit(job_location: str | None, candidate_location: str | None) -> float:
    if not job_location or not candidate_location:
        return NEUTRAL

    job_loc = job_location.lower()
    candidate_loc = candidate_location.lower()

    if "remote" in job_loc or "remote" in candidate_loc:
        return 1.0

    job_city = next((c for c in MAJOR_CITIES if c in job_loc), None)
    candidate_city = next((c for c in MAJOR_CITIES if c in candidate_loc), None)

    if job_city and job_city == candidate_city:
        return 1.0
    if job_city or candidate_city:
        return 0.6
    return 0.3


def work_type_fit(job_work_type: str | None, candidate_work_type: str | None) -> float:
    if not job_work_type or not candidate_work_type:
        return 0.7

    j = job_work_type.lower()
    c = candidate_work_type.lower()

    if j == c:
        return 1.0
    if j == "remote":
        return 0.9
    if j == "hybrid" or c == "hybrid":
        return 0.8
    return 0.4


def _midpoint(low: float | None, high: float | None) -> float | None:
    low = low if low and low > 0 else None
    high = high if high and high > 0 else None
    if low is None and high is None:
        return None
    if low is None:
        return high
    if high is None:
        return low
    return (low + high) / 2


def salary_fit(
    job_min: float | None,
    job_max: float | None,
    candidate_min: float | None,
    candidate_max: float | None,
) -> float:
    job_mid = _midpoint(job_min, job_max)
    candidate_mid = _midpoint(candidate_min, candidate_max)
    if job_mid is None or candidate_mid is None:
        return NEUTRAL

    lower = candidate_min if candidate_min and candidate_min > 0 else 0.0
    upper = candidate_max if candidate_max and candidate_max > 0 else math.inf

    if lower <= job_mid <= upper:
        return 1.0
    if job_mid < candidate_mid:
        return _clamp(1 - (candidate_mid - job_mid) / candidate_mid)
    return 0.6


def company_trust(job: RankableJob) -> float:
    company = (job.company or "").lower()
    if any(c in company for c in WELL_KNOWN_COMPANIES):
        return 1.0
    if job.trust_score is not None:
        return _clamp(job.trust_score / 100)
    if job.is_platform_sourced:
        return 0.9
    return NEUTRAL


def recency(created_at: datetime | None, now: datetime) -> float:
    if created_at is None:
        return NEUTRAL
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    age_days = (now - created_at).total_seconds() / 86400
    for max_days, score in _RECENCY_STEPS:
        if age_days < max_days:
            return score
    return STALE_SCORE


def engagement(application_count: int | None) -> float:
    count = application_count or 0
    for max_count, score in _COMPETITION_STEPS:
        if count < max_count:
            return score
    return CROWDED_SCORE


def personalization(candidate: CandidateProfile, job: RankableJob) -> float:
    score = NEUTRAL
    if candidate.industry and job.is_platform_sourced:
        score += 0.2
    return _clamp(score)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class FeatureExtractor:
    """Builds the FeatureVector for one candidate-job pair.

    ``clock`` supplies "now" for the recency feature; tests pass a fixed one.
    """

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._clock = clock or _utcnow

    def now(self) -> datetime:
        current = self._clock()
        if current.tzinfo is None:
            current = current.replace(tzinfo=timezone.utc)
        return current

    def extract(
        self,
        job: RankableJob,
        candidate: CandidateProfile,
        semantic_score: float | None = None,
        skill_match_score: float | None = None,
    ) -> FeatureVector:
        if skill_match_score is not None:
            skills = _clamp(float(skill_match_score))
        else:
            skills = skill_match(job.skills, candidate.skills)

        return FeatureVector(
            semantic_similarity=semantic_similarity(semantic_score),
            skill_match=skills,
            experience_alignment=experience_alignment(job.experience_level, candidate),
            location_fit=location_fit(job.location, candidate.location),
            work_type_fit=work_type_fit(job.work_type, candidate.work_type),
            salary_fit=salary_fit(job.salary_min, job.salary_max, candidate.salary_min, candidate.salary_max),
            company_trust=company_trust(job),
            recency=recency(job.created_at, self.now()),
            engagement=engagement(job.application_count),
            personalization=personalization(candidate, job),
        )
