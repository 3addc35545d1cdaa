"""Tests for the Ranker: ordering, tie-breaking and explanations."""

from datetime import timedelta

import pytest

from models.schemas.candidate import CandidateProfile
from models.schemas.features import FEATURE_NAMES, FeatureVector, SimilarityScores
from models.schemas.job import RankableJob
from services.ranking.ranker import explain


class TestRank:
    def test_sorted_descending(self, ranker, job, candidate):
        weak = RankableJob(job_id=2, title="Line Cook", skills=["Food Safety"], location="Denver, CO")
        results = ranker.rank([weak, job], candidate)
        assert [r.job_id for r in results] == [1, 2]
        assert results[0].final_score > results[1].final_score

    def test_ties_keep_input_order(self, ranker, candidate):
        jobs = [RankableJob(job_id=i) for i in (3, 1, 2)]
        results = ranker.rank(jobs, candidate)
        assert [r.job_id for r in results] == [3, 1, 2]

    def test_similarity_map_feeds_semantic_feature(self, ranker, candidate):
        jobs = [RankableJob(job_id=1), RankableJob(job_id=2)]
        similarity = {2: SimilarityScores(semantic=0.9)}
        results = ranker.rank(jobs, candidate, similarity)
        assert results[0].job_id == 2
        assert results[0].features.semantic_similarity == 0.9
        assert results[1].features.semantic_similarity == 0.0

    def test_similarity_skill_match_override(self, ranker, candidate):
        results = ranker.rank(
            [RankableJob(job_id=1, skills=["COBOL"])],
            candidate,
            {1: SimilarityScores(skill_match=0.95)},
        )
        assert results[0].features.skill_match == 0.95

    def test_stale_posting_scores_lower(self, ranker, now):
        candidate = CandidateProfile(candidate_id="c")
        fresh = RankableJob(job_id=1, created_at=now)
        stale = RankableJob(job_id=2, created_at=now - timedelta(days=40))

        results = {r.job_id: r for r in ranker.rank([stale, fresh], candidate)}

        assert results[2].features.recency == 0.2
        assert results[1].features.recency == 1.0
        assert results[2].final_score < results[1].final_score

    def test_deterministic_without_adaptation(self, ranker, job, candidate):
        jobs = [job, RankableJob(job_id=2, location="Seattle"), RankableJob(job_id=3, skills=["Python"])]
        similarity = {1: SimilarityScores(semantic=0.4), 3: SimilarityScores(semantic=0.8)}
        first = ranker.rank(jobs, candidate, similarity)
        second = ranker.rank(jobs, candidate, similarity)
        assert first == second

    def test_scores_and_features_in_range(self, ranker, candidate, now):
        jobs = [
            RankableJob(job_id=1),
            RankableJob(job_id=2, salary_min=1, salary_max=2, trust_score=400, application_count=10_000),
            RankableJob(job_id=3, company="Netflix", created_at=now + timedelta(days=3), work_type="onsite"),
        ]
        for result in ranker.rank(jobs, candidate, {1: SimilarityScores(semantic=5.0)}):
            assert 0.0 <= result.final_score <= 1.0
            for name in FEATURE_NAMES:
                assert 0.0 <= getattr(result.features, name) <= 1.0

    def test_empty_job_list(self, ranker, candidate):
        assert ranker.rank([], candidate) == []

    def test_interaction_facade(self, ranker):
        ranker.record_interaction("c", 1, "save", FeatureVector(), 0.6)
        assert ranker.get_stats().buffered_samples == 1
        assert ranker.get_weights() == ranker.model.get_weights()


class TestExplain:
    def test_two_positives_max(self):
        features = FeatureVector(semantic_similarity=0.9, skill_match=0.8, location_fit=1.0)
        assert explain(features) == "✓ strong semantic match, good skill alignment"

    def test_positive_and_caveat(self):
        features = FeatureVector(semantic_similarity=0.9, skill_match=0.1)
        assert explain(features) == "✓ strong semantic match | △ skill gap"

    def test_one_caveat_max(self):
        features = FeatureVector(semantic_similarity=0.1, skill_match=0.1)
        assert explain(features) == "△ limited semantic match"

    def test_location_and_recency(self):
        features = FeatureVector(semantic_similarity=0.0, location_fit=1.0, recency=1.0)
        assert explain(features) == "✓ great location fit, recently posted | △ limited semantic match"

    def test_general_match(self):
        assert explain(FeatureVector(semantic_similarity=0.5)) == "General match"

    @pytest.mark.parametrize("field,phrase", [
        ("work_type_fit", "matches work preference"),
        ("company_trust", "trusted company"),
    ])
    def test_single_positive(self, field, phrase):
        features = FeatureVector(semantic_similarity=0.5, **{field: 0.95})
        assert explain(features) == f"✓ {phrase}"
