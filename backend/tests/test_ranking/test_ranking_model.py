"""Tests for the linear ranking model and its online weight adaptation.

The adaptation rule is a heuristic correlation-style update (weights follow
the relevance-weighted feature means), not gradient descent or boosting.
These tests pin that exact rule.
"""

import threading

import pytest

from models.schemas.features import FEATURE_NAMES, FeatureVector, ModelWeights
from services.ranking.ranking_model import MAX_WEIGHT, MIN_WEIGHT, RankingModel
from services.ranking.weights_store import InMemoryWeightsStore


class BrokenStore:
    def load(self):
        raise OSError("disk unavailable")

    def save(self, weights):
        raise OSError("disk unavailable")


class LockCheckingStore(InMemoryWeightsStore):
    """Records whether another thread could take the model lock during save."""

    def __init__(self):
        super().__init__()
        self.model = None
        self.lock_free_during_save = []

    def save(self, weights):
        def try_lock():
            acquired = self.model._lock.acquire(blocking=False)
            if acquired:
                self.model._lock.release()
            self.lock_free_during_save.append(acquired)

        t = threading.Thread(target=try_lock)
        t.start()
        t.join()
        return super().save(weights)


def _record(model: RankingModel, n: int, features: FeatureVector, label: float) -> list[bool]:
    return [
        model.record_interaction("cand", i, "view", features, label)
        for i in range(n)
    ]


class TestPredict:
    def test_default_weights(self, model):
        assert model.get_weights() == ModelWeights()

    def test_neutral_features(self, model):
        # every weight except semantic (0.25) times 0.5, semantic feature is 0
        assert model.predict(FeatureVector()) == pytest.approx(0.375)

    def test_all_ones_is_sum_of_weights(self, model):
        ones = FeatureVector(**{name: 1.0 for name in FEATURE_NAMES})
        assert model.predict(ones) == pytest.approx(1.0)

    def test_score_clamped_to_one(self):
        model = RankingModel(InMemoryWeightsStore({"bias": 0.5}))
        ones = FeatureVector(**{name: 1.0 for name in FEATURE_NAMES})
        assert model.predict(ones) == 1.0

    def test_monotonic_in_each_feature(self, model):
        for name in FEATURE_NAMES:
            low = FeatureVector(**{name: 0.2})
            high = FeatureVector(**{name: 0.8})
            assert model.predict(high) >= model.predict(low), name


class TestLoad:
    def test_persisted_weights_override_defaults(self):
        model = RankingModel(InMemoryWeightsStore({"skill_match": 0.3, "bias": 0.1}))
        weights = model.get_weights()
        assert weights.skill_match == 0.3
        assert weights.bias == 0.1
        assert weights.semantic_similarity == 0.25

    def test_corrupt_document_uses_defaults(self):
        model = RankingModel(InMemoryWeightsStore({"skill_match": "high"}))
        assert model.get_weights() == ModelWeights()

    def test_store_errors_use_defaults(self):
        model = RankingModel(BrokenStore())
        assert model.get_weights() == ModelWeights()

    def test_negative_weight_uses_defaults(self):
        model = RankingModel(InMemoryWeightsStore({"recency": -0.3}))
        assert model.get_weights() == ModelWeights()
        assert model.predict(FeatureVector(recency=0.9)) >= model.predict(FeatureVector(recency=0.1))

    def test_out_of_range_bias_uses_defaults(self):
        model = RankingModel(InMemoryWeightsStore({"bias": 1.5}))
        assert model.get_weights().bias == 0.0

    def test_loads_once(self, store):
        model = RankingModel(store)
        model.get_weights()
        store.document = {"bias": 0.9}
        assert model.get_weights().bias == 0.0


class TestAdaptation:
    def test_nine_interactions_leave_weights_unchanged(self, model):
        before = model.get_weights()
        _record(model, 9, FeatureVector(recency=1.0), 0.1)
        assert model.get_weights() == before
        assert model.get_stats().buffered_samples == 9

    def test_adapt_below_min_samples_is_noop(self, model, store):
        _record(model, 9, FeatureVector(recency=1.0), 1.0)
        assert model.adapt() is False
        assert model.get_weights() == ModelWeights()
        assert model.get_stats().buffered_samples == 9
        assert store.save_count == 0

    def test_full_buffer_triggers_one_pass(self, model, store):
        triggered = _record(model, 100, FeatureVector(), 0.3)
        assert triggered == [False] * 99 + [True]
        stats = model.get_stats()
        assert stats.buffered_samples == 0
        assert stats.is_adapted is True
        assert store.save_count == 1

    def test_new_sample_clears_adapted_flag(self, model):
        _record(model, 100, FeatureVector(), 0.3)
        model.record_interaction("cand", 1, "click", FeatureVector(), 0.3)
        assert model.get_stats().is_adapted is False

    def test_low_relevance_views_shift_toward_high_features(self, model):
        features = FeatureVector(semantic_similarity=0.0, recency=1.0, engagement=1.0)
        before = model.get_weights()

        _record(model, 120, features, 0.1)

        weights = model.get_weights()
        # bias is the label-weighted mean label; each weight is mean feature * bias
        assert weights.bias == pytest.approx(0.1)
        assert weights.recency == pytest.approx(0.1)
        assert weights.engagement == pytest.approx(0.1)
        assert weights.semantic_similarity == MIN_WEIGHT
        assert weights.engagement > before.engagement
        assert weights.recency > weights.skill_match
        for name in FEATURE_NAMES:
            assert MIN_WEIGHT <= getattr(weights, name) <= MAX_WEIGHT
        assert model.get_stats().buffered_samples == 20

    def test_weights_clamped_to_bounds(self, store):
        model = RankingModel(store, batch_size=1000)
        _record(model, 10, FeatureVector(skill_match=1.0), 0.5)
        assert model.adapt() is True

        weights = model.get_weights()
        assert weights.bias == pytest.approx(0.5)
        assert weights.skill_match == MAX_WEIGHT  # 1.0 * 0.5 clamped down
        assert weights.location_fit == pytest.approx(0.25)
        assert weights.semantic_similarity == MIN_WEIGHT  # 0.0 clamped up

    def test_zero_labels_floor_every_weight(self, store):
        model = RankingModel(store, batch_size=1000)
        _record(model, 10, FeatureVector(), 0.0)
        model.adapt()
        weights = model.get_weights()
        assert weights.bias == 0.0
        assert all(getattr(weights, name) == MIN_WEIGHT for name in FEATURE_NAMES)

    def test_adapted_weights_persisted(self, model, store):
        _record(model, 100, FeatureVector(), 0.6)
        assert store.document == model.get_weights().model_dump()
        assert set(store.document) == set(FEATURE_NAMES) | {"bias"}

    def test_save_failure_keeps_weights_in_memory(self):
        model = RankingModel(BrokenStore(), batch_size=10)
        assert _record(model, 10, FeatureVector(skill_match=1.0), 0.5)[-1] is True
        assert model.get_weights().skill_match == MAX_WEIGHT

    def test_adapted_weights_keep_scores_monotonic(self, model):
        _record(model, 100, FeatureVector(recency=0.9, skill_match=0.2), 0.7)
        for name in FEATURE_NAMES:
            low = FeatureVector(**{name: 0.1})
            high = FeatureVector(**{name: 0.9})
            assert model.predict(high) >= model.predict(low), name

    def test_non_finite_relevance_recorded_as_zero(self, model):
        assert model.record_interaction("cand", 1, "view", FeatureVector(), float("nan")) is False
        assert model.record_interaction("cand", 2, "view", FeatureVector(), float("inf")) is False
        assert [s.label for s in model._samples] == [0.0, 0.0]

    def test_save_runs_outside_model_lock(self):
        store = LockCheckingStore()
        model = RankingModel(store, batch_size=10)
        store.model = model
        _record(model, 10, FeatureVector(), 0.5)
        assert store.lock_free_during_save == [True]

    def test_concurrent_recording_never_interleaves_passes(self, store):
        model = RankingModel(store, batch_size=100)

        def worker():
            _record(model, 50, FeatureVector(recency=1.0), 0.3)

        threads = [threading.Thread(target=worker) for _ in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert store.save_count == 5
        assert model.get_stats().buffered_samples == 0
