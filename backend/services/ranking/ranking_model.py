"""Linear ranking model with online weight adaptation.

score = clamp(bias + sum(w_i * f_i), 0, 1). No non-linearity, no feature
interactions.

Weights adapt from streamed interaction feedback with a heuristic,
correlation-style rule rather than gradient descent or boosting:

    total   = sum(label)                      (1 if zero)
    bias    = sum(label * label) / total      relevance-weighted mean label
    avg_i   = sum(f_i * label) / total        relevance-weighted feature mean
    w_i     = clamp(avg_i * bias, 0.05, 0.4)

This nudges weight toward features that co-occur with high-relevance
interactions; it does not minimize any loss. The buffer is consumed by one
pass and then discarded.
"""

import logging
import math
import threading

import numpy as np

from models.schemas.features import (
    FEATURE_NAMES,
    MAX_WEIGHT,
    MIN_WEIGHT,
    FeatureVector,
    ModelWeights,
)
from models.schemas.training import ModelStats, TrainingSample
from services.ranking.base import BaseModelService
from services.ranking.weights_store import WeightsStore

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 100
DEFAULT_MIN_SAMPLES = 10


class RankingModel(BaseModelService):
    model_name = "ltr_linear"

    def __init__(
        self,
        store: WeightsStore,
        batch_size: int = DEFAULT_BATCH_SIZE,
        min_samples: int = DEFAULT_MIN_SAMPLES,
    ) -> None:
        super().__init__()
        self._store = store
        self.batch_size = batch_size
        self.min_samples = min_samples
        self._weights = ModelWeights()
        self._samples: list[TrainingSample] = []
        self._is_adapted = False
        self._save_lock = threading.Lock()

    def load(self) -> None:
        try:
            saved = self._store.load()
        except Exception as e:
            logger.warning("Weights store load failed, using defaults: %s", e)
            saved = None

        if saved is None:
            logger.info("Using default ranking weights")
            return
        self._weights = saved
        logger.info("Loaded persisted ranking weights")

    def predict(self, features: FeatureVector) -> float:
        """Final relevance score in [0, 1] for one feature vector."""
        self.ensure_loaded()
        weights = self._weights
        raw = weights.bias + float(np.dot(weights.as_array(), features.as_array()))
        return min(max(raw, 0.0), 1.0)

    def record_interaction(
        self,
        candidate_id: str,
        job_id: int,
        interaction_type: str,
        features: FeatureVector,
        relevance: float,
    ) -> bool:
        """Buffer one feedback sample; adapt once the buffer is full.

        ``relevance`` is the label the caller derived from the interaction
        type. Returns True if this call triggered an adaptation pass.
        """
        self.ensure_loaded()
        if not math.isfinite(relevance):
            logger.warning(
                "Non-finite relevance %r for candidate %s, job %s; recorded as 0",
                relevance, candidate_id, job_id,
            )
            relevance = 0.0
        sample = TrainingSample(
            pair_id=f"{candidate_id}:{job_id}",
            features=features,
            label=min(max(relevance, 0.0), 1.0),
        )
        with self._lock:
            self._samples.append(sample)
            self._is_adapted = False
            logger.debug(
                "Recorded %s for candidate %s, job %s (%d buffered)",
                interaction_type, candidate_id, job_id, len(self._samples),
            )
            adapted = len(self._samples) >= self.batch_size and self._reweight()

        if adapted:
            self._persist()
        return adapted

    def adapt(self) -> bool:
        """Run one re-weighting pass over the buffered samples.

        Below ``min_samples`` this is a no-op: the model never mutates itself
        from a near-empty sample set. Returns True if weights changed.
        """
        self.ensure_loaded()
        with self._lock:
            adapted = self._reweight()
        if adapted:
            self._persist()
        return adapted

    def _reweight(self) -> bool:
        # Caller holds self._lock
        n_samples = len(self._samples)
        if n_samples < self.min_samples:
            logger.info(
                "Not enough feedback to adapt (%d < %d), keeping current weights",
                n_samples, self.min_samples,
            )
            return False

        features = np.array([s.features.as_array() for s in self._samples])
        labels = np.array([s.label for s in self._samples])

        total = float(labels.sum()) or 1.0
        bias = float(np.dot(labels, labels)) / total
        avg_features = labels @ features / total
        new_weights = np.clip(avg_features * bias, MIN_WEIGHT, MAX_WEIGHT)

        self._weights = ModelWeights(
            bias=bias,
            **{name: float(w) for name, w in zip(FEATURE_NAMES, new_weights)},
        )
        self._is_adapted = True
        self._samples.clear()
        logger.info("Ranking weights adapted from %d samples", n_samples)
        return True

    def _persist(self) -> None:
        # Saves run outside the model lock; the save lock keeps them ordered
        # and each one writes whatever weights are current when it starts.
        with self._save_lock:
            with self._lock:
                weights = self._weights
            try:
                saved = self._store.save(weights)
            except Exception as e:
                logger.warning("Weights store save failed, keeping weights in memory: %s", e)
                return
        if not saved:
            logger.warning("Weights not persisted, keeping weights in memory")

    def get_weights(self) -> ModelWeights:
        self.ensure_loaded()
        return self._weights.model_copy()

    def get_stats(self) -> ModelStats:
        self.ensure_loaded()
        with self._lock:
            return ModelStats(
                buffered_samples=len(self._samples),
                is_adapted=self._is_adapted,
                weights=self._weights.model_copy(),
            )
