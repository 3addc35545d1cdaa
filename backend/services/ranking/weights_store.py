"""Persistence port for ranking model weights.

The persisted document is one flat JSON object: the ten feature weights
plus ``bias``. Every save replaces the whole document. A missing or corrupt
document means "use defaults"; a failed write is logged and otherwise
ignored, so weights keep serving from memory.
"""

import json
import logging
import math
import os
import tempfile
from pathlib import Path
from typing import Protocol

from models.schemas.features import MAX_WEIGHT, ModelWeights

logger = logging.getLogger(__name__)


class WeightsStore(Protocol):
    def load(self) -> ModelWeights | None:
        """Return persisted weights, or None when nothing usable is stored."""

    def save(self, weights: ModelWeights) -> bool:
        """Persist weights. Returns False on failure instead of raising."""


def weights_from_document(doc: object) -> ModelWeights | None:
    """Build ModelWeights from a decoded document, or None if it is unusable.

    Keys missing from the document keep their default value; unknown keys
    are ignored. Any non-numeric or non-finite known value rejects the
    document as a whole, as does a feature weight outside [0, MAX_WEIGHT]
    or a bias outside [0, 1].
    """
    if not isinstance(doc, dict):
        return None

    values: dict[str, float] = {}
    for name in ModelWeights.model_fields:
        if name not in doc:
            continue
        value = doc[name]
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        if not math.isfinite(value):
            return None
        high = 1.0 if name == "bias" else MAX_WEIGHT
        if not 0.0 <= value <= high:
            return None
        values[name] = float(value)
    return ModelWeights(**values)


class JsonFileWeightsStore:
    """Weights persisted as a JSON file at a single well-known path."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> ModelWeights | None:
        if not self.path.exists():
            return None
        try:
            doc = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Could not read weights file %s: %s", self.path, e)
            return None

        weights = weights_from_document(doc)
        if weights is None:
            logger.warning("Ignoring malformed weights file %s", self.path)
        return weights

    def save(self, weights: ModelWeights) -> bool:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            # Write-then-rename so readers never see a half-written document
            fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(weights.model_dump(), f, indent=2)
                os.replace(tmp_path, self.path)
            except BaseException:
                os.unlink(tmp_path)
                raise
        except OSError as e:
            logger.warning("Could not save weights file %s: %s", self.path, e)
            return False
        return True


class InMemoryWeightsStore:
    """Store that keeps the last saved document in memory. Used in tests."""

    def __init__(self, initial: dict | None = None) -> None:
        self.document: dict | None = dict(initial) if initial is not None else None
        self.save_count = 0

    def load(self) -> ModelWeights | None:
        if self.document is None:
            return None
        return weights_from_document(self.document)

    def save(self, weights: ModelWeights) -> bool:
        self.document = weights.model_dump()
        self.save_count += 1
        return True
