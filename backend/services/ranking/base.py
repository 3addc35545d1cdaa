"""Base class for ranking services whose state is loaded lazily."""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Any

logger = logging.getLogger(__name__)


class BaseModelService(ABC):
    """Shared lifecycle for services holding mutable model state.

    Subclasses must implement:
        - model_name: identifier used in log lines
        - load(): read persisted state into memory
        - predict(...): score one input

    ``_lock`` guards both the one-time load and any later mutation of the
    subclass's state, so subclasses should take it around their writes.
    """

    model_name: str = ""

    def __init__(self) -> None:
        self._loaded = False
        self._lock = threading.RLock()

    @abstractmethod
    def load(self) -> None:
        """Read persisted state. Called at most once, by ensure_loaded()."""

    @abstractmethod
    def predict(self, *args: Any, **kwargs: Any) -> Any:
        """Score one input."""

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def ensure_loaded(self) -> None:
        if self._loaded:
            return
        with self._lock:
            if not self._loaded:
                logger.info("Loading model: %s", self.model_name)
                self.load()
                self._loaded = True
