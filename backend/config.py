import os

from pydantic import Field
from pydantic_settings import BaseSettings


def _parse_cors_origins() -> list[str] | None:
    """Parse CORS_ORIGINS env var as comma-separated string or JSON list."""
    raw = os.environ.get("CORS_ORIGINS")
    if not raw:
        return None
    if raw.startswith("["):
        import json
        return json.loads(raw)
    return [o.strip() for o in raw.split(",") if o.strip()]


def _default_weights_file() -> str:
    # Serverless deployments only have /tmp writable
    if os.environ.get("VERCEL"):
        return os.path.join("/tmp", "ltr-weights.json")
    return os.path.join("data", "ltr-weights.json")


class Settings(BaseSettings):
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]
    debug: bool = False

    # Ranking model settings
    weights_file: str = Field(default_factory=_default_weights_file)
    adaptation_batch_size: int = 100  # buffered samples that trigger a re-weighting pass
    min_adaptation_samples: int = 10  # below this, adaptation is a no-op
    relevance_labels: dict[str, float] = {
        "view": 0.1,
        "click": 0.3,
        "save": 0.6,
        "apply": 1.0,
    }

    # Request limits
    max_jobs_per_request: int = 500
    rank_rate_limit: str = "60/minute"

    # When enabled, /rank embeds candidate and jobs itself if the request
    # carries no precomputed similarity map
    semantic_scoring: bool = False
    embedding_model: str = "TechWolf/JobBERT-v2"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "protected_namespaces": ("settings_",)}


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})
