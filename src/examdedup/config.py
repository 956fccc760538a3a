from pathlib import Path
from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    app_name: str = "Exam Question Dedup"
    app_version: str = "0.1.0"
    debug: bool = False

    # Logging
    log_level: str = "INFO"
    log_dir: Path = Path("data/logs")

    # Deduplication
    # Batches at least this large are deduplicated on a worker thread.
    dedup_offload_min_batch: int = 200
    dedup_high_removal_rate: float = 0.5
    dedup_low_fulfillment_rate: float = 0.7
    dedup_low_fulfillment_removal_rate: float = 0.4

    # Generator model ids, matched by substring when deriving model strength
    strong_models: list[str] = [
        "openai/gpt-oss-120b",
        "llama-3.3-70b-versatile",
        "meta-llama/llama-4-maverick-17b-128e-instruct",
    ]
    medium_models: list[str] = [
        "openai/gpt-oss-20b",
        "llama-3.1-8b-instant",
    ]

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    return Settings()
