from __future__ import annotations

from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # 0 means unbounded subscriber queues.
    SUBSCRIBER_QUEUE_MAXSIZE: int = 0

    GROUP_THRESHOLD_SECONDS: float = 120.0

    LOG_LEVEL: str = "INFO"

    model_config = ConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
