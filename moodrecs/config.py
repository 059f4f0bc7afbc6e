"""Application configuration loaded from environment variables."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, str(default))
    try:
        return int(raw)
    except ValueError:
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name, str(default))
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Config:
    """Application configuration."""

    # Server settings
    host: str
    port: int
    log_level: str

    # Recommendation settings
    recs_top_n: int

    # Normalization settings
    recs_book_duration_min: int
    recs_tv_episode_min: int
    recs_popularity_divisor: float
    recs_book_max_genres: int

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        host = os.getenv("HOST", "0.0.0.0")
        port_str = os.getenv("PORT", "8000")
        try:
            port = int(port_str)
        except ValueError:
            raise ConfigurationError(f"PORT must be an integer, got: {port_str}")

        log_level = os.getenv("LOG_LEVEL", "INFO").upper()

        recs_top_n = _int_env("RECS_TOP_N", 12)
        recs_book_duration_min = _int_env("RECS_BOOK_DURATION_MIN", 300)
        recs_tv_episode_min = _int_env("RECS_TV_EPISODE_MIN", 45)
        recs_popularity_divisor = _float_env("RECS_POPULARITY_DIVISOR", 1000.0)
        recs_book_max_genres = _int_env("RECS_BOOK_MAX_GENRES", 5)

        positive = {
            "RECS_TOP_N": recs_top_n,
            "RECS_BOOK_DURATION_MIN": recs_book_duration_min,
            "RECS_TV_EPISODE_MIN": recs_tv_episode_min,
            "RECS_POPULARITY_DIVISOR": recs_popularity_divisor,
            "RECS_BOOK_MAX_GENRES": recs_book_max_genres,
        }
        for name, value in positive.items():
            if value <= 0:
                raise ConfigurationError(f"{name} must be positive, got: {value}")

        return cls(
            host=host,
            port=port,
            log_level=log_level,
            recs_top_n=recs_top_n,
            recs_book_duration_min=recs_book_duration_min,
            recs_tv_episode_min=recs_tv_episode_min,
            recs_popularity_divisor=recs_popularity_divisor,
            recs_book_max_genres=recs_book_max_genres,
        )


config = Config.from_env()
