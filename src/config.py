"""Centralised configuration management for the database and recommendation rules."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache


@dataclass(frozen=True)
class DatabaseConfig:
    """Connection settings for the relational store."""

    url: str = "sqlite:///./fitness_service.db"
    pool_size: int = 5
    max_overflow: int = 10
    echo: bool = False


@dataclass(frozen=True)
class RecommendationConfig:
    """Thresholds used when generating recommendations from user activity."""

    recent_window_days: int = 7
    inactivity_days: int = 3
    streak_days: int = 7
    streak_lookback_days: int = 30
    nutrition_window_days: int = 30
    protein_per_kg: float = 1.8
    default_protein_target: float = 120.0
    protein_shortfall_ratio: float = 0.8
    progress_growth_ratio: float = 1.1
    progress_min_workouts: int = 3


@dataclass(frozen=True)
class AppConfig:
    """Aggregate application configuration."""

    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    recommendations: RecommendationConfig = field(default_factory=RecommendationConfig)
    log_level: str = "INFO"


def _get_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _get_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _build_database_url() -> str:
    """Build a database URL from environment variables."""
    url = os.getenv("DATABASE_URL")
    if url:
        return url

    user = os.getenv("DB_USER")
    password = os.getenv("DB_PASSWORD")
    host = os.getenv("DB_HOST")
    port = os.getenv("DB_PORT")
    name = os.getenv("DB_NAME")

    if all([user, password, host, port, name]):
        return f"postgresql+psycopg2://{user}:{password}@{host}:{port}/{name}"

    return DatabaseConfig.url


def load_database_config() -> DatabaseConfig:
    return DatabaseConfig(
        url=_build_database_url(),
        pool_size=_get_int("DB_POOL_SIZE", DatabaseConfig.pool_size),
        max_overflow=_get_int("DB_MAX_OVERFLOW", DatabaseConfig.max_overflow),
        echo=_get_bool("DB_ECHO", DatabaseConfig.echo),
    )


def load_recommendation_config() -> RecommendationConfig:
    """Read ``RECOMMENDATIONS_<FIELD>`` overrides, keeping defaults on bad input."""

    defaults = RecommendationConfig()

    def _int(key: str) -> int:
        return _get_int(f"RECOMMENDATIONS_{key.upper()}", getattr(defaults, key))

    def _float(key: str) -> float:
        return _get_float(f"RECOMMENDATIONS_{key.upper()}", getattr(defaults, key))

    return RecommendationConfig(
        recent_window_days=_int("recent_window_days"),
        inactivity_days=_int("inactivity_days"),
        streak_days=_int("streak_days"),
        streak_lookback_days=_int("streak_lookback_days"),
        nutrition_window_days=_int("nutrition_window_days"),
        protein_per_kg=_float("protein_per_kg"),
        default_protein_target=_float("default_protein_target"),
        protein_shortfall_ratio=_float("protein_shortfall_ratio"),
        progress_growth_ratio=_float("progress_growth_ratio"),
        progress_min_workouts=_int("progress_min_workouts"),
    )


@lru_cache()
def get_config() -> AppConfig:
    """Return the lazily initialised application configuration."""

    return AppConfig(
        database=load_database_config(),
        recommendations=load_recommendation_config(),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
