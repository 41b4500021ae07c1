"""Utilities for accessing services within Flask request context."""
from __future__ import annotations

from flask import g

from src.database import get_session
from src.services.recommendations import RecommendationService

SERVICE_KEYS = {"recommendation_service"}


def get_db_session():
    if "db_session" not in g:
        g.db_session = get_session()
    return g.db_session


def get_recommendation_service() -> RecommendationService:
    if "recommendation_service" not in g:
        g.recommendation_service = RecommendationService(get_db_session())
    return g.recommendation_service


def cleanup_services(exception):
    session = g.pop("db_session", None)
    for key in SERVICE_KEYS:
        g.pop(key, None)
    if session is not None:
        try:
            if exception is not None:
                session.rollback()
        finally:
            session.close()
