"""Repository helpers for managing stored recommendations."""
from __future__ import annotations

from typing import Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from src.models import Recommendation


class RecommendationRepository:
    """Persistence operations for user recommendations."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_user(
        self,
        user_id: str,
        *,
        is_read: Optional[bool] = None,
        limit: int = 10,
    ) -> Sequence[Recommendation]:
        query = select(Recommendation).where(Recommendation.user_id == user_id)
        if is_read is not None:
            query = query.where(Recommendation.is_read.is_(is_read))
        query = query.order_by(
            Recommendation.created_at.desc(), Recommendation.id.desc()
        ).limit(limit)
        return self.session.scalars(query).all()

    def count_unread(self, user_id: str) -> int:
        query = select(func.count(Recommendation.id)).where(
            Recommendation.user_id == user_id,
            Recommendation.is_read.is_(False),
        )
        return int(self.session.execute(query).scalar_one() or 0)

    def get_for_user(self, user_id: str, recommendation_id: int) -> Recommendation:
        recommendation = self.session.get(Recommendation, recommendation_id)
        if recommendation is None or recommendation.user_id != user_id:
            raise LookupError(
                f"Recommendation {recommendation_id} not found for user {user_id}"
            )
        return recommendation

    def create(
        self,
        *,
        user_id: str,
        type: str,
        title: str,
        message: str,
        priority: str,
    ) -> Recommendation:
        recommendation = Recommendation(
            user_id=user_id,
            type=type,
            title=title,
            message=message,
            priority=priority,
        )
        self.session.add(recommendation)
        self.session.flush()
        self.session.refresh(recommendation)
        return recommendation

    def mark_read(self, recommendation: Recommendation) -> Recommendation:
        recommendation.is_read = True
        self.session.flush()
        self.session.refresh(recommendation)
        return recommendation

    def delete(self, recommendation: Recommendation) -> None:
        self.session.delete(recommendation)
        self.session.flush()
