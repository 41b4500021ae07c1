"""Read-only queries over the activity recommendations are derived from."""
from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from src.models import NutritionLog, User, Workout


class ActivityRepository:
    """Lookups over users, workouts and nutrition logs."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_user(self, user_id: str) -> Optional[User]:
        return self.session.get(User, user_id)

    def completed_workouts_since(self, user_id: str, since: datetime) -> Sequence[Workout]:
        query = (
            select(Workout)
            .where(
                Workout.user_id == user_id,
                Workout.status == "completed",
                Workout.date >= since,
            )
            .order_by(Workout.date.desc(), Workout.id.desc())
        )
        return self.session.scalars(query).all()

    def nutrition_logs_since(self, user_id: str, since: datetime) -> Sequence[NutritionLog]:
        query = (
            select(NutritionLog)
            .options(selectinload(NutritionLog.items))
            .where(NutritionLog.user_id == user_id, NutritionLog.date >= since)
            .order_by(NutritionLog.date.desc())
        )
        return self.session.scalars(query).all()
