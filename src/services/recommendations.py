"""Recommendation service: listing, read tracking and rule-based generation."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy.orm import Session

from src.config import RecommendationConfig, get_config
from src.models import Recommendation, Workout
from src.repositories.activity import ActivityRepository
from src.repositories.recommendations import RecommendationRepository
from src.validation import RecommendationQuery

__all__ = [
    "RecommendationDraft",
    "RecommendationNotFoundError",
    "RecommendationService",
    "calculate_workout_streak",
]

logger = logging.getLogger(__name__)


class RecommendationNotFoundError(Exception):
    """Raised when a recommendation does not exist for the requesting user."""


@dataclass(frozen=True)
class RecommendationDraft:
    """A recommendation produced by a rule, not yet persisted."""

    type: str
    title: str
    message: str
    priority: str = "normal"


def calculate_workout_streak(workout_dates: Sequence[date], *, today: date, lookback_days: int = 30) -> int:
    """Count consecutive days ending today that have at least one workout.

    A day without a workout breaks the streak, so a user who has not trained
    today has a streak of zero.
    """

    trained_days = set(workout_dates)
    streak = 0
    for offset in range(lookback_days):
        if today - timedelta(days=offset) in trained_days:
            streak += 1
        else:
            break
    return streak


class RecommendationService:
    """Provide and generate personalised training recommendations for users."""

    def __init__(self, session: Session, config: Optional[RecommendationConfig] = None) -> None:
        self.session = session
        self.repository = RecommendationRepository(session)
        self.activity_repository = ActivityRepository(session)
        self.config = config or get_config().recommendations

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def list_recommendations(self, user_id: str, query: RecommendationQuery) -> List[Dict[str, Any]]:
        recommendations = self.repository.list_for_user(
            user_id, is_read=query.is_read, limit=query.page_size
        )
        return [self._serialize_recommendation(item) for item in recommendations]

    def unread_count(self, user_id: str) -> int:
        return self.repository.count_unread(user_id)

    def mark_as_read(self, user_id: str, recommendation_id: int) -> Dict[str, Any]:
        recommendation = self._get_recommendation(user_id, recommendation_id)
        updated = self.repository.mark_read(recommendation)
        self.session.commit()
        logger.info("Recommendation %s marked as read", recommendation_id)
        return self._serialize_recommendation(updated)

    def delete_recommendation(self, user_id: str, recommendation_id: int) -> None:
        recommendation = self._get_recommendation(user_id, recommendation_id)
        self.repository.delete(recommendation)
        self.session.commit()
        logger.info("Recommendation %s deleted", recommendation_id)

    def generate_recommendations(
        self, user_id: str, *, now: Optional[datetime] = None
    ) -> List[Dict[str, Any]]:
        """Evaluate every rule against recent activity and persist the results."""

        now = now or _utcnow()
        drafts = self.build_drafts(user_id, now=now)

        created = [
            self.repository.create(
                user_id=user_id,
                type=draft.type,
                title=draft.title,
                message=draft.message,
                priority=draft.priority,
            )
            for draft in drafts
        ]
        self.session.commit()

        logger.info("Generated %d recommendations for user %s", len(created), user_id)
        return [self._serialize_recommendation(item) for item in created]

    def build_drafts(self, user_id: str, *, now: datetime) -> List[RecommendationDraft]:
        cfg = self.config
        recent_since = now - timedelta(days=cfg.recent_window_days)
        recent_workouts = self.activity_repository.completed_workouts_since(user_id, recent_since)

        drafts = [
            self._inactivity_rule(recent_workouts, now),
            self._streak_rule(user_id, now),
            self._protein_rule(user_id, now),
            self._duration_progress_rule(user_id, recent_workouts, now),
        ]
        return [draft for draft in drafts if draft is not None]

    # ------------------------------------------------------------------
    # Rules
    # ------------------------------------------------------------------
    def _inactivity_rule(
        self, recent_workouts: Sequence[Workout], now: datetime
    ) -> Optional[RecommendationDraft]:
        if not recent_workouts:
            return RecommendationDraft(
                type="workout",
                title="Start your fitness journey!",
                message=(
                    "You have not logged a single workout in the last "
                    f"{self.config.recent_window_days} days. Starting today is the best decision!"
                ),
                priority="high",
            )

        days_since_last = (now - recent_workouts[0].date).days
        if days_since_last < self.config.inactivity_days:
            return None
        return RecommendationDraft(
            type="workout",
            title="Time to get back to training!",
            message=(
                f"You have not trained for {days_since_last} days. "
                "Time to get back to the gym and keep your progress going!"
            ),
            priority="high",
        )

    def _streak_rule(self, user_id: str, now: datetime) -> Optional[RecommendationDraft]:
        lookback = self.config.streak_lookback_days
        since = datetime.combine(now.date() - timedelta(days=lookback), datetime.min.time())
        workouts = self.activity_repository.completed_workouts_since(user_id, since)
        streak = calculate_workout_streak(
            [workout.date.date() for workout in workouts],
            today=now.date(),
            lookback_days=lookback,
        )
        if streak < self.config.streak_days:
            return None
        return RecommendationDraft(
            type="progress",
            title="Great streak!",
            message=f"You have trained {streak} days in a row! Keep it up!",
        )

    def _protein_rule(self, user_id: str, now: datetime) -> Optional[RecommendationDraft]:
        cfg = self.config
        logs = self.activity_repository.nutrition_logs_since(
            user_id, now - timedelta(days=cfg.nutrition_window_days)
        )
        if not logs:
            return None

        total_protein = sum(item.protein or 0.0 for log in logs for item in log.items)
        average_protein = total_protein / len(logs)

        user = self.activity_repository.get_user(user_id)
        if user is not None and user.weight:
            target = user.weight * cfg.protein_per_kg
        else:
            target = cfg.default_protein_target

        if average_protein >= target * cfg.protein_shortfall_ratio:
            return None
        return RecommendationDraft(
            type="nutrition",
            title="Protein intake is too low",
            message=(
                f"Your average protein intake ({round(average_protein)}g) is below the "
                f"recommended {round(target)}g. Add more protein-rich foods to your diet!"
            ),
        )

    def _duration_progress_rule(
        self, user_id: str, recent_workouts: Sequence[Workout], now: datetime
    ) -> Optional[RecommendationDraft]:
        cfg = self.config
        window_start = now - timedelta(days=cfg.recent_window_days)
        previous_start = window_start - timedelta(days=cfg.recent_window_days)
        previous_workouts = [
            workout
            for workout in self.activity_repository.completed_workouts_since(user_id, previous_start)
            if workout.date < window_start
        ]
        if (
            len(recent_workouts) < cfg.progress_min_workouts
            or len(previous_workouts) < cfg.progress_min_workouts
        ):
            return None

        current_average = _average_duration(recent_workouts)
        previous_average = _average_duration(previous_workouts)
        if previous_average <= 0 or current_average <= previous_average * cfg.progress_growth_ratio:
            return None

        increase = round((current_average - previous_average) / previous_average * 100)
        return RecommendationDraft(
            type="progress",
            title="Excellent progress!",
            message=(
                f"Your average workout duration grew by {increase}% compared with the "
                "previous week. Keep going!"
            ),
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _get_recommendation(self, user_id: str, recommendation_id: int) -> Recommendation:
        try:
            return self.repository.get_for_user(user_id, recommendation_id)
        except LookupError as exc:
            raise RecommendationNotFoundError(str(exc)) from exc

    def _serialize_recommendation(self, recommendation: Recommendation) -> Dict[str, Any]:
        return {
            "id": recommendation.id,
            "user_id": recommendation.user_id,
            "type": recommendation.type,
            "title": recommendation.title,
            "message": recommendation.message,
            "priority": recommendation.priority,
            "is_read": recommendation.is_read,
            "created_at": recommendation.created_at.isoformat() if recommendation.created_at else None,
        }


def _average_duration(workouts: Sequence[Workout]) -> float:
    return sum(workout.duration or 0 for workout in workouts) / len(workouts)


def _utcnow() -> datetime:
    # Activity dates are stored as naive UTC.
    return datetime.now(timezone.utc).replace(tzinfo=None)
