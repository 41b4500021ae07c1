from datetime import date, timedelta

import pytest

from conftest import NOW
from src.config import RecommendationConfig
from src.services.recommendations import (
    RecommendationNotFoundError,
    RecommendationService,
    calculate_workout_streak,
)
from src.validation import normalize_recommendation_query


def _titles(recommendations):
    return [item["title"] for item in recommendations]


def test_streak_counts_consecutive_days_from_today():
    today = date(2025, 6, 15)
    dates = [today - timedelta(days=offset) for offset in (0, 1, 2, 4)]
    assert calculate_workout_streak(dates, today=today) == 3


def test_streak_is_zero_without_workout_today():
    today = date(2025, 6, 15)
    assert calculate_workout_streak([today - timedelta(days=1)], today=today) == 0


def test_streak_is_bounded_by_lookback():
    today = date(2025, 6, 15)
    dates = [today - timedelta(days=offset) for offset in range(40)]
    assert calculate_workout_streak(dates, today=today, lookback_days=30) == 30


def test_generate_for_inactive_user_suggests_starting(session, make_user):
    make_user("user-1")
    service = RecommendationService(session, RecommendationConfig())

    created = service.generate_recommendations("user-1", now=NOW)

    assert _titles(created) == ["Start your fitness journey!"]
    assert created[0]["type"] == "workout"
    assert created[0]["priority"] == "high"
    assert created[0]["is_read"] is False
    assert service.unread_count("user-1") == 1


def test_generate_flags_days_since_last_workout(session, make_user, add_workouts):
    make_user("user-1")
    add_workouts("user-1", [4, 5])
    service = RecommendationService(session, RecommendationConfig())

    created = service.generate_recommendations("user-1", now=NOW)

    assert _titles(created) == ["Time to get back to training!"]
    assert "4 days" in created[0]["message"]


def test_generate_ignores_planned_workouts(session, make_user, add_workouts):
    make_user("user-1")
    add_workouts("user-1", [0, 1], status="planned")
    service = RecommendationService(session, RecommendationConfig())

    created = service.generate_recommendations("user-1", now=NOW)

    assert _titles(created) == ["Start your fitness journey!"]


def test_generate_rewards_streak(session, make_user, add_workouts):
    make_user("user-1")
    add_workouts("user-1", range(8))
    service = RecommendationService(session, RecommendationConfig())

    created = service.generate_recommendations("user-1", now=NOW)

    assert _titles(created) == ["Great streak!"]
    assert "8 days in a row" in created[0]["message"]


def test_generate_flags_low_protein_against_body_weight(session, make_user, add_nutrition_log):
    make_user("user-1", weight=80)
    add_nutrition_log("user-1", protein=60)
    add_nutrition_log("user-1", protein=80, days_ago=2)
    service = RecommendationService(session, RecommendationConfig())

    drafts = service.build_drafts("user-1", now=NOW)

    nutrition = [draft for draft in drafts if draft.type == "nutrition"]
    assert len(nutrition) == 1
    assert "(70g)" in nutrition[0].message
    assert "144g" in nutrition[0].message


def test_protein_target_defaults_without_weight(session, make_user, add_nutrition_log):
    make_user("user-1")
    add_nutrition_log("user-1", protein=100)
    service = RecommendationService(session, RecommendationConfig())

    drafts = service.build_drafts("user-1", now=NOW)

    assert all(draft.type != "nutrition" for draft in drafts)


def test_generate_reports_duration_progress(session, make_user, add_workouts):
    make_user("user-1")
    add_workouts("user-1", [1, 3, 5], duration=60)
    add_workouts("user-1", [8, 10, 12], duration=40)
    service = RecommendationService(session, RecommendationConfig())

    drafts = service.build_drafts("user-1", now=NOW)

    progress = [draft for draft in drafts if draft.title == "Excellent progress!"]
    assert len(progress) == 1
    assert "50%" in progress[0].message


def test_duration_progress_needs_enough_workouts(session, make_user, add_workouts):
    make_user("user-1")
    add_workouts("user-1", [1], duration=90)
    add_workouts("user-1", [8], duration=30)
    service = RecommendationService(session, RecommendationConfig())

    drafts = service.build_drafts("user-1", now=NOW)

    assert all(draft.title != "Excellent progress!" for draft in drafts)


def test_list_recommendations_applies_filters(session, seed_recommendations):
    seed_recommendations("user-1", unread=3, read=2)
    seed_recommendations("user-2", unread=1, read=0)
    service = RecommendationService(session)

    everything = service.list_recommendations("user-1", normalize_recommendation_query({}))
    unread = service.list_recommendations(
        "user-1", normalize_recommendation_query({"isRead": "false"})
    )
    read = service.list_recommendations(
        "user-1", normalize_recommendation_query({"isRead": True, "limit": "1"})
    )

    assert len(everything) == 5
    assert all(item["user_id"] == "user-1" for item in everything)
    assert len(unread) == 3 and not any(item["is_read"] for item in unread)
    assert len(read) == 1 and read[0]["is_read"] is True


def test_fractional_limit_truncates_page(session, seed_recommendations):
    seed_recommendations("user-1", unread=3, read=0)
    service = RecommendationService(session)

    page = service.list_recommendations("user-1", normalize_recommendation_query({"limit": "2.7"}))

    assert len(page) == 2


def test_mark_as_read_and_delete(session, seed_recommendations):
    first_id, *_ = seed_recommendations("user-1", unread=2, read=0)
    service = RecommendationService(session)

    updated = service.mark_as_read("user-1", first_id)
    assert updated["is_read"] is True
    assert service.unread_count("user-1") == 1

    service.delete_recommendation("user-1", first_id)
    with pytest.raises(RecommendationNotFoundError):
        service.mark_as_read("user-1", first_id)


def test_recommendations_are_scoped_to_owner(session, seed_recommendations):
    (other_id,) = seed_recommendations("user-2", unread=1, read=0)
    service = RecommendationService(session)

    with pytest.raises(RecommendationNotFoundError):
        service.delete_recommendation("user-1", other_id)
    with pytest.raises(RecommendationNotFoundError):
        service.mark_as_read("user-1", other_id)
