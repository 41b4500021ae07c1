import os
import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from src.database import Base, get_engine, get_session, init_engine
from src.main import app
from src.models import NutritionItem, NutritionLog, Recommendation, User, Workout


NOW = datetime(2025, 6, 15, 12, 0, 0)


@pytest.fixture(scope="session")
def database_url(tmp_path_factory):
    db_file = tmp_path_factory.mktemp("db") / "test.db"
    return f"sqlite:///{db_file}"


@pytest.fixture(scope="session", autouse=True)
def setup_database(database_url):
    os.environ["DATABASE_URL"] = database_url
    engine = init_engine(database_url)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(autouse=True)
def clean_database():
    engine = get_engine()
    with engine.begin() as connection:
        for table in reversed(Base.metadata.sorted_tables):
            connection.execute(table.delete())
    yield


@pytest.fixture
def session():
    db_session = get_session()
    try:
        yield db_session
    finally:
        db_session.close()


@pytest.fixture
def make_user(session):
    def _make_user(user_id="user-1", weight=None):
        user = User(id=user_id, email=f"{user_id}@example.com", name=user_id, weight=weight)
        session.add(user)
        session.commit()
        return user

    return _make_user


@pytest.fixture
def add_workouts(session):
    def _add_workouts(user_id, days_ago, *, duration=45, status="completed", now=NOW):
        for offset in days_ago:
            session.add(
                Workout(
                    user_id=user_id,
                    date=now - timedelta(days=offset),
                    type="strength",
                    status=status,
                    duration=duration,
                )
            )
        session.commit()

    return _add_workouts


@pytest.fixture
def add_nutrition_log(session):
    def _add_nutrition_log(user_id, protein, *, days_ago=1, now=NOW):
        log = NutritionLog(user_id=user_id, date=now - timedelta(days=days_ago), meal_type="lunch")
        log.items.append(NutritionItem(name="Chicken breast", amount=200, calories=330, protein=protein))
        session.add(log)
        session.commit()
        return log

    return _add_nutrition_log


@pytest.fixture
def seed_recommendations(session, make_user):
    def _seed(user_id="user-1", *, unread=2, read=1):
        if session.get(User, user_id) is None:
            make_user(user_id)
        created = []
        for index in range(unread + read):
            recommendation = Recommendation(
                user_id=user_id,
                type="workout",
                title=f"Recommendation {index}",
                message="Keep training.",
                priority="normal",
                is_read=index >= unread,
            )
            session.add(recommendation)
            created.append(recommendation)
        session.commit()
        return [item.id for item in created]

    return _seed


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client
