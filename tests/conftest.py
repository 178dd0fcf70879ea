import os
import tempfile
from datetime import date, timedelta

# Settings are read at import time, so the environment must be ready first
_TMP_DIR = tempfile.mkdtemp(prefix="ecopulse-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP_DIR}/test.db"
os.environ["SECRET_KEY"] = "test-secret-key-that-is-long-enough-0123"
os.environ["ENVIRONMENT"] = "development"
os.environ["ENABLE_EXPIRY_SWEEP"] = "false"

import pytest
from fastapi.testclient import TestClient

from config.database import Base, SessionLocal, engine
from models.index import init_db
from main import app
from api.user.user_model import User, UserRole
from api.challenges.challenges_model import Challenge
from api.consumption.consumption_model import ElectricityUsage, WaterUsage, WasteUsage
from helpers.token_helper import create_user_token
from utils.time_utils import utcnow


@pytest.fixture(autouse=True)
def fresh_schema():
    Base.metadata.drop_all(bind=engine)
    init_db()
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(name=None, role=UserRole.user, city="Colombo", photo="default.jpg"):
        counter["n"] += 1
        user = User(
            name=name or f"user{counter['n']}",
            email=f"user{counter['n']}@example.com",
            role=role,
            city=city,
            photo=photo,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def auth_headers():
    def _headers(user):
        return {"Authorization": f"Bearer {create_user_token(user)}"}
    return _headers


@pytest.fixture
def make_challenge(db):
    def _make(
        title="Cut electricity",
        goal=50,
        unit="kWh",
        starts_in=timedelta(days=-1),
        lasts=timedelta(days=30),
        resource_type=None,
    ):
        start = utcnow() + starts_in
        challenge = Challenge(
            title=title,
            description=f"{title} by {goal} {unit}",
            goal=goal,
            unit=unit,
            resource_type=resource_type,
            start_date=start,
            end_date=start + lasts,
        )
        db.add(challenge)
        db.commit()
        db.refresh(challenge)
        return challenge

    return _make


@pytest.fixture
def add_usage(db):
    """Insert consumption rows directly, bypassing the service layer."""
    def _add(user, electricity=(), water=(), waste=()):
        month = date(2024, 1, 1)
        for i, units in enumerate(electricity):
            db.add(ElectricityUsage(user_id=user.id, billing_month=_shift(month, i), units=units))
        for i, units in enumerate(water):
            db.add(WaterUsage(user_id=user.id, billing_month=_shift(month, i), units=units))
        for i, (plastic, paper, food) in enumerate(waste):
            db.add(WasteUsage(
                user_id=user.id,
                plastic_bags=plastic,
                paper_bags=paper,
                food_waste_bags=food,
                collection_date=month + timedelta(days=7 * i),
            ))
        db.commit()
    return _add


def _shift(month: date, n: int) -> date:
    year, index = divmod(month.month - 1 + n, 12)
    return date(month.year + year, index + 1, 1)
