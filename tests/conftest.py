"""
Pytest configuration and shared fixtures.

This module provides:
- Flask app bound to an in-memory SQLite database
- Flask test client
- Authentication fixtures (test user, JWT headers)
- Medicine / interaction factories
"""

import datetime

import pytest
from flask_jwt_extended import create_access_token

from meditime import create_app
from meditime.extensions import db as _db
from meditime.models import (
    AlertnessEffect,
    DrugInteraction,
    InteractionType,
    LifePattern,
    MealTiming,
    Medicine,
    MedicineStatus,
    SeverityLevel,
    SleepInducing,
    User,
    UserMedicine,
)

TEST_CONFIG = {
    "TESTING": True,
    "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
    "JWT_SECRET_KEY": "test-secret-key-that-is-long-enough",
    "LOG_LEVEL": "WARNING",
}


# =============================================================================
# APPLICATION FIXTURES
# =============================================================================

@pytest.fixture(scope="function")
def app():
    """Create an app with a fresh schema for each test."""
    app = create_app(TEST_CONFIG)
    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope="function")
def db(app):
    return _db


@pytest.fixture(scope="function")
def client(app):
    return app.test_client()


# =============================================================================
# USER FIXTURES
# =============================================================================

@pytest.fixture(scope="function")
def test_user_data():
    return {
        "name": "Test User",
        "email": "test@meditime.com",
        "password": "test1234",
    }


@pytest.fixture(scope="function")
def test_user(db, test_user_data):
    """Create a test user in the database."""
    user = User(name=test_user_data["name"], email=test_user_data["email"])
    user.set_password(test_user_data["password"])
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture(scope="function")
def auth_headers(test_user):
    token = create_access_token(identity=str(test_user.id))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope="function")
def life_pattern(db, test_user):
    pattern = LifePattern(
        user_id=test_user.id,
        wake_up_time="06:00",
        bed_time="22:00",
        breakfast_time="07:00",
        lunch_time="12:00",
        dinner_time="18:00",
        has_driving=True,
        has_focus_work=False,
    )
    db.session.add(pattern)
    db.session.commit()
    return pattern


# =============================================================================
# MEDICINE FIXTURES
# =============================================================================

@pytest.fixture(scope="function")
def make_medicine(db):
    """Factory for Medicine rows; classification defaults to 'no constraints'."""
    def _make(name, **fields):
        fields.setdefault("sleep_inducing", SleepInducing.NONE)
        fields.setdefault("alertness_effect", AlertnessEffect.NONE)
        fields.setdefault("stomach_irritation", False)
        fields.setdefault("meal_timing", MealTiming.ANYTIME)
        medicine = Medicine(name=name, **fields)
        db.session.add(medicine)
        db.session.commit()
        return medicine
    return _make


@pytest.fixture(scope="function")
def make_interaction(db):
    def _make(medicine_a, medicine_b, severity=SeverityLevel.MODERATE,
              interaction_type=InteractionType.EFFECT_INCREASE,
              description="Combined use changes the effect", recommendation=None):
        interaction = DrugInteraction(
            medicine_a_id=medicine_a.id,
            medicine_b_id=medicine_b.id,
            severity_level=severity,
            interaction_type=interaction_type,
            description=description,
            recommendation=recommendation,
        )
        db.session.add(interaction)
        db.session.commit()
        return interaction
    return _make


@pytest.fixture(scope="function")
def add_to_regimen(db, test_user):
    """Put a medicine straight into the test user's active list."""
    def _add(medicine, times=("09:00",), status=MedicineStatus.ACTIVE):
        user_medicine = UserMedicine(
            user_id=test_user.id,
            medicine_id=medicine.id,
            dosage="1 tablet",
            frequency=len(times),
            start_date=datetime.date(2026, 1, 1),
            status=status,
        )
        user_medicine.times = times
        db.session.add(user_medicine)
        db.session.commit()
        return user_medicine
    return _add
