import os
import uuid

os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from quickcourt.core.security import create_access_token, hash_password
from quickcourt.db.session import Base, get_db, make_engine
from quickcourt.main import app
from quickcourt.models.user import User
from quickcourt.models.venue import Venue
from quickcourt.models.court import Court
from quickcourt.models.time_slot import TimeSlot, SlotStatus
from quickcourt.models.audit_log import AuditLog  # noqa: F401

engine = make_engine("sqlite://", poolclass=StaticPool)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    # Handlers share the test's session so assertions see their writes
    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def make_user(db, role="owner", email=None, password="secret123"):
    u = User(
        id=str(uuid.uuid4()),
        email=email or f"{role}-{uuid.uuid4().hex[:6]}@quickcourt.local",
        full_name=role.title(),
        role=role,
        password_hash=hash_password(password),
        is_active=True,
    )
    db.add(u)
    db.commit()
    return u


def make_court(db, owner, **overrides):
    venue = Venue(id=str(uuid.uuid4()), owner_id=owner.id, name="Riverside Arena", location="Ahmedabad", is_approved=True)
    db.add(venue)
    fields = dict(
        id=str(uuid.uuid4()),
        venue_id=venue.id,
        name="Court C",
        sport_type="badminton",
        hourly_rate=500,
        peak_rate=800,
        peak_start="18:00",
        peak_end="20:00",
        open_time="06:00",
        close_time="22:00",
        slot_minutes=60,
    )
    fields.update(overrides)
    court = Court(**fields)
    db.add(court)
    db.commit()
    return court


def make_slot(db, court, date_str="2026-11-02", start="10:00", end="11:00", status=SlotStatus.AVAILABLE, price=500, **extra):
    slot = TimeSlot(
        id=str(uuid.uuid4()),
        court_id=court.id,
        date_str=date_str,
        start=start,
        end=end,
        status=status,
        price=price,
        **extra,
    )
    db.add(slot)
    db.commit()
    return slot


def auth_headers(user):
    return {"Authorization": f"Bearer {create_access_token(user.id, user.role)}"}


@pytest.fixture
def owner(db):
    return make_user(db, "owner")


@pytest.fixture
def court(db, owner):
    return make_court(db, owner)
