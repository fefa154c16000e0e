import logging
import uuid

from sqlalchemy.orm import Session
from sqlalchemy import text
from sqlalchemy.exc import OperationalError, ProgrammingError

from quickcourt.db.session import SessionLocal
from quickcourt.core.security import hash_password
from quickcourt.models.user import User
from quickcourt.models.venue import Venue
from quickcourt.models.court import Court

logger = logging.getLogger(__name__)


def ensure_user(db: Session, email: str, password: str, role: str, name: str) -> User:
    u = db.query(User).filter(User.email == email).first()
    if u:
        return u
    u = User(
        id=str(uuid.uuid4()),
        email=email,
        full_name=name,
        role=role,
        password_hash=hash_password(password),
        is_active=True,
    )
    db.add(u)
    db.commit()
    return u


def ensure_venue(db: Session, owner: User, name: str, location: str) -> Venue:
    v = db.query(Venue).filter(Venue.owner_id == owner.id, Venue.name == name).first()
    if v:
        return v
    v = Venue(id=str(uuid.uuid4()), owner_id=owner.id, name=name, location=location, is_approved=True)
    db.add(v)
    db.commit()
    return v


# name, sport, hourly rate, peak rate, peak window
DEMO_COURTS = [
    ("Court A", "badminton", 500, 800, ("18:00", "20:00")),
    ("Court B", "badminton", 500, None, None),
    ("Turf 1", "football", 1200, 1500, ("17:00", "21:00")),
]


def run(db=None):
    if db is None:
        db = SessionLocal()
    try:
        # If migrations haven't been applied yet, seeding must not crash the API.
        try:
            db.execute(text("SELECT 1 FROM users LIMIT 1"))
        except (ProgrammingError, OperationalError):
            db.rollback()
            logger.warning("[seed] users table not found yet. Skipping seeding (run alembic upgrade head).")
            return

        ensure_user(db, "admin@quickcourt.local", "admin12345", "admin", "Admin")
        owner = ensure_user(db, "owner@quickcourt.local", "owner12345", "owner", "Facility Owner")
        ensure_user(db, "player@quickcourt.local", "player12345", "user", "Player")

        venue = ensure_venue(db, owner, "Riverside Sports Arena", "Ahmedabad")
        for name, sport, rate, peak_rate, peak in DEMO_COURTS:
            exists = db.query(Court).filter(Court.venue_id == venue.id, Court.name == name).first()
            if exists:
                continue
            db.add(Court(
                id=str(uuid.uuid4()),
                venue_id=venue.id,
                name=name,
                sport_type=sport,
                hourly_rate=rate,
                peak_rate=peak_rate,
                peak_start=peak[0] if peak else None,
                peak_end=peak[1] if peak else None,
                open_time="06:00",
                close_time="22:00",
                slot_minutes=60,
                weekly_hours={},
                date_overrides={},
                blackout_dates=[],
            ))
        db.commit()
        logger.info("[seed] demo users, venue and courts ensured")
    finally:
        db.close()


if __name__ == "__main__":
    run()
