"""Read-only slot projections for owner views and the public booking page."""
from datetime import date
from itertools import groupby
from typing import List, Optional

from sqlalchemy.orm import Session

from quickcourt.models.court import Court
from quickcourt.models.time_slot import TimeSlot, SlotStatus
from quickcourt.services import slot_store
from quickcourt.services.court_service import resolve_operating_hours


def list_slots(
    db: Session,
    court_id: str,
    start: date,
    end: date,
    status: Optional[SlotStatus] = None,
) -> List[TimeSlot]:
    """Slots ordered by date then start time. An unknown court simply has no slots."""
    return slot_store.fetch_range(db, court_id, start.isoformat(), end.isoformat(), status=status)


def group_by_date(slots: List[TimeSlot]) -> List[dict]:
    ordered = sorted(slots, key=lambda s: (s.date_str, s.start))
    return [
        {"date": day, "slots": list(day_slots)}
        for day, day_slots in groupby(ordered, key=lambda s: s.date_str)
    ]


def available_for_date(db: Session, court: Court, day: date) -> dict:
    hours = resolve_operating_hours(court, day)
    if hours is None:
        return {"date": day.isoformat(), "operatingHours": None, "slots": []}
    slots = list_slots(db, court.id, day, day, status=SlotStatus.AVAILABLE)
    return {
        "date": day.isoformat(),
        "operatingHours": {"open": hours[0], "close": hours[1]},
        "slots": slots,
    }
