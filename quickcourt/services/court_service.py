"""
Court lookup, ownership checks and availability settings.

The generator reads operating hours, pricing and closures from the court
row; owners edit them here.
"""
import logging
from datetime import date, timedelta
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from quickcourt.core.config import settings
from quickcourt.core.errors import NotFoundError, PermissionDeniedError, ValidationError
from quickcourt.models.court import Court, WEEKDAYS, COURT_STATUSES
from quickcourt.models.venue import Venue
from quickcourt.services.audit_service import log_audit
from quickcourt.services.timeutil import parse_date, parse_hhmm

logger = logging.getLogger(__name__)


def get_court(db: Session, court_id: str, active_only: bool = False) -> Court:
    court = db.get(Court, court_id)
    if not court:
        raise NotFoundError("Court not found")
    if active_only and (not court.is_active or court.status == "inactive"):
        raise NotFoundError("Court not found")
    return court


def require_court_access(db: Session, court: Court, auth) -> Venue:
    """Admins may manage any court; owners only courts of their own venues."""
    venue = db.get(Venue, court.venue_id)
    if not venue:
        raise NotFoundError("Venue not found")
    if auth.role != "admin" and venue.owner_id != auth.user_id:
        raise PermissionDeniedError("Unauthorized to manage this court's slots")
    return venue


def resolve_operating_hours(court: Court, day: date) -> Optional[Tuple[str, str]]:
    """
    Opening and closing time for one calendar date, or None when closed.

    Blackout dates close the court; otherwise a per-date override wins over
    a per-weekday entry, which wins over the court's daily hours.
    """
    key = day.isoformat()
    if key in (court.blackout_dates or []):
        return None
    hours = (court.date_overrides or {}).get(key)
    if hours is None:
        hours = (court.weekly_hours or {}).get(WEEKDAYS[day.weekday()])
    if hours is not None:
        opens, closes = hours.get("open"), hours.get("close")
        if not opens or not closes:
            return None
        return opens, closes
    return (
        court.open_time or settings.DEFAULT_OPEN_TIME,
        court.close_time or settings.DEFAULT_CLOSE_TIME,
    )


def availability_calendar(court: Court, start: date, days: int | None = None) -> List[dict]:
    if days is None:
        days = settings.AVAILABILITY_HORIZON_DAYS
    out = []
    for i in range(days):
        day = start + timedelta(days=i)
        key = day.isoformat()
        if key in (court.blackout_dates or []):
            out.append({"date": key, "isAvailable": False, "reason": "Blackout Date"})
            continue
        hours = resolve_operating_hours(court, day)
        if hours is None:
            out.append({"date": key, "isAvailable": False, "reason": "Closed"})
            continue
        out.append({"date": key, "isAvailable": True, "operatingHours": {"open": hours[0], "close": hours[1]}})
    return out


def _check_hours(hours: dict, label: str) -> dict:
    opens, closes = hours.get("open"), hours.get("close")
    # An entry with neither value marks the day closed
    if not opens and not closes:
        return {"open": None, "close": None}
    if not opens or not closes:
        raise ValidationError(f"{label}: open and close are both required")
    if parse_hhmm(opens, f"{label}.open") >= parse_hhmm(closes, f"{label}.close"):
        raise ValidationError(f"{label}: open must be before close")
    return {"open": opens, "close": closes}


def update_availability(db: Session, court: Court, patch: dict, actor_id: str) -> Court:
    """
    Apply a partial settings update. Keys follow the column names; any key
    absent from ``patch`` is left unchanged.
    """
    if "weekly_hours" in patch and patch["weekly_hours"] is not None:
        weekly = {}
        for day_name, hours in patch["weekly_hours"].items():
            name = day_name.strip().lower()
            if name not in WEEKDAYS:
                raise ValidationError(f"Unknown weekday: {day_name}")
            weekly[name] = _check_hours(hours or {}, name)
        court.weekly_hours = weekly

    if "date_overrides" in patch and patch["date_overrides"] is not None:
        overrides = {}
        for day_str, hours in patch["date_overrides"].items():
            key = parse_date(day_str, "override date").isoformat()
            overrides[key] = _check_hours(hours or {}, key)
        court.date_overrides = overrides

    if "blackout_dates" in patch and patch["blackout_dates"] is not None:
        court.blackout_dates = sorted({parse_date(d, "blackout date").isoformat() for d in patch["blackout_dates"]})

    opens = patch.get("open_time") or court.open_time or settings.DEFAULT_OPEN_TIME
    closes = patch.get("close_time") or court.close_time or settings.DEFAULT_CLOSE_TIME
    if patch.get("open_time") or patch.get("close_time"):
        if parse_hhmm(opens, "openTime") >= parse_hhmm(closes, "closeTime"):
            raise ValidationError("openTime must be before closeTime")
        court.open_time, court.close_time = opens, closes

    if patch.get("slot_minutes") is not None:
        minutes = int(patch["slot_minutes"])
        if minutes < 15 or minutes > 240:
            raise ValidationError("slotMinutes must be between 15 and 240")
        court.slot_minutes = minutes

    if patch.get("hourly_rate") is not None:
        if patch["hourly_rate"] < 0:
            raise ValidationError("hourlyRate must be >= 0")
        court.hourly_rate = patch["hourly_rate"]
    if "peak_rate" in patch:
        if patch["peak_rate"] is not None and patch["peak_rate"] < 0:
            raise ValidationError("peakRate must be >= 0")
        court.peak_rate = patch["peak_rate"]
    if "peak_start" in patch or "peak_end" in patch:
        peak_start = patch.get("peak_start")
        peak_end = patch.get("peak_end")
        if bool(peak_start) != bool(peak_end):
            raise ValidationError("peakStart and peakEnd must be set together")
        if peak_start:
            parse_hhmm(peak_start, "peakStart")
            parse_hhmm(peak_end, "peakEnd")
        court.peak_start, court.peak_end = peak_start or None, peak_end or None

    if patch.get("status") is not None:
        if patch["status"] not in COURT_STATUSES:
            raise ValidationError(f"status must be one of {', '.join(COURT_STATUSES)}")
        court.status = patch["status"]
        if court.status == "maintenance":
            court.maintenance_notes = patch.get("maintenance_notes") or court.maintenance_notes
        elif court.status == "active":
            court.maintenance_notes = None
    elif patch.get("maintenance_notes") is not None:
        court.maintenance_notes = patch["maintenance_notes"]

    court.updated_by = actor_id
    log_audit(db, actor_id, "court.availability_update", "court", court.id, {k: v for k, v in patch.items() if v is not None})
    db.commit()
    db.refresh(court)
    logger.info("Court %s availability updated by %s", court.id, actor_id)
    return court
