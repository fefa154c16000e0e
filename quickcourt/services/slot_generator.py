"""
Court slot generation over an inclusive date range.

One candidate is produced per ``slot_minutes`` interval between the court's
opening and closing time on every open date; a trailing interval shorter
than ``slot_minutes`` is not emitted. Candidates are written through the
slot store, which never touches booked slots. With ``clear_existing`` the
non-booked slots of the range that no longer match a candidate are blocked.
"""
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import List

from sqlalchemy.orm import Session

from quickcourt.core.config import settings
from quickcourt.models.court import Court
from quickcourt.models.time_slot import TimeSlot
from quickcourt.services import slot_store
from quickcourt.services.audit_service import log_audit
from quickcourt.services.court_service import get_court, resolve_operating_hours
from quickcourt.services.slot_store import SlotCandidate, WriteOutcome
from quickcourt.services.timeutil import format_hhmm, in_window, iter_dates, parse_hhmm, parse_range

logger = logging.getLogger(__name__)

OUTSIDE_HOURS_REASON = "Outside operating hours"


@dataclass
class GenerationResult:
    created: int = 0
    refreshed: int = 0
    existing: int = 0
    skipped_booked: int = 0
    retired: int = 0
    slots: List[TimeSlot] = field(default_factory=list)

    @property
    def message(self) -> str:
        msg = f"Generated {self.created} slots"
        if self.refreshed:
            msg += f", refreshed {self.refreshed}"
        if self.skipped_booked:
            msg += f", kept {self.skipped_booked} booked"
        if self.retired:
            msg += f", blocked {self.retired} outside operating hours"
        return msg


def slot_minutes_for(court: Court) -> int:
    return court.slot_minutes or settings.DEFAULT_SLOT_MINUTES


def resolve_price(court: Court, start_minute: int, minutes: int = 60) -> int:
    """Hourly rate for the slot's start time, peak rate inside the peak window, scaled to the slot length."""
    rate = court.hourly_rate
    if court.peak_start and court.peak_end:
        if in_window(start_minute, parse_hhmm(court.peak_start), parse_hhmm(court.peak_end)):
            rate = court.peak_rate if court.peak_rate is not None else court.hourly_rate
    return rate * minutes // 60


def candidate_slots(court: Court, start: date, end: date) -> List[SlotCandidate]:
    minutes = slot_minutes_for(court)
    out: List[SlotCandidate] = []
    for day in iter_dates(start, end):
        hours = resolve_operating_hours(court, day)
        if hours is None:
            continue
        t = parse_hhmm(hours[0], "open")
        close = parse_hhmm(hours[1], "close")
        date_str = day.isoformat()
        while t + minutes <= close:
            out.append(SlotCandidate(
                court_id=court.id,
                date_str=date_str,
                start=format_hhmm(t),
                end=format_hhmm(t + minutes),
                price=resolve_price(court, t, minutes),
            ))
            t += minutes
    return out


def generate_slots(
    db: Session,
    court_id: str,
    start_date: str,
    end_date: str,
    clear_existing: bool = False,
    actor_id: str | None = None,
) -> GenerationResult:
    court = get_court(db, court_id, active_only=True)
    start, end = parse_range(start_date, end_date, max_days=settings.MAX_GENERATION_DAYS)

    result = GenerationResult()
    candidates = candidate_slots(court, start, end)
    for c in candidates:
        write = slot_store.write_candidate(db, c, refresh=clear_existing, actor_id=actor_id)
        if write.outcome is WriteOutcome.CREATED:
            result.created += 1
        elif write.outcome is WriteOutcome.REFRESHED:
            result.refreshed += 1
        elif write.outcome is WriteOutcome.EXISTING:
            result.existing += 1
        elif write.outcome is WriteOutcome.SKIPPED_BOOKED:
            result.skipped_booked += 1
        else:
            raise AssertionError(f"unhandled write outcome {write.outcome!r}")

    if clear_existing:
        keep = {(c.date_str, c.start) for c in candidates}
        result.retired = slot_store.retire_outside(
            db, court.id, start.isoformat(), end.isoformat(), keep, OUTSIDE_HOURS_REASON, actor_id=actor_id,
        )

    log_audit(db, actor_id, "slots.generate", "court", court.id, {
        "startDate": start.isoformat(),
        "endDate": end.isoformat(),
        "clearExisting": clear_existing,
        "created": result.created,
        "refreshed": result.refreshed,
        "skippedBooked": result.skipped_booked,
        "retired": result.retired,
    })
    db.commit()

    result.slots = slot_store.fetch_range(db, court.id, start.isoformat(), end.isoformat())
    logger.info(
        "Generated slots for court %s %s..%s: created=%s refreshed=%s existing=%s booked=%s retired=%s",
        court.id, start, end, result.created, result.refreshed, result.existing, result.skipped_booked, result.retired,
    )
    return result
