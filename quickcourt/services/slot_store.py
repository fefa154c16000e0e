"""
Persistence for TimeSlot rows keyed by (court, date, start).

Writes are explicit conditional writes: the caller learns whether a
candidate was created, refreshed, left as it was, or skipped because the
slot is booked. The unique constraint on (court_id, date_str, start) is the
backstop when two generation requests insert the same key concurrently.
"""
import enum
import logging
import uuid
from dataclasses import dataclass
from typing import Iterable, List, Optional, Set, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from quickcourt.models.time_slot import TimeSlot, SlotStatus

logger = logging.getLogger(__name__)


class WriteOutcome(str, enum.Enum):
    CREATED = "created"
    REFRESHED = "refreshed"
    EXISTING = "existing"
    SKIPPED_BOOKED = "skipped_booked"


@dataclass(frozen=True)
class SlotCandidate:
    court_id: str
    date_str: str
    start: str
    end: str
    price: int


@dataclass
class SlotWrite:
    outcome: WriteOutcome
    slot: Optional[TimeSlot]


def fetch_range(
    db: Session,
    court_id: str,
    start_date: str,
    end_date: str,
    status: SlotStatus | None = None,
) -> List[TimeSlot]:
    q = db.query(TimeSlot).filter(
        TimeSlot.court_id == court_id,
        TimeSlot.date_str >= start_date,
        TimeSlot.date_str <= end_date,
    )
    if status is not None:
        q = q.filter(TimeSlot.status == status)
    return q.order_by(TimeSlot.date_str.asc(), TimeSlot.start.asc()).all()


def find_slot(db: Session, court_id: str, date_str: str, start: str) -> Optional[TimeSlot]:
    return (
        db.query(TimeSlot)
        .filter_by(court_id=court_id, date_str=date_str, start=start)
        .first()
    )


def get_many(db: Session, court_id: str, slot_ids: Iterable[str]) -> List[TimeSlot]:
    ids = list(slot_ids)
    if not ids:
        return []
    return (
        db.query(TimeSlot)
        .filter(TimeSlot.court_id == court_id, TimeSlot.id.in_(ids))
        .all()
    )


def _insert(db: Session, c: SlotCandidate, actor_id: str | None) -> SlotWrite:
    slot = TimeSlot(
        id=str(uuid.uuid4()),
        court_id=c.court_id,
        date_str=c.date_str,
        start=c.start,
        end=c.end,
        status=SlotStatus.AVAILABLE,
        price=c.price,
        updated_by=actor_id,
    )
    try:
        with db.begin_nested():
            db.add(slot)
    except IntegrityError:
        # Another request inserted the same (court, date, start) first
        logger.info("Slot %s %s %s already exists; keeping stored row", c.court_id, c.date_str, c.start)
        return SlotWrite(WriteOutcome.EXISTING, find_slot(db, c.court_id, c.date_str, c.start))
    return SlotWrite(WriteOutcome.CREATED, slot)


def retire_outside(
    db: Session,
    court_id: str,
    start_date: str,
    end_date: str,
    keep: Set[Tuple[str, str]],
    reason: str,
    actor_id: str | None = None,
) -> int:
    """
    Block non-booked slots in the range whose (date, start) is not in ``keep``.

    Rows are never deleted; stale slots become ``blocked`` with ``reason`` so
    they stop being offered. Slots already blocked for the same reason are
    not counted again.
    """
    stale = [
        s.id
        for s in fetch_range(db, court_id, start_date, end_date)
        if s.status != SlotStatus.BOOKED
        and (s.date_str, s.start) not in keep
        and not (s.status == SlotStatus.BLOCKED and s.block_reason == reason)
    ]
    if not stale:
        return 0
    return (
        db.query(TimeSlot)
        .filter(TimeSlot.id.in_(stale), TimeSlot.status != SlotStatus.BOOKED)
        .update(
            {
                TimeSlot.status: SlotStatus.BLOCKED,
                TimeSlot.block_reason: reason,
                TimeSlot.updated_by: actor_id,
            },
            synchronize_session="fetch",
        )
    )


def write_candidate(db: Session, c: SlotCandidate, refresh: bool, actor_id: str | None = None) -> SlotWrite:
    """
    Read-or-create one candidate.

    Booked slots are never written. Other existing slots are reset to
    available at the candidate's price only when ``refresh`` is set.
    """
    existing = find_slot(db, c.court_id, c.date_str, c.start)
    if existing is None:
        return _insert(db, c, actor_id)
    if existing.status == SlotStatus.BOOKED:
        return SlotWrite(WriteOutcome.SKIPPED_BOOKED, existing)
    if not refresh:
        return SlotWrite(WriteOutcome.EXISTING, existing)

    # The status guard sits in the WHERE clause so a booking made after the read still wins
    updated = (
        db.query(TimeSlot)
        .filter(TimeSlot.id == existing.id, TimeSlot.status != SlotStatus.BOOKED)
        .update(
            {
                TimeSlot.end: c.end,
                TimeSlot.price: c.price,
                TimeSlot.status: SlotStatus.AVAILABLE,
                TimeSlot.block_reason: None,
                TimeSlot.updated_by: actor_id,
            },
            synchronize_session="fetch",
        )
    )
    if not updated:
        return SlotWrite(WriteOutcome.SKIPPED_BOOKED, existing)
    return SlotWrite(WriteOutcome.REFRESHED, existing)
