"""
Slot side of the booking flow: occupying a slot and the cancellation path.

These are the only transitions into and out of ``booked``.
"""
import logging
import random
import string

from sqlalchemy.orm import Session

from quickcourt.core.errors import ConflictError, NotFoundError, PermissionDeniedError, SlotServiceError
from quickcourt.models.court import Court
from quickcourt.models.time_slot import TimeSlot, SlotStatus
from quickcourt.models.venue import Venue
from quickcourt.services.audit_service import log_audit

logger = logging.getLogger(__name__)


def make_booking_ref() -> str:
    return "QC-" + "".join(random.choices(string.ascii_uppercase + string.digits, k=8))


def _get_slot(db: Session, slot_id: str) -> TimeSlot:
    slot = db.get(TimeSlot, slot_id)
    if not slot:
        raise NotFoundError("Slot not found")
    return slot


def occupy_slot(db: Session, slot_id: str, user_id: str) -> TimeSlot:
    slot = _get_slot(db, slot_id)
    court = db.get(Court, slot.court_id)
    if not court or not court.is_active or court.status == "inactive":
        raise NotFoundError("Court not found")

    # booking_ref must be unique
    for _ in range(10):
        ref = make_booking_ref()
        if not db.query(TimeSlot.id).filter(TimeSlot.booking_ref == ref).first():
            break
    else:
        raise SlotServiceError("could not allocate booking reference")

    # Conditional update: only one request can move a given slot out of available
    updated = (
        db.query(TimeSlot)
        .filter(TimeSlot.id == slot.id, TimeSlot.status == SlotStatus.AVAILABLE)
        .update(
            {
                TimeSlot.status: SlotStatus.BOOKED,
                TimeSlot.booking_ref: ref,
                TimeSlot.booked_by: user_id,
                TimeSlot.block_reason: None,
                TimeSlot.updated_by: user_id,
            },
            synchronize_session="fetch",
        )
    )
    if not updated:
        db.rollback()
        raise ConflictError(f"Slot is not available (status: {slot.status.value})")

    log_audit(db, user_id, "slot.book", "time_slot", slot.id, {"bookingRef": ref})
    db.commit()
    db.refresh(slot)
    logger.info("Slot %s booked by %s as %s", slot.id, user_id, ref)
    return slot


def release_slot(db: Session, slot_id: str, auth) -> TimeSlot:
    """Cancellation path: booked -> available. The record is kept, only its status reverts."""
    slot = _get_slot(db, slot_id)
    if slot.status != SlotStatus.BOOKED:
        raise ConflictError("Slot is not booked")

    if auth.role != "admin" and slot.booked_by != auth.user_id:
        court = db.get(Court, slot.court_id)
        venue = db.get(Venue, court.venue_id) if court else None
        if not venue or venue.owner_id != auth.user_id:
            raise PermissionDeniedError("Unauthorized to cancel this booking")

    ref = slot.booking_ref
    updated = (
        db.query(TimeSlot)
        .filter(TimeSlot.id == slot.id, TimeSlot.status == SlotStatus.BOOKED)
        .update(
            {
                TimeSlot.status: SlotStatus.AVAILABLE,
                TimeSlot.booking_ref: None,
                TimeSlot.booked_by: None,
                TimeSlot.updated_by: auth.user_id,
            },
            synchronize_session="fetch",
        )
    )
    if not updated:
        db.rollback()
        raise ConflictError("Slot is not booked")

    log_audit(db, auth.user_id, "slot.release", "time_slot", slot.id, {"bookingRef": ref})
    db.commit()
    db.refresh(slot)
    logger.info("Slot %s released (booking %s) by %s", slot.id, ref, auth.user_id)
    return slot
