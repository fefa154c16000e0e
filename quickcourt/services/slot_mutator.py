"""
Bulk status changes requested by court owners.

Booked slots belong to the booking flow: they are left untouched and
returned in ``skipped`` instead of being overwritten.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Sequence

from sqlalchemy.orm import Session

from quickcourt.core.errors import NotFoundError, ValidationError
from quickcourt.models.court import Court
from quickcourt.models.time_slot import TimeSlot, SlotStatus
from quickcourt.services import slot_store
from quickcourt.services.audit_service import log_audit

logger = logging.getLogger(__name__)

# Target status -> whether a reason is required. Booked is not a valid target.
MUTATION_TARGETS = {
    SlotStatus.AVAILABLE: False,
    SlotStatus.BLOCKED: True,
    SlotStatus.MAINTENANCE: True,
}


@dataclass
class MutationResult:
    modified_count: int = 0
    skipped: List[str] = field(default_factory=list)


def parse_target_status(value: str) -> SlotStatus:
    try:
        status = SlotStatus((value or "").strip().lower())
    except ValueError:
        raise ValidationError(f"Unknown status: {value}")
    if status not in MUTATION_TARGETS:
        raise ValidationError(f"Slots cannot be set to {status.value} here")
    return status


def _dedupe(ids: Sequence[str]) -> List[str]:
    seen = set()
    out = []
    for i in ids:
        if i not in seen:
            seen.add(i)
            out.append(i)
    return out


def mutate_slots(
    db: Session,
    court: Court,
    slot_ids: Sequence[str],
    status: str,
    reason: str | None = None,
    actor_id: str | None = None,
) -> MutationResult:
    target = parse_target_status(status)
    reason = (reason or "").strip() or None
    if MUTATION_TARGETS[target] and not reason:
        raise ValidationError(f"reason is required when setting slots to {target.value}")
    if target is SlotStatus.AVAILABLE:
        reason = None

    ids = _dedupe(slot_ids or [])
    if not ids:
        raise ValidationError("slotIds must be a non-empty list")

    found = {s.id: s for s in slot_store.get_many(db, court.id, ids)}
    missing = [i for i in ids if i not in found]
    if missing:
        raise NotFoundError(f"Slots not found for this court: {', '.join(missing)}")

    skipped = [i for i in ids if found[i].status == SlotStatus.BOOKED]
    mutable = [i for i in ids if i not in skipped]

    result = MutationResult(skipped=skipped)
    if mutable:
        result.modified_count = (
            db.query(TimeSlot)
            .filter(
                TimeSlot.id.in_(mutable),
                TimeSlot.court_id == court.id,
                TimeSlot.status != SlotStatus.BOOKED,
            )
            .update(
                {
                    TimeSlot.status: target,
                    TimeSlot.block_reason: reason,
                    TimeSlot.updated_by: actor_id,
                },
                synchronize_session="fetch",
            )
        )
        if result.modified_count < len(mutable):
            # Booked between our read and the update
            raced = (
                db.query(TimeSlot.id)
                .filter(TimeSlot.id.in_(mutable), TimeSlot.status == SlotStatus.BOOKED)
                .all()
            )
            result.skipped.extend(r.id for r in raced)

    if target is SlotStatus.MAINTENANCE and result.modified_count:
        court.status = "maintenance"
        court.maintenance_notes = reason
        court.updated_by = actor_id

    log_audit(db, actor_id, "slots.status_update", "court", court.id, {
        "status": target.value,
        "reason": reason,
        "slotIds": ids,
        "modifiedCount": result.modified_count,
        "skipped": result.skipped,
    })
    db.commit()

    if result.skipped:
        logger.info("Court %s: skipped %d booked slots on %s update", court.id, len(result.skipped), target.value)
    logger.info("Court %s: %d slots set to %s by %s", court.id, result.modified_count, target.value, actor_id)
    return result
