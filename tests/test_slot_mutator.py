import json

import pytest

from conftest import make_court, make_slot
from quickcourt.core.errors import NotFoundError, ValidationError
from quickcourt.models.audit_log import AuditLog
from quickcourt.models.time_slot import SlotStatus
from quickcourt.services.slot_mutator import mutate_slots


def test_maintenance_on_available_slots(db, court, owner):
    a = make_slot(db, court, start="10:00", end="11:00")
    b = make_slot(db, court, start="11:00", end="12:00")

    result = mutate_slots(db, court, [a.id, b.id], "maintenance", "pipe repair", actor_id=owner.id)
    db.refresh(a)
    db.refresh(b)
    db.refresh(court)

    assert result.modified_count == 2
    assert result.skipped == []
    assert (a.status, a.block_reason) == (SlotStatus.MAINTENANCE, "pipe repair")
    assert (b.status, b.block_reason) == (SlotStatus.MAINTENANCE, "pipe repair")
    assert court.status == "maintenance"
    assert court.maintenance_notes == "pipe repair"


def test_booked_slot_is_skipped_and_left_unchanged(db, court):
    a = make_slot(db, court, start="10:00", end="11:00", status=SlotStatus.BOOKED, booking_ref="QC-AAAA0001")
    b = make_slot(db, court, start="11:00", end="12:00", status=SlotStatus.BLOCKED, block_reason="coaching")

    result = mutate_slots(db, court, [a.id, b.id], "available")
    db.refresh(a)
    db.refresh(b)

    assert result.modified_count == 1
    assert result.skipped == [a.id]
    assert a.status == SlotStatus.BOOKED
    assert a.booking_ref == "QC-AAAA0001"
    assert b.status == SlotStatus.AVAILABLE
    assert b.block_reason is None


@pytest.mark.parametrize("target", ["available", "blocked", "maintenance"])
def test_no_target_status_overwrites_a_booking(db, court, target):
    a = make_slot(db, court, status=SlotStatus.BOOKED)

    result = mutate_slots(db, court, [a.id], target, "reason")
    db.refresh(a)

    assert result.modified_count == 0
    assert result.skipped == [a.id]
    assert a.status == SlotStatus.BOOKED


def test_reason_required_for_blocking(db, court):
    a = make_slot(db, court)
    with pytest.raises(ValidationError):
        mutate_slots(db, court, [a.id], "blocked", "   ")
    db.refresh(a)
    assert a.status == SlotStatus.AVAILABLE


def test_reason_ignored_when_releasing(db, court):
    a = make_slot(db, court, status=SlotStatus.BLOCKED, block_reason="league night")
    mutate_slots(db, court, [a.id], "available", "whatever")
    db.refresh(a)
    assert a.block_reason is None


@pytest.mark.parametrize("target", ["booked", "closed", ""])
def test_invalid_target_status(db, court, target):
    a = make_slot(db, court)
    with pytest.raises(ValidationError):
        mutate_slots(db, court, [a.id], target, "x")


def test_empty_slot_list_rejected(db, court):
    with pytest.raises(ValidationError):
        mutate_slots(db, court, [], "available")


def test_slot_of_another_court_is_not_found(db, court, owner):
    other = make_court(db, owner, name="Court D")
    foreign = make_slot(db, other)
    mine = make_slot(db, court)

    with pytest.raises(NotFoundError):
        mutate_slots(db, court, [mine.id, foreign.id], "blocked", "event")
    db.refresh(mine)
    assert mine.status == SlotStatus.AVAILABLE


def test_mutation_is_audited(db, court, owner):
    a = make_slot(db, court)
    mutate_slots(db, court, [a.id, a.id], "blocked", "tournament", actor_id=owner.id)

    row = db.query(AuditLog).filter(AuditLog.action == "slots.status_update").one()
    details = json.loads(row.details_json)
    assert row.actor_user_id == owner.id
    assert details["slotIds"] == [a.id]
    assert details["modifiedCount"] == 1
