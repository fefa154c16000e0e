import pytest

from conftest import auth_headers, make_slot, make_user
from quickcourt.api.deps import AuthContext
from quickcourt.core.errors import ConflictError, SlotServiceError
from quickcourt.models.audit_log import AuditLog
from quickcourt.models.time_slot import TimeSlot, SlotStatus
from quickcourt.services import slot_booking
from quickcourt.services.slot_generator import generate_slots


def test_book_then_release(client, db, court):
    player = make_user(db, "user")
    slot = make_slot(db, court)

    r = client.post(f"/api/v1/slots/{slot.id}/book", headers=auth_headers(player))
    assert r.status_code == 200, r.text
    assert r.json()["status"] == "booked"
    assert r.json()["bookingRef"].startswith("QC-")

    # second booking of the same slot conflicts
    other = make_user(db, "user")
    assert client.post(f"/api/v1/slots/{slot.id}/book", headers=auth_headers(other)).status_code == 409
    # only the booker, the owner or an admin can cancel
    assert client.post(f"/api/v1/slots/{slot.id}/release", headers=auth_headers(other)).status_code == 403

    r = client.post(f"/api/v1/slots/{slot.id}/release", headers=auth_headers(player))
    assert r.status_code == 200
    assert r.json()["status"] == "available"
    assert r.json()["bookingRef"] is None
    db.refresh(slot)
    assert slot.booked_by is None


def test_owner_can_cancel_a_booking_on_their_court(client, db, owner, court):
    player = make_user(db, "user")
    slot = make_slot(db, court)
    client.post(f"/api/v1/slots/{slot.id}/book", headers=auth_headers(player))

    r = client.post(f"/api/v1/slots/{slot.id}/release", headers=auth_headers(owner))
    assert r.status_code == 200


def test_blocked_slot_cannot_be_booked(client, db, court):
    player = make_user(db, "user")
    slot = make_slot(db, court, status=SlotStatus.BLOCKED, block_reason="coaching")
    r = client.post(f"/api/v1/slots/{slot.id}/book", headers=auth_headers(player))
    assert r.status_code == 409


def test_booked_slot_survives_regeneration_and_bulk_release(client, db, owner, court):
    player = make_user(db, "user")
    generate_slots(db, court.id, "2026-11-02", "2026-11-02")
    evening = next(s for s in generate_slots(db, court.id, "2026-11-02", "2026-11-02").slots if s.start == "18:00")

    client.post(f"/api/v1/slots/{evening.id}/book", headers=auth_headers(player))

    r = client.post(
        f"/api/v1/courts/{court.id}/slots",
        json={"startDate": "2026-11-02", "endDate": "2026-11-02", "clearExisting": True},
        headers=auth_headers(owner),
    )
    assert r.json()["skippedBooked"] == 1
    slot_json = next(s for s in r.json()["slots"] if s["id"] == evening.id)
    assert slot_json["status"] == "booked"
    assert slot_json["price"] == 800

    r = client.patch(
        f"/api/v1/courts/{court.id}/slots",
        json={"slotIds": [evening.id], "status": "blocked", "reason": "league"},
        headers=auth_headers(owner),
    )
    assert r.json()["skipped"] == [evening.id]
    assert r.json()["modifiedCount"] == 0


def test_unknown_slot_is_404(client, db):
    player = make_user(db, "user")
    assert client.post("/api/v1/slots/nope/book", headers=auth_headers(player)).status_code == 404


def test_booking_ref_is_not_reused(db, court, monkeypatch):
    player = make_user(db, "user")
    make_slot(db, court, start="09:00", status=SlotStatus.BOOKED, booking_ref="QC-TAKEN001", booked_by=player.id)
    slot = make_slot(db, court, start="10:00")
    refs = iter(["QC-TAKEN001", "QC-FRESH001"])
    monkeypatch.setattr(slot_booking, "make_booking_ref", lambda: next(refs))

    booked = slot_booking.occupy_slot(db, slot.id, player.id)

    assert booked.booking_ref == "QC-FRESH001"


def test_booking_fails_when_no_free_ref_can_be_found(db, court, monkeypatch):
    player = make_user(db, "user")
    make_slot(db, court, start="09:00", status=SlotStatus.BOOKED, booking_ref="QC-TAKEN001", booked_by=player.id)
    slot = make_slot(db, court, start="10:00")
    monkeypatch.setattr(slot_booking, "make_booking_ref", lambda: "QC-TAKEN001")

    with pytest.raises(SlotServiceError):
        slot_booking.occupy_slot(db, slot.id, player.id)
    db.refresh(slot)
    assert slot.status == SlotStatus.AVAILABLE


def test_release_conflicts_when_slot_was_freed_after_the_read(db, court):
    player = make_user(db, "user")
    slot = make_slot(db, court, status=SlotStatus.BOOKED, booking_ref="QC-RACE0001", booked_by=player.id)
    assert slot.status == SlotStatus.BOOKED
    # another request releases the slot; the loaded object still says booked
    db.query(TimeSlot).filter(TimeSlot.id == slot.id).update(
        {TimeSlot.status: SlotStatus.AVAILABLE, TimeSlot.booking_ref: None}, synchronize_session=False,
    )

    auth = AuthContext(user_id=player.id, email=player.email, role="user")
    with pytest.raises(ConflictError):
        slot_booking.release_slot(db, slot.id, auth)
    assert db.query(AuditLog).filter_by(action="slot.release").count() == 0
