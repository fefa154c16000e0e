from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from quickcourt.db.session import get_db
from quickcourt.api.deps import AuthContext, require_roles
from quickcourt.models.time_slot import SlotStatus
from quickcourt.schemas.slots import (
    SlotOut, SlotListOut, SlotDaysOut, GenerateSlotsIn, GenerateSlotsOut,
    UpdateSlotsIn, UpdateSlotsOut, DaySlotsOut,
)
from quickcourt.services.availability import list_slots, group_by_date, available_for_date
from quickcourt.services.court_service import get_court, require_court_access
from quickcourt.services.slot_generator import generate_slots
from quickcourt.services.slot_mutator import mutate_slots
from quickcourt.services.timeutil import parse_date, parse_range

router = APIRouter(tags=["slots"])


def _status_filter(status: str) -> SlotStatus | None:
    # unknown values are ignored, matching the owner UI's "all" option
    try:
        return SlotStatus(status) if status else None
    except ValueError:
        return None


@router.get("/courts/{court_id}/slots", response_model=SlotListOut)
def get_court_slots(
    court_id: str,
    startDate: str = "",
    endDate: str = "",
    status: str = "",
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_roles("owner", "admin")),
):
    court = get_court(db, court_id)
    require_court_access(db, court, auth)
    start, end = parse_range(startDate, endDate)
    slots = list_slots(db, court.id, start, end, status=_status_filter(status))
    return SlotListOut(slots=[SlotOut.from_slot(s) for s in slots])


@router.get("/courts/{court_id}/slots/by-date", response_model=SlotDaysOut)
def get_court_slots_by_date(
    court_id: str,
    startDate: str = "",
    endDate: str = "",
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_roles("owner", "admin")),
):
    court = get_court(db, court_id)
    require_court_access(db, court, auth)
    start, end = parse_range(startDate, endDate)
    days = group_by_date(list_slots(db, court.id, start, end))
    return {"days": [{"date": d["date"], "slots": [SlotOut.from_slot(s) for s in d["slots"]]} for d in days]}


@router.post("/courts/{court_id}/slots", response_model=GenerateSlotsOut)
def post_generate_slots(
    court_id: str,
    body: GenerateSlotsIn,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_roles("owner", "admin")),
):
    court = get_court(db, court_id, active_only=True)
    require_court_access(db, court, auth)
    result = generate_slots(db, court.id, body.startDate, body.endDate, clear_existing=body.clearExisting, actor_id=auth.user_id)
    return GenerateSlotsOut(
        message=result.message,
        created=result.created,
        refreshed=result.refreshed,
        skippedBooked=result.skipped_booked,
        retired=result.retired,
        slots=[SlotOut.from_slot(s) for s in result.slots],
    )


@router.patch("/courts/{court_id}/slots", response_model=UpdateSlotsOut)
def patch_slot_status(
    court_id: str,
    body: UpdateSlotsIn,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_roles("owner", "admin")),
):
    court = get_court(db, court_id)
    require_court_access(db, court, auth)
    result = mutate_slots(db, court, body.slotIds, body.status, body.reason, actor_id=auth.user_id)
    return UpdateSlotsOut(
        message=f"Updated {result.modified_count} slots",
        modifiedCount=result.modified_count,
        skipped=result.skipped,
    )


@router.get("/courts/{court_id}/available-slots", response_model=DaySlotsOut)
def get_available_slots(court_id: str, date: str = "", db: Session = Depends(get_db)):
    """Public: bookable slots of one date."""
    court = get_court(db, court_id, active_only=True)
    day = available_for_date(db, court, parse_date(date, "date"))
    return DaySlotsOut(
        date=day["date"],
        operatingHours=day["operatingHours"],
        slots=[SlotOut.from_slot(s) for s in day["slots"]],
    )
