from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from quickcourt.db.session import get_db
from quickcourt.api.deps import AuthContext, get_auth_context
from quickcourt.schemas.slots import SlotOut
from quickcourt.services.slot_booking import occupy_slot, release_slot

router = APIRouter(tags=["bookings"])


@router.post("/slots/{slot_id}/book", response_model=SlotOut)
def book_slot(slot_id: str, db: Session = Depends(get_db), auth: AuthContext = Depends(get_auth_context)):
    return SlotOut.from_slot(occupy_slot(db, slot_id, auth.user_id))


@router.post("/slots/{slot_id}/release", response_model=SlotOut)
def cancel_slot_booking(slot_id: str, db: Session = Depends(get_db), auth: AuthContext = Depends(get_auth_context)):
    return SlotOut.from_slot(release_slot(db, slot_id, auth))
