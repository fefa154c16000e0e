from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from quickcourt.db.session import get_db
from quickcourt.api.deps import AuthContext, require_roles
from quickcourt.schemas.court import CourtAvailabilityIn, court_settings_out
from quickcourt.services.court_service import (
    get_court, require_court_access, update_availability, availability_calendar,
)

router = APIRouter(tags=["courts"])


@router.get("/courts/{court_id}/availability")
def get_court_availability(
    court_id: str,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_roles("owner", "admin")),
):
    court = get_court(db, court_id)
    venue = require_court_access(db, court, auth)
    today = datetime.now(timezone.utc).date()
    return {
        "court": court_settings_out(court),
        "venueName": venue.name,
        "availability": availability_calendar(court, today),
    }


@router.put("/courts/{court_id}/availability")
def put_court_availability(
    court_id: str,
    body: CourtAvailabilityIn,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_roles("owner", "admin")),
):
    court = get_court(db, court_id)
    require_court_access(db, court, auth)
    court = update_availability(db, court, body.to_patch(), auth.user_id)
    return {"court": court_settings_out(court)}
