from pydantic import BaseModel, Field
from typing import Dict, List, Optional

from quickcourt.models.court import Court

class HoursIn(BaseModel):
    # both empty marks the day closed
    open: Optional[str] = None
    close: Optional[str] = None

class CourtAvailabilityIn(BaseModel):
    """Partial update of a court's availability settings; omitted fields stay unchanged."""
    openTime: Optional[str] = None
    closeTime: Optional[str] = None
    slotMinutes: Optional[int] = None
    weeklyHours: Optional[Dict[str, HoursIn]] = None
    dateOverrides: Optional[Dict[str, HoursIn]] = None
    blackoutDates: Optional[List[str]] = None
    hourlyRate: Optional[int] = None
    peakRate: Optional[int] = None
    peakStart: Optional[str] = None
    peakEnd: Optional[str] = None
    status: Optional[str] = Field(default=None, description="active|maintenance|inactive")
    maintenanceNotes: Optional[str] = None

    def to_patch(self) -> dict:
        sent = self.model_fields_set
        patch = {
            "open_time": self.openTime,
            "close_time": self.closeTime,
            "slot_minutes": self.slotMinutes,
            "weekly_hours": {k: v.model_dump() for k, v in self.weeklyHours.items()} if self.weeklyHours is not None else None,
            "date_overrides": {k: v.model_dump() for k, v in self.dateOverrides.items()} if self.dateOverrides is not None else None,
            "blackout_dates": self.blackoutDates,
            "hourly_rate": self.hourlyRate,
            "status": self.status,
            "maintenance_notes": self.maintenanceNotes,
        }
        # peak fields may be cleared explicitly with null
        if "peakRate" in sent:
            patch["peak_rate"] = self.peakRate
        if "peakStart" in sent or "peakEnd" in sent:
            patch["peak_start"] = self.peakStart
            patch["peak_end"] = self.peakEnd
        return patch

def court_settings_out(c: Court) -> dict:
    return {
        "id": c.id,
        "venueId": c.venue_id,
        "name": c.name,
        "sportType": c.sport_type,
        "status": c.status,
        "maintenanceNotes": c.maintenance_notes,
        "isActive": c.is_active,
        "openTime": c.open_time,
        "closeTime": c.close_time,
        "slotMinutes": c.slot_minutes,
        "hourlyRate": c.hourly_rate,
        "peakRate": c.peak_rate,
        "peakStart": c.peak_start,
        "peakEnd": c.peak_end,
        "currency": c.currency,
        "weeklyHours": c.weekly_hours or {},
        "dateOverrides": c.date_overrides or {},
        "blackoutDates": c.blackout_dates or [],
    }
