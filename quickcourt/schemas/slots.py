from pydantic import BaseModel, Field
from typing import List, Optional

from quickcourt.models.time_slot import TimeSlot

class SlotOut(BaseModel):
    id: str
    court: str
    date: str
    startTime: str
    endTime: str
    status: str
    price: int
    blockReason: Optional[str] = None
    bookingRef: Optional[str] = None

    @classmethod
    def from_slot(cls, s: TimeSlot) -> "SlotOut":
        return cls(
            id=s.id,
            court=s.court_id,
            date=s.date_str,
            startTime=s.start,
            endTime=s.end,
            status=s.status.value,
            price=s.price,
            blockReason=s.block_reason,
            bookingRef=s.booking_ref,
        )

class SlotListOut(BaseModel):
    slots: List[SlotOut]

class SlotDayOut(BaseModel):
    date: str
    slots: List[SlotOut]

class SlotDaysOut(BaseModel):
    days: List[SlotDayOut]

class GenerateSlotsIn(BaseModel):
    startDate: str = Field(default="", description="First date YYYY-MM-DD (inclusive)")
    endDate: str = Field(default="", description="Last date YYYY-MM-DD (inclusive)")
    clearExisting: bool = False

class GenerateSlotsOut(BaseModel):
    message: str
    created: int = 0
    refreshed: int = 0
    skippedBooked: int = 0
    retired: int = 0
    slots: List[SlotOut]

class UpdateSlotsIn(BaseModel):
    slotIds: List[str] = Field(default_factory=list)
    status: str = ""
    reason: Optional[str] = None

class UpdateSlotsOut(BaseModel):
    message: str
    modifiedCount: int
    skipped: List[str] = Field(default_factory=list)

class OperatingHours(BaseModel):
    open: str
    close: str

class DaySlotsOut(BaseModel):
    date: str
    operatingHours: Optional[OperatingHours] = None
    slots: List[SlotOut]
