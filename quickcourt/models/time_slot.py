import enum
from sqlalchemy import String, Integer, DateTime, UniqueConstraint, Enum
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime, timezone
from quickcourt.db.session import Base


class SlotStatus(str, enum.Enum):
    AVAILABLE = "available"
    BOOKED = "booked"
    BLOCKED = "blocked"
    MAINTENANCE = "maintenance"


class TimeSlot(Base):
    __tablename__ = "time_slots"
    __table_args__ = (
        UniqueConstraint("court_id", "date_str", "start", name="uq_time_slot_court_date_start"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    court_id: Mapped[str] = mapped_column(String(36), index=True)

    date_str: Mapped[str] = mapped_column(String(10), index=True)  # YYYY-MM-DD
    start: Mapped[str] = mapped_column(String(5))  # HH:MM
    end: Mapped[str] = mapped_column(String(5))    # HH:MM

    status: Mapped[SlotStatus] = mapped_column(
        Enum(SlotStatus, name="slot_status", values_callable=lambda e: [m.value for m in e], native_enum=False, length=12),
        default=SlotStatus.AVAILABLE,
        index=True,
    )
    price: Mapped[int] = mapped_column(Integer)
    block_reason: Mapped[str] = mapped_column(String(255), nullable=True)

    # Set by the booking flow while status is booked
    booking_ref: Mapped[str] = mapped_column(String(20), nullable=True, index=True)
    booked_by: Mapped[str] = mapped_column(String(36), nullable=True)

    updated_by: Mapped[str] = mapped_column(String(36), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
