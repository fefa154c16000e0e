from sqlalchemy import String, Integer, DateTime, Boolean, Text, JSON
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime, timezone
from quickcourt.db.session import Base

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")
COURT_STATUSES = ("active", "maintenance", "inactive")

class Court(Base):
    __tablename__ = "courts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    venue_id: Mapped[str] = mapped_column(String(36), index=True)
    name: Mapped[str] = mapped_column(String(120))
    sport_type: Mapped[str] = mapped_column(String(60))

    # Pricing (whole currency units per hour)
    hourly_rate: Mapped[int] = mapped_column(Integer)
    peak_rate: Mapped[int] = mapped_column(Integer, nullable=True)
    peak_start: Mapped[str] = mapped_column(String(5), nullable=True)  # HH:MM
    peak_end: Mapped[str] = mapped_column(String(5), nullable=True)    # HH:MM
    currency: Mapped[str] = mapped_column(String(3), default="INR")

    # Operating hours; NULL falls back to settings defaults
    open_time: Mapped[str] = mapped_column(String(5), nullable=True)   # HH:MM
    close_time: Mapped[str] = mapped_column(String(5), nullable=True)  # HH:MM
    slot_minutes: Mapped[int] = mapped_column(Integer, nullable=True)

    # {"monday": {"open": "08:00", "close": "20:00"}, ...}
    weekly_hours: Mapped[dict] = mapped_column(JSON, default=lambda: {})
    # {"2025-08-15": {"open": "08:00", "close": "18:00"}}
    date_overrides: Mapped[dict] = mapped_column(JSON, default=lambda: {})
    # ["2025-08-16", ...]
    blackout_dates: Mapped[list] = mapped_column(JSON, default=lambda: [])

    status: Mapped[str] = mapped_column(String(12), default="active")  # active|maintenance|inactive
    maintenance_notes: Mapped[str] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    updated_by: Mapped[str] = mapped_column(String(36), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
