import enum
from datetime import date
from sqlalchemy import Column, Integer, String, Enum, ForeignKey, TIMESTAMP, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from room_booking.database import Base
from room_booking.utils.timeslots import TimeRange


class Weekday(str, enum.Enum):
    MONDAY    = "monday"
    TUESDAY   = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY  = "thursday"
    FRIDAY    = "friday"
    SATURDAY  = "saturday"
    SUNDAY    = "sunday"

    @classmethod
    def from_date(cls, day: date) -> "Weekday":
        return list(cls)[day.weekday()]


class RoomAvailability(Base):
    """Recurring weekly opening window. At most one per room and weekday."""
    __tablename__ = "room_availability"
    __table_args__ = (
        UniqueConstraint("roomId", "dayOfWeek", name="uq_room_availability_room_day"),
    )

    id          = Column(Integer, primary_key=True, index=True)
    roomId      = Column(Integer, ForeignKey("rooms.id"), nullable=False, index=True)
    dayOfWeek   = Column(Enum(Weekday, values_callable=lambda e: [m.value for m in e]),
                         nullable=False)
    startTime   = Column(String(5), nullable=False)   # HH:MM
    endTime     = Column(String(5), nullable=False)   # HH:MM
    createdById = Column(Integer, ForeignKey("users.id"), nullable=True)
    createdAt   = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)
    updatedAt   = Column(TIMESTAMP(timezone=True), server_default=func.now(),
                         onupdate=func.now(), nullable=False)

    # ─── Relationships ─────────────────────────────────────────────────────────
    room = relationship("Room", back_populates="availability")

    @property
    def window(self) -> TimeRange:
        return TimeRange.parse(self.startTime, self.endTime)

    def __repr__(self):
        return f"<RoomAvailability room={self.roomId} {self.dayOfWeek} {self.startTime}-{self.endTime}>"
