from sqlalchemy import Column, Integer, String, Text, Date, ForeignKey, TIMESTAMP, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from room_booking.database import Base
from room_booking.utils.timeslots import TimeRange


class RoomUnavailability(Base):
    """Date-scoped closure (maintenance, holidays) that overrides opening hours."""
    __tablename__ = "room_unavailability"
    __table_args__ = (
        Index("ix_room_unavailability_room_date", "roomId", "date"),
    )

    id          = Column(Integer, primary_key=True, index=True)
    roomId      = Column(Integer, ForeignKey("rooms.id"), nullable=False)
    date        = Column(Date, nullable=False, index=True)
    startTime   = Column(String(5), nullable=False)
    endTime     = Column(String(5), nullable=False)
    reason      = Column(Text, nullable=True)
    createdById = Column(Integer, ForeignKey("users.id"), nullable=True)
    createdAt   = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)
    updatedAt   = Column(TIMESTAMP(timezone=True), server_default=func.now(),
                         onupdate=func.now(), nullable=False)

    # ─── Relationships ─────────────────────────────────────────────────────────
    room = relationship("Room", back_populates="unavailability")

    @property
    def time_range(self) -> TimeRange:
        return TimeRange.parse(self.startTime, self.endTime)

    def __repr__(self):
        return f"<RoomUnavailability room={self.roomId} {self.date} {self.startTime}-{self.endTime}>"
