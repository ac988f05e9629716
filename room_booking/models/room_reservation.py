import enum
from sqlalchemy import Column, Integer, String, Text, Date, Enum, ForeignKey, TIMESTAMP, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from room_booking.database import Base
from room_booking.utils.timeslots import TimeRange


class ReservationStatus(str, enum.Enum):
    PENDING   = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


# Statuses that occupy the room
ACTIVE_STATUSES = (ReservationStatus.PENDING, ReservationStatus.CONFIRMED)


class RoomReservation(Base):
    __tablename__ = "room_reservations"
    __table_args__ = (
        Index("ix_room_reservations_room_date", "roomId", "date"),
    )

    id            = Column(Integer, primary_key=True, index=True)
    roomId        = Column(Integer, ForeignKey("rooms.id"), nullable=False)
    date          = Column(Date, nullable=False, index=True)
    startTime     = Column(String(5), nullable=False)
    endTime       = Column(String(5), nullable=False)
    customerName  = Column(String(150), nullable=False)
    customerEmail = Column(String(255), nullable=True)
    customerPhone = Column(String(30), nullable=True)
    purpose       = Column(Text, nullable=True)
    notes         = Column(Text, nullable=True)
    status        = Column(Enum(ReservationStatus, values_callable=lambda e: [m.value for m in e]),
                           default=ReservationStatus.PENDING, nullable=False, index=True)
    createdById   = Column(Integer, ForeignKey("users.id"), nullable=True)  # NULL = public booking
    createdAt     = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)
    updatedAt     = Column(TIMESTAMP(timezone=True), server_default=func.now(),
                           onupdate=func.now(), nullable=False)

    # ─── Relationships ─────────────────────────────────────────────────────────
    room = relationship("Room", back_populates="reservations")

    @property
    def time_range(self) -> TimeRange:
        return TimeRange.parse(self.startTime, self.endTime)

    @property
    def is_cancelled(self) -> bool:
        return self.status == ReservationStatus.CANCELLED

    def __repr__(self):
        return f"<RoomReservation id={self.id} room={self.roomId} {self.date} {self.status}>"
