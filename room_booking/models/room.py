from sqlalchemy import Column, Integer, String, Text, Boolean, JSON, ForeignKey, TIMESTAMP
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from room_booking.database import Base


class Room(Base):
    __tablename__ = "rooms"

    id          = Column(Integer, primary_key=True, index=True)
    name        = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    capacity    = Column(Integer, nullable=True)
    equipment   = Column(JSON, nullable=False, default=list)
    color       = Column(String(20), nullable=True)
    # Soft-delete flag: inactive rooms disappear from booking surfaces only
    isActive    = Column(Boolean, default=True, nullable=False, index=True)
    createdById = Column(Integer, ForeignKey("users.id"), nullable=True)
    createdAt   = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)
    updatedAt   = Column(TIMESTAMP(timezone=True), server_default=func.now(),
                         onupdate=func.now(), nullable=False)

    # ─── Relationships ─────────────────────────────────────────────────────────
    created_by     = relationship("User", foreign_keys=[createdById])
    availability   = relationship("RoomAvailability", back_populates="room")
    unavailability = relationship("RoomUnavailability", back_populates="room")
    reservations   = relationship("RoomReservation", back_populates="room")

    def __repr__(self):
        return f"<Room id={self.id} name={self.name} active={self.isActive}>"
