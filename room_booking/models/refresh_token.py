from datetime import datetime, timezone
from sqlalchemy import Column, Integer, Text, Boolean, ForeignKey, TIMESTAMP
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from room_booking.database import Base


class RefreshToken(Base):
    __tablename__ = "refresh_tokens"

    id        = Column(Integer, primary_key=True, index=True)
    userId    = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    token     = Column(Text, nullable=False, unique=True)
    expiresAt = Column(TIMESTAMP(timezone=True), nullable=False)
    revoked   = Column(Boolean, default=False, nullable=False)
    createdAt = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)

    # ─── Relationships ─────────────────────────────────────────────────────────
    user = relationship("User", back_populates="refresh_tokens")

    @property
    def is_expired(self) -> bool:
        # SQLite hands back naive datetimes
        expires = self.expiresAt
        if expires.tzinfo is None:
            expires = expires.replace(tzinfo=timezone.utc)
        return expires < datetime.now(timezone.utc)

    def __repr__(self):
        return f"<RefreshToken id={self.id} userId={self.userId} revoked={self.revoked}>"
