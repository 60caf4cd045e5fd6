"""
Bullet model: a reusable resume snippet owned by one user.

A bullet can be attached to any number of the same user's experiences
through ExperienceBullet.
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index
from sqlalchemy.sql import func
from jobhunt.db.base import Base, utcnow

MAX_BULLET_LENGTH = 500


class Bullet(Base):
    __tablename__ = "bullets"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    text = Column(String(MAX_BULLET_LENGTH), nullable=False)

    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), onupdate=utcnow, nullable=False)

    __table_args__ = (
        Index("idx_bullets_user_updated", "user_id", "updated_at"),
    )

    def __repr__(self):
        preview = self.text[:50] + "..." if self.text and len(self.text) > 50 else self.text
        return f"<Bullet(id={self.id}, text='{preview}')>"
