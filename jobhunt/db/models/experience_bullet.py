"""
ExperienceBullet: join row recording that a bullet is used under an experience.

The (experience_id, bullet_id) pair is unique and both foreign keys cascade,
so deleting either parent removes its associations at the storage layer.
"""
from sqlalchemy import Column, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from jobhunt.db.base import Base, utcnow


class ExperienceBullet(Base):
    __tablename__ = "experience_bullets"

    id = Column(Integer, primary_key=True, index=True)
    experience_id = Column(Integer, ForeignKey("experience.id", ondelete="CASCADE"), nullable=False, index=True)
    bullet_id = Column(Integer, ForeignKey("bullets.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)

    __table_args__ = (
        UniqueConstraint("experience_id", "bullet_id", name="uq_experience_bullet"),
    )

    def __repr__(self):
        return f"<ExperienceBullet(experience_id={self.experience_id}, bullet_id={self.bullet_id})>"
