"""
Experience model: one employment record owned by one user.
"""
from sqlalchemy import Column, Integer, String, Date, DateTime, Boolean, ForeignKey, Index, CheckConstraint
from sqlalchemy.sql import func
from jobhunt.db.base import Base, utcnow


class Experience(Base):
    __tablename__ = "experience"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    company_name = Column(String(255), nullable=False)
    job_title = Column(String(255), nullable=False)

    # Date range; end_date is null while is_current is set
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)
    is_current = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), onupdate=utcnow, nullable=False)

    __table_args__ = (
        CheckConstraint(
            "NOT (is_current AND end_date IS NOT NULL)",
            name="ck_experience_current_without_end_date",
        ),
        CheckConstraint(
            "end_date IS NULL OR end_date > start_date",
            name="ck_experience_end_after_start",
        ),
        Index("idx_experience_user_start", "user_id", "start_date"),
    )

    def __repr__(self):
        return f"<Experience(id={self.id}, company_name='{self.company_name}', job_title='{self.job_title}')>"
