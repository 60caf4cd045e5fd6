"""
Pydantic schemas for experience endpoints and the experience/bullet association.

Experience and ExperienceWithBullets are separate response types; callers pick
one explicitly with the include_bullets flag.
"""
from typing import Optional, List
from datetime import date, datetime
from pydantic import BaseModel, Field, model_validator


class ExperienceBase(BaseModel):
    """Base experience schema with common fields."""
    company_name: str = Field(..., description="Company name", min_length=1, max_length=255)
    job_title: str = Field(..., description="Job title", min_length=1, max_length=255)
    start_date: date = Field(..., description="First day in the role")
    end_date: Optional[date] = Field(None, description="Last day in the role, null while current")
    is_current: bool = Field(False, description="Currently employed here")


class ExperienceCreate(ExperienceBase):
    """
    Schema for creating or replacing an experience.

    A current job must not carry an end date; a past job needs one that falls
    after the start date.
    """

    @model_validator(mode="after")
    def check_date_range(self):
        if self.is_current and self.end_date is not None:
            raise ValueError("End date should not be provided when currently working")
        if not self.is_current and self.end_date is None:
            raise ValueError("End date is required when not currently working")
        if self.end_date is not None and self.end_date <= self.start_date:
            raise ValueError("End date must be after start date")
        return self


class ExperienceUpdate(ExperienceCreate):
    """Schema for replacing an existing experience (PUT semantics)."""
    pass


class ExperienceResponse(ExperienceBase):
    """Schema for experience response."""
    id: int = Field(..., description="Experience ID")
    user_id: int = Field(..., description="User ID who owns this experience")
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ExperienceBulletItem(BaseModel):
    """A bullet as embedded under an experience."""
    id: int
    text: str
    created_at: datetime
    updated_at: datetime
    association_created_at: datetime


class ExperienceWithBullets(ExperienceBase):
    """An experience with its associated bullets, oldest bullet first."""
    id: int
    user_id: int
    created_at: datetime
    updated_at: datetime
    bullets: List[ExperienceBulletItem] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "id": 3,
                "user_id": 1,
                "company_name": "Acme",
                "job_title": "Backend Engineer",
                "start_date": "2020-01-01",
                "end_date": "2021-01-01",
                "is_current": False,
                "created_at": "2026-01-15T09:00:00Z",
                "updated_at": "2026-01-15T09:00:00Z",
                "bullets": [
                    {
                        "id": 7,
                        "text": "Led migration",
                        "created_at": "2026-01-15T09:01:00Z",
                        "updated_at": "2026-01-15T09:01:00Z",
                        "association_created_at": "2026-01-15T09:02:00Z"
                    }
                ]
            }
        }


class ExperienceListResponse(BaseModel):
    experiences: List[ExperienceResponse]
    total: int


class ExperienceWithBulletsListResponse(BaseModel):
    experiences: List[ExperienceWithBullets]
    total: int


class AssociationCreate(BaseModel):
    bullet_id: int = Field(..., description="Bullet to attach", gt=0)


class AssociationResponse(BaseModel):
    """One experience_bullets row."""
    id: int
    experience_id: int
    bullet_id: int
    created_at: datetime

    class Config:
        from_attributes = True


class AssociationListResponse(BaseModel):
    associations: List[AssociationResponse]
    total: int


class UserStats(BaseModel):
    """
    Aggregate counts over a user's experiences and their bullets.

    avg_bullets_per_experience only averages over experiences that have at
    least one bullet.
    """
    total_experiences: int = 0
    total_bullets_used: int = 0
    total_associations: int = 0
    avg_bullets_per_experience: float = 0.0
