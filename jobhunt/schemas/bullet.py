"""
Pydantic schemas for bullet endpoints.
"""
from datetime import datetime
from pydantic import BaseModel, Field, field_validator

from jobhunt.db.models.bullet import MAX_BULLET_LENGTH


class BulletBase(BaseModel):
    text: str = Field(..., description="Bullet text", min_length=1, max_length=MAX_BULLET_LENGTH)

    @field_validator("text")
    @classmethod
    def strip_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Bullet text must not be blank")
        return value


class BulletCreate(BulletBase):
    pass


class BulletUpdate(BulletBase):
    pass


class BulletResponse(BulletBase):
    """Schema for bullet response."""
    id: int
    user_id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
        json_schema_extra = {
            "example": {
                "id": 7,
                "user_id": 1,
                "text": "Led migration of billing service to Postgres",
                "created_at": "2026-01-15T09:00:00Z",
                "updated_at": "2026-01-15T09:00:00Z"
            }
        }


class BulletListResponse(BaseModel):
    bullets: list[BulletResponse] = Field(..., description="Bullets in this page")
    total: int = Field(..., description="Total number of matching bullets")
    count: int = Field(..., description="Number of bullets in this page")
