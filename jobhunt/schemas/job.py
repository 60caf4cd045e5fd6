"""
Pydantic schemas for job endpoints.
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field


class JobBase(BaseModel):
    """Base job schema with common fields."""
    company_name: str = Field(..., description="Company name", min_length=1, max_length=255)
    description: str = Field(..., description="Job description", min_length=1, max_length=5000)
    application_link: Optional[str] = Field(None, description="Job posting URL", max_length=2048)


class JobCreate(JobBase):
    """Schema for creating a new job."""
    pass


class JobUpdate(JobBase):
    """Schema for replacing an existing job."""
    pass


class JobResponse(JobBase):
    """Schema for job response."""
    id: int = Field(..., description="Job ID")
    user_id: int = Field(..., description="User ID who owns this job")
    created_at: datetime = Field(..., description="Job creation timestamp")
    updated_at: datetime = Field(..., description="Job last update timestamp")

    class Config:
        from_attributes = True
        json_schema_extra = {
            "example": {
                "id": 1,
                "user_id": 1,
                "company_name": "Tech Corp",
                "description": "Backend engineer, Python and Postgres.",
                "application_link": "https://example.com/job/123",
                "created_at": "2026-01-15T09:00:00Z",
                "updated_at": "2026-01-15T10:00:00Z"
            }
        }


class JobListResponse(BaseModel):
    """Schema for list of jobs response."""
    jobs: list[JobResponse] = Field(..., description="List of jobs")
    total: int = Field(..., description="Total number of matching jobs")
    count: int = Field(..., description="Number of jobs in this page")
