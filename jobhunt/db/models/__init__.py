"""
Database models module.

This module imports all database models to ensure they are registered with SQLAlchemy's Base.metadata
before table creation.

All models must be imported here to be included in database migrations and table creation.
"""
from jobhunt.db.models.user import User
from jobhunt.db.models.job import Job
from jobhunt.db.models.bullet import Bullet
from jobhunt.db.models.experience import Experience
from jobhunt.db.models.experience_bullet import ExperienceBullet

__all__ = [
    "User",
    "Job",
    "Bullet",
    "Experience",
    "ExperienceBullet",
]
