"""
Storage adapter for association writes.

Translates engine-specific integrity failures into a tagged InsertOutcome so the
association service never inspects driver error codes itself.
"""
import enum
import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobhunt.db.models.experience_bullet import ExperienceBullet

logger = logging.getLogger(__name__)

# Postgres SQLSTATE codes
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"


class InsertOutcome(str, enum.Enum):
    OK = "ok"
    CONFLICT = "conflict"
    INVALID_REFERENCE = "invalid_reference"
    OTHER = "other"


@dataclass
class InsertResult:
    outcome: InsertOutcome
    row: Optional[ExperienceBullet] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.outcome is InsertOutcome.OK


def classify_integrity_error(error: IntegrityError) -> InsertOutcome:
    """Map a driver-level integrity error onto an InsertOutcome."""
    orig = error.orig
    # psycopg2 exposes pgcode, psycopg 3 exposes sqlstate
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code == UNIQUE_VIOLATION:
        return InsertOutcome.CONFLICT
    if code == FOREIGN_KEY_VIOLATION:
        return InsertOutcome.INVALID_REFERENCE

    message = str(orig).upper()
    if "UNIQUE CONSTRAINT FAILED" in message:
        return InsertOutcome.CONFLICT
    if "FOREIGN KEY CONSTRAINT FAILED" in message:
        return InsertOutcome.INVALID_REFERENCE
    return InsertOutcome.OTHER


def insert_association(db: Session, experience_id: int, bullet_id: int) -> InsertResult:
    """
    Insert one experience_bullets row inside the caller's transaction.

    The row is flushed but not committed. On any non-OK outcome the session must
    be rolled back by the caller before it is reused.
    """
    association = ExperienceBullet(experience_id=experience_id, bullet_id=bullet_id)
    db.add(association)
    try:
        db.flush()
    except IntegrityError as e:
        outcome = classify_integrity_error(e)
        logger.warning(
            f"Association insert rejected: experience_id={experience_id}, "
            f"bullet_id={bullet_id}, outcome={outcome.value}"
        )
        return InsertResult(outcome=outcome, error=e)

    return InsertResult(outcome=InsertOutcome.OK, row=association)
