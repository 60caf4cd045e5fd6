"""
Ownership gate for experience/bullet pairs.

Both parents are resolved in a single statement before any decision is made, so
the outcome never reveals which of the two ids was missing.
"""
import logging
from sqlalchemy.orm import Session

from jobhunt.core.errors import NotFoundError, ForbiddenError
from jobhunt.db.models.bullet import Bullet
from jobhunt.db.models.experience import Experience

logger = logging.getLogger(__name__)


def validate_ownership(
    db: Session,
    experience_id: int,
    bullet_id: int,
    user_id: int,
    lock: bool = True
) -> None:
    """
    Confirm user_id owns both the experience and the bullet.

    With lock=True both rows are read FOR SHARE, so a concurrent delete of either
    parent waits until the caller's transaction ends. SQLite ignores the clause.

    Raises:
        NotFoundError: Either row does not exist
        ForbiddenError: Either row belongs to a different user
    """
    query = (
        db.query(Experience.user_id, Bullet.user_id)
        .select_from(Experience)
        .join(Bullet, Bullet.id == bullet_id)
        .filter(Experience.id == experience_id)
    )
    if lock:
        query = query.with_for_update(read=True)

    row = query.first()
    if row is None:
        raise NotFoundError("Experience or bullet not found")

    experience_owner, bullet_owner = row
    if experience_owner != user_id or bullet_owner != user_id:
        logger.warning(
            f"Ownership check failed: experience_id={experience_id}, bullet_id={bullet_id}, "
            f"user_id={user_id}"
        )
        raise ForbiddenError("Access denied: you can only associate your own experiences and bullets")
