"""
Bullet store.

Bullets are reusable resume snippets owned by one user. Every read and write is
scoped by owner; a bullet owned by someone else is reported as not found.
"""
import logging
from typing import List, Optional
from sqlalchemy.orm import Session

from jobhunt.core.errors import NotFoundError, ValidationError
from jobhunt.db.models.bullet import Bullet, MAX_BULLET_LENGTH
from jobhunt.services import experience_bullet_service
from jobhunt.services.query_utils import apply_paging, like_pattern, LIKE_ESCAPE

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_LIMIT = 50


def _clean_text(text: str) -> str:
    text = (text or "").strip()
    if not text or len(text) > MAX_BULLET_LENGTH:
        raise ValidationError(
            f"Bullet text must be between 1 and {MAX_BULLET_LENGTH} characters", entity="bullet"
        )
    return text


def _owned(db: Session, user_id: int):
    return db.query(Bullet).filter(Bullet.user_id == user_id)


def create_bullet(db: Session, user_id: int, text: str) -> Bullet:
    bullet = Bullet(user_id=user_id, text=_clean_text(text))
    db.add(bullet)
    db.commit()
    db.refresh(bullet)

    logger.info(f"Bullet created: bullet_id={bullet.id}, user_id={user_id}")
    return bullet


def list_bullets(
    db: Session,
    user_id: int,
    limit: Optional[int] = None,
    offset: Optional[int] = None
) -> List[Bullet]:
    """List a user's bullets, most recently updated first."""
    query = _owned(db, user_id).order_by(Bullet.updated_at.desc(), Bullet.id.desc())
    bullets = apply_paging(query, limit, offset).all()

    logger.debug(f"Bullets listed: user_id={user_id}, count={len(bullets)}")
    return bullets


def count_bullets(db: Session, user_id: int) -> int:
    return _owned(db, user_id).count()


def get_bullet(db: Session, bullet_id: int, user_id: int) -> Bullet:
    """
    Fetch one bullet owned by user_id.

    Raises:
        NotFoundError: No such bullet for this user
    """
    bullet = _owned(db, user_id).filter(Bullet.id == bullet_id).first()
    if not bullet:
        raise NotFoundError("Bullet not found", entity="bullet")
    return bullet


def update_bullet(db: Session, bullet_id: int, user_id: int, text: str) -> Bullet:
    text = _clean_text(text)
    bullet = get_bullet(db, bullet_id, user_id)

    bullet.text = text
    db.commit()
    db.refresh(bullet)

    logger.info(f"Bullet updated: bullet_id={bullet.id}, user_id={user_id}")
    return bullet


def delete_bullet(db: Session, bullet_id: int, user_id: int) -> int:
    """
    Delete a bullet and every association that uses it, in one transaction.

    Returns:
        Number of experience associations removed along with the bullet
    """
    bullet = get_bullet(db, bullet_id, user_id)
    try:
        removed = experience_bullet_service.delete_by_bullet_id(db, bullet.id, commit=False)
        db.delete(bullet)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(f"Bullet deleted: bullet_id={bullet_id}, user_id={user_id}, associations_removed={removed}")
    return removed


def search_bullets(
    db: Session,
    user_id: int,
    term: str,
    limit: Optional[int] = DEFAULT_SEARCH_LIMIT,
    offset: Optional[int] = 0
) -> List[Bullet]:
    """Case-insensitive substring search over bullet text."""
    if not term:
        raise ValidationError("Search term must not be empty", entity="bullet")

    query = (
        _owned(db, user_id)
        .filter(Bullet.text.ilike(like_pattern(term), escape=LIKE_ESCAPE))
        .order_by(Bullet.updated_at.desc(), Bullet.id.desc())
    )
    bullets = apply_paging(query, limit, offset).all()

    logger.debug(f"Bullets searched: user_id={user_id}, matches={len(bullets)}")
    return bullets
