"""
Experience/bullet association service.

Owns the many-to-many relation between Experience and Bullet:

- associate / disassociate a pair after the ownership gate passes
- aggregated reads across the join (experiences with their bullets, user stats)
- bulk removal used by the parent stores' delete paths

An association is either absent or present. Creating an existing pair raises
ConflictError; removing a missing pair raises NotFoundError.
"""
import logging
from typing import Dict, Iterable, List, Optional
from sqlalchemy import and_, distinct, func, select
from sqlalchemy.orm import Session

from jobhunt.core.errors import ConflictError, InvalidReferenceError, NotFoundError, JobHuntError
from jobhunt.db.models.bullet import Bullet
from jobhunt.db.models.experience import Experience
from jobhunt.db.models.experience_bullet import ExperienceBullet
from jobhunt.db.storage import InsertOutcome, insert_association
from jobhunt.schemas.experience import ExperienceBulletItem, ExperienceWithBullets, UserStats
from jobhunt.services.ownership import validate_ownership

logger = logging.getLogger(__name__)


def create_association(db: Session, experience_id: int, bullet_id: int) -> ExperienceBullet:
    """
    Insert a join row inside the current transaction (no commit).

    Callers must have passed validate_ownership in the same transaction.

    Raises:
        ConflictError: The pair already exists
        InvalidReferenceError: A parent row no longer exists
    """
    result = insert_association(db, experience_id, bullet_id)
    if result.ok:
        return result.row

    db.rollback()
    if result.outcome is InsertOutcome.CONFLICT:
        raise ConflictError("This bullet is already associated with this experience") from result.error
    if result.outcome is InsertOutcome.INVALID_REFERENCE:
        raise InvalidReferenceError("Invalid experience or bullet ID") from result.error
    raise result.error


def associate_bullet(db: Session, experience_id: int, bullet_id: int, user_id: int) -> ExperienceBullet:
    """
    Attach a bullet to an experience, both owned by user_id.

    Ownership check and insert run in one transaction.
    """
    try:
        validate_ownership(db, experience_id, bullet_id, user_id)
        association = create_association(db, experience_id, bullet_id)
        db.commit()
    except JobHuntError:
        db.rollback()
        raise

    db.refresh(association)
    logger.info(
        f"Bullet associated: experience_id={experience_id}, bullet_id={bullet_id}, "
        f"user_id={user_id}, association_id={association.id}"
    )
    return association


def disassociate_bullet(db: Session, experience_id: int, bullet_id: int, user_id: int) -> None:
    """
    Detach a bullet from an experience, both owned by user_id.

    Raises:
        NotFoundError: Either parent is missing, or the pair is not associated
        ForbiddenError: Either parent belongs to another user
    """
    try:
        validate_ownership(db, experience_id, bullet_id, user_id)
        removed = (
            db.query(ExperienceBullet)
            .filter(
                ExperienceBullet.experience_id == experience_id,
                ExperienceBullet.bullet_id == bullet_id
            )
            .delete(synchronize_session=False)
        )
        if removed == 0:
            raise NotFoundError("Association not found", entity="association")
        db.commit()
    except JobHuntError:
        db.rollback()
        raise

    logger.info(
        f"Bullet disassociated: experience_id={experience_id}, bullet_id={bullet_id}, user_id={user_id}"
    )


def find_association(db: Session, experience_id: int, bullet_id: int) -> Optional[ExperienceBullet]:
    return (
        db.query(ExperienceBullet)
        .filter(
            ExperienceBullet.experience_id == experience_id,
            ExperienceBullet.bullet_id == bullet_id
        )
        .first()
    )


def list_by_experience(db: Session, experience_id: int) -> List[ExperienceBullet]:
    """Associations for one experience, oldest first."""
    return (
        db.query(ExperienceBullet)
        .filter(ExperienceBullet.experience_id == experience_id)
        .order_by(ExperienceBullet.created_at.asc(), ExperienceBullet.id.asc())
        .all()
    )


def list_by_bullet(db: Session, bullet_id: int) -> List[ExperienceBullet]:
    """Associations for one bullet, oldest first."""
    return (
        db.query(ExperienceBullet)
        .filter(ExperienceBullet.bullet_id == bullet_id)
        .order_by(ExperienceBullet.created_at.asc(), ExperienceBullet.id.asc())
        .all()
    )


def group_experience_rows(rows: Iterable) -> List[ExperienceWithBullets]:
    """
    Fold flat experience/bullet join rows into one record per experience.

    Rows must already be ordered; experiences keep first-seen order and bullets
    keep row order. A row with bullet_id None only contributes its experience.
    """
    grouped: Dict[int, ExperienceWithBullets] = {}

    for row in rows:
        experience = grouped.get(row.experience_id)
        if experience is None:
            experience = ExperienceWithBullets(
                id=row.experience_id,
                user_id=row.user_id,
                company_name=row.company_name,
                job_title=row.job_title,
                start_date=row.start_date,
                end_date=row.end_date,
                is_current=row.is_current,
                created_at=row.experience_created_at,
                updated_at=row.experience_updated_at,
                bullets=[],
            )
            grouped[row.experience_id] = experience

        if row.bullet_id is not None:
            experience.bullets.append(ExperienceBulletItem(
                id=row.bullet_id,
                text=row.bullet_text,
                created_at=row.bullet_created_at,
                updated_at=row.bullet_updated_at,
                association_created_at=row.association_created_at,
            ))

    return list(grouped.values())


def get_experiences_with_bullets(
    db: Session,
    user_id: int,
    experience_id: Optional[int] = None
) -> List[ExperienceWithBullets]:
    """
    Every experience owned by user_id with its bullets embedded.

    Experiences without bullets are included with an empty list. Experiences are
    ordered by start_date descending, bullets by their created_at ascending.
    """
    query = (
        db.query(
            Experience.id.label("experience_id"),
            Experience.user_id,
            Experience.company_name,
            Experience.job_title,
            Experience.start_date,
            Experience.end_date,
            Experience.is_current,
            Experience.created_at.label("experience_created_at"),
            Experience.updated_at.label("experience_updated_at"),
            Bullet.id.label("bullet_id"),
            Bullet.text.label("bullet_text"),
            Bullet.created_at.label("bullet_created_at"),
            Bullet.updated_at.label("bullet_updated_at"),
            ExperienceBullet.created_at.label("association_created_at"),
        )
        .select_from(Experience)
        .outerjoin(ExperienceBullet, ExperienceBullet.experience_id == Experience.id)
        .outerjoin(
            Bullet,
            and_(Bullet.id == ExperienceBullet.bullet_id, Bullet.user_id == Experience.user_id)
        )
        .filter(Experience.user_id == user_id)
    )
    if experience_id is not None:
        query = query.filter(Experience.id == experience_id)

    rows = query.order_by(
        Experience.start_date.desc(),
        Experience.id.desc(),
        Bullet.created_at.asc(),
        Bullet.id.asc(),
    ).all()

    experiences = group_experience_rows(rows)
    logger.debug(f"Experiences with bullets loaded: user_id={user_id}, experiences={len(experiences)}")
    return experiences


def delete_by_experience_id(db: Session, experience_id: int, commit: bool = True) -> int:
    """Remove every association of an experience. Returns the number removed (0 is fine)."""
    removed = (
        db.query(ExperienceBullet)
        .filter(ExperienceBullet.experience_id == experience_id)
        .delete(synchronize_session=False)
    )
    if commit:
        db.commit()
    return removed


def delete_by_bullet_id(db: Session, bullet_id: int, commit: bool = True) -> int:
    """Remove every association of a bullet. Returns the number removed (0 is fine)."""
    removed = (
        db.query(ExperienceBullet)
        .filter(ExperienceBullet.bullet_id == bullet_id)
        .delete(synchronize_session=False)
    )
    if commit:
        db.commit()
    return removed


def get_user_stats(db: Session, user_id: int) -> UserStats:
    """
    Aggregate association statistics for one user.

    The average is total associations divided by the number of experiences that
    have at least one bullet; bullet-less experiences do not drag it down.
    """
    owned = Experience.user_id == user_id

    def _over_user_links(column):
        return (
            select(column)
            .select_from(ExperienceBullet)
            .join(Experience, Experience.id == ExperienceBullet.experience_id)
            .where(owned)
            .scalar_subquery()
        )

    stmt = select(
        select(func.count(Experience.id)).where(owned).scalar_subquery().label("total_experiences"),
        _over_user_links(func.count(distinct(ExperienceBullet.bullet_id))).label("total_bullets_used"),
        _over_user_links(func.count(ExperienceBullet.id)).label("total_associations"),
        _over_user_links(func.count(distinct(ExperienceBullet.experience_id))).label("experiences_with_bullets"),
    )
    row = db.execute(stmt).one()

    total_associations = int(row.total_associations or 0)
    experiences_with_bullets = int(row.experiences_with_bullets or 0)
    average = total_associations / experiences_with_bullets if experiences_with_bullets else 0.0

    return UserStats(
        total_experiences=int(row.total_experiences or 0),
        total_bullets_used=int(row.total_bullets_used or 0),
        total_associations=total_associations,
        avg_bullets_per_experience=average,
    )
