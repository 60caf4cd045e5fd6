"""
Experience store.

Employment records owned by one user. A current job never stores an end date:
when is_current is set the supplied end_date is dropped.
"""
import logging
from datetime import date
from typing import List, Optional
from sqlalchemy.orm import Session

from jobhunt.core.errors import NotFoundError, ValidationError
from jobhunt.db.models.experience import Experience
from jobhunt.services import experience_bullet_service
from jobhunt.services.query_utils import apply_paging

logger = logging.getLogger(__name__)

# Caller-selectable sort columns. Anything else is rejected before a query is built.
SORTABLE_COLUMNS = {
    "start_date": Experience.start_date,
    "end_date": Experience.end_date,
    "company_name": Experience.company_name,
    "job_title": Experience.job_title,
    "created_at": Experience.created_at,
}
SORT_DIRECTIONS = ("ASC", "DESC")

DEFAULT_ORDER_BY = "start_date"
DEFAULT_ORDER_DIRECTION = "DESC"


def resolve_ordering(order_by: str = DEFAULT_ORDER_BY, order_direction: str = DEFAULT_ORDER_DIRECTION):
    """
    Translate an (order_by, order_direction) pair into ORDER BY clauses.

    Raises:
        ValidationError: Column or direction is not in the allow-list
    """
    column = SORTABLE_COLUMNS.get(order_by)
    if column is None:
        raise ValidationError(
            f"order_by must be one of: {', '.join(SORTABLE_COLUMNS)}", entity="experience"
        )
    if order_direction not in SORT_DIRECTIONS:
        raise ValidationError("order_direction must be ASC or DESC", entity="experience")

    if order_direction == "ASC":
        return [column.asc(), Experience.id.asc()]
    return [column.desc(), Experience.id.desc()]


def _resolve_end_date(start_date: date, end_date: Optional[date], is_current: bool) -> Optional[date]:
    """
    End date to store: None for a current job, otherwise the supplied date.

    The store checks the range itself instead of trusting the request layer,
    so direct service callers get a ValidationError too.
    """
    if is_current:
        return None
    if end_date is None:
        raise ValidationError("End date is required when not currently working", entity="experience")
    if end_date <= start_date:
        raise ValidationError("End date must be after start date", entity="experience")
    return end_date


def _owned(db: Session, user_id: int):
    return db.query(Experience).filter(Experience.user_id == user_id)


def create_experience(
    db: Session,
    user_id: int,
    company_name: str,
    job_title: str,
    start_date: date,
    end_date: Optional[date] = None,
    is_current: bool = False
) -> Experience:
    experience = Experience(
        user_id=user_id,
        company_name=company_name,
        job_title=job_title,
        start_date=start_date,
        end_date=_resolve_end_date(start_date, end_date, is_current),
        is_current=bool(is_current),
    )
    db.add(experience)
    db.commit()
    db.refresh(experience)

    logger.info(
        f"Experience created: experience_id={experience.id}, user_id={user_id}, "
        f"company={experience.company_name}"
    )
    return experience


def list_experiences(
    db: Session,
    user_id: int,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
    order_by: str = DEFAULT_ORDER_BY,
    order_direction: str = DEFAULT_ORDER_DIRECTION
) -> List[Experience]:
    ordering = resolve_ordering(order_by, order_direction)
    query = _owned(db, user_id).order_by(*ordering)
    experiences = apply_paging(query, limit, offset).all()

    logger.debug(f"Experiences listed: user_id={user_id}, count={len(experiences)}")
    return experiences


def count_experiences(db: Session, user_id: int) -> int:
    return _owned(db, user_id).count()


def get_experience(db: Session, experience_id: int, user_id: int) -> Experience:
    """
    Fetch one experience owned by user_id.

    Raises:
        NotFoundError: No such experience for this user
    """
    experience = _owned(db, user_id).filter(Experience.id == experience_id).first()
    if not experience:
        raise NotFoundError("Experience not found", entity="experience")
    return experience


def update_experience(
    db: Session,
    experience_id: int,
    user_id: int,
    company_name: str,
    job_title: str,
    start_date: date,
    end_date: Optional[date] = None,
    is_current: bool = False
) -> Experience:
    """Replace every editable field of an experience."""
    final_end_date = _resolve_end_date(start_date, end_date, is_current)
    experience = get_experience(db, experience_id, user_id)

    experience.company_name = company_name
    experience.job_title = job_title
    experience.start_date = start_date
    experience.end_date = final_end_date
    experience.is_current = bool(is_current)
    db.commit()
    db.refresh(experience)

    logger.info(f"Experience updated: experience_id={experience.id}, user_id={user_id}")
    return experience


def delete_experience(db: Session, experience_id: int, user_id: int) -> int:
    """
    Delete an experience and all of its bullet associations.

    Returns:
        Number of associations removed
    """
    experience = get_experience(db, experience_id, user_id)
    try:
        removed = experience_bullet_service.delete_by_experience_id(db, experience.id, commit=False)
        db.delete(experience)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(
        f"Experience deleted: experience_id={experience_id}, user_id={user_id}, "
        f"associations_removed={removed}"
    )
    return removed
