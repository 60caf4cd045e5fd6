"""
Job store: the postings a user is applying to.
"""
import logging
from typing import List, Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session

from jobhunt.core.errors import NotFoundError, ValidationError
from jobhunt.db.models.job import Job
from jobhunt.services.query_utils import apply_paging, like_pattern, LIKE_ESCAPE

logger = logging.getLogger(__name__)


def _owned(db: Session, user_id: int):
    return db.query(Job).filter(Job.user_id == user_id)


def _require_fields(company_name: str, description: str) -> None:
    if not company_name or not description:
        raise ValidationError("Company name and description are required", entity="job")


def _search_filter(term: str):
    pattern = like_pattern(term)
    return or_(
        Job.company_name.ilike(pattern, escape=LIKE_ESCAPE),
        Job.description.ilike(pattern, escape=LIKE_ESCAPE),
    )


def create_job(
    db: Session,
    user_id: int,
    company_name: str,
    description: str,
    application_link: Optional[str] = None
) -> Job:
    _require_fields(company_name, description)
    job = Job(
        user_id=user_id,
        company_name=company_name,
        description=description,
        application_link=application_link or None,
    )
    db.add(job)
    db.commit()
    db.refresh(job)

    logger.info(f"Job created: job_id={job.id}, user_id={user_id}, company={job.company_name}")
    return job


def list_jobs(
    db: Session,
    user_id: int,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
    search: Optional[str] = None
) -> List[Job]:
    """List a user's jobs, most recently updated first, optionally filtered by search."""
    query = _owned(db, user_id)
    if search:
        query = query.filter(_search_filter(search))
    query = query.order_by(Job.updated_at.desc(), Job.id.desc())
    jobs = apply_paging(query, limit, offset).all()

    logger.debug(f"Jobs listed: user_id={user_id}, count={len(jobs)}")
    return jobs


def count_jobs(db: Session, user_id: int, search: Optional[str] = None) -> int:
    query = _owned(db, user_id)
    if search:
        query = query.filter(_search_filter(search))
    return query.count()


def get_job(db: Session, job_id: int, user_id: int) -> Job:
    job = _owned(db, user_id).filter(Job.id == job_id).first()
    if not job:
        raise NotFoundError("Job not found", entity="job")
    return job


def update_job(
    db: Session,
    job_id: int,
    user_id: int,
    company_name: str,
    description: str,
    application_link: Optional[str] = None
) -> Job:
    _require_fields(company_name, description)
    job = get_job(db, job_id, user_id)
    job.company_name = company_name
    job.description = description
    job.application_link = application_link or None
    db.commit()
    db.refresh(job)

    logger.info(f"Job updated: job_id={job.id}, user_id={user_id}")
    return job


def delete_job(db: Session, job_id: int, user_id: int) -> None:
    job = get_job(db, job_id, user_id)
    db.delete(job)
    db.commit()

    logger.info(f"Job deleted: job_id={job_id}, user_id={user_id}")
