"""
Job endpoints for the job tracker.

Provides CRUD operations for the postings a user is applying to.
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session

from jobhunt.api.errors import to_http_exception
from jobhunt.core.auth_dependency import get_db, get_current_user_obj
from jobhunt.core.errors import JobHuntError
from jobhunt.db.models.user import User
from jobhunt.schemas.job import (
    JobCreate,
    JobUpdate,
    JobResponse,
    JobListResponse,
)
from jobhunt.services import job_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/jobs", tags=["Jobs"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=JobResponse)
def create_job(
    job_data: JobCreate,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """Create a job entry owned by the authenticated user."""
    try:
        job = job_service.create_job(
            db, user.id,
            company_name=job_data.company_name,
            description=job_data.description,
            application_link=job_data.application_link
        )
        return JobResponse.model_validate(job)

    except JobHuntError as e:
        db.rollback()
        raise to_http_exception(e)
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to create job: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create job"
        )


@router.get("", status_code=status.HTTP_200_OK, response_model=JobListResponse)
def list_jobs(
    limit: Optional[int] = Query(None, ge=1, le=100, description="Page size"),
    offset: Optional[int] = Query(None, ge=0, description="Rows to skip"),
    search: Optional[str] = Query(None, min_length=1, max_length=100, description="Search in company and description"),
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """
    List the user's jobs, most recently updated first.
    """
    try:
        jobs = job_service.list_jobs(db, user.id, limit=limit, offset=offset, search=search)
        total = job_service.count_jobs(db, user.id, search=search)

        return JobListResponse(
            jobs=[JobResponse.model_validate(job) for job in jobs],
            total=total,
            count=len(jobs)
        )

    except JobHuntError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Failed to list jobs: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list jobs"
        )


@router.get("/{job_id}", status_code=status.HTTP_200_OK, response_model=JobResponse)
def get_job(
    job_id: int,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """
    Get a specific job by ID.

    Returns 404 if job not found or user doesn't have access.
    """
    try:
        return JobResponse.model_validate(job_service.get_job(db, job_id, user.id))
    except JobHuntError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Failed to get job: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get job"
        )


@router.put("/{job_id}", status_code=status.HTTP_200_OK, response_model=JobResponse)
def update_job(
    job_id: int,
    job_data: JobUpdate,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    try:
        job = job_service.update_job(
            db, job_id, user.id,
            company_name=job_data.company_name,
            description=job_data.description,
            application_link=job_data.application_link
        )
        return JobResponse.model_validate(job)

    except JobHuntError as e:
        db.rollback()
        raise to_http_exception(e)
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to update job: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update job"
        )


@router.delete("/{job_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_job(
    job_id: int,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    try:
        job_service.delete_job(db, job_id, user.id)
        return None

    except JobHuntError as e:
        db.rollback()
        raise to_http_exception(e)
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to delete job: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete job"
        )
