"""
Experience endpoints.

CRUD over the user's employment records, plus attaching and detaching bullets
and the aggregated experience/bullet reads.
"""
import logging
from typing import Optional, Union
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session

from jobhunt.api.errors import to_http_exception
from jobhunt.core.auth_dependency import get_db, get_current_user_obj
from jobhunt.core.errors import JobHuntError, NotFoundError
from jobhunt.db.models.user import User
from jobhunt.schemas.experience import (
    ExperienceCreate,
    ExperienceUpdate,
    ExperienceResponse,
    ExperienceWithBullets,
    ExperienceListResponse,
    ExperienceWithBulletsListResponse,
    AssociationCreate,
    AssociationResponse,
    AssociationListResponse,
    UserStats,
)
from jobhunt.services import experience_service, experience_bullet_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/experience", tags=["Experience"])


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    response_model=None
)
def list_experiences(
    limit: Optional[int] = Query(None, ge=1, le=100, description="Page size"),
    offset: Optional[int] = Query(None, ge=0, description="Rows to skip"),
    include_bullets: bool = Query(False, description="Embed each experience's bullets"),
    order_by: str = Query(
        experience_service.DEFAULT_ORDER_BY,
        pattern="^(start_date|end_date|company_name|job_title|created_at)$"
    ),
    order_direction: str = Query(experience_service.DEFAULT_ORDER_DIRECTION, pattern="^(ASC|DESC)$"),
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
) -> Union[ExperienceWithBulletsListResponse, ExperienceListResponse]:
    """
    List the user's experiences.

    include_bullets=true returns every experience with its bullets, newest start
    date first; paging and ordering apply only to the plain listing.
    """
    try:
        if include_bullets:
            experiences = experience_bullet_service.get_experiences_with_bullets(db, user.id)
            return ExperienceWithBulletsListResponse(experiences=experiences, total=len(experiences))

        experiences = experience_service.list_experiences(
            db, user.id,
            limit=limit,
            offset=offset,
            order_by=order_by,
            order_direction=order_direction
        )
        return ExperienceListResponse(
            experiences=[ExperienceResponse.model_validate(e) for e in experiences],
            total=experience_service.count_experiences(db, user.id)
        )

    except JobHuntError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Failed to list experiences: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list experiences"
        )


@router.get("/stats", status_code=status.HTTP_200_OK, response_model=UserStats)
def get_stats(
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    try:
        return experience_bullet_service.get_user_stats(db, user.id)
    except Exception as e:
        logger.error(f"Failed to get experience stats: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get experience stats"
        )


@router.get(
    "/{experience_id}",
    status_code=status.HTTP_200_OK,
    response_model=None
)
def get_experience(
    experience_id: int,
    include_bullets: bool = Query(False, description="Embed the experience's bullets"),
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
) -> Union[ExperienceWithBullets, ExperienceResponse]:
    try:
        if include_bullets:
            experiences = experience_bullet_service.get_experiences_with_bullets(
                db, user.id, experience_id=experience_id
            )
            if not experiences:
                raise NotFoundError("Experience not found", entity="experience")
            return experiences[0]

        experience = experience_service.get_experience(db, experience_id, user.id)
        return ExperienceResponse.model_validate(experience)

    except JobHuntError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Failed to get experience: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get experience"
        )


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ExperienceResponse)
def create_experience(
    experience_data: ExperienceCreate,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    try:
        experience = experience_service.create_experience(
            db, user.id,
            company_name=experience_data.company_name,
            job_title=experience_data.job_title,
            start_date=experience_data.start_date,
            end_date=experience_data.end_date,
            is_current=experience_data.is_current
        )
        return ExperienceResponse.model_validate(experience)

    except JobHuntError as e:
        db.rollback()
        raise to_http_exception(e)
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to create experience: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create experience"
        )


@router.put("/{experience_id}", status_code=status.HTTP_200_OK, response_model=ExperienceResponse)
def update_experience(
    experience_id: int,
    experience_data: ExperienceUpdate,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    try:
        experience = experience_service.update_experience(
            db, experience_id, user.id,
            company_name=experience_data.company_name,
            job_title=experience_data.job_title,
            start_date=experience_data.start_date,
            end_date=experience_data.end_date,
            is_current=experience_data.is_current
        )
        return ExperienceResponse.model_validate(experience)

    except JobHuntError as e:
        db.rollback()
        raise to_http_exception(e)
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to update experience: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update experience"
        )


@router.delete("/{experience_id}", status_code=status.HTTP_200_OK)
def delete_experience(
    experience_id: int,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """Delete an experience; its bullet associations are removed with it."""
    try:
        removed = experience_service.delete_experience(db, experience_id, user.id)
        return {
            "message": "Experience deleted successfully",
            "associations_removed": removed
        }
    except JobHuntError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Failed to delete experience: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete experience"
        )


@router.get(
    "/{experience_id}/bullets",
    status_code=status.HTTP_200_OK,
    response_model=AssociationListResponse
)
def list_experience_associations(
    experience_id: int,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    try:
        experience = experience_service.get_experience(db, experience_id, user.id)
        associations = experience_bullet_service.list_by_experience(db, experience.id)
        return AssociationListResponse(
            associations=[AssociationResponse.model_validate(a) for a in associations],
            total=len(associations)
        )
    except JobHuntError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Failed to list experience associations: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list experience associations"
        )


@router.post(
    "/{experience_id}/bullets",
    status_code=status.HTTP_201_CREATED,
    response_model=AssociationResponse
)
def associate_bullet(
    experience_id: int,
    payload: AssociationCreate,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """
    Attach one of the user's bullets to one of the user's experiences.

    409 if the pair is already associated; 404 if either side is missing or
    belongs to someone else.
    """
    try:
        association = experience_bullet_service.associate_bullet(
            db, experience_id, payload.bullet_id, user.id
        )
        return AssociationResponse.model_validate(association)
    except JobHuntError as e:
        raise to_http_exception(e)
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to associate bullet: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to associate bullet"
        )


@router.delete("/{experience_id}/bullets/{bullet_id}", status_code=status.HTTP_200_OK)
def disassociate_bullet(
    experience_id: int,
    bullet_id: int,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    try:
        experience_bullet_service.disassociate_bullet(db, experience_id, bullet_id, user.id)
        return {"message": "Bullet association removed successfully"}
    except JobHuntError as e:
        raise to_http_exception(e)
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to remove bullet association: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to remove bullet association"
        )
