"""
Bullet endpoints.

CRUD and search over the authenticated user's reusable resume bullets.
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session

from jobhunt.api.errors import to_http_exception
from jobhunt.core.auth_dependency import get_db, get_current_user_obj
from jobhunt.core.errors import JobHuntError
from jobhunt.db.models.user import User
from jobhunt.schemas.bullet import (
    BulletCreate,
    BulletUpdate,
    BulletResponse,
    BulletListResponse,
)
from jobhunt.schemas.experience import AssociationResponse, AssociationListResponse
from jobhunt.services import bullet_service, experience_bullet_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bullets", tags=["Bullets"])


@router.get("", status_code=status.HTTP_200_OK, response_model=BulletListResponse)
def list_bullets(
    limit: Optional[int] = Query(None, ge=1, le=100, description="Page size"),
    offset: Optional[int] = Query(None, ge=0, description="Rows to skip"),
    search: Optional[str] = Query(None, min_length=1, max_length=100, description="Substring to match"),
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """
    List the user's bullets, most recently updated first.

    With search, returns case-insensitive substring matches; total is then the
    number of matches in this page.
    """
    try:
        if search:
            bullets = bullet_service.search_bullets(
                db, user.id, search,
                limit=limit or bullet_service.DEFAULT_SEARCH_LIMIT,
                offset=offset or 0
            )
            total = len(bullets)
        else:
            bullets = bullet_service.list_bullets(db, user.id, limit=limit, offset=offset)
            total = bullet_service.count_bullets(db, user.id)

        return BulletListResponse(
            bullets=[BulletResponse.model_validate(b) for b in bullets],
            total=total,
            count=len(bullets)
        )

    except JobHuntError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Failed to list bullets: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list bullets"
        )


@router.get("/{bullet_id}", status_code=status.HTTP_200_OK, response_model=BulletResponse)
def get_bullet(
    bullet_id: int,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    try:
        return BulletResponse.model_validate(bullet_service.get_bullet(db, bullet_id, user.id))
    except JobHuntError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Failed to get bullet: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get bullet"
        )


@router.post("", status_code=status.HTTP_201_CREATED, response_model=BulletResponse)
def create_bullet(
    bullet_data: BulletCreate,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    try:
        bullet = bullet_service.create_bullet(db, user.id, bullet_data.text)
        return BulletResponse.model_validate(bullet)
    except JobHuntError as e:
        db.rollback()
        raise to_http_exception(e)
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to create bullet: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create bullet"
        )


@router.put("/{bullet_id}", status_code=status.HTTP_200_OK, response_model=BulletResponse)
def update_bullet(
    bullet_id: int,
    bullet_data: BulletUpdate,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    try:
        bullet = bullet_service.update_bullet(db, bullet_id, user.id, bullet_data.text)
        return BulletResponse.model_validate(bullet)
    except JobHuntError as e:
        db.rollback()
        raise to_http_exception(e)
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to update bullet: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update bullet"
        )


@router.delete("/{bullet_id}", status_code=status.HTTP_200_OK)
def delete_bullet(
    bullet_id: int,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """Delete a bullet; its experience associations go with it."""
    try:
        removed = bullet_service.delete_bullet(db, bullet_id, user.id)
        return {
            "message": "Bullet deleted successfully",
            "associations_removed": removed
        }
    except JobHuntError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Failed to delete bullet: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete bullet"
        )


@router.get("/{bullet_id}/experiences", status_code=status.HTTP_200_OK, response_model=AssociationListResponse)
def list_bullet_associations(
    bullet_id: int,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """Association rows linking this bullet to the user's experiences, oldest first."""
    try:
        bullet = bullet_service.get_bullet(db, bullet_id, user.id)
        associations = experience_bullet_service.list_by_bullet(db, bullet.id)
        return AssociationListResponse(
            associations=[AssociationResponse.model_validate(a) for a in associations],
            total=len(associations)
        )
    except JobHuntError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Failed to list bullet associations: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list bullet associations"
        )
