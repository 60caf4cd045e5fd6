"""
FastAPI dependencies for the database session and the authenticated user.
"""
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from jobhunt.core.security import decode_access_token
from jobhunt.db.session import SessionLocal
from jobhunt.db.models.user import User

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")


def get_db():
    """Database session dependency."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(token: str = Depends(oauth2_scheme)) -> str:
    """Email carried by the bearer token; 401 when the token is unusable."""
    email = decode_access_token(token)
    if not email:
        raise _unauthorized("Invalid token")
    return email


def get_current_user_obj(
    email: str = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> User:
    """
    The User row behind the token.

    A valid token for a deleted account is still a 401, not a 404.
    """
    user = db.query(User).filter(User.email == email).first()
    if not user:
        raise _unauthorized("User not found")
    return user
