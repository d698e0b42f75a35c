import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from uuid import UUID

from app.db.session import get_db
from app.models.user import User
from app.schemas.user import UserCreate, UserRead, HomeLocationUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


def get_user_or_404(db: Session, user_id: UUID) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.post("", response_model=UserRead, status_code=201)
def create_user(user: UserCreate, db: Session = Depends(get_db)):
    """Create a new user profile."""
    if user.email:
        existing = db.query(User).filter(User.email == user.email).first()
        if existing:
            raise HTTPException(status_code=400, detail="User with this email already exists")
    db_user = User(**user.model_dump())
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


@router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: UUID, db: Session = Depends(get_db)):
    """Get user by ID."""
    return get_user_or_404(db, user_id)


@router.patch("/{user_id}/home", response_model=UserRead)
def update_home_location(user_id: UUID, payload: HomeLocationUpdate, db: Session = Depends(get_db)):
    """
    Set or clear the home location.

    Only keys present in the body are written; null clears a value.
    Latitude/longitude ranges are enforced by the schema (422 on violation).
    """
    user = get_user_or_404(db, user_id)
    data = payload.model_dump(include=payload.model_fields_set)
    if not data:
        raise HTTPException(status_code=400, detail="No valid fields to update")

    for field, value in data.items():
        setattr(user, field, value)
    db.commit()
    db.refresh(user)
    logger.info(
        "Home location updated: user_id=%s fields=%s has_home=%s",
        user_id,
        sorted(data),
        user.home_latitude is not None and user.home_longitude is not None,
    )
    return user
