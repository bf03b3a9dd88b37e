from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from ird_properties.core.database import get_db
from ird_properties.core.security import (
    get_current_user, require_admin, check_self_or_admin,
    get_password_hash, verify_password
)
from ird_properties.models.user import User, UserRole
from ird_properties.schemas.user import UserCreate, UserUpdate, UserResponse, PasswordChange

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


def _get_user_or_404(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.get("", response_model=List[UserResponse])
def list_users(
    role: Optional[UserRole] = None,
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    limit: int = Query(100, ge=1, le=500, description="Max records to return"),
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """List all users (admin only)"""
    query = db.query(User)
    if role:
        query = query.filter(User.role == role.value)

    return query.order_by(User.created_at.desc(), User.id.desc()).offset(skip).limit(limit).all()


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get user by ID (admin, or the user themselves)"""
    check_self_or_admin(current_user, user_id)
    return _get_user_or_404(db, user_id)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    user_data: UserCreate,
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Create a new user (admin only)"""
    existing = db.query(User).filter(User.username == user_data.username).first()
    if existing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username already exists"
        )

    user = User(
        username=user_data.username,
        hashed_password=get_password_hash(user_data.password),
        name=user_data.name,
        role=user_data.role.value,
        department=user_data.department,
        email=user_data.email,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"User '{user.username}' ({user.role}) created by {current_user.username}")
    return user


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    user_data: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update a user profile (admin, or the user themselves without role changes)"""
    check_self_or_admin(current_user, user_id)
    user = _get_user_or_404(db, user_id)

    # Explicit nulls leave the field unchanged
    update_data = user_data.model_dump(exclude_unset=True, exclude_none=True)

    # Only admins can change roles or account status
    if current_user.role != UserRole.ADMIN.value:
        if "role" in update_data or "is_active" in update_data:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Only admins can change roles or account status"
            )

    if "role" in update_data:
        update_data['role'] = update_data['role'].value

    for key, value in update_data.items():
        setattr(user, key, value)

    db.commit()
    db.refresh(user)
    return user


@router.put("/{user_id}/password")
def change_password(
    user_id: int,
    password_data: PasswordChange,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Change a password (the user with their current password, or an admin)"""
    check_self_or_admin(current_user, user_id)
    user = _get_user_or_404(db, user_id)

    # Users changing their own password must prove they know the current one
    if current_user.id == user_id:
        if not password_data.current_password or not verify_password(
            password_data.current_password, user.hashed_password
        ):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Current password is incorrect"
            )

    user.hashed_password = get_password_hash(password_data.new_password)
    db.commit()
    return {"message": "Password updated successfully"}


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def deactivate_user(
    user_id: int,
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Deactivate a user (admin only). Their requests and issuances stay on record."""
    user = _get_user_or_404(db, user_id)

    if user.id == current_user.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete your own account"
        )

    user.is_active = False
    db.commit()
