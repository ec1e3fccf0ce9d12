"""CRUD operations for user accounts."""

from __future__ import annotations

from pydantic import EmailStr
from sqlalchemy import select
from sqlalchemy.orm import Session

from backend.models.user import User
from backend.schemas.user import UserCreate, UserPublic


# ================================================================== #
# Helper Functions for Schema Conversion                            #
# ================================================================== #

def build_user_public(user_orm: User) -> UserPublic:
    """Convert User ORM to the public profile schema.

    Args:
        user_orm: User ORM object

    Returns:
        UserPublic schema (never includes the password hash)
    """
    return UserPublic.model_validate(user_orm, from_attributes=True)


# ================================================================== #
# User CRUD Operations                                               #
# ================================================================== #

def create_user(db: Session, user_data: UserCreate, password_hash: str) -> User:
    """Create and persist a new user.

    Args:
        db: Database session
        user_data: Validated user payload
        password_hash: Already hashed password

    Returns:
        Created user ORM object

    Raises:
        IntegrityError: If email already exists
    """
    db_user = User(
        name=user_data.name,
        email=str(user_data.email).lower(),
        password_hash=password_hash,
    )

    db.add(db_user)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(db_user)

    return db_user


def get_user_by_id(db: Session, user_id: str) -> User | None:
    """Return a user by primary key.

    Args:
        db: Database session
        user_id: Primary key of the user

    Returns:
        User ORM object or None if not found
    """
    return db.scalar(select(User).where(User.id == user_id))


def get_user_by_email(db: Session, email: str | EmailStr) -> User | None:
    """Return a user by unique e-mail address.

    Args:
        db: Database session
        email: Email address to search for (case-insensitive)

    Returns:
        User ORM object or None if not found
    """
    normalized = str(email).strip().lower()
    return db.scalar(select(User).where(User.email == normalized))


def update_user(
        db: Session,
        user_id: str,
        *,
        name: str | None = None,
        password_hash: str | None = None,
) -> User | None:
    """Update the mutable fields of an existing user.

    Only the display name and the password hash can change; the email is
    the login key and stays fixed.

    Args:
        db: Active database session
        user_id: Primary key of the target user
        name: New display name, if provided
        password_hash: New password hash, if provided

    Returns:
        Updated user ORM object or None if not found
    """
    user_orm = get_user_by_id(db, user_id)
    if not user_orm:
        return None

    if name is not None:
        user_orm.name = name
    if password_hash is not None:
        user_orm.password_hash = password_hash

    db.commit()
    db.refresh(user_orm)

    return user_orm
