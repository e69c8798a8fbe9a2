from sqlalchemy.orm import Session

from app.db.models.user import User as UserModel


def get_user_by_email(db: Session, email: str) -> UserModel | None:
    """Get a user by email."""
    return db.query(UserModel).filter(UserModel.email == email).first()


def get_user_by_username(db: Session, username: str) -> UserModel | None:
    """Get a user by username."""
    return db.query(UserModel).filter(UserModel.username == username).first()


def create_user(
    db: Session,
    username: str,
    email: str,
    password_hash: str,
) -> UserModel:
    """Create a new user in the database. Pure data access - no business logic."""
    db_user = UserModel(
        username=username,
        email=email,
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


def get_users_paginated(
    db: Session, page: int = 1, per_page: int = 20
) -> tuple[list[UserModel], int]:
    """
    Get users with pagination, sorted by username for stable pagination.

    Args:
        page: Page number (1-indexed)
        per_page: Number of items per page

    Returns:
        Tuple of (list of users, total count)
    """
    query = db.query(UserModel)
    total = query.count()
    skip = (page - 1) * per_page
    users = query.order_by(UserModel.username).offset(skip).limit(per_page).all()
    return users, total
