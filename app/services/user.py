import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

import app.repositories.user as user_repo
from app.core.security import get_password_hash
from app.db.models.user import User as UserModel
from app.errors import ErrorCode, new, wrap
from app.schemas.user import CreateUserRequest

logger = logging.getLogger(__name__)


def register_user(db: Session, request: CreateUserRequest) -> UserModel:
    """
    Register a new user from an already validated request.

    - Validates email uniqueness
    - Validates username uniqueness
    - Hashes the password before storing it

    Raises:
        AppError: ALREADY_EXISTS for a taken email or username,
                  DATABASE_ERROR when the storage layer fails
    """
    try:
        if user_repo.get_user_by_email(db, request.email):
            raise new(ErrorCode.ALREADY_EXISTS, "Email already registered")
        if user_repo.get_user_by_username(db, request.username):
            raise new(ErrorCode.ALREADY_EXISTS, "Username already taken")

        user = user_repo.create_user(
            db,
            username=request.username,
            email=request.email,
            password_hash=get_password_hash(request.password),
        )
    except IntegrityError as exc:
        # Lost a race with a concurrent registration of the same email/username
        raise wrap(exc, ErrorCode.ALREADY_EXISTS, "User already exists") from exc
    except SQLAlchemyError as exc:
        raise wrap(exc, ErrorCode.DATABASE, "Failed to create user") from exc

    logger.info("Registered user id=%s username=%s", user.id, user.username)
    return user


def list_users(db: Session, page: int = 1, per_page: int = 20) -> tuple[list[UserModel], int]:
    """
    Get users with pagination.

    Raises:
        AppError: DATABASE_ERROR when the storage layer fails
    """
    try:
        return user_repo.get_users_paginated(db, page=page, per_page=per_page)
    except SQLAlchemyError as exc:
        raise wrap(exc, ErrorCode.DATABASE, "Failed to list users") from exc
