import logging

from fastapi import APIRouter, Depends, Header, Query
from sqlalchemy.orm import Session

from app.api import responses
from app.api.deps import get_db, get_validator
from app.schemas.response import Meta
from app.schemas.user import CreateUserRequest, UserResponse
from app.services.user import list_users, register_user
from app.validation import Validator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("")
def get_all_users(
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    per_page: int = Query(20, ge=1, le=100, description="Number of items per page"),
    db: Session = Depends(get_db),
):
    """List users, paginated, with pagination details in ``meta``."""
    users, total = list_users(db, page=page, per_page=per_page)
    return responses.json_with_meta(
        200,
        [UserResponse.model_validate(user) for user in users],
        Meta.paginate(page=page, per_page=per_page, total=total),
    )


@router.post("/register", status_code=201)
def register(
    request: CreateUserRequest,
    db: Session = Depends(get_db),
    validator: Validator = Depends(get_validator),
    accept_language: str | None = Header(default=None),
):
    """
    Register a new user.

    Every field rule is evaluated; a failing request gets all violations at
    once in ``error.details``. Messages follow ``Accept-Language`` (en/id) when
    sent, the configured locale otherwise.
    """
    errors = validator.validate_struct(request, locale=accept_language)
    if errors is not None:
        logger.info("Registration rejected: %s", errors.to_map())
        return responses.validation_failed(errors)

    user = register_user(db, request)
    return responses.created(UserResponse.model_validate(user))
