from fastapi import Request

from app.db import SessionLocal
from app.validation import Validator


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_validator(request: Request) -> Validator:
    """Return the validator built once at startup and stored on the app."""
    return request.app.state.validator
