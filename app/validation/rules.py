"""Validation rules: pure predicates over a single field value.

Each rule takes the field value and the tag parameter (``None`` when the tag
has none) and returns ``True`` when the value is acceptable.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping, Sized
from types import MappingProxyType
from typing import Any

from email_validator import EmailNotValidError, validate_email

Rule = Callable[[Any, str | None], bool]

PASSWORD_MIN_LENGTH = 8
PASSWORD_SPECIAL_CHARS = "!@#$%^&*()_+-=[]{};':\"\\|,.<>/?"

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 30

_UPPER = re.compile(r"[A-Z]")
_LOWER = re.compile(r"[a-z]")
_DIGIT = re.compile(r"\d")
_SPECIAL = re.compile("[" + re.escape(PASSWORD_SPECIAL_CHARS) + "]")
_NON_DIGIT = re.compile(r"\D")
_USERNAME = re.compile(r"^[a-zA-Z0-9_-]+$")


class RuleDeclarationError(ValueError):
    """Raised when a rule is declared with a parameter it cannot use."""


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _numeric_param(tag: str, param: str | None) -> float:
    try:
        return float(param)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise RuleDeclarationError(f"Rule '{tag}' needs a numeric parameter, got {param!r}") from exc


def _magnitude(value: Any) -> float | None:
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, Sized):
        return float(len(value))
    return None


# Baseline rules


def validate_required(value: Any, _param: str | None = None) -> bool:
    if value is None or value is False:
        return False
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value != 0
    if isinstance(value, Sized):
        return len(value) > 0
    return True


def validate_email_address(value: Any, _param: str | None = None) -> bool:
    if not isinstance(value, str) or not value:
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def validate_min(value: Any, param: str | None) -> bool:
    bound = _numeric_param("min", param)
    magnitude = _magnitude(value)
    return magnitude is not None and magnitude >= bound


def validate_max(value: Any, param: str | None) -> bool:
    bound = _numeric_param("max", param)
    magnitude = _magnitude(value)
    return magnitude is not None and magnitude <= bound


# Custom rules


def validate_password(value: Any, _param: str | None = None) -> bool:
    """
    Validate password strength:
    - Minimum 8 characters
    - At least one uppercase letter
    - At least one lowercase letter
    - At least one digit
    - At least one special character
    """
    password = _as_text(value)
    if len(password) < PASSWORD_MIN_LENGTH:
        return False

    has_upper = _UPPER.search(password) is not None
    has_lower = _LOWER.search(password) is not None
    has_digit = _DIGIT.search(password) is not None
    has_special = _SPECIAL.search(password) is not None

    return has_upper and has_lower and has_digit and has_special


def validate_phone(value: Any, _param: str | None = None) -> bool:
    """Validate a phone number in Indonesian, international or local format."""
    phone = _as_text(value)
    digits = _NON_DIGIT.sub("", phone)

    if len(digits) < 10 or len(digits) > 15:
        return False

    # Indonesian country code
    if digits.startswith("62"):
        return 11 <= len(digits) <= 13

    # International format
    if phone.startswith("+"):
        return 11 <= len(digits) <= 16

    # Local format
    if digits.startswith("0"):
        return 10 <= len(digits) <= 12

    return True


def validate_username(value: Any, _param: str | None = None) -> bool:
    username = _as_text(value)

    if len(username) < USERNAME_MIN_LENGTH or len(username) > USERNAME_MAX_LENGTH:
        return False

    if not _USERNAME.match(username):
        return False

    return username[0] not in "_-" and username[-1] not in "_-"


_DEFAULT_RULES: dict[str, Rule] = {
    "required": validate_required,
    "email": validate_email_address,
    "min": validate_min,
    "max": validate_max,
    "password": validate_password,
    "phone": validate_phone,
    "username": validate_username,
}


def default_rules() -> Mapping[str, Rule]:
    """Read-only view of the built-in rules."""
    return MappingProxyType(_DEFAULT_RULES)


def build_rules(extra: Mapping[str, Rule] | None = None) -> Mapping[str, Rule]:
    """Build the process-wide rule mapping once at startup.

    Raises:
        ValueError: If an extra rule reuses an already registered name
    """
    rules = dict(_DEFAULT_RULES)
    for name, rule in (extra or {}).items():
        if name in rules:
            raise ValueError(f"Validation rule '{name}' is already registered")
        rules[name] = rule
    return MappingProxyType(rules)
