"""Field-level request validation.

Rules are plain predicates (``rules``), schemas are declared explicitly next to
the request models (``fields``), and ``Validator`` ties them together.
"""

from app.validation.fields import FieldSpec, RuleTag, Schema, parse_tags, resolve_field_name
from app.validation.validator import (
    FieldError,
    UnknownRuleError,
    ValidationErrors,
    Validator,
    ValidatorConfigError,
    is_validation_errors,
)

__all__ = [
    "FieldError",
    "FieldSpec",
    "RuleTag",
    "Schema",
    "UnknownRuleError",
    "ValidationErrors",
    "Validator",
    "ValidatorConfigError",
    "is_validation_errors",
    "parse_tags",
    "resolve_field_name",
]
