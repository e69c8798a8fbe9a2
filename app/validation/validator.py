"""Validator engine: applies declared rules to a bound request object."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from typing import Any, overload

from pydantic import BaseModel, ConfigDict

from app.validation.fields import FieldSpec, Schema
from app.validation.messages import format_message, normalize_locale
from app.validation.rules import Rule, build_rules

logger = logging.getLogger(__name__)


class ValidatorConfigError(Exception):
    """Programmer error in a schema declaration, never a validation failure."""


class UnknownRuleError(ValidatorConfigError):
    def __init__(self, tag: str, field: str) -> None:
        super().__init__(f"Undefined validation rule '{tag}' on field '{field}'")
        self.tag = tag
        self.field = field


class MissingSchemaError(ValidatorConfigError):
    pass


class FieldError(BaseModel):
    """A single failed rule on a single field."""

    model_config = ConfigDict(frozen=True)

    field: str
    tag: str
    value: str
    message: str


class ValidationErrors(Sequence[FieldError]):
    """Ordered, non-empty collection of field errors from one validation call."""

    def __init__(self, errors: Sequence[FieldError]) -> None:
        if not errors:
            raise ValueError("ValidationErrors requires at least one FieldError")
        self._errors = tuple(errors)

    @overload
    def __getitem__(self, index: int) -> FieldError: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[FieldError]: ...

    def __getitem__(self, index):
        return self._errors[index]

    def __len__(self) -> int:
        return len(self._errors)

    def __iter__(self) -> Iterator[FieldError]:
        return iter(self._errors)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationErrors):
            return NotImplemented
        return self._errors == other._errors

    def __hash__(self) -> int:
        return hash(self._errors)

    def __str__(self) -> str:
        return "; ".join(self.messages())

    def __repr__(self) -> str:
        return f"ValidationErrors({list(self._errors)!r})"

    def messages(self) -> list[str]:
        return [error.message for error in self._errors]

    def to_map(self) -> dict[str, list[str]]:
        """Group messages by field, keeping evaluation order within each field."""
        grouped: dict[str, list[str]] = {}
        for error in self._errors:
            grouped.setdefault(error.field, []).append(error.message)
        return grouped

    def to_list(self) -> list[dict[str, str]]:
        return [error.model_dump() for error in self._errors]


def is_validation_errors(obj: object) -> bool:
    return isinstance(obj, ValidationErrors)


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _read_field(target: Any, field: FieldSpec) -> Any:
    if isinstance(target, Mapping):
        return target.get(field.name)
    return getattr(target, field.name, None)


class Validator:
    """Runs declared rules against objects.

    Build one instance at startup and pass it to whatever needs it; the rule
    mapping is read-only afterwards, so a single instance can serve concurrent
    requests.
    """

    def __init__(self, rules: Mapping[str, Rule] | None = None, locale: str | None = None) -> None:
        self._rules = rules if rules is not None else build_rules()
        self.locale = normalize_locale(locale)

    @property
    def rules(self) -> Mapping[str, Rule]:
        return self._rules

    def check_schema(self, schema: Schema) -> None:
        """Fail fast when a schema references a rule that is not registered."""
        for field in schema:
            for tag in field.tags:
                if tag.name not in self._rules:
                    raise UnknownRuleError(tag.name, field.name)

    def validate_struct(
        self,
        target: Any,
        schema: Schema | None = None,
        locale: str | None = None,
    ) -> ValidationErrors | None:
        """
        Validate every declared field of ``target``.

        All fields and all of their rules are evaluated; failures are collected
        in declaration order rather than stopping at the first one.

        Returns:
            None when the object is valid, otherwise the collected errors

        Raises:
            UnknownRuleError: If a declared tag has no registered rule
            MissingSchemaError: If no schema is given and the target declares none
        """
        if schema is None:
            schema = getattr(target, "validation_schema", None)
            if not isinstance(schema, Schema):
                raise MissingSchemaError(f"{type(target).__name__} declares no validation_schema")

        lang = normalize_locale(locale, default=self.locale)
        errors: list[FieldError] = []

        for field in schema:
            value = _read_field(target, field)
            label = field.label
            for tag in field.tags:
                rule = self._rules.get(tag.name)
                if rule is None:
                    raise UnknownRuleError(tag.name, field.name)
                if rule(value, tag.param):
                    continue
                if not label:
                    continue
                errors.append(
                    FieldError(
                        field=label,
                        tag=tag.name,
                        value=_stringify(value),
                        message=format_message(tag.name, label, tag.param, lang),
                    )
                )

        if not errors:
            return None

        logger.debug("Validation failed for %s: %d error(s)", type(target).__name__, len(errors))
        return ValidationErrors(errors)
