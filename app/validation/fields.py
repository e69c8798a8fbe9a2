"""Explicit field declarations consumed by the validator.

Request models declare their rules once, next to the model, as a ``Schema``:

    validation_schema: ClassVar[Schema] = Schema(
        FieldSpec.of("email", "required,email"),
        FieldSpec.of("password", "required,min=6"),
    )
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

# Alias that marks a field as never serialized, and therefore never reported.
SKIP_ALIAS = "-"


@dataclass(frozen=True)
class RuleTag:
    name: str
    param: str | None = None

    def __str__(self) -> str:
        return self.name if self.param is None else f"{self.name}={self.param}"


def parse_tags(declaration: str) -> tuple[RuleTag, ...]:
    """Parse a compact tag string such as ``"required,min=6"``."""
    tags: list[RuleTag] = []
    for chunk in declaration.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        name, sep, param = chunk.partition("=")
        tags.append(RuleTag(name.strip(), param.strip() if sep else None))
    return tuple(tags)


@dataclass(frozen=True)
class FieldSpec:
    name: str
    tags: tuple[RuleTag, ...] = ()
    alias: str | None = None

    @classmethod
    def of(cls, name: str, declaration: str, alias: str | None = None) -> FieldSpec:
        return cls(name=name, tags=parse_tags(declaration), alias=alias)

    @property
    def label(self) -> str:
        return resolve_field_name(self.alias, self.name)


class Schema:
    """Ordered, immutable set of field declarations."""

    def __init__(self, *fields: FieldSpec) -> None:
        names = [field.name for field in fields]
        if len(names) != len(set(names)):
            raise ValueError(f"Duplicate field declaration in schema: {names}")
        self._fields = tuple(fields)

    @property
    def fields(self) -> tuple[FieldSpec, ...]:
        return self._fields

    def __iter__(self) -> Iterator[FieldSpec]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def tag_names(self) -> set[str]:
        return {tag.name for field in self._fields for tag in field.tags}

    def __repr__(self) -> str:
        return f"Schema({', '.join(field.name for field in self._fields)})"


def resolve_field_name(alias: str | None, name: str) -> str:
    """Return the externally visible name of a field.

    The serialization alias wins over the structural name. The ``"-"`` alias
    yields an empty string: the field is excluded from error reporting.
    """
    if alias is None or alias == "":
        return name
    if alias == SKIP_ALIAS:
        return ""
    return alias
