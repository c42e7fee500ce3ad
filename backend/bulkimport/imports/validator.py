"""
Schema-driven row validation for CSV imports.

One ``ValidatorSchema`` per entity type describes which columns it accepts and
how they are typed. ``create_validator`` turns a schema into a pure function
that maps one raw CSV record to either a candidate entity or the complete list
of field errors for that row. Foreign-key existence needs the data store, so
the validator only reports which foreign keys the orchestrator must check.
"""

from __future__ import annotations

import dataclasses
import math
import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Mapping

UUID_PATTERN = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)

DATE_FORMATS: tuple[str, ...] = ("%Y-%m-%d", "%m/%d/%Y", "%Y/%m/%d")

TRUE_VALUES = frozenset({"true", "yes", "y", "1"})
FALSE_VALUES = frozenset({"false", "no", "n", "0"})

_INTEGER = re.compile(r"[+-]?\d+")
_GROUPED_NUMBER = re.compile(r"[+-]?\d{1,3}(?:,\d{3})+(?:\.\d*)?")


@dataclasses.dataclass(frozen=True)
class ForeignKeyRule:
    """``field`` must name a row of ``table`` owned by the importing tenant."""

    field: str
    table: str
    message: str


@dataclasses.dataclass(frozen=True)
class FieldError:
    field: str | None
    message: str


@dataclasses.dataclass(frozen=True)
class ValidatorSchema:
    """
    Static description of one importable entity.

    Field groups are tuples so errors come out in declaration order. Every
    group must be a subset of ``allowed_fields``.
    """

    allowed_fields: tuple[str, ...]
    required_fields: tuple[str, ...] = ()
    uuid_fields: tuple[str, ...] = ()
    numeric_fields: tuple[str, ...] = ()
    # Subset of numeric_fields backed by Integer columns.
    integer_fields: tuple[str, ...] = ()
    boolean_fields: tuple[str, ...] = ()
    date_fields: tuple[str, ...] = ()
    enum_fields: Mapping[str, tuple[str, ...]] = dataclasses.field(default_factory=dict)
    foreign_keys: tuple[ForeignKeyRule, ...] = ()
    # Applied on insert only, for columns the CSV left empty.
    defaults: Mapping[str, Any] = dataclasses.field(default_factory=dict)

    def __post_init__(self) -> None:
        allowed = set(self.allowed_fields)
        declared = {
            *self.required_fields,
            *self.uuid_fields,
            *self.numeric_fields,
            *self.boolean_fields,
            *self.date_fields,
            *self.enum_fields,
            *(rule.field for rule in self.foreign_keys),
        }
        undeclared = sorted(declared - allowed)
        if undeclared:
            raise ValueError(f"Schema references fields outside allowed_fields: {undeclared}")
        not_numeric = sorted(set(self.integer_fields) - set(self.numeric_fields))
        if not_numeric:
            raise ValueError(f"integer_fields must also be numeric_fields: {not_numeric}")
        if "organization_id" in self.defaults:
            raise ValueError("organization_id cannot have a default; it is set per import")


@dataclasses.dataclass(frozen=True)
class ValidationOutcome:
    """
    Result of validating one record.

    ``value`` is the typed candidate entity (empty cells omitted) and is None
    whenever ``errors`` is non-empty. ``foreign_keys`` lists only the rules
    whose field is populated in ``value``.
    """

    value: dict[str, Any] | None
    errors: tuple[FieldError, ...] = ()
    foreign_keys: tuple[ForeignKeyRule, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors


RowValidator = Callable[[Mapping[str, Any]], ValidationOutcome]


def create_validator(schema: ValidatorSchema) -> RowValidator:
    """Build the validation function for one entity schema."""

    def validate(record: Mapping[str, Any]) -> ValidationOutcome:
        errors: list[FieldError] = []

        for name in record:
            if name not in schema.allowed_fields:
                errors.append(FieldError(field=name, message=f"Unknown field '{name}'"))

        entity: dict[str, Any] = {}
        for name in schema.allowed_fields:
            value = _clean(record.get(name))
            if value:
                entity[name] = value

        for name in schema.required_fields:
            if name not in entity:
                errors.append(FieldError(field=name, message=f"{name} is required"))

        for name in schema.uuid_fields:
            raw = entity.get(name)
            if raw is None:
                continue
            if UUID_PATTERN.fullmatch(raw):
                entity[name] = raw.lower()
            else:
                errors.append(
                    FieldError(field=name, message=f"Invalid {name}: '{raw}' is not a valid UUID")
                )

        for name in schema.numeric_fields:
            raw = entity.get(name)
            if raw is None:
                continue
            number = parse_number(raw)
            if number is None:
                errors.append(
                    FieldError(field=name, message=f"Invalid {name}: '{raw}' is not a number")
                )
            elif name in schema.integer_fields and not isinstance(number, int):
                if number.is_integer():
                    entity[name] = int(number)
                else:
                    errors.append(
                        FieldError(field=name, message=f"Invalid {name}: '{raw}' is not a whole number")
                    )
            else:
                entity[name] = number

        for name in schema.boolean_fields:
            raw = entity.get(name)
            if raw is None:
                continue
            flag = parse_boolean(raw)
            if flag is None:
                errors.append(
                    FieldError(
                        field=name,
                        message=f"Invalid {name}: '{raw}' (expected true or false)",
                    )
                )
            else:
                entity[name] = flag

        for name, choices in schema.enum_fields.items():
            raw = entity.get(name)
            if raw is None or raw in choices:
                continue
            errors.append(
                FieldError(
                    field=name,
                    message=f"Invalid {name}: '{raw}'. Allowed values: {', '.join(choices)}",
                )
            )

        for name in schema.date_fields:
            raw = entity.get(name)
            if raw is None:
                continue
            parsed = parse_date(raw)
            if parsed is None:
                errors.append(
                    FieldError(field=name, message=f"Invalid {name}: '{raw}' (expected YYYY-MM-DD)")
                )
            else:
                entity[name] = parsed

        if errors:
            return ValidationOutcome(value=None, errors=tuple(errors))

        return ValidationOutcome(
            value=entity,
            foreign_keys=tuple(rule for rule in schema.foreign_keys if rule.field in entity),
        )

    return validate


def parse_number(raw: str) -> int | float | None:
    """Parse finite numeric text; integral text stays an int."""
    # Decimal() accepts "1_000"; spreadsheets never emit it.
    if "_" in raw:
        return None
    text = raw.replace(",", "") if _GROUPED_NUMBER.fullmatch(raw) else raw
    try:
        number = Decimal(text)
    except InvalidOperation:
        return None
    if not number.is_finite():
        return None
    if _INTEGER.fullmatch(text):
        return int(text)
    result = float(number)
    # "1e400" is a finite Decimal but overflows float.
    if not math.isfinite(result):
        return None
    return result


def parse_boolean(raw: str) -> bool | None:
    lowered = raw.lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    return None


def parse_date(raw: str) -> date | None:
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(raw, fmt).date()
        except ValueError:
            continue
    return None


def _clean(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()
