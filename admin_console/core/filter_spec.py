"""Filter Spec — boundary validation of listing query parameters into a typed FilterSpec.

Invariants:
    - Validation happens once, before any query is built
    - Every offending parameter is reported, not just the first
    - Unknown parameter names are offending parameters
    - page >= 1, 1 <= page_size <= MAX_PAGE_SIZE, sort_field in the listing whitelist
    - Empty values are treated as absent

Design Decisions:
    - ListingDefinition is data, not code: each listing declares its filter
      whitelist and sort fields, the parser is shared
    - Range filters use paired parameters (<field>From/<field>To for dates,
      <field>Min/<field>Max for numbers); a date-only upper bound covers the whole day
"""

import math
import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from enum import Enum

from admin_console.core.domain_types import SortDirection
from admin_console.core.errors import FieldIssue, RequestValidationFailed

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100
MAX_SEARCH_LENGTH = 200
MAX_IDENTIFIER_LENGTH = 255

PAGINATION_PARAMS = ("page", "pageSize", "sortField", "sortDir")


class FilterKind(str, Enum):
    ENUM = "enum"
    IDENTIFIER = "identifier"
    UUID = "uuid"
    DATE_RANGE = "date_range"
    NUMBER_RANGE = "number_range"
    SEARCH = "search"


@dataclass(frozen=True)
class FilterField:
    """One whitelisted filter of a listing."""
    name: str
    kind: FilterKind
    choices: tuple[str, ...] = ()

    @property
    def param_names(self) -> tuple[str, ...]:
        if self.kind is FilterKind.DATE_RANGE:
            return (f"{self.name}From", f"{self.name}To")
        if self.kind is FilterKind.NUMBER_RANGE:
            return (f"{self.name}Min", f"{self.name}Max")
        return (self.name,)


@dataclass(frozen=True)
class ListingDefinition:
    """Whitelist of filters and sort fields accepted by one listing."""
    name: str
    filters: tuple[FilterField, ...]
    sort_fields: tuple[str, ...]
    default_sort: str = "createdAt"
    default_dir: SortDirection = SortDirection.DESC

    def accepted_params(self) -> set[str]:
        names = set(PAGINATION_PARAMS)
        for f in self.filters:
            names.update(f.param_names)
        return names


@dataclass(frozen=True)
class ValueRange:
    """Inclusive range; either bound may be open."""
    lower: datetime | int | float | None = None
    upper: datetime | int | float | None = None


@dataclass(frozen=True)
class FilterSpec:
    page: int
    page_size: int
    sort_field: str
    sort_dir: SortDirection
    filters: dict[str, object] = field(default_factory=dict)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


def parse_filter_spec(
    params: Mapping[str, str], definition: ListingDefinition,
) -> FilterSpec:
    """Validate raw query parameters against a listing definition.

    Raises RequestValidationFailed listing every invalid parameter.
    """
    issues: list[FieldIssue] = []
    values = {k: v.strip() for k, v in params.items() if v is not None and v.strip()}

    accepted = definition.accepted_params()
    for name in params:
        if name not in accepted:
            issues.append(FieldIssue(name, "unknown parameter"))

    page = _parse_int(values, "page", 1, 1, None, issues)
    page_size = _parse_int(
        values, "pageSize", DEFAULT_PAGE_SIZE, 1, MAX_PAGE_SIZE, issues,
    )

    sort_field = values.get("sortField", definition.default_sort)
    if sort_field not in definition.sort_fields:
        issues.append(FieldIssue(
            "sortField", f"must be one of {', '.join(definition.sort_fields)}",
        ))

    sort_dir = definition.default_dir
    if "sortDir" in values:
        try:
            sort_dir = SortDirection(values["sortDir"].lower())
        except ValueError:
            issues.append(FieldIssue("sortDir", "must be one of asc, desc"))

    filters: dict[str, object] = {}
    for f in definition.filters:
        value = _parse_filter(f, values, issues)
        if value is not None:
            filters[f.name] = value

    if issues:
        raise RequestValidationFailed(issues)
    return FilterSpec(
        page=page, page_size=page_size, sort_field=sort_field,
        sort_dir=sort_dir, filters=filters,
    )


# ─── Field parsers ───────────────────────────────────────────────

def _parse_int(
    values: Mapping[str, str], name: str, default: int,
    minimum: int, maximum: int | None, issues: list[FieldIssue],
) -> int:
    raw = values.get(name)
    if raw is None:
        return default
    try:
        number = int(raw)
    except ValueError:
        issues.append(FieldIssue(name, "must be an integer"))
        return default
    if number < minimum or (maximum is not None and number > maximum):
        bound = f"between {minimum} and {maximum}" if maximum else f">= {minimum}"
        issues.append(FieldIssue(name, f"must be {bound}"))
        return default
    return number


def _parse_filter(
    f: FilterField, values: Mapping[str, str], issues: list[FieldIssue],
) -> object | None:
    if f.kind is FilterKind.DATE_RANGE:
        return _parse_range(f, values, issues, _parse_instant)
    if f.kind is FilterKind.NUMBER_RANGE:
        return _parse_range(f, values, issues, _parse_number)

    raw = values.get(f.name)
    if raw is None:
        return None
    if f.kind is FilterKind.ENUM:
        if raw not in f.choices:
            issues.append(FieldIssue(f.name, f"must be one of {', '.join(f.choices)}"))
            return None
        return raw
    if f.kind is FilterKind.UUID:
        try:
            return uuid.UUID(raw)
        except ValueError:
            issues.append(FieldIssue(f.name, "must be a valid UUID"))
            return None
    if f.kind is FilterKind.IDENTIFIER:
        if len(raw) > MAX_IDENTIFIER_LENGTH:
            issues.append(FieldIssue(f.name, "identifier is too long"))
            return None
        return raw
    # SEARCH
    if len(raw) > MAX_SEARCH_LENGTH:
        issues.append(FieldIssue(
            f.name, f"must be at most {MAX_SEARCH_LENGTH} characters",
        ))
        return None
    return raw


def _parse_range(f, values, issues, parse_bound) -> ValueRange | None:
    lower_name, upper_name = f.param_names
    bounds = []
    failed = False
    for name, is_upper in ((lower_name, False), (upper_name, True)):
        raw = values.get(name)
        if raw is None:
            bounds.append(None)
            continue
        try:
            bounds.append(parse_bound(raw, is_upper))
        except ValueError as e:
            issues.append(FieldIssue(name, str(e)))
            failed = True
            bounds.append(None)
    if failed:
        return None
    lower, upper = bounds
    if lower is None and upper is None:
        return None
    if lower is not None and upper is not None and lower > upper:
        issues.append(FieldIssue(f.name, f"{lower_name} must not be after {upper_name}"))
        return None
    return ValueRange(lower=lower, upper=upper)


def _parse_instant(raw: str, is_upper: bool) -> datetime:
    """ISO 8601 date or datetime; naive values are UTC."""
    if len(raw) == 10:
        try:
            day = date.fromisoformat(raw)
        except ValueError:
            raise ValueError("must be an ISO 8601 date or datetime")
        return datetime.combine(day, time.max if is_upper else time.min, timezone.utc)
    try:
        instant = datetime.fromisoformat(raw)
    except ValueError:
        raise ValueError("must be an ISO 8601 date or datetime")
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def _parse_number(raw: str, is_upper: bool) -> int | float:
    """Integral values come back as int so they bind to integer columns."""
    try:
        number = float(raw)
    except ValueError:
        raise ValueError("must be a number")
    if not math.isfinite(number):
        raise ValueError("must be a finite number")
    return int(number) if number.is_integer() else number
