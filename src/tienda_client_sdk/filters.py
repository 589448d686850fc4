from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field, replace
from datetime import date, datetime, time
from types import MappingProxyType
from typing import Any, TypeVar

from .catalogs import ALL_SENTINELS

T = TypeVar("T")
Predicate = Callable[[Any], bool]

_ACTIVE_VALUES = {"active", "activo", "activos"}
_INACTIVE_VALUES = {"inactive", "inactivo", "inactivos"}
_END_OF_DAY = time(23, 59, 59)


@dataclass(frozen=True)
class CategoricalOption:
    field: str
    case_sensitive: bool = True


@dataclass(frozen=True)
class FilterProfile:
    """Which record fields each filter option of an entity looks at."""

    search_fields: tuple[str, ...] = ()
    categorical: Mapping[str, CategoricalOption] = field(default_factory=dict)
    status_field: str | None = None
    date_field: str | None = None


@dataclass(frozen=True)
class FilterState:
    search: str = ""
    selections: Mapping[str, str | None] = field(default_factory=dict)
    status: str | None = None
    date_from: date | str | None = None
    date_to: date | str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "search", self.search or "")
        object.__setattr__(self, "selections", MappingProxyType(dict(self.selections or {})))
        object.__setattr__(self, "status", _coerce_status(self.status))
        object.__setattr__(self, "date_from", _coerce_date(self.date_from, "date_from"))
        object.__setattr__(self, "date_to", _coerce_date(self.date_to, "date_to"))

    def with_changes(self, **changes: Any) -> "FilterState":
        return replace(self, **changes)

    def is_empty(self) -> bool:
        return (
            not self.search
            and not _active_selections(self.selections)
            and self.status is None
            and self.date_from is None
            and self.date_to is None
        )


def apply_filters(records: Iterable[T], state: FilterState, profile: FilterProfile) -> list[T]:
    """Return the records matching every set option of ``state``, in input order."""
    predicates = build_predicates(state, profile)
    if not predicates:
        return list(records)
    return [record for record in records if all(predicate(record) for predicate in predicates)]


def build_predicates(state: FilterState, profile: FilterProfile) -> list[Predicate]:
    predicates: list[Predicate] = []

    if state.search:
        if not profile.search_fields:
            raise ValueError("free-text search is not supported for this entity")
        predicates.append(_search_predicate(state.search.lower(), profile.search_fields))

    for key, expected in _active_selections(state.selections).items():
        option = profile.categorical.get(key)
        if option is None:
            raise ValueError(f"unknown filter option: {key}")
        predicates.append(_categorical_predicate(option, expected))

    if state.status is not None:
        if profile.status_field is None:
            raise ValueError("status filter is not supported for this entity")
        predicates.append(_status_predicate(profile.status_field, state.status == "active"))

    if state.date_from is not None or state.date_to is not None:
        if profile.date_field is None:
            raise ValueError("date range filter is not supported for this entity")
        lower = datetime.combine(state.date_from, time.min) if state.date_from else None
        upper = datetime.combine(state.date_to, _END_OF_DAY) if state.date_to else None
        predicates.append(_date_range_predicate(profile.date_field, lower, upper))

    return predicates


def field_value(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def _search_predicate(term: str, fields: tuple[str, ...]) -> Predicate:
    def matches(record: Any) -> bool:
        for name in fields:
            value = field_value(record, name)
            if isinstance(value, str) and term in value.lower():
                return True
        return False

    return matches


def _categorical_predicate(option: CategoricalOption, expected: str) -> Predicate:
    wanted = expected if option.case_sensitive else expected.casefold()

    def matches(record: Any) -> bool:
        value = field_value(record, option.field)
        if not isinstance(value, str):
            return False
        return (value if option.case_sensitive else value.casefold()) == wanted

    return matches


def _status_predicate(field_name: str, wanted: bool) -> Predicate:
    def matches(record: Any) -> bool:
        return field_value(record, field_name) is wanted

    return matches


def _date_range_predicate(field_name: str, lower: datetime | None, upper: datetime | None) -> Predicate:
    def matches(record: Any) -> bool:
        value = field_value(record, field_name)
        if not isinstance(value, datetime):
            return False
        if lower is not None and value < lower:
            return False
        if upper is not None and value > upper:
            return False
        return True

    return matches


def _active_selections(selections: Mapping[str, str | None]) -> dict[str, str]:
    return {
        key: value
        for key, value in selections.items()
        if value is not None and value.strip().lower() not in ALL_SENTINELS
    }


def _coerce_status(value: str | None) -> str | None:
    if value is None:
        return None
    normalized = value.strip().lower()
    if normalized in ALL_SENTINELS:
        return None
    if normalized in _ACTIVE_VALUES:
        return "active"
    if normalized in _INACTIVE_VALUES:
        return "inactive"
    raise ValueError(f"unknown status filter: {value!r}")


def _coerce_date(value: date | str | None, name: str) -> date | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = value.strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError as exc:
        raise ValueError(f"invalid {name}: expected YYYY-MM-DD, got {value!r}") from exc
