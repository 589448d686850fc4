from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Literal

from pydantic import BaseModel

from .entities import EntityProfile, get_profile
from .filters import FilterState, apply_filters
from .statistics import CollectionStats


class CollectionStore:
    """Full and visible record sets for one entity.

    ``full`` only changes through :meth:`replace_all`; ``visible`` is always
    recomputed from ``full`` and the current filter state, never patched.
    """

    def __init__(self, entity: EntityProfile | str) -> None:
        self.profile = get_profile(entity)
        self._full: tuple[BaseModel, ...] = ()
        self._visible: tuple[BaseModel, ...] = ()
        self._filter_state = FilterState()

    @property
    def full(self) -> tuple[BaseModel, ...]:
        return self._full

    @property
    def visible(self) -> tuple[BaseModel, ...]:
        return self._visible

    @property
    def filter_state(self) -> FilterState:
        return self._filter_state

    def replace_all(self, records: Iterable[Any]) -> tuple[BaseModel, ...]:
        normalized = tuple(self.profile.normalizer(record) for record in records)
        # Filter first so a bad filter state cannot leave full and visible out of step.
        visible = self._evaluate(normalized, self._filter_state)
        self._full = normalized
        self._visible = visible
        return self._full

    def apply_filters(self, state: FilterState) -> tuple[BaseModel, ...]:
        visible = self._evaluate(self._full, state)
        self._filter_state = state
        self._visible = visible
        return self._visible

    def clear_filters(self) -> tuple[BaseModel, ...]:
        return self.apply_filters(FilterState())

    def statistics(self, scope: Literal["full", "visible"] = "full") -> CollectionStats:
        if scope not in {"full", "visible"}:
            raise ValueError(f"unknown statistics scope: {scope!r}")
        records = self._full if scope == "full" else self._visible
        return self.profile.aggregator(records)

    def find(self, record_id: int) -> BaseModel | None:
        for record in self._full:
            if getattr(record, "id", None) == record_id:
                return record
        return None

    def _evaluate(self, records: tuple[BaseModel, ...], state: FilterState) -> tuple[BaseModel, ...]:
        return tuple(apply_filters(records, state, self.profile.filters))
