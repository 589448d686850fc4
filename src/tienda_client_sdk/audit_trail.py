from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any

from .catalogs import NO_GROUP, PREDEFINED_GROUPS
from .filters import field_value
from .models import FieldChange

_GROUP_NUMBER_RE = re.compile(r"GRUPO_(\d+)", re.IGNORECASE)


def group_options(records: Iterable[Any]) -> list[str]:
    """Groups offered by the audit group filter: predefined ones plus any seen in history."""
    seen = {
        group
        for group in (field_value(record, "grupo_responsable") for record in records)
        if isinstance(group, str) and group and group != NO_GROUP
    }
    return sorted(set(PREDEFINED_GROUPS) | seen, key=_group_sort_key)


def compare_changes(before: Any, after: Any) -> list[FieldChange]:
    """Fields of the new snapshot whose value differs from the previous one."""
    if not isinstance(before, Mapping) or not isinstance(after, Mapping):
        return []
    return [
        FieldChange(campo=str(campo), antes=before.get(campo), despues=value)
        for campo, value in after.items()
        if before.get(campo) != value
    ]


def _group_sort_key(group: str) -> tuple[int, int, str]:
    match = _GROUP_NUMBER_RE.search(group)
    if match:
        return (0, int(match.group(1)), group)
    return (1, 0, group)
