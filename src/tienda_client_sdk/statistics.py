from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from .catalogs import AUDITED_TABLES, OPERATION_KINDS
from .filters import field_value

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CollectionStats:
    total: int
    active_count: int | None = None
    inventory_value: Decimal | None = None
    per_operation: dict[str, int] | None = None
    per_table: dict[str, int] | None = None
    per_group: dict[str, int] | None = None

    def to_dict(self) -> dict[str, Any]:
        payload = {
            "total": self.total,
            "active_count": self.active_count,
            "inventory_value": self.inventory_value,
            "per_operation": self.per_operation,
            "per_table": self.per_table,
            "per_group": self.per_group,
        }
        return {key: value for key, value in payload.items() if value is not None}


def product_stats(records: Iterable[Any]) -> CollectionStats:
    rows = list(records)
    inventory_value = Decimal("0")
    for row in rows:
        precio = field_value(row, "precio")
        stock = field_value(row, "stock")
        if not isinstance(precio, (Decimal, int)) or not isinstance(stock, int):
            continue
        try:
            inventory_value = inventory_value + precio * stock
        except ArithmeticError:
            # Decimal overflow on absurd backend values; the row is left out of the total.
            logger.warning(
                "inventory_value_overflow",
                extra={"record_id": field_value(row, "id"), "precio": str(precio), "stock": stock},
            )
    return CollectionStats(
        total=len(rows),
        active_count=_count_active(rows),
        inventory_value=inventory_value,
    )


def customer_stats(records: Iterable[Any]) -> CollectionStats:
    rows = list(records)
    return CollectionStats(total=len(rows), active_count=_count_active(rows))


def audit_stats(records: Iterable[Any]) -> CollectionStats:
    rows = list(records)
    per_operation = {kind: 0 for kind in OPERATION_KINDS}
    per_table = {table: 0 for table in AUDITED_TABLES}
    per_group: Counter[str] = Counter()
    for row in rows:
        kind = field_value(row, "operacion")
        if kind in per_operation:
            per_operation[kind] += 1
        table = str(field_value(row, "tabla_afectada") or "").lower()
        if table:
            per_table[table] = per_table.get(table, 0) + 1
        group = field_value(row, "grupo_responsable")
        if group:
            per_group[str(group)] += 1
    return CollectionStats(
        total=len(rows),
        per_operation=per_operation,
        per_table=per_table,
        per_group=dict(per_group),
    )


def _count_active(rows: list[Any]) -> int:
    return sum(1 for row in rows if field_value(row, "activo") is True)
