from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .base import BaseClient, path_segment


@dataclass
class AuditClient(BaseClient):
    """Read-only access to the audit trail; the backend writes it on every mutation."""

    entity: str = "auditoria"

    def list_audit(self) -> list[Any]:
        return self._list("/auditoria/", operation="list")

    def by_group(self, grupo: str) -> list[Any]:
        return self._list(f"/auditoria/grupo/{path_segment(grupo)}", operation="by_group")

    def by_table(self, tabla: str) -> list[Any]:
        return self._list(f"/auditoria/tabla/{path_segment(tabla)}", operation="by_table")

    def by_operation(self, operacion: str) -> list[Any]:
        return self._list(
            f"/auditoria/operacion/{path_segment(operacion.upper())}",
            operation="by_operation",
        )

    def record_history(self, tabla: str, record_id: int) -> list[Any]:
        return self._list(
            f"/auditoria/registro/{path_segment(tabla)}/{path_segment(record_id)}",
            operation="record_history",
        )
