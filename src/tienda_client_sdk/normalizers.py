from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import BaseModel

from .catalogs import NO_GROUP
from .json_decoding import safe_json_decode
from .models import AuditRecord, Customer, Product

logger = logging.getLogger(__name__)


def normalize_rows(payload: Any, *, strict: bool = False) -> list[Any]:
    """Return the record list from a bare list or a listing envelope.

    Anything else is logged and read as no rows, or rejected with
    ``ValueError`` when ``strict`` is set.
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in ("rows", "items", "data"):
            if isinstance(payload.get(key), list):
                return payload[key]
    if strict:
        raise ValueError(f"not a listing payload: {type(payload).__name__}")
    if payload is not None:
        logger.warning("listing_payload_unrecognized", extra={"payload_type": type(payload).__name__})
    return []


def normalize_product(raw: Any) -> Product:
    if isinstance(raw, Product):
        return raw
    data = _as_mapping(raw, "productos")
    precio = _to_decimal(data.get("precio"))
    return Product.model_validate(
        {
            **_extras(data, Product),
            "id": _to_int(data.get("id")),
            "nombre": _to_text(data.get("nombre")),
            "descripcion": _to_optional_text(data.get("descripcion")),
            "precio": precio if precio is not None else Decimal("0"),
            "stock": _to_int(data.get("stock")) or 0,
            "categoria": _to_text(data.get("categoria")),
            "activo": _to_bool(data.get("activo")),
        }
    )


def normalize_customer(raw: Any) -> Customer:
    if isinstance(raw, Customer):
        return raw
    data = _as_mapping(raw, "clientes")
    return Customer.model_validate(
        {
            **_extras(data, Customer),
            "id": _to_int(data.get("id")),
            "nombre": _to_text(data.get("nombre")),
            "email": _to_text(data.get("email")),
            "telefono": _to_text(data.get("telefono")),
            "documento": _to_text(data.get("documento")),
            "ciudad": _to_text(data.get("ciudad")),
            "direccion": _to_optional_text(data.get("direccion")),
            "activo": _to_bool(data.get("activo")),
        }
    )


def normalize_audit_record(raw: Any) -> AuditRecord:
    if isinstance(raw, AuditRecord):
        return raw
    data = _as_mapping(raw, "auditoria")
    fecha_operacion = _to_optional_text(data.get("fecha_operacion"))
    group = _to_text(data.get("grupo_responsable")).strip()
    return AuditRecord.model_validate(
        {
            **_extras(data, AuditRecord),
            "id": _to_int(data.get("id")),
            "tabla_afectada": _to_text(data.get("tabla_afectada")),
            "id_registro": _to_int(data.get("id_registro")),
            "operacion": _to_text(data.get("operacion")).strip().upper(),
            "grupo_responsable": group or NO_GROUP,
            "datos_anteriores": safe_json_decode(data.get("datos_anteriores")),
            "datos_nuevos": safe_json_decode(data.get("datos_nuevos")),
            "fecha_operacion": fecha_operacion,
            "fecha_objeto": parse_timestamp(data.get("fecha_operacion")),
            "observaciones": _to_text(data.get("observaciones")),
        }
    )


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp into a naive local datetime, or ``None``."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text[-1] in "Zz":
            text = f"{text[:-1]}+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def _as_mapping(raw: Any, entity: str) -> Mapping[str, Any]:
    if isinstance(raw, Mapping):
        return raw
    if isinstance(raw, BaseModel):
        return raw.model_dump()
    logger.warning("record_not_an_object", extra={"entity": entity, "record_type": type(raw).__name__})
    return {}


def _extras(data: Mapping[str, Any], model: type[BaseModel]) -> dict[str, Any]:
    return {
        str(key): value
        for key, value in data.items()
        if str(key) not in model.model_fields
        and str(key).isidentifier()
        and not str(key).startswith("_")
    }


def _to_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    if not number.is_finite() or number != number.to_integral_value():
        return None
    return int(number)


def _to_decimal(value: Any) -> Decimal | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    return number if number.is_finite() else None


def _to_bool(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0 if value in {0, 1} else None
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "t", "yes", "y", "si", "sí"}:
            return True
        if normalized in {"0", "false", "f", "no", "n"}:
            return False
    return None


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _to_optional_text(value: Any) -> str | None:
    if value is None:
        return None
    return _to_text(value)
