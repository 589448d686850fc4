from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from tienda_client_sdk.models import AuditRecord, Product
from tienda_client_sdk.normalizers import (
    normalize_audit_record,
    normalize_customer,
    normalize_product,
    normalize_rows,
    parse_timestamp,
)
from tienda_client_sdk.validation import product_issues


def test_product_numeric_text_is_parsed_and_negative_stock_passes_through() -> None:
    product = normalize_product({"id": 1, "nombre": "Mouse", "precio": "50000", "stock": -1, "categoria": "Hogar"})

    assert product.id == 1
    assert product.precio == Decimal("50000")
    assert product.stock == -1
    assert product.categoria == "Hogar"
    assert [issue.field for issue in product_issues(product)] == ["stock"]


def test_product_missing_fields_get_defaults() -> None:
    product = normalize_product({})

    assert product.id is None
    assert product.nombre == ""
    assert product.descripcion is None
    assert product.precio == Decimal("0")
    assert product.stock == 0
    assert product.categoria == ""
    assert product.activo is None


def test_product_unparseable_values_fall_back_without_raising() -> None:
    product = normalize_product({"id": "abc", "precio": "caro", "stock": "1.5", "activo": "quizas"})

    assert product.id is None
    assert product.precio == Decimal("0")
    assert product.stock == 0
    assert product.activo is None


def test_product_keeps_unknown_wire_fields() -> None:
    product = normalize_product({"id": 2, "nombre": "Teclado", "fecha_creacion": "2024-01-01"})

    assert product.model_extra == {"fecha_creacion": "2024-01-01"}


def test_canonical_record_is_returned_unchanged() -> None:
    product = Product(id=5, nombre="Laptop")

    assert normalize_product(product) is product


def test_non_mapping_record_normalizes_to_defaults() -> None:
    assert normalize_customer("not a record").nombre == ""
    assert normalize_audit_record(None).grupo_responsable == "SIN_GRUPO"


def test_customer_activo_variants() -> None:
    assert normalize_customer({"activo": 1}).activo is True
    assert normalize_customer({"activo": "false"}).activo is False
    assert normalize_customer({"activo": True, "telefono": 3001234567}).telefono == "3001234567"


def test_audit_record_normalization() -> None:
    record = normalize_audit_record(
        {
            "id": 10,
            "tabla_afectada": "productos",
            "id_registro": "4",
            "operacion": "update",
            "grupo_responsable": None,
            "datos_anteriores": '{"precio": 10}',
            "datos_nuevos": {"precio": 12},
            "fecha_operacion": "2024-06-15T12:00:00",
        }
    )

    assert isinstance(record, AuditRecord)
    assert record.operacion == "UPDATE"
    assert record.id_registro == 4
    assert record.grupo_responsable == "SIN_GRUPO"
    assert record.datos_anteriores == {"precio": 10}
    assert record.datos_nuevos == {"precio": 12}
    assert record.fecha_operacion == "2024-06-15T12:00:00"
    assert record.fecha_objeto == datetime(2024, 6, 15, 12, 0, 0)
    assert record.observaciones == ""


def test_audit_record_bad_timestamp_and_snapshot_do_not_raise() -> None:
    record = normalize_audit_record(
        {"operacion": "DELETE", "datos_anteriores": "{roto", "datos_nuevos": "null", "fecha_operacion": "ayer"}
    )

    assert record.datos_anteriores == "{roto"
    assert record.datos_nuevos is None
    assert record.fecha_operacion == "ayer"
    assert record.fecha_objeto is None


def test_parse_timestamp_converts_aware_values_to_naive_local_time() -> None:
    parsed = parse_timestamp("2024-01-01T05:00:00Z")
    expected = datetime(2024, 1, 1, 5, 0, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)

    assert parsed == expected
    assert parsed.tzinfo is None
    assert parse_timestamp(datetime(2024, 1, 1, tzinfo=timezone(timedelta(hours=-5)))).tzinfo is None
    assert parse_timestamp("") is None
    assert parse_timestamp(12345) is None


def test_normalize_rows_shapes() -> None:
    assert normalize_rows([{"id": 1}]) == [{"id": 1}]
    assert normalize_rows({"items": [{"id": 2}]}) == [{"id": 2}]
    assert normalize_rows({"data": [{"id": 3}], "total": 1}) == [{"id": 3}]
    assert normalize_rows({"detail": "nada"}) == []
    assert normalize_rows(None) == []


def test_normalize_rows_strict_rejects_non_listings() -> None:
    assert normalize_rows({"rows": []}, strict=True) == []

    with pytest.raises(ValueError):
        normalize_rows({"detail": "mantenimiento"}, strict=True)
    with pytest.raises(ValueError):
        normalize_rows(None, strict=True)
