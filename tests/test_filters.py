from __future__ import annotations

from datetime import date

import pytest

from tienda_client_sdk.entities import AUDIT, CUSTOMERS, PRODUCTS
from tienda_client_sdk.filters import FilterState, apply_filters
from tienda_client_sdk.normalizers import normalize_audit_record, normalize_customer, normalize_product


def _products():
    return [
        normalize_product({"id": 1, "nombre": "Laptop", "descripcion": "Laptop HP para oficina", "precio": 2500000, "stock": 3, "categoria": "Electrónica", "activo": True}),
        normalize_product({"id": 2, "nombre": "Mouse", "descripcion": None, "precio": 50000, "stock": 10, "categoria": "Electrónica", "activo": False}),
        normalize_product({"id": 3, "nombre": "Sartén", "descripcion": "Antiadherente", "precio": 80000, "stock": 0, "categoria": "Hogar", "activo": True}),
        normalize_product({"id": 4, "nombre": "Balón", "precio": 60000, "stock": 5, "categoria": "Deportes"}),
    ]


def _audit():
    return [
        normalize_audit_record({"id": 1, "tabla_afectada": "productos", "operacion": "create", "grupo_responsable": "GRUPO_1", "fecha_operacion": "2024-01-01T00:00:00"}),
        normalize_audit_record({"id": 2, "tabla_afectada": "Clientes", "operacion": "UPDATE", "grupo_responsable": "GRUPO_2", "fecha_operacion": "2024-06-15T12:00:00"}),
        normalize_audit_record({"id": 3, "tabla_afectada": "productos", "operacion": "DELETE", "grupo_responsable": "GRUPO_1", "fecha_operacion": "2024-12-31T23:59:59"}),
        normalize_audit_record({"id": 4, "tabla_afectada": "productos", "operacion": "UPDATE", "fecha_operacion": "no es fecha"}),
    ]


def _ids(records) -> list[int]:
    return [record.id for record in records]


def test_empty_state_returns_full_set_in_order() -> None:
    products = _products()

    result = apply_filters(products, FilterState(), PRODUCTS.filters)

    assert result == products
    assert result is not products


def test_search_matches_description_case_insensitively() -> None:
    products = [
        normalize_product({"nombre": "Laptop", "descripcion": "Laptop HP para oficina"}),
        normalize_product({"nombre": "Mouse", "descripcion": None}),
    ]

    result = apply_filters(products, FilterState(search="hp"), PRODUCTS.filters)

    assert [product.nombre for product in result] == ["Laptop"]


def test_search_matches_name_or_email_for_customers() -> None:
    customers = [
        normalize_customer({"id": 1, "nombre": "Ana Gómez", "email": "ana@correo.com"}),
        normalize_customer({"id": 2, "nombre": "Luis", "email": "luis.ANA@correo.com"}),
        normalize_customer({"id": 3, "nombre": "Pedro"}),
    ]

    assert _ids(apply_filters(customers, FilterState(search="ANA"), CUSTOMERS.filters)) == [1, 2]


def test_category_filter_is_case_sensitive_and_all_sentinel_matches_everything() -> None:
    products = _products()

    assert _ids(apply_filters(products, FilterState(selections={"categoria": "Electrónica"}), PRODUCTS.filters)) == [1, 2]
    assert apply_filters(products, FilterState(selections={"categoria": "electrónica"}), PRODUCTS.filters) == []
    assert _ids(apply_filters(products, FilterState(selections={"categoria": "todos"}), PRODUCTS.filters)) == [1, 2, 3, 4]


def test_status_filter_treats_unknown_activo_as_non_matching() -> None:
    products = _products()

    assert _ids(apply_filters(products, FilterState(status="activos"), PRODUCTS.filters)) == [1, 3]
    assert _ids(apply_filters(products, FilterState(status="inactive"), PRODUCTS.filters)) == [2]
    assert _ids(apply_filters(products, FilterState(status="todos"), PRODUCTS.filters)) == [1, 2, 3, 4]


def test_predicates_are_combined_with_and() -> None:
    state = FilterState(search="laptop", selections={"categoria": "Electrónica"}, status="active")

    assert _ids(apply_filters(_products(), state, PRODUCTS.filters)) == [1]


def test_city_filter_for_customers() -> None:
    customers = [
        normalize_customer({"id": 1, "ciudad": "Medellín"}),
        normalize_customer({"id": 2, "ciudad": "Cali"}),
        normalize_customer({"id": 3}),
    ]

    assert _ids(apply_filters(customers, FilterState(selections={"ciudad": "Cali"}), CUSTOMERS.filters)) == [2]


def test_date_range_is_inclusive_and_skips_unparseable_dates() -> None:
    state = FilterState(date_from="2024-01-01", date_to="2024-06-30")

    assert _ids(apply_filters(_audit(), state, AUDIT.filters)) == [1, 2]


def test_open_ended_date_bounds() -> None:
    assert _ids(apply_filters(_audit(), FilterState(date_from=date(2024, 6, 15)), AUDIT.filters)) == [2, 3]
    assert _ids(apply_filters(_audit(), FilterState(date_to=date(2024, 12, 31)), AUDIT.filters)) == [1, 2, 3]


def test_audit_table_is_case_insensitive_and_operation_exact() -> None:
    records = _audit()

    assert _ids(apply_filters(records, FilterState(selections={"tabla": "clientes"}), AUDIT.filters)) == [2]
    assert _ids(apply_filters(records, FilterState(selections={"operacion": "UPDATE"}), AUDIT.filters)) == [2, 4]
    assert _ids(apply_filters(records, FilterState(selections={"grupo": "GRUPO_1"}), AUDIT.filters)) == [1, 3]


def test_filtering_is_idempotent_and_does_not_mutate_input() -> None:
    products = _products()
    snapshot = list(products)
    state = FilterState(search="a", status="active")

    first = apply_filters(products, state, PRODUCTS.filters)
    second = apply_filters(products, state, PRODUCTS.filters)

    assert first == second
    assert products == snapshot


def test_raw_mappings_are_filtered_null_safely() -> None:
    rows = [{"nombre": None, "descripcion": None}, {"nombre": "Cable HP"}]

    assert apply_filters(rows, FilterState(search="hp"), PRODUCTS.filters) == [{"nombre": "Cable HP"}]


def test_state_rejects_unknown_status_and_bad_dates() -> None:
    with pytest.raises(ValueError):
        FilterState(status="borrados")
    with pytest.raises(ValueError):
        FilterState(date_from="15/06/2024")


def test_unsupported_options_for_entity_raise() -> None:
    with pytest.raises(ValueError):
        apply_filters(_products(), FilterState(selections={"ciudad": "Cali"}), PRODUCTS.filters)
    with pytest.raises(ValueError):
        apply_filters(_audit(), FilterState(search="x"), AUDIT.filters)
    with pytest.raises(ValueError):
        apply_filters(_products(), FilterState(date_from="2024-01-01"), PRODUCTS.filters)


def test_with_changes_and_is_empty() -> None:
    state = FilterState()

    assert state.is_empty()
    assert FilterState(selections={"categoria": "todos"}).is_empty()
    changed = state.with_changes(status="activos")
    assert changed.status == "active"
    assert not changed.is_empty()
    assert state.status is None
