from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from .filters import CategoricalOption, FilterProfile
from .normalizers import normalize_audit_record, normalize_customer, normalize_product
from .statistics import CollectionStats, audit_stats, customer_stats, product_stats


@dataclass(frozen=True)
class EntityProfile:
    """Everything that differs between the product, customer and audit collections."""

    name: str
    normalizer: Callable[[Any], BaseModel]
    filters: FilterProfile
    aggregator: Callable[[Iterable[Any]], CollectionStats]


PRODUCTS = EntityProfile(
    name="productos",
    normalizer=normalize_product,
    filters=FilterProfile(
        search_fields=("nombre", "descripcion"),
        categorical={"categoria": CategoricalOption("categoria")},
        status_field="activo",
    ),
    aggregator=product_stats,
)

CUSTOMERS = EntityProfile(
    name="clientes",
    normalizer=normalize_customer,
    filters=FilterProfile(
        search_fields=("nombre", "email"),
        categorical={"ciudad": CategoricalOption("ciudad")},
        status_field="activo",
    ),
    aggregator=customer_stats,
)

AUDIT = EntityProfile(
    name="auditoria",
    normalizer=normalize_audit_record,
    filters=FilterProfile(
        categorical={
            "grupo": CategoricalOption("grupo_responsable"),
            "tabla": CategoricalOption("tabla_afectada", case_sensitive=False),
            "operacion": CategoricalOption("operacion"),
        },
        date_field="fecha_objeto",
    ),
    aggregator=audit_stats,
)

PROFILES = {profile.name: profile for profile in (PRODUCTS, CUSTOMERS, AUDIT)}


def get_profile(entity: EntityProfile | str) -> EntityProfile:
    if isinstance(entity, EntityProfile):
        return entity
    try:
        return PROFILES[entity]
    except KeyError as exc:
        raise ValueError(f"unknown entity: {entity!r}") from exc


def aggregate(entity: EntityProfile | str, records: Iterable[Any]) -> CollectionStats:
    return get_profile(entity).aggregator(records)
