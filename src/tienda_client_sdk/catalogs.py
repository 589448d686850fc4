from __future__ import annotations

PRODUCT_CATEGORIES = (
    "Electrónica",
    "Ropa",
    "Alimentos",
    "Hogar",
    "Deportes",
    "Libros",
    "Juguetes",
    "Salud",
    "Otros",
)

CITIES = (
    "Medellín",
    "Bogotá",
    "Cali",
    "Barranquilla",
    "Cartagena",
    "Bucaramanga",
    "Pereira",
    "Manizales",
    "Otra",
)

OPERATION_KINDS = ("CREATE", "UPDATE", "DELETE")
AUDITED_TABLES = ("productos", "clientes")

NO_GROUP = "SIN_GRUPO"
PREDEFINED_GROUPS = tuple(f"GRUPO_{index}" for index in range(1, 14))

# Filter values that mean "do not filter on this option".
ALL_SENTINELS = frozenset({"", "todos", "all"})
