from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer

# The backend expects JSON numbers, not the string form pydantic uses for Decimal.
JsonDecimal = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class Product(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True)

    id: int | None = None
    nombre: str = ""
    descripcion: str | None = None
    precio: Decimal = Decimal("0")
    stock: int = 0
    categoria: str = ""
    activo: bool | None = None


class Customer(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True)

    id: int | None = None
    nombre: str = ""
    email: str = ""
    telefono: str = ""
    documento: str = ""
    ciudad: str = ""
    direccion: str | None = None
    activo: bool | None = None


class AuditRecord(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True)

    id: int | None = None
    tabla_afectada: str = ""
    id_registro: int | None = None
    operacion: str = ""
    grupo_responsable: str = ""
    datos_anteriores: Any = None
    datos_nuevos: Any = None
    fecha_operacion: str | None = None
    fecha_objeto: datetime | None = Field(default=None, exclude=True)
    observaciones: str = ""


class ProductPayload(BaseModel):
    """Body for product create and full update."""

    model_config = ConfigDict(extra="forbid")

    nombre: str
    descripcion: str | None = None
    precio: JsonDecimal
    stock: int
    categoria: str
    activo: bool = True


class ProductPatch(BaseModel):
    model_config = ConfigDict(extra="forbid")

    nombre: str | None = None
    descripcion: str | None = None
    precio: JsonDecimal | None = None
    stock: int | None = None
    categoria: str | None = None
    activo: bool | None = None


class CustomerPayload(BaseModel):
    """Body for customer create and full update."""

    model_config = ConfigDict(extra="forbid")

    nombre: str
    email: str
    telefono: str
    documento: str
    ciudad: str
    direccion: str | None = None
    activo: bool = True


class CustomerPatch(BaseModel):
    model_config = ConfigDict(extra="forbid")

    nombre: str | None = None
    email: str | None = None
    telefono: str | None = None
    documento: str | None = None
    ciudad: str | None = None
    direccion: str | None = None
    activo: bool | None = None


class FieldChange(BaseModel):
    campo: str
    antes: Any = None
    despues: Any = None
