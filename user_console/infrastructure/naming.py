"""Tabla de nombres de campos entre el formato de red y el interno.

El servicio intercambia JSON en snake_case; dentro de la aplicación los
diccionarios usan camelCase. La tabla enumera explícitamente los campos de
usuario, del formulario y del sobre paginado. Las claves que no figuran en
ella se conservan tal cual.
"""

from __future__ import annotations

from typing import Any

WIRE_TO_INTERNAL: dict[str, str] = {
    "id": "id",
    "first_name": "firstName",
    "last_name": "lastName",
    "email": "email",
    "content": "content",
    "total_pages": "totalPages",
}

INTERNAL_TO_WIRE: dict[str, str] = {
    interno: red for red, interno in WIRE_TO_INTERNAL.items()
}


def to_internal_name(name: str) -> str:
    return WIRE_TO_INTERNAL.get(name, name)


def to_wire_name(name: str) -> str:
    return INTERNAL_TO_WIRE.get(name, name)


def _rename(payload: Any, mapping: dict[str, str]) -> Any:
    if isinstance(payload, dict):
        return {
            mapping.get(clave, clave): _rename(valor, mapping)
            for clave, valor in payload.items()
        }
    if isinstance(payload, (list, tuple)):
        return [_rename(valor, mapping) for valor in payload]
    return payload


def to_internal_form(payload: Any) -> Any:
    """Convierte recursivamente las claves de un payload de red a camelCase."""

    return _rename(payload, WIRE_TO_INTERNAL)


def to_wire_form(payload: Any) -> Any:
    """Convierte recursivamente las claves internas a snake_case."""

    return _rename(payload, INTERNAL_TO_WIRE)


__all__ = [
    "INTERNAL_TO_WIRE",
    "WIRE_TO_INTERNAL",
    "to_internal_form",
    "to_internal_name",
    "to_wire_form",
    "to_wire_name",
]
