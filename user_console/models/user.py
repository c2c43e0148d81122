"""Definiciones de modelos de dominio."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class User:
    """Registro de usuario tal como lo devuelve el servicio remoto.

    El ``id`` lo asigna el servidor al crear y no cambia nunca.
    """

    id: int
    first_name: str
    last_name: str
    email: str

    @classmethod
    def from_internal(cls, datos: dict) -> "User":
        """Construye el usuario desde un diccionario en notación camelCase."""

        return cls(
            id=int(datos["id"]),
            first_name=datos.get("firstName") or "",
            last_name=datos.get("lastName") or "",
            email=datos.get("email") or "",
        )

    def to_internal(self) -> dict:
        return {
            "id": self.id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
        }


@dataclass(frozen=True, slots=True)
class UserFormDraft:
    """Valores del formulario aún no guardados; no tiene ``id``."""

    first_name: str = ""
    last_name: str = ""
    email: str = ""

    @classmethod
    def empty(cls) -> "UserFormDraft":
        return cls()

    @classmethod
    def from_record(cls, usuario: User) -> "UserFormDraft":
        """Copia los tres campos editables de un usuario existente."""

        return cls(
            first_name=usuario.first_name,
            last_name=usuario.last_name,
            email=usuario.email,
        )

    def to_internal(self) -> dict:
        return {
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
        }


@dataclass(frozen=True, slots=True)
class UserPage:
    """Página de usuarios con el total de páginas informado por el servidor."""

    content: tuple[User, ...] = ()
    total_pages: int = 0


__all__ = ["User", "UserFormDraft", "UserPage"]
