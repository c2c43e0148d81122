"""Implementaciones de repositorios para acceso a datos."""

from __future__ import annotations

from typing import Any

from user_console.errors import TransportError
from user_console.infrastructure.api_client import APIClient
from user_console.infrastructure.naming import to_internal_form, to_wire_form
from user_console.models.user import User, UserFormDraft, UserPage


class UserRepository:
    """Repositorio de usuarios basado en un cliente API.

    Es el único punto donde los datos cruzan entre la forma de red
    (snake_case) y la interna (camelCase).
    """

    def __init__(self, api_client: APIClient) -> None:
        self._api_client = api_client

    def fetch_page(self, page: int, page_size: int) -> UserPage:
        """Devuelve una página del listado completo."""

        crudo = self._api_client.get(params={"page": page, "size": page_size})
        return self._to_page(crudo)

    def search_page(self, first_name: str, page: int, page_size: int) -> UserPage:
        """Devuelve una página de usuarios filtrados por nombre."""

        crudo = self._api_client.get(
            "search",
            params={"firstName": first_name, "page": page, "size": page_size},
        )
        return self._to_page(crudo)

    def create(self, draft: UserFormDraft) -> User:
        crudo = self._api_client.post(body=to_wire_form(draft.to_internal()))
        return self._to_user(crudo)

    def update(self, user_id: int, draft: UserFormDraft) -> User:
        crudo = self._api_client.put(str(user_id), body=to_wire_form(draft.to_internal()))
        return self._to_user(crudo)

    def delete(self, user_id: int) -> None:
        self._api_client.delete(str(user_id))

    # ------------------------------------------------------------------
    # Conversión
    # ------------------------------------------------------------------
    @staticmethod
    def _to_user(crudo: Any) -> User:
        datos = to_internal_form(crudo)
        if not isinstance(datos, dict) or "id" not in datos:
            raise TransportError("Formato inesperado al leer el usuario.")
        try:
            return User.from_internal(datos)
        except (TypeError, ValueError) as exc:
            raise TransportError(f"Usuario con datos inválidos: {exc}") from exc

    @classmethod
    def _to_page(cls, crudo: Any) -> UserPage:
        datos = to_internal_form(crudo)
        if not isinstance(datos, dict):
            raise TransportError("Formato inesperado al leer la página de usuarios.")
        contenido = datos.get("content") or []
        try:
            total_pages = int(datos.get("totalPages") or 0)
        except (TypeError, ValueError) as exc:
            raise TransportError("Total de páginas inválido en la respuesta.") from exc
        return UserPage(
            content=tuple(cls._to_user(item) for item in contenido),
            total_pages=total_pages,
        )


__all__ = ["UserRepository"]
