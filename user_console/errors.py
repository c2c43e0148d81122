"""Jerarquía de errores de la consola de usuarios."""

from __future__ import annotations


class UserConsoleError(Exception):
    """Error base de la aplicación."""


class ConfigError(UserConsoleError):
    """Valor de configuración inválido."""


class TransportError(UserConsoleError):
    """Fallo de red, HTTP o de decodificación al hablar con el servicio remoto.

    Attributes
    ----------
    status_code:
        Código HTTP de la respuesta, si llegó a existir una.
    server_message:
        Campo ``message`` del cuerpo de error devuelto por el servicio.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        server_message: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.server_message = server_message


__all__ = ["ConfigError", "TransportError", "UserConsoleError"]
