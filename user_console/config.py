"""Configuración de la aplicación leída desde variables de entorno."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from user_console.errors import ConfigError

DEFAULT_API_URL = "http://localhost:9090/users"
DEFAULT_PAGE_SIZE = 5


def _getenv_str(name: str, default: str) -> str:
    value = os.getenv(name)
    return default if value is None or value.strip() == "" else value.strip()


def _getenv_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ConfigError(f"{name} debe ser un entero, se recibió {value!r}") from exc


def _getenv_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


@dataclass(frozen=True, slots=True)
class Settings:
    """Parámetros de conexión y comportamiento del cliente."""

    api_url: str = DEFAULT_API_URL
    timeout: int = 10
    page_size: int = DEFAULT_PAGE_SIZE
    discard_stale_responses: bool = False
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Construye :class:`Settings` a partir del entorno."""

    timeout = _getenv_int("USER_CONSOLE_TIMEOUT", 10)
    page_size = _getenv_int("USER_CONSOLE_PAGE_SIZE", DEFAULT_PAGE_SIZE)
    if timeout <= 0:
        raise ConfigError("USER_CONSOLE_TIMEOUT debe ser mayor que cero")
    if page_size <= 0:
        raise ConfigError("USER_CONSOLE_PAGE_SIZE debe ser mayor que cero")

    return Settings(
        api_url=_getenv_str("USER_CONSOLE_API_URL", DEFAULT_API_URL).rstrip("/"),
        timeout=timeout,
        page_size=page_size,
        discard_stale_responses=_getenv_bool("USER_CONSOLE_DISCARD_STALE", False),
        log_level=_getenv_str("USER_CONSOLE_LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


__all__ = ["Settings", "configure_logging", "load_settings"]
