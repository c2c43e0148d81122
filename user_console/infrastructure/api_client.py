"""Cliente HTTP contra el servicio REST de usuarios.

Encapsula las peticiones con ``urllib.request``: serializa el cuerpo a JSON,
decodifica la respuesta y traduce cualquier fallo a :class:`TransportError`.
Cada petición genera una traza que se entrega a los observadores
registrados; los observadores no participan del flujo de control.
"""

from __future__ import annotations

import http.client
import json
import logging
import socket
import time
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from user_console.errors import TransportError

logger = logging.getLogger(__name__)
trace_logger = logging.getLogger("user_console.http")


@dataclass(frozen=True, slots=True)
class RequestTrace:
    """Resumen de una petición HTTP para diagnóstico."""

    method: str
    url: str
    status: Optional[int]
    elapsed_ms: float
    error: Optional[str] = None


TraceObserver = Callable[[RequestTrace], None]


def log_trace(trace: RequestTrace) -> None:
    if trace.error:
        trace_logger.warning(
            "%s %s -> %s (%.1f ms): %s",
            trace.method,
            trace.url,
            trace.status if trace.status is not None else "sin respuesta",
            trace.elapsed_ms,
            trace.error,
        )
        return
    trace_logger.info(
        "%s %s -> %s (%.1f ms)", trace.method, trace.url, trace.status, trace.elapsed_ms
    )


class APIClient:
    """Provee acceso HTTP al recurso de usuarios."""

    def __init__(self, base_url: str, *, timeout: int = 10, trace_to_log: bool = True) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._observers: list[TraceObserver] = []
        if trace_to_log:
            self.add_observer(log_trace)

    # ------------------------------------------------------------------
    # Observadores
    # ------------------------------------------------------------------
    def add_observer(self, observer: TraceObserver) -> None:
        self._observers.append(observer)

    def remove_observer(self, observer: TraceObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def _notify(self, trace: RequestTrace) -> None:
        for observer in list(self._observers):
            try:
                observer(trace)
            except Exception:  # la traza nunca corta la petición
                logger.exception("Observador de trazas falló para %s %s", trace.method, trace.url)

    # ------------------------------------------------------------------
    # Peticiones
    # ------------------------------------------------------------------
    def build_url(self, path: str = "", params: Mapping[str, Any] | None = None) -> str:
        url = self.base_url
        if path:
            url = f"{url}/{path.lstrip('/')}"
        if params:
            url = f"{url}?{urlencode(params)}"
        return url

    def request(
        self,
        method: str,
        path: str = "",
        *,
        params: Mapping[str, Any] | None = None,
        body: Any = None,
        expect_json: bool = True,
    ) -> Any:
        """Ejecuta la petición y devuelve el cuerpo decodificado.

        Con ``expect_json=False`` un cuerpo que no es JSON se devuelve como
        texto en lugar de considerarse un error. Un cuerpo vacío devuelve
        ``None``.
        """

        url = self.build_url(path, params)
        headers = {"Accept": "application/json"}
        data = None
        if body is not None:
            data = json.dumps(body).encode("utf-8")
            headers["Content-Type"] = "application/json"

        request = Request(url, data=data, method=method, headers=headers)
        started = time.perf_counter()
        status: Optional[int] = None
        try:
            with urlopen(request, timeout=self.timeout) as response:
                status = getattr(response, "status", 200)
                raw = response.read()
        except HTTPError as exc:
            server_message = self._extract_server_message(exc)
            error = TransportError(
                server_message or f"Error HTTP {exc.code}",
                status_code=exc.code,
                server_message=server_message,
            )
            self._trace(method, url, exc.code, started, str(error))
            raise error from exc
        except URLError as exc:
            if isinstance(exc.reason, socket.timeout):
                message = "La petición expiró por timeout."
            else:
                message = f"No se pudo conectar al servicio: {exc.reason}."
            self._trace(method, url, None, started, message)
            raise TransportError(message) from exc
        except (socket.timeout, TimeoutError) as exc:
            message = "La petición expiró por timeout."
            self._trace(method, url, None, started, message)
            raise TransportError(message) from exc
        except (http.client.HTTPException, OSError) as exc:
            # urllib no envuelve los cortes de conexión ni las lecturas incompletas.
            message = f"La conexión con el servicio se interrumpió: {exc!r}."
            self._trace(method, url, None, started, message)
            raise TransportError(message) from exc

        try:
            payload = self._decode(raw, expect_json)
        except ValueError as exc:
            message = "Respuesta del servicio no es JSON válido."
            self._trace(method, url, status, started, message)
            raise TransportError(message, status_code=status) from exc

        self._trace(method, url, status, started, None)
        return payload

    def get(self, path: str = "", *, params: Mapping[str, Any] | None = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str = "", *, body: Any) -> Any:
        return self.request("POST", path, body=body)

    def put(self, path: str = "", *, body: Any) -> Any:
        return self.request("PUT", path, body=body)

    def delete(self, path: str = "") -> Any:
        return self.request("DELETE", path, expect_json=False)

    # ------------------------------------------------------------------
    # Utilidades
    # ------------------------------------------------------------------
    @staticmethod
    def _decode(raw: bytes, expect_json: bool) -> Any:
        text = raw.decode("utf-8") if raw else ""
        if not text.strip():
            return None
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            if expect_json:
                raise
            return text

    @staticmethod
    def _extract_server_message(exc: HTTPError) -> Optional[str]:
        try:
            raw = exc.read()
        except (http.client.HTTPException, OSError):
            return None
        if not raw:
            return None
        try:
            payload = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError):
            return None
        if isinstance(payload, dict):
            message = payload.get("message")
            if isinstance(message, str) and message:
                return message
        return None

    def _trace(
        self,
        method: str,
        url: str,
        status: Optional[int],
        started: float,
        error: Optional[str],
    ) -> None:
        elapsed_ms = (time.perf_counter() - started) * 1000
        self._notify(RequestTrace(method=method, url=url, status=status, elapsed_ms=elapsed_ms, error=error))


__all__ = ["APIClient", "RequestTrace", "TraceObserver", "log_trace"]
