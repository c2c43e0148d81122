"""Ejecutores de operaciones remotas.

El controlador no llama al repositorio directamente sino a través de un
ejecutor, que decide en qué hilo corre la operación. Los callbacks de
resultado siempre se invocan en el hilo que posee el estado.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol

from user_console.errors import TransportError

Operation = Callable[[], Any]
SuccessCallback = Callable[[Any], None]
FailureCallback = Callable[[TransportError], None]


class TaskRunner(Protocol):
    def submit(
        self,
        operation: Operation,
        on_success: SuccessCallback,
        on_failure: FailureCallback,
    ) -> None: ...


class InlineTaskRunner:
    """Ejecuta la operación en el momento, en el hilo que la solicita."""

    def submit(
        self,
        operation: Operation,
        on_success: SuccessCallback,
        on_failure: FailureCallback,
    ) -> None:
        try:
            resultado = operation()
        except TransportError as exc:
            on_failure(exc)
            return
        on_success(resultado)


__all__ = [
    "FailureCallback",
    "InlineTaskRunner",
    "Operation",
    "SuccessCallback",
    "TaskRunner",
]
