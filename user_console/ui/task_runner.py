"""Ejecutor de operaciones remotas en hilos Qt."""

from __future__ import annotations

import logging
from typing import Dict, Tuple

from PyQt6.QtCore import QObject, QThread, pyqtSignal, pyqtSlot

from user_console.core.tasks import FailureCallback, Operation, SuccessCallback
from user_console.errors import TransportError

logger = logging.getLogger(__name__)


class _RequestWorker(QObject):
    finished = pyqtSignal(int, object)
    error = pyqtSignal(int, object)

    def __init__(self, task_id: int, operation: Operation) -> None:
        super().__init__()
        self.task_id = task_id
        self.operation = operation

    def run(self) -> None:
        try:
            resultado = self.operation()
        except TransportError as exc:
            self.error.emit(self.task_id, exc)
            return
        except Exception as exc:  # el hilo debe terminar y el controlador enterarse
            logger.exception("Operación remota %s falló de forma inesperada", self.task_id)
            self.error.emit(self.task_id, TransportError(str(exc) or repr(exc)))
            return
        self.finished.emit(self.task_id, resultado)


class QtTaskRunner(QObject):
    """Corre cada operación en su propio ``QThread``.

    Los resultados vuelven por señales conectadas a slots de este objeto, que
    vive en el hilo de la interfaz; así los callbacks nunca tocan el estado
    desde el hilo de trabajo. No hay cancelación: cada petición termina por su
    cuenta.
    """

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._next_id = 0
        self._tasks: Dict[int, Tuple[QThread, _RequestWorker, SuccessCallback, FailureCallback]] = {}

    def submit(
        self,
        operation: Operation,
        on_success: SuccessCallback,
        on_failure: FailureCallback,
    ) -> None:
        self._next_id += 1
        task_id = self._next_id

        thread = QThread(self)
        worker = _RequestWorker(task_id, operation)
        worker.moveToThread(thread)

        thread.started.connect(worker.run)
        worker.finished.connect(thread.quit)
        worker.error.connect(thread.quit)
        worker.finished.connect(self._on_finished)
        worker.error.connect(self._on_error)
        thread.finished.connect(worker.deleteLater)
        thread.finished.connect(thread.deleteLater)

        self._tasks[task_id] = (thread, worker, on_success, on_failure)
        thread.start()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    @pyqtSlot(int, object)
    def _on_finished(self, task_id: int, resultado: object) -> None:
        task = self._tasks.pop(task_id, None)
        if task is None:
            return
        _, _, on_success, _ = task
        on_success(resultado)

    @pyqtSlot(int, object)
    def _on_error(self, task_id: int, exc: object) -> None:
        task = self._tasks.pop(task_id, None)
        if task is None:
            return
        _, _, _, on_failure = task
        on_failure(exc)  # type: ignore[arg-type]


__all__ = ["QtTaskRunner"]
