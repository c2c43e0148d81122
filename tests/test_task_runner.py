from __future__ import annotations

from typing import List, Tuple

import pytest

pytest.importorskip("PyQt6.QtCore")

from user_console.errors import TransportError  # noqa: E402
from user_console.ui.task_runner import _RequestWorker  # noqa: E402


def _collect(worker: _RequestWorker) -> Tuple[List[tuple], List[tuple]]:
    finished: List[tuple] = []
    errors: List[tuple] = []
    worker.finished.connect(lambda task_id, result: finished.append((task_id, result)))
    worker.error.connect(lambda task_id, exc: errors.append((task_id, exc)))
    return finished, errors


def test_worker_emits_result_on_success() -> None:
    worker = _RequestWorker(1, lambda: "ok")
    finished, errors = _collect(worker)

    worker.run()

    assert finished == [(1, "ok")]
    assert errors == []


def test_worker_forwards_transport_errors_unchanged() -> None:
    failure = TransportError("boom", status_code=500)

    def _operation() -> None:
        raise failure

    worker = _RequestWorker(2, _operation)
    finished, errors = _collect(worker)

    worker.run()

    assert finished == []
    assert errors == [(2, failure)]


def test_worker_wraps_unexpected_exceptions(caplog: pytest.LogCaptureFixture) -> None:
    def _operation() -> None:
        raise RuntimeError("payload inesperado")

    worker = _RequestWorker(3, _operation)
    finished, errors = _collect(worker)

    with caplog.at_level("ERROR", logger="user_console.ui.task_runner"):
        worker.run()

    assert finished == []
    assert len(errors) == 1
    task_id, exc = errors[0]
    assert task_id == 3
    assert isinstance(exc, TransportError)
    assert str(exc) == "payload inesperado"
    assert exc.status_code is None
    assert any("3" in record.getMessage() for record in caplog.records)
