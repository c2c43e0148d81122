"""Punto de entrada de la aplicación.

Crea los componentes de infraestructura, el controlador y su estado, y arranca
la interfaz gráfica principal.
"""

from __future__ import annotations

import logging
import sys

from PyQt6.QtWidgets import QApplication

from user_console.config import configure_logging, load_settings
from user_console.core.controller import UserListController
from user_console.core.state import ViewState
from user_console.infrastructure.api_client import APIClient
from user_console.infrastructure.repositories import UserRepository
from user_console.ui.main_window import MainWindow
from user_console.ui.task_runner import QtTaskRunner
from user_console.ui.user_dialog import ask_delete_confirmation

logger = logging.getLogger(__name__)


def main() -> None:
    """Arranca la aplicación PyQt6 con las dependencias configuradas."""

    settings = load_settings()
    configure_logging(settings.log_level)
    logger.info("Conectando con %s", settings.api_url)

    app = QApplication(sys.argv)
    app.setStyle("Fusion")

    api_client = APIClient(settings.api_url, timeout=settings.timeout)
    repository = UserRepository(api_client)
    controller = UserListController(
        repository,
        confirm_delete=ask_delete_confirmation,
        runner=QtTaskRunner(app),
        state=ViewState(page_size=settings.page_size),
        discard_stale_responses=settings.discard_stale_responses,
    )

    window = MainWindow(controller=controller)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":  # pragma: no cover - punto de entrada interactivo
    main()
