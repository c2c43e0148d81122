"""Ventana principal de la aplicación."""

from __future__ import annotations

from dataclasses import dataclass

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from user_console.core.controller import UserListController
from user_console.core.state import ViewState
from user_console.models.user import User
from user_console.ui.user_dialog import UserDialog


@dataclass(slots=True)
class _TableColumns:
    id: int = 0
    first_name: int = 1
    last_name: int = 2
    email: int = 3


class MainWindow(QMainWindow):
    """Ventana principal con listado paginado de usuarios."""

    ERROR_AUTOHIDE_MS = 6000

    def __init__(self, *, controller: UserListController) -> None:
        super().__init__()
        self.controller = controller
        self._columns = _TableColumns()
        self._scheduled_error_serial = 0

        self.setWindowTitle("Gestión de usuarios")
        self.resize(760, 440)

        self.search_box = QLineEdit(placeholderText="Buscar por nombre")
        self.search_box.returnPressed.connect(self._on_search)

        self.search_button = QPushButton("Buscar")
        self.search_button.clicked.connect(self._on_search)

        self.add_button = QPushButton("Nuevo usuario")
        self.add_button.clicked.connect(self.controller.open_create_dialog)

        self.refresh_button = QPushButton("Recargar")
        self.refresh_button.clicked.connect(self.controller.refresh)

        self.table = QTableWidget(columnCount=4)
        self.table.setHorizontalHeaderLabels(["ID", "Nombre", "Apellido", "Email"])
        self.table.horizontalHeader().setStretchLastSection(True)
        self.table.verticalHeader().setVisible(False)
        self.table.setSelectionBehavior(QTableWidget.SelectionBehavior.SelectRows)
        self.table.setSelectionMode(QTableWidget.SelectionMode.SingleSelection)
        self.table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        self.table.itemSelectionChanged.connect(self._update_row_actions)
        self.table.itemDoubleClicked.connect(lambda _item: self._on_edit())

        self.edit_button = QPushButton("Editar")
        self.edit_button.clicked.connect(self._on_edit)
        self.delete_button = QPushButton("Eliminar")
        self.delete_button.clicked.connect(self._on_delete)

        self.prev_button = QPushButton("‹ Anterior")
        self.prev_button.clicked.connect(self._on_prev_page)
        self.next_button = QPushButton("Siguiente ›")
        self.next_button.clicked.connect(self._on_next_page)
        self.page_label = QLabel("Página 0 / 0")

        self.error_label = QLabel("")
        self.error_label.setStyleSheet("color: #b91c1c; font-weight: 600;")
        self.error_close_button = QPushButton("Cerrar")
        self.error_close_button.clicked.connect(lambda: self.controller.dismiss_error())

        top_bar = QHBoxLayout()
        top_bar.addWidget(QLabel("Usuarios"))
        top_bar.addStretch(1)
        top_bar.addWidget(self.search_box)
        top_bar.addWidget(self.search_button)
        top_bar.addWidget(self.add_button)
        top_bar.addWidget(self.refresh_button)

        row_actions = QHBoxLayout()
        row_actions.addWidget(self.edit_button)
        row_actions.addWidget(self.delete_button)
        row_actions.addStretch(1)
        row_actions.addWidget(self.prev_button)
        row_actions.addWidget(self.page_label)
        row_actions.addWidget(self.next_button)

        error_bar = QHBoxLayout()
        error_bar.addWidget(self.error_label, 1)
        error_bar.addWidget(self.error_close_button)

        layout = QVBoxLayout()
        layout.addLayout(top_bar)
        layout.addWidget(self.table)
        layout.addLayout(row_actions)
        layout.addLayout(error_bar)

        container = QWidget()
        container.setLayout(layout)
        self.setCentralWidget(container)

        self.dialog = UserDialog(self.controller, self)

        self.controller.subscribe(self._render)
        self._render(self.controller.state)
        self.controller.refresh()

    # ------------------------------------------------------------------
    # Eventos y acciones
    # ------------------------------------------------------------------
    def _on_search(self) -> None:
        self.controller.search_requested(self.search_box.text().strip())

    def _on_prev_page(self) -> None:
        state = self.controller.state
        if state.page > 0:
            self.controller.page_changed(state.page - 1)

    def _on_next_page(self) -> None:
        state = self.controller.state
        if state.page + 1 < state.total_pages:
            self.controller.page_changed(state.page + 1)

    def _selected_user(self) -> User | None:
        current_row = self.table.currentRow()
        records = self.controller.state.records
        if current_row < 0 or current_row >= len(records):
            return None
        return records[current_row]

    def _on_edit(self) -> None:
        usuario = self._selected_user()
        if usuario is not None:
            self.controller.open_edit_dialog(usuario)

    def _on_delete(self) -> None:
        usuario = self._selected_user()
        if usuario is not None:
            self.controller.delete_requested(usuario.id)

    def _update_row_actions(self) -> None:
        has_selection = self._selected_user() is not None
        self.edit_button.setEnabled(has_selection)
        self.delete_button.setEnabled(has_selection)

    # ------------------------------------------------------------------
    # Renderizado
    # ------------------------------------------------------------------
    def _render(self, state: ViewState) -> None:  # pragma: no cover - UI
        self._populate_table(state.records)

        if state.total_pages > 0:
            self.page_label.setText(f"Página {state.page + 1} / {state.total_pages}")
        else:
            self.page_label.setText("Página 0 / 0")
        self.prev_button.setEnabled(state.page > 0 and state.total_pages > 0)
        self.next_button.setEnabled(state.page + 1 < state.total_pages)

        visible = state.error_visible and state.last_error is not None
        self.error_label.setText(state.last_error.display if visible else "")
        self.error_label.setVisible(visible)
        self.error_close_button.setVisible(visible)
        if visible and state.error_serial != self._scheduled_error_serial:
            self._scheduled_error_serial = state.error_serial
            QTimer.singleShot(
                self.ERROR_AUTOHIDE_MS,
                lambda serial=state.error_serial: self.controller.dismiss_error(serial),
            )

        self.dialog.sync(state)
        self._update_row_actions()

    def _populate_table(self, usuarios: tuple[User, ...]) -> None:
        self.table.setRowCount(len(usuarios))

        for row, usuario in enumerate(usuarios):
            valores = (
                (self._columns.id, str(usuario.id)),
                (self._columns.first_name, usuario.first_name),
                (self._columns.last_name, usuario.last_name),
                (self._columns.email, usuario.email),
            )
            for column, texto in valores:
                item = QTableWidgetItem(texto)
                item.setFlags(item.flags() ^ Qt.ItemFlag.ItemIsEditable)
                self.table.setItem(row, column, item)

        self.table.resizeColumnsToContents()


__all__ = ["MainWindow"]
