"""Diálogo modal de alta y edición de usuarios."""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QLineEdit,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from user_console.core.controller import UserListController
from user_console.core.state import DialogMode, ViewState


def ask_delete_confirmation(user_id: int) -> bool:
    """Pide confirmación explícita antes de eliminar un usuario."""

    respuesta = QMessageBox.question(
        None,
        "Eliminar usuario",
        f"¿Seguro que desea eliminar el usuario {user_id}?",
        QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
        QMessageBox.StandardButton.No,
    )
    return respuesta == QMessageBox.StandardButton.Yes


class UserDialog(QDialog):
    """Formulario de usuario conectado al controlador.

    El diálogo no se cierra solo: lo cierra :meth:`sync` cuando el estado
    indica que el guardado terminó bien.
    """

    def __init__(self, controller: UserListController, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.controller = controller
        self.setModal(True)
        self.setMinimumWidth(380)

        self._input_first_name = QLineEdit()
        self._input_last_name = QLineEdit()
        self._input_email = QLineEdit()
        self._inputs = {
            "first_name": self._input_first_name,
            "last_name": self._input_last_name,
            "email": self._input_email,
        }
        for field_name, widget in self._inputs.items():
            widget.textEdited.connect(
                lambda text, name=field_name: self.controller.edit_draft(name, text)
            )

        self._btn_submit = QPushButton("Crear")
        self._btn_submit.clicked.connect(self.controller.submit_dialog)
        self._btn_cancel = QPushButton("Cancelar")
        self._btn_cancel.clicked.connect(self.reject)

        form = QFormLayout()
        form.setLabelAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
        form.addRow("Nombre", self._input_first_name)
        form.addRow("Apellido", self._input_last_name)
        form.addRow("Email", self._input_email)

        buttons = QDialogButtonBox()
        buttons.addButton(self._btn_submit, QDialogButtonBox.ButtonRole.ActionRole)
        buttons.addButton(self._btn_cancel, QDialogButtonBox.ButtonRole.RejectRole)

        layout = QVBoxLayout()
        layout.addLayout(form)
        layout.addWidget(buttons)
        self.setLayout(layout)

    def reject(self) -> None:  # pragma: no cover - interacción UI
        self.controller.cancel_dialog()

    def sync(self, state: ViewState) -> None:  # pragma: no cover - interacción UI
        """Muestra, oculta y rellena el formulario según el estado."""

        if not state.dialog_open:
            if self.isVisible():
                self.hide()
            return

        editing = state.mode is DialogMode.EDITING
        self.setWindowTitle("Editar usuario" if editing else "Nuevo usuario")
        self._btn_submit.setText("Actualizar" if editing else "Crear")

        for field_name, widget in self._inputs.items():
            valor = getattr(state.draft, field_name)
            if widget.text() != valor:
                widget.setText(valor)

        if not self.isVisible():
            self.open()
            self._input_first_name.setFocus()


__all__ = ["UserDialog", "ask_delete_confirmation"]
