"""Controlador del listado de usuarios.

Es la única pieza que modifica :class:`ViewState`. Cada evento de la vista se
traduce en, como mucho, una llamada al repositorio; el resultado reemplaza el
estado y se notifica a los suscriptores. Los fallos de transporte se
convierten en un :class:`ErrorNotice` y nunca salen de aquí.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Callable, List, Optional

from user_console.core.state import DialogMode, ErrorNotice, ViewState
from user_console.core.tasks import InlineTaskRunner, TaskRunner
from user_console.errors import TransportError
from user_console.infrastructure.repositories import UserRepository
from user_console.models.user import User, UserFormDraft, UserPage

logger = logging.getLogger(__name__)

StateListener = Callable[[ViewState], None]
DeleteConfirmation = Callable[[int], bool]

UNKNOWN_ERROR_MESSAGE = "Error desconocido"
DRAFT_FIELDS = ("first_name", "last_name", "email")


def error_notice_from(exc: TransportError) -> ErrorNotice:
    """Prefiere el mensaje del servidor; si no hay, el del propio error."""

    message = exc.server_message or str(exc) or UNKNOWN_ERROR_MESSAGE
    return ErrorNotice(message=message, status_code=exc.status_code)


class UserListController:
    """Orquesta la paginación, la búsqueda y el CRUD de usuarios."""

    def __init__(
        self,
        repository: UserRepository,
        *,
        confirm_delete: DeleteConfirmation,
        runner: TaskRunner | None = None,
        state: ViewState | None = None,
        discard_stale_responses: bool = False,
    ) -> None:
        self._repository = repository
        self._confirm_delete = confirm_delete
        self._runner: TaskRunner = runner or InlineTaskRunner()
        self.state = state or ViewState()
        self._discard_stale = discard_stale_responses
        self._fetch_seq = 0
        self._dialog_seq = 0
        self._listeners: List[StateListener] = []

    # ------------------------------------------------------------------
    # Suscripción
    # ------------------------------------------------------------------
    def subscribe(self, listener: StateListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: StateListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self.state)

    # ------------------------------------------------------------------
    # Eventos de la vista
    # ------------------------------------------------------------------
    def refresh(self) -> None:
        """Vuelve a pedir la página actual en el modo vigente."""

        self._fetch(self.state.page, search=self.state.searching)

    def page_changed(self, new_page: int) -> None:
        if new_page < 0:
            raise ValueError(f"Página inválida: {new_page}")
        self.state.page = new_page
        self._notify()
        self._fetch(new_page, search=self.state.searching)

    def search_requested(self, term: str) -> None:
        # La página se conserva: una búsqueda nueva no vuelve a la primera.
        self.state.search_term = term
        self._notify()
        self._fetch(self.state.page, search=True)

    def open_create_dialog(self) -> None:
        if self.state.mode is not DialogMode.IDLE:
            logger.debug("open_create_dialog ignorado en modo %s", self.state.mode.value)
            return
        self._dialog_seq += 1
        self.state.open_dialog(UserFormDraft.empty(), None)
        self._notify()

    def open_edit_dialog(self, record: User) -> None:
        if self.state.mode is not DialogMode.IDLE:
            logger.debug("open_edit_dialog ignorado en modo %s", self.state.mode.value)
            return
        self._dialog_seq += 1
        self.state.open_dialog(UserFormDraft.from_record(record), record.id)
        self._notify()

    def edit_draft(self, field_name: str, value: str) -> None:
        if field_name not in DRAFT_FIELDS:
            raise ValueError(f"Campo de formulario desconocido: {field_name}")
        if not self.state.dialog_open:
            logger.debug("edit_draft ignorado con el diálogo cerrado")
            return
        self.state.draft = replace(self.state.draft, **{field_name: value})
        self._notify()

    def submit_dialog(self) -> None:
        mode = self.state.mode
        if mode is DialogMode.IDLE:
            logger.debug("submit_dialog ignorado sin diálogo abierto")
            return

        draft = self.state.draft
        if mode is DialogMode.EDITING:
            user_id = self.state.selected_record_id
            operation: Callable[[], Any] = lambda: self._repository.update(user_id, draft)
        else:
            operation = lambda: self._repository.create(draft)

        dialog_seq = self._dialog_seq
        self._runner.submit(
            operation,
            lambda saved: self._on_saved(dialog_seq, saved),
            self._on_failure,
        )

    def cancel_dialog(self) -> None:
        if self.state.mode is DialogMode.IDLE:
            return
        self.state.close_dialog()
        self._notify()

    def delete_requested(self, record_id: int) -> None:
        if not self._confirm_delete(record_id):
            logger.info("Eliminación del usuario %s cancelada", record_id)
            return
        self._runner.submit(
            lambda: self._repository.delete(record_id),
            self._on_deleted,
            self._on_failure,
        )

    def dismiss_error(self, error_serial: Optional[int] = None) -> None:
        """Oculta la notificación.

        Con ``error_serial`` sólo se oculta si sigue siendo ese mismo error;
        así un cierre automático programado no oculta un error posterior.
        """

        if not self.state.error_visible:
            return
        if error_serial is not None and error_serial != self.state.error_serial:
            return
        self.state.error_visible = False
        self._notify()

    # ------------------------------------------------------------------
    # Resultados
    # ------------------------------------------------------------------
    def _fetch(self, page: int, *, search: bool) -> None:
        self._fetch_seq += 1
        seq = self._fetch_seq
        size = self.state.page_size
        if search:
            term = self.state.search_term
            operation: Callable[[], UserPage] = lambda: self._repository.search_page(term, page, size)
        else:
            operation = lambda: self._repository.fetch_page(page, size)

        self._runner.submit(
            operation,
            lambda result: self._on_fetched(seq, page, search, result),
            lambda exc: self._on_fetch_failed(seq, exc),
        )

    def _is_stale(self, seq: int) -> bool:
        if self._discard_stale and seq != self._fetch_seq:
            logger.debug("Respuesta %s descartada; la última petición es %s", seq, self._fetch_seq)
            return True
        return False

    def _on_fetched(self, seq: int, page: int, search: bool, result: UserPage) -> None:
        if self._is_stale(seq):
            return
        self.state.apply_page(page, result.content, result.total_pages)
        if search and 0 < result.total_pages <= page:
            logger.warning(
                "La búsqueda %r tiene %s páginas pero se pidió la página %s",
                self.state.search_term,
                result.total_pages,
                page,
            )
        self._notify()

    def _on_fetch_failed(self, seq: int, exc: TransportError) -> None:
        if self._is_stale(seq):
            return
        self._on_failure(exc)

    def _on_saved(self, dialog_seq: int, saved: Optional[User]) -> None:
        if saved is not None:
            logger.info("Usuario %s guardado", saved.id)
        # Si el usuario ya abrió otro formulario, su borrador se conserva.
        if self.state.dialog_open and dialog_seq == self._dialog_seq:
            self.state.close_dialog()
        self._notify()
        self.refresh()

    def _on_deleted(self, _result: Any) -> None:
        self.refresh()

    def _on_failure(self, exc: TransportError) -> None:
        notice = error_notice_from(exc)
        logger.warning("Operación remota fallida: %s", notice.display)
        self.state.report_error(notice)
        self._notify()


__all__ = ["UNKNOWN_ERROR_MESSAGE", "UserListController", "error_notice_from"]
