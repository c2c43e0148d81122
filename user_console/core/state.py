"""Estado compartido de la vista de usuarios."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from user_console.config import DEFAULT_PAGE_SIZE
from user_console.models.user import User, UserFormDraft


class DialogMode(Enum):
    IDLE = "idle"
    CREATING = "creating"
    EDITING = "editing"


@dataclass(frozen=True, slots=True)
class ErrorNotice:
    """Error visible para el usuario, derivado de un fallo de transporte."""

    message: str
    status_code: Optional[int] = None

    @property
    def display(self) -> str:
        if self.status_code is not None:
            return f"[{self.status_code}] {self.message}"
        return self.message

    def __str__(self) -> str:
        return self.display


@dataclass
class ViewState:
    """Mantiene la página visible, la búsqueda, el formulario y el último error.

    Sólo :class:`~user_console.core.controller.UserListController` lo
    modifica; la capa de presentación únicamente lo lee.
    """

    page: int = 0
    page_size: int = DEFAULT_PAGE_SIZE
    total_pages: int = 0
    records: Tuple[User, ...] = ()
    search_term: str = ""
    selected_record_id: Optional[int] = None
    dialog_open: bool = False
    draft: UserFormDraft = field(default_factory=UserFormDraft.empty)
    last_error: Optional[ErrorNotice] = None
    error_visible: bool = False
    error_serial: int = 0

    @property
    def mode(self) -> DialogMode:
        if not self.dialog_open:
            return DialogMode.IDLE
        if self.selected_record_id is None:
            return DialogMode.CREATING
        return DialogMode.EDITING

    @property
    def searching(self) -> bool:
        return self.search_term != ""

    def apply_page(self, page: int, records: Tuple[User, ...], total_pages: int) -> None:
        self.page = page
        self.records = records
        self.total_pages = total_pages

    def open_dialog(self, draft: UserFormDraft, selected_record_id: Optional[int]) -> None:
        self.draft = draft
        self.selected_record_id = selected_record_id
        self.dialog_open = True

    def close_dialog(self) -> None:
        self.dialog_open = False
        self.selected_record_id = None
        self.draft = UserFormDraft.empty()

    def report_error(self, notice: ErrorNotice) -> None:
        self.last_error = notice
        self.error_visible = True
        self.error_serial += 1


__all__ = ["DialogMode", "ErrorNotice", "ViewState"]
