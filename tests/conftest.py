from __future__ import annotations

import json
from dataclasses import replace
from typing import Any, Callable, List, Optional

import pytest

from user_console.errors import TransportError
from user_console.models.user import User, UserFormDraft, UserPage


class FakeResponse:
    def __init__(self, body: Any = None, *, status: int = 200, raw: bytes | None = None) -> None:
        self.status = status
        if raw is not None:
            self._raw = raw
        elif body is None:
            self._raw = b""
        else:
            self._raw = json.dumps(body).encode("utf-8")

    def read(self) -> bytes:
        return self._raw

    def __enter__(self) -> "FakeResponse":
        return self

    def __exit__(self, *exc_info: object) -> None:
        return None


class FakeUserRepository:
    """Repositorio en memoria con la misma paginación que el servicio."""

    def __init__(self, users: Optional[List[User]] = None) -> None:
        self.users: List[User] = list(users or [])
        self.calls: List[tuple] = []
        self.fail_with: Optional[TransportError] = None
        self._next_id = max((u.id for u in self.users), default=0) + 1

    def _maybe_fail(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    @staticmethod
    def _paginate(users: List[User], page: int, size: int) -> UserPage:
        total_pages = (len(users) + size - 1) // size
        start = page * size
        return UserPage(content=tuple(users[start:start + size]), total_pages=total_pages)

    def fetch_page(self, page: int, page_size: int) -> UserPage:
        self.calls.append(("fetch_page", page, page_size))
        self._maybe_fail()
        return self._paginate(self.users, page, page_size)

    def search_page(self, first_name: str, page: int, page_size: int) -> UserPage:
        self.calls.append(("search_page", first_name, page, page_size))
        self._maybe_fail()
        matches = [u for u in self.users if u.first_name.lower().startswith(first_name.lower())]
        return self._paginate(matches, page, page_size)

    def create(self, draft: UserFormDraft) -> User:
        self.calls.append(("create", draft))
        self._maybe_fail()
        user = User(
            id=self._next_id,
            first_name=draft.first_name,
            last_name=draft.last_name,
            email=draft.email,
        )
        self._next_id += 1
        self.users.append(user)
        return user

    def update(self, user_id: int, draft: UserFormDraft) -> User:
        self.calls.append(("update", user_id, draft))
        self._maybe_fail()
        for index, user in enumerate(self.users):
            if user.id == user_id:
                updated = replace(
                    user,
                    first_name=draft.first_name,
                    last_name=draft.last_name,
                    email=draft.email,
                )
                self.users[index] = updated
                return updated
        raise TransportError("not found", status_code=404, server_message=f"User {user_id} not found")

    def delete(self, user_id: int) -> None:
        self.calls.append(("delete", user_id))
        self._maybe_fail()
        if not any(u.id == user_id for u in self.users):
            raise TransportError("not found", status_code=404, server_message=f"User {user_id} not found")
        self.users = [u for u in self.users if u.id != user_id]


class DeferredTaskRunner:
    """Guarda las operaciones para resolverlas en el orden que decida el test."""

    def __init__(self) -> None:
        self.pending: List[tuple[Callable[[], Any], Callable, Callable]] = []

    def submit(self, operation, on_success, on_failure) -> None:
        self.pending.append((operation, on_success, on_failure))

    def resolve(self, index: int) -> None:
        operation, on_success, on_failure = self.pending.pop(index)
        try:
            result = operation()
        except TransportError as exc:
            on_failure(exc)
            return
        on_success(result)


def make_users(count: int) -> List[User]:
    return [
        User(id=i, first_name=f"Name{i}", last_name=f"Last{i}", email=f"user{i}@example.com")
        for i in range(1, count + 1)
    ]


@pytest.fixture
def fake_repository() -> FakeUserRepository:
    return FakeUserRepository(make_users(12))
