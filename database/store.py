"""
Persistence operations for users and todos.

``TodoStore`` wraps one request-scoped ``AsyncSession``.  Every method
returns immutable records and reports failures as ``ResourceNotFound`` or
``PersistenceFailure``; no ORM object or SQLAlchemy exception escapes.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import PersistenceFailure, ResourceNotFound
from database.models import Todo, User
from utils.schemas import TodoRecord, UserRecord

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = frozenset({"text", "done"})

# Primary keys are 32-bit INTEGER columns.
MAX_ROW_ID = 2**31 - 1


def _storable_id(row_id: int) -> bool:
    return 1 <= row_id <= MAX_ROW_ID


@contextmanager
def _store_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error("Store operation %s failed: %s", operation, exc)
        raise PersistenceFailure() from exc


class TodoStore:
    def __init__(self, session: AsyncSession):
        self._session = session

    # ── Todos ─────────────────────────────────────────────────────────

    async def find_todos_by_owner(self, owner_id: int) -> List[TodoRecord]:
        if not _storable_id(owner_id):
            return []
        with _store_errors("find_todos_by_owner"):
            result = await self._session.execute(
                select(Todo).where(Todo.owner_id == owner_id).order_by(Todo.id)
            )
            rows = result.scalars().all()
        return [TodoRecord.model_validate(row) for row in rows]

    async def find_todo_by_id(self, todo_id: int) -> TodoRecord:
        if not _storable_id(todo_id):
            raise ResourceNotFound()
        with _store_errors("find_todo_by_id"):
            row = await self._session.get(Todo, todo_id)
        if row is None:
            raise ResourceNotFound()
        return TodoRecord.model_validate(row)

    async def insert_todo(self, owner_id: int, text: str) -> TodoRecord:
        with _store_errors("insert_todo"):
            row = Todo(owner_id=owner_id, text=text, done=False)
            self._session.add(row)
            await self._session.flush()
        return TodoRecord.model_validate(row)

    async def update_todo(self, todo_id: int, field_set: Dict[str, Any]) -> TodoRecord:
        """Write exactly the columns in ``field_set`` and return the new row."""
        unknown = set(field_set) - _UPDATABLE_FIELDS
        if not field_set or unknown:
            raise ValueError(f"Invalid todo field set: {sorted(field_set)}")
        if not _storable_id(todo_id):
            raise ResourceNotFound()

        with _store_errors("update_todo"):
            result = await self._session.execute(
                update(Todo)
                .where(Todo.id == todo_id)
                .values(**field_set)
                .returning(Todo.id, Todo.text, Todo.done, Todo.owner_id)
                .execution_options(synchronize_session=False)
            )
            row = result.one_or_none()
        if row is None:
            raise ResourceNotFound()
        return TodoRecord.model_validate(dict(row._mapping))

    async def delete_todo(self, todo_id: int) -> TodoRecord:
        if not _storable_id(todo_id):
            raise ResourceNotFound()
        with _store_errors("delete_todo"):
            row = await self._session.get(Todo, todo_id)
            if row is None:
                raise ResourceNotFound()
            record = TodoRecord.model_validate(row)
            await self._session.delete(row)
            await self._session.flush()
        return record

    # ── Users ─────────────────────────────────────────────────────────

    async def find_user_by_username(self, username: str) -> UserRecord:
        with _store_errors("find_user_by_username"):
            result = await self._session.execute(
                select(User).where(User.username == username)
            )
            row = result.scalar_one_or_none()
        if row is None:
            raise ResourceNotFound("user not found")
        return UserRecord.model_validate(row)

    async def insert_user(self, username: str, password_hash: str) -> UserRecord:
        """Insert a user; a taken username surfaces as ``PersistenceFailure``."""
        with _store_errors("insert_user"):
            row = User(username=username, password_hash=password_hash)
            self._session.add(row)
            await self._session.flush()
        return UserRecord.model_validate(row)
