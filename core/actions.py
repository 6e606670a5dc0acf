"""
Todo actions: CRUD plus registration and login.

Every method reports failures by raising a ``core.errors`` kind and never
retries.  Password hashing runs on the default executor (a bounded thread
pool configured at startup) so it never blocks the event loop.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, assert_never

from auth.jwt import TokenService
from auth.password import PasswordHasher
from core.errors import InvalidCredentials, ResourceNotFound
from database.store import TodoStore
from utils.schemas import (
    AuthResponse,
    Both,
    DoneOnly,
    TextOnly,
    TodoPatch,
    TodoRecord,
)

logger = logging.getLogger(__name__)


def patch_fields(patch: TodoPatch) -> Dict[str, Any]:
    """Columns a patch variant writes, and nothing else."""
    if isinstance(patch, Both):
        return {"text": patch.text, "done": patch.done}
    if isinstance(patch, TextOnly):
        return {"text": patch.text}
    if isinstance(patch, DoneOnly):
        return {"done": patch.done}
    assert_never(patch)


class TodoActions:
    def __init__(
        self,
        store: TodoStore,
        hasher: PasswordHasher,
        tokens: TokenService,
    ):
        self._store = store
        self._hasher = hasher
        self._tokens = tokens

    # ── Todos ─────────────────────────────────────────────────────────

    async def list_todos(self, owner_id: int) -> List[TodoRecord]:
        return await self._store.find_todos_by_owner(owner_id)

    async def create_todo(self, owner_id: int, text: str) -> TodoRecord:
        todo = await self._store.insert_todo(owner_id, text)
        logger.debug("Created todo %d for user %d", todo.id, owner_id)
        return todo

    async def update_todo(self, existing: TodoRecord, patch: TodoPatch) -> TodoRecord:
        return await self._store.update_todo(existing.id, patch_fields(patch))

    async def delete_todo(self, existing: TodoRecord) -> TodoRecord:
        return await self._store.delete_todo(existing.id)

    # ── Users ─────────────────────────────────────────────────────────

    async def register(self, username: str, password: str) -> AuthResponse:
        """Hash the password, store the user and hand back a fresh token."""
        password_hash = await asyncio.to_thread(self._hasher.hash, password)
        user = await self._store.insert_user(username, password_hash)
        token = self._tokens.issue(user.id, user.username)
        logger.info("Registered user %s (%d)", user.username, user.id)
        return AuthResponse(id=user.id, username=user.username, token=token)

    async def login(self, username: str, password: str) -> AuthResponse:
        """
        Check credentials and issue a token.

        An unknown username and a wrong password raise the same
        ``InvalidCredentials`` so callers cannot tell them apart.
        """
        try:
            user = await self._store.find_user_by_username(username)
        except ResourceNotFound:
            await asyncio.to_thread(self._hasher.verify_dummy, password)
            logger.info("Login failed for %s", username)
            raise InvalidCredentials() from None

        if not await asyncio.to_thread(self._hasher.verify, password, user.password_hash):
            logger.info("Login failed for %s", username)
            raise InvalidCredentials()

        token = self._tokens.issue(user.id, user.username)
        logger.info("Login: %s (%d)", user.username, user.id)
        return AuthResponse(id=user.id, username=user.username, token=token)
