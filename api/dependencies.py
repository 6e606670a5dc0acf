"""
FastAPI dependencies (shared across routes).

Process-wide services live on ``app.state`` (built once in ``create_app``);
request-scoped ones are derived from the request's DB session.
"""

from __future__ import annotations

from typing import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from auth.jwt import TokenService
from auth.password import PasswordHasher
from core.actions import TodoActions
from database.session import get_db_session
from database.store import TodoStore


async def db_session(session: AsyncSession = Depends(get_db_session)) -> AsyncGenerator[AsyncSession, None]:
    """Re-export so routes import from a single place."""
    yield session


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_store(session: AsyncSession = Depends(db_session)) -> TodoStore:
    return TodoStore(session)


def get_actions(
    store: TodoStore = Depends(get_store),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
) -> TodoActions:
    return TodoActions(store, hasher, tokens)
