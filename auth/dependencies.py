"""
FastAPI dependencies for authentication and ownership.

The pipeline is two plain stages: ``get_current_identity`` turns the
``Authorization`` header into an ``Identity``; ``get_owned_todo`` takes
that identity as an argument and binds it to the todo named in the path.
The underlying checks (``extract_identity``, ``authorize_owner``) are
ordinary functions so they can be used and tested without a request.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, Header, Path

from api.dependencies import get_store, get_token_service
from auth.jwt import TokenService
from core.errors import ResourceNotFound, TokenValidationFailure, Unauthenticated
from database.store import TodoStore
from utils.schemas import Identity, OwnedTodo

HEADER_MISSING = "Auth header not present."
HEADER_MALFORMED = "Auth header is malformed or contains non-ASCII characters."
TOKEN_REJECTED = "Token is invalid or expired."

_BEARER_PREFIX = "bearer "


def _token_from_header(authorization: str) -> Optional[str]:
    """Return the raw token, or ``None`` if the header can't carry one."""
    if not authorization.isascii():
        return None
    value = authorization.strip()
    if value.lower().startswith(_BEARER_PREFIX):
        value = value[len(_BEARER_PREFIX):].strip()
    if not value or any(ch.isspace() for ch in value):
        return None
    return value


def extract_identity(authorization: Optional[str], tokens: TokenService) -> Identity:
    """
    Derive the caller's identity from the raw ``Authorization`` header.

    Accepts a bare token or ``Bearer <token>``.  Raises ``Unauthenticated``
    with a reason naming which check failed.
    """
    if authorization is None:
        raise Unauthenticated(HEADER_MISSING)

    token = _token_from_header(authorization)
    if token is None:
        raise Unauthenticated(HEADER_MALFORMED)

    try:
        claims = tokens.validate(token)
    except TokenValidationFailure as exc:
        raise Unauthenticated(TOKEN_REJECTED) from exc

    return Identity(id=claims.subject_id, username=claims.username)


async def authorize_owner(identity: Identity, todo_id: int, store: TodoStore) -> OwnedTodo:
    """
    Look up ``todo_id`` and confirm ``identity`` owns it.

    A todo owned by someone else raises exactly what a missing todo does.
    """
    todo = await store.find_todo_by_id(todo_id)
    if todo.owner_id != identity.id:
        raise ResourceNotFound()
    return OwnedTodo(todo=todo, identity=identity)


# ── FastAPI wiring ────────────────────────────────────────────────────


async def get_current_identity(
    authorization: Optional[str] = Header(None, alias="Authorization"),
    tokens: TokenService = Depends(get_token_service),
) -> Identity:
    return extract_identity(authorization, tokens)


async def get_owned_todo(
    todo_id: int = Path(...),
    identity: Identity = Depends(get_current_identity),
    store: TodoStore = Depends(get_store),
) -> OwnedTodo:
    return await authorize_owner(identity, todo_id, store)
