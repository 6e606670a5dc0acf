"""
Todo API routes.

Route prefix: /api/v1
"""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Body, Depends, status

from api.dependencies import get_actions
from auth.dependencies import get_current_identity, get_owned_todo
from core.actions import TodoActions
from utils.schemas import (
    ErrorResponse,
    Identity,
    NewTodoRequest,
    OwnedTodo,
    TodoPatch,
    TodoRecord,
    TodoResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["todos"],
    responses={
        401: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)

_NOT_FOUND = {404: {"model": ErrorResponse}}


@router.get("/todos", response_model=List[TodoResponse])
async def list_todos(
    identity: Identity = Depends(get_current_identity),
    actions: TodoActions = Depends(get_actions),
) -> List[TodoRecord]:
    """All todos owned by the caller."""
    return await actions.list_todos(identity.id)


@router.post(
    "/todos",
    response_model=TodoResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_todo(
    req: NewTodoRequest,
    identity: Identity = Depends(get_current_identity),
    actions: TodoActions = Depends(get_actions),
) -> TodoRecord:
    return await actions.create_todo(identity.id, req.text)


@router.get("/todos/{todo_id}", response_model=TodoResponse, responses=_NOT_FOUND)
async def get_todo(owned: OwnedTodo = Depends(get_owned_todo)) -> TodoRecord:
    return owned.todo


@router.patch("/todos/{todo_id}", response_model=TodoResponse, responses=_NOT_FOUND)
async def update_todo(
    patch: TodoPatch = Body(...),
    owned: OwnedTodo = Depends(get_owned_todo),
    actions: TodoActions = Depends(get_actions),
) -> TodoRecord:
    """
    Partial update.  The body must be exactly one of ``{"text"}``,
    ``{"done"}`` or ``{"text", "done"}``; anything else is a 422.
    """
    return await actions.update_todo(owned.todo, patch)


@router.delete("/todos/{todo_id}", response_model=TodoResponse, responses=_NOT_FOUND)
async def delete_todo(
    owned: OwnedTodo = Depends(get_owned_todo),
    actions: TodoActions = Depends(get_actions),
) -> TodoRecord:
    todo = await actions.delete_todo(owned.todo)
    logger.info("User %d deleted todo %d", owned.identity.id, todo.id)
    return todo
