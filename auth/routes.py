"""
Auth API routes — register, login.

Route prefix: /api/v1/auth
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from api.dependencies import get_actions
from core.actions import TodoActions
from utils.schemas import AuthResponse, ErrorResponse, LoginRequest, RegisterRequest

router = APIRouter(
    tags=["auth"],
    responses={500: {"model": ErrorResponse}},
)


@router.post("/register", response_model=AuthResponse)
async def register(
    req: RegisterRequest,
    actions: TodoActions = Depends(get_actions),
) -> AuthResponse:
    """Register a new user."""
    return await actions.register(req.username, req.password)


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={401: {"model": ErrorResponse}},
)
async def login(
    req: LoginRequest,
    actions: TodoActions = Depends(get_actions),
) -> AuthResponse:
    """Login with username + password."""
    return await actions.login(req.username, req.password)
