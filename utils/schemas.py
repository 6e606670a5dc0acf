"""
Pydantic schemas for the todos service.
"""

from __future__ import annotations

from typing import Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr


# ═══════════════════════════════════════════════════════════════════════════════
# Store records
# ═══════════════════════════════════════════════════════════════════════════════


class TodoRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    text: str
    done: bool = False
    owner_id: int


class UserRecord(BaseModel):
    """A stored user.  Never returned to clients: it carries the hash."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    username: str
    password_hash: str


# ═══════════════════════════════════════════════════════════════════════════════
# Auth: claims & identity
# ═══════════════════════════════════════════════════════════════════════════════


class Claims(BaseModel):
    """Decoded token payload.  ``exp`` is an absolute UNIX timestamp."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    subject_id: int = Field(..., alias="id")
    username: str
    exp: int


class Identity(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    username: str


class OwnedTodo(BaseModel):
    """A todo that passed the ownership check, with the caller's identity."""

    model_config = ConfigDict(frozen=True)

    todo: TodoRecord
    identity: Identity


# ═══════════════════════════════════════════════════════════════════════════════
# Request / response bodies
# ═══════════════════════════════════════════════════════════════════════════════


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=1, max_length=128)


class LoginRequest(BaseModel):
    username: str
    password: str


class AuthResponse(BaseModel):
    id: int
    username: str
    token: str


class NewTodoRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    text: StrictStr


class TodoResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    text: str
    done: bool
    owner_id: int


class ErrorResponse(BaseModel):
    message: str


# ═══════════════════════════════════════════════════════════════════════════════
# Partial update variants
# ═══════════════════════════════════════════════════════════════════════════════
#
# Each variant forbids extra keys, so any payload validates against at most
# one of them: {"text"} -> TextOnly, {"done"} -> DoneOnly, {"text","done"} ->
# Both.  Anything else (empty, unknown keys, wrong types) fails all three.


class TextOnly(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    text: StrictStr


class DoneOnly(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    done: StrictBool


class Both(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    text: StrictStr
    done: StrictBool


TodoPatch = Union[TextOnly, DoneOnly, Both]
