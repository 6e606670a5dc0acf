"""
Shared fixtures: cheap hashers, a token service, an in-memory store for
action/guard tests and a SQLite-backed app for store and HTTP tests.
"""

import time
from typing import Any, Dict, List

import httpx
import jwt as pyjwt
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from auth.jwt import TokenService
from auth.password import PasswordHasher
from config.settings import Settings
from core.actions import TodoActions
from core.errors import PersistenceFailure, ResourceNotFound
from database.models import Base
from main import create_app
from utils.schemas import TodoRecord, UserRecord

TEST_SECRET = "test-secret-key-for-testing-only-0123456789abcdef0123456789abcdef"

# Minimum argon2 costs; real defaults make the suite slow.
FAST_ARGON2 = {"time_cost": 1, "memory_cost": 8, "parallelism": 1}


class InMemoryStore:
    """Dict-backed stand-in for ``TodoStore`` with the same error contract."""

    def __init__(self):
        self.todos: Dict[int, TodoRecord] = {}
        self.users: Dict[str, UserRecord] = {}
        self.update_calls: List[Dict[str, Any]] = []
        self._next_todo_id = 1
        self._next_user_id = 1

    async def find_todos_by_owner(self, owner_id: int) -> List[TodoRecord]:
        return [t for t in self.todos.values() if t.owner_id == owner_id]

    async def find_todo_by_id(self, todo_id: int) -> TodoRecord:
        if todo_id not in self.todos:
            raise ResourceNotFound()
        return self.todos[todo_id]

    async def insert_todo(self, owner_id: int, text: str) -> TodoRecord:
        todo = TodoRecord(id=self._next_todo_id, text=text, done=False, owner_id=owner_id)
        self.todos[todo.id] = todo
        self._next_todo_id += 1
        return todo

    async def update_todo(self, todo_id: int, field_set: Dict[str, Any]) -> TodoRecord:
        self.update_calls.append(dict(field_set))
        todo = await self.find_todo_by_id(todo_id)
        updated = todo.model_copy(update=field_set)
        self.todos[todo_id] = updated
        return updated

    async def delete_todo(self, todo_id: int) -> TodoRecord:
        todo = await self.find_todo_by_id(todo_id)
        del self.todos[todo_id]
        return todo

    async def find_user_by_username(self, username: str) -> UserRecord:
        if username not in self.users:
            raise ResourceNotFound("user not found")
        return self.users[username]

    async def insert_user(self, username: str, password_hash: str) -> UserRecord:
        if username in self.users:
            raise PersistenceFailure()
        user = UserRecord(id=self._next_user_id, username=username, password_hash=password_hash)
        self.users[username] = user
        self._next_user_id += 1
        return user


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(**FAST_ARGON2)


@pytest.fixture
def token_service() -> TokenService:
    return TokenService(TEST_SECRET)


@pytest.fixture
def memory_store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def actions(memory_store, hasher, token_service) -> TodoActions:
    return TodoActions(memory_store, hasher, token_service)


@pytest_asyncio.fixture
async def engine(tmp_path):
    """File-backed SQLite engine with the schema created."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'todos.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine):
    factory = async_sessionmaker(engine, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest.fixture
def settings() -> Settings:
    return Settings(
        jwt_secret=TEST_SECRET,
        auto_create_tables=False,
        argon2_time_cost=FAST_ARGON2["time_cost"],
        argon2_memory_cost=FAST_ARGON2["memory_cost"],
        argon2_parallelism=FAST_ARGON2["parallelism"],
    )


@pytest.fixture
def app(settings, engine):
    return create_app(settings, engine=engine)


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def make_token():
    """Build a raw token signed with the test secret, claims overridable."""

    def _make(**claims: Any) -> str:
        payload = {"id": 1, "username": "alice", "exp": int(time.time()) + 3600}
        payload.update(claims)
        return pyjwt.encode(payload, TEST_SECRET, algorithm="HS512")

    return _make
