import asyncio

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import async_sessionmaker
from sqlalchemy.pool import NullPool

from app import models
from app.core.database import Base, build_engine, get_db
from main import app as api_app


@pytest.fixture
def session_factory(tmp_path):
    # A fresh database file per test; NullPool so no connection outlives the loop that opened it
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'library.db'}", poolclass=NullPool)

    async def create_schema():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(create_schema())
    yield async_sessionmaker(engine, expire_on_commit=False)
    asyncio.run(engine.dispose())


@pytest.fixture
def run(session_factory):
    """Run ``operation(db, *args, **kwargs)`` in its own session and return the result"""
    def _run(operation, *args, **kwargs):
        async def _inner():
            async with session_factory() as db:
                return await operation(db, *args, **kwargs)
        return asyncio.run(_inner())
    return _run


@pytest.fixture
def seed(run):
    """Insert a book with one note and return their ids"""
    async def _seed(db):
        book = models.Book(title="The Rust Programming Language", author="Steve Klabnik")
        db.add(book)
        await db.flush()
        note = models.Note(book_id=book.id, content="Ownership rules", note_type="summary")
        db.add(note)
        await db.commit()
        return book.id, note.id
    return run(_seed)


@pytest.fixture
def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    api_app.dependency_overrides[get_db] = override_get_db
    with TestClient(api_app) as test_client:
        yield test_client
    api_app.dependency_overrides.clear()


@pytest.fixture
def book_id(client):
    response = client.post("/api/v1/books", json={"title": "测试书籍", "author": "测试作者"})
    assert response.status_code == 201
    return response.json()["id"]


@pytest.fixture
def create_note(client, book_id):
    def _create(tags=None, **fields):
        payload = {"book_id": book_id, "content": "A reading note", "note_type": "general"}
        payload.update(fields)
        if tags is not None:
            payload["tags"] = tags
        response = client.post("/api/v1/notes", json=payload)
        assert response.status_code == 201, response.text
        return response.json()
    return _create
