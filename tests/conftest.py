import asyncio
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test_splitledger.db")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool

import splitledger.models  # noqa: F401
from splitledger.db.session import Base, get_db
from splitledger.main import app


@pytest.fixture
def client(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)
    session_factory = sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)

    async def create_all():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(create_all())

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    # no context manager: the lifespan (startup DB wait) is not exercised here
    yield TestClient(app)
    app.dependency_overrides.clear()
    asyncio.run(engine.dispose())


@pytest.fixture
def group(client):
    res = client.post("/api/v1/groups/", json={
        "name": "Trip",
        "description": "Weekend away",
        "is_public": True,
        "creator": {"uid": "A", "display_name": "Alice", "email": "alice@splitledger.io"},
    })
    assert res.status_code == 201
    group_id = res.json()["id"]

    for uid, name in [("B", "Bob"), ("C", "Carol")]:
        res = client.post(f"/api/v1/groups/{group_id}/members", json={"uid": uid, "display_name": name})
        assert res.status_code == 201

    return group_id
