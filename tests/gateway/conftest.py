"""gateway 测试配置 -- FastAPI app + httpx AsyncClient + 预置用户"""

import os
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from taskhub.core.models import User
from taskhub.gateway.services.sse_hub import SSEHub


@pytest_asyncio.fixture
async def alice(make_user) -> User:
    return await make_user("Alice")


@pytest_asyncio.fixture
async def bob(make_user) -> User:
    return await make_user("Bob")


@pytest_asyncio.fixture
async def sse_hub() -> SSEHub:
    return SSEHub()


@pytest_asyncio.fixture
async def app(tmp_path: Path, store_group, sse_hub):
    """创建测试用 FastAPI app 实例（手动初始化 state，绕过 lifespan）"""
    os.environ["TASKHUB_DB_PATH"] = str(tmp_path / "sqlite" / "test.db")
    os.environ["LOGFIRE_SEND_TO_LOGFIRE"] = "false"

    from taskhub.gateway.main import create_app

    application = create_app()
    application.state.store_group = store_group
    application.state.sse_hub = sse_hub
    yield application

    for key in ["TASKHUB_DB_PATH", "LOGFIRE_SEND_TO_LOGFIRE"]:
        os.environ.pop(key, None)


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """提供 httpx AsyncClient 用于测试"""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
