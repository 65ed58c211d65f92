"""core 测试配置 -- 预置两名用户"""

import pytest_asyncio
from taskhub.core.models import User


@pytest_asyncio.fixture
async def alice(make_user) -> User:
    return await make_user("Alice")


@pytest_asyncio.fixture
async def bob(make_user) -> User:
    return await make_user("Bob")
