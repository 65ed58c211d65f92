"""全局 pytest 配置 -- 临时 SQLite 数据库 + 用户 / 任务造数 fixture"""

from collections.abc import AsyncGenerator, Awaitable, Callable
from datetime import timedelta
from pathlib import Path

import aiosqlite
import pytest_asyncio
from taskhub.core.ids import new_id
from taskhub.core.models import Task, TaskPriority, TaskStatus, User
from taskhub.core.store import StoreGroup, create_store_group
from taskhub.core.timeutil import utc_now


@pytest_asyncio.fixture
async def tmp_db_path(tmp_path: Path) -> Path:
    """提供临时 SQLite 数据库路径"""
    return tmp_path / "sqlite" / "test.db"


@pytest_asyncio.fixture
async def db_conn(tmp_db_path: Path) -> AsyncGenerator[aiosqlite.Connection, None]:
    """提供已初始化的临时 SQLite 数据库连接"""
    from taskhub.core.store.sqlite_init import init_db

    tmp_db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = await aiosqlite.connect(str(tmp_db_path))
    await init_db(conn)
    yield conn
    await conn.close()


@pytest_asyncio.fixture
async def store_group(tmp_db_path: Path) -> AsyncGenerator[StoreGroup, None]:
    """提供临时数据库上的 StoreGroup"""
    group = await create_store_group(str(tmp_db_path))
    yield group
    await group.conn.close()


@pytest_asyncio.fixture
async def make_user(store_group: StoreGroup) -> Callable[[str], Awaitable[User]]:
    """用户造数：make_user("Alice") 写入一个用户（邮箱由名称生成）"""

    async def _make(name: str) -> User:
        user = User(user_id=new_id(), name=name, email=f"{name.lower()}@example.com")
        await store_group.user_store.create_user(user)
        return user

    return _make


@pytest_asyncio.fixture
async def make_task(store_group: StoreGroup) -> Callable[..., Awaitable[Task]]:
    """任务造数：绕过业务校验直接落盘，可构造已逾期任务"""

    async def _make(
        creator_id: str,
        *,
        title: str = "Seeded task",
        due_in: timedelta = timedelta(days=1),
        status: TaskStatus = TaskStatus.TODO,
        priority: TaskPriority = TaskPriority.MEDIUM,
        assigned_to_id: str | None = None,
        created_offset: timedelta = timedelta(0),
    ) -> Task:
        now = utc_now()
        task = Task(
            task_id=new_id(),
            title=title,
            description=f"{title} description",
            due_date=now + due_in,
            priority=priority,
            status=status,
            creator_id=creator_id,
            assigned_to_id=assigned_to_id,
            created_at=now + created_offset,
            updated_at=now + created_offset,
        )
        await store_group.task_store.create_task(task)
        return task

    return _make
