"""FastAPI lifespan 测试

测试内容：
1. 启动时按 TASKHUB_DB_PATH 初始化 DB 与 SSEHub
2. 关闭时连接清理
"""

import sqlite3

import pytest
from taskhub.gateway.main import create_app, lifespan
from taskhub.gateway.services.sse_hub import SSEHub


class TestLifespan:
    async def test_startup_initializes_state(self, monkeypatch, tmp_path):
        db_path = tmp_path / "life" / "taskhub.db"
        monkeypatch.setenv("TASKHUB_DB_PATH", str(db_path))
        monkeypatch.setenv("LOGFIRE_SEND_TO_LOGFIRE", "false")
        app = create_app()

        async with lifespan(app):
            assert db_path.exists()
            assert isinstance(app.state.sse_hub, SSEHub)
            cursor = await app.state.store_group.conn.execute("SELECT COUNT(*) FROM tasks")
            assert (await cursor.fetchone())[0] == 0

        # 关闭后连接不可再用
        with pytest.raises((ValueError, sqlite3.ProgrammingError)):
            await app.state.store_group.conn.execute("SELECT 1")
