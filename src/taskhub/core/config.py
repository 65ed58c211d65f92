"""配置常量模块 -- 可通过环境变量覆盖

包含数据库路径、SSE 心跳与队列大小、通知列表上限等可配置常量。
"""

import os
from pathlib import Path


def _get_base_dir() -> Path:
    """获取项目 data 基础目录"""
    return Path(os.environ.get("TASKHUB_DATA_DIR", "data"))


def get_db_path() -> str:
    """获取 SQLite 数据库路径"""
    return os.environ.get(
        "TASKHUB_DB_PATH",
        str(_get_base_dir() / "sqlite" / "taskhub.db"),
    )


# SSE 心跳间隔（秒）
SSE_HEARTBEAT_INTERVAL: int = int(
    os.environ.get("TASKHUB_SSE_HEARTBEAT_INTERVAL", "15")
)

# 每个 SSE 连接的待发送事件队列上限，写满即视为慢连接并断开
SSE_QUEUE_MAXSIZE: int = int(os.environ.get("TASKHUB_SSE_QUEUE_MAXSIZE", "100"))

# 用户通知列表返回条数上限
NOTIFICATION_LIST_LIMIT: int = 50

# 任务标题最大长度
TASK_TITLE_MAX_LENGTH: int = 100
