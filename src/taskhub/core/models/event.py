"""实时事件模型

Event 只用于推送，不落盘：连接断开期间错过的事件不会补发，
客户端重连后重新拉取任务列表即可恢复一致。
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field

from ..ids import new_id
from .enums import EventName


class Event(BaseModel):
    """推送事件"""

    event_id: str = Field(default_factory=new_id, description="唯一标识，ULID 格式")
    name: EventName = Field(description="事件名")
    ts: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="事件时间戳",
    )
    payload: dict[str, Any] = Field(default_factory=dict, description="JSON 可序列化 payload")


class TaskDeletedPayload(BaseModel):
    """task:deleted 事件 payload，对外字段名为 taskId"""

    task_id: str = Field(serialization_alias="taskId")
