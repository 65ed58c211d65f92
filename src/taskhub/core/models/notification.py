"""Notification Domain Model

通知仅在任务被指派给“非操作者本人”时作为副作用产生；
唯一的变更操作是标记已读（幂等），核心层从不删除通知。
"""

from datetime import datetime

from pydantic import BaseModel, Field


class TaskRef(BaseModel):
    """任务最小投影（id + 标题）"""

    task_id: str
    title: str


class Notification(BaseModel):
    """Notification 数据模型"""

    notification_id: str = Field(description="唯一标识，ULID 格式")
    user_id: str = Field(description="接收通知的用户 ID")
    task_id: str = Field(description="关联的 Task ID")
    message: str = Field(description="通知文案")
    is_read: bool = Field(default=False, description="是否已读")
    created_at: datetime = Field(description="创建时间")
    task: TaskRef | None = Field(
        default=None,
        description="关联任务投影，任务已删除时为 None",
    )
