"""Store Protocol 接口定义

定义 TaskStore、NotificationStore、UserStore 的抽象接口，
使用 Python Protocol 实现结构化子类型（duck typing）。
"""

from datetime import datetime
from typing import Any, Protocol

from ..models.notification import Notification
from ..models.task import Task, TaskFilters, TaskSort
from ..models.user import User


class TaskStore(Protocol):
    """Task 存储接口"""

    async def create_task(self, task: Task) -> None:
        """创建任务记录"""
        ...

    async def get_task(self, task_id: str) -> Task | None:
        """根据 task_id 查询任务"""
        ...

    async def list_tasks(
        self,
        filters: TaskFilters | None = None,
        sort: TaskSort | None = None,
        now: datetime | None = None,
    ) -> list[Task]:
        """按筛选条件与排序查询任务列表"""
        ...

    async def update_task(
        self,
        task_id: str,
        changes: dict[str, Any],
        updated_at: datetime,
    ) -> Task | None:
        """部分更新任务，返回更新后的任务或 None"""
        ...

    async def delete_task(self, task_id: str) -> bool:
        """删除任务，返回是否删除成功"""
        ...

    async def exists(self, task_id: str) -> bool:
        ...


class NotificationStore(Protocol):
    """Notification 存储接口"""

    async def create_notification(self, notification: Notification) -> None:
        ...

    async def get_notification(self, notification_id: str) -> Notification | None:
        ...

    async def mark_read(self, notification_id: str) -> Notification | None:
        """标记已读（幂等）"""
        ...

    async def count_unread(self, user_id: str) -> int:
        ...

    async def list_for_user(self, user_id: str, limit: int = ...) -> list[Notification]:
        """按创建时间倒序查询用户通知"""
        ...


class UserStore(Protocol):
    """用户协作方接口"""

    async def create_user(self, user: User) -> None:
        ...

    async def get_user(self, user_id: str) -> User | None:
        ...

    async def list_users(self) -> list[User]:
        ...

    async def exists_by_email(self, email: str) -> bool:
        ...
