"""TaskHub Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .enums import (
    PRIORITY_RANK,
    EventName,
    NotificationTemplate,
    SortOrder,
    TaskPriority,
    TaskSortField,
    TaskStatus,
)
from .event import Event, TaskDeletedPayload
from .notification import Notification, TaskRef
from .task import (
    Task,
    TaskCreate,
    TaskFilters,
    TaskSort,
    TaskUpdate,
    UserRef,
)
from .user import User

__all__ = [
    # 枚举
    "TaskStatus",
    "TaskPriority",
    "PRIORITY_RANK",
    "EventName",
    "NotificationTemplate",
    "TaskSortField",
    "SortOrder",
    # Task
    "Task",
    "TaskCreate",
    "TaskUpdate",
    "TaskFilters",
    "TaskSort",
    "UserRef",
    # Notification
    "Notification",
    "TaskRef",
    # User
    "User",
    # Event
    "Event",
    "TaskDeletedPayload",
]
