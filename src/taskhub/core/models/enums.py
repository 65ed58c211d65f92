"""枚举定义

包含 TaskStatus、TaskPriority、实时事件名 EventName、通知文案模板，
以及 ListTasks 使用的排序字段与方向。
"""

from enum import StrEnum


class TaskStatus(StrEnum):
    """任务状态 -- 四个状态之间可自由切换，不设流转图"""

    TODO = "To Do"
    IN_PROGRESS = "In Progress"
    REVIEW = "Review"
    COMPLETED = "Completed"


class TaskPriority(StrEnum):
    """任务优先级"""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    URGENT = "Urgent"


# 优先级排序权重（按紧急程度，而非字母序）
PRIORITY_RANK: dict[TaskPriority, int] = {
    TaskPriority.LOW: 0,
    TaskPriority.MEDIUM: 1,
    TaskPriority.HIGH: 2,
    TaskPriority.URGENT: 3,
}


class EventName(StrEnum):
    """实时推送事件名"""

    # 全局广播
    TASK_CREATED = "task:created"
    TASK_UPDATED = "task:updated"
    TASK_DELETED = "task:deleted"

    # 仅推送给被指派人
    TASK_ASSIGNED = "task:assigned"
    NOTIFICATION_NEW = "notification:new"


class NotificationTemplate(StrEnum):
    """指派通知文案模板，{title} 为任务标题"""

    TASK_CREATED_ASSIGNMENT = 'You have been assigned a new task: "{title}"'
    TASK_REASSIGNMENT = 'You have been assigned to task: "{title}"'

    def render(self, title: str) -> str:
        return self.value.format(title=title)


class TaskSortField(StrEnum):
    """任务列表排序字段（取值与查询参数 sortBy 一致）"""

    DUE_DATE = "dueDate"
    CREATED_AT = "createdAt"
    PRIORITY = "priority"


class SortOrder(StrEnum):
    """排序方向"""

    ASC = "asc"
    DESC = "desc"
