"""Task Domain Model

Task 由 TaskService 创建；creator_id 创建后不可变，
assigned_to_id 可修改或清空。creator / assignee 是从用户表联查的只读展示投影。
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..config import TASK_TITLE_MAX_LENGTH
from ..timeutil import to_utc
from .enums import SortOrder, TaskPriority, TaskSortField, TaskStatus


class UserRef(BaseModel):
    """用户展示投影（仅 id + 名称 + 邮箱）"""

    user_id: str
    name: str
    email: str


class Task(BaseModel):
    """Task 数据模型"""

    task_id: str = Field(description="唯一标识，ULID 格式")
    title: str = Field(description="任务标题")
    description: str = Field(description="任务描述")
    due_date: datetime = Field(description="截止时间（UTC）")
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM, description="优先级")
    status: TaskStatus = Field(default=TaskStatus.TODO, description="当前状态")
    creator_id: str = Field(description="创建者 ID，创建后不可变")
    assigned_to_id: str | None = Field(default=None, description="被指派人 ID")
    created_at: datetime = Field(description="创建时间")
    updated_at: datetime = Field(description="更新时间")
    creator: UserRef | None = Field(default=None, description="创建者展示信息")
    assignee: UserRef | None = Field(default=None, description="被指派人展示信息")


class TaskCreate(BaseModel):
    """创建任务请求"""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1, max_length=TASK_TITLE_MAX_LENGTH)
    description: str = Field(min_length=1)
    due_date: datetime
    priority: TaskPriority
    assigned_to_id: str | None = None

    @field_validator("due_date")
    @classmethod
    def _normalize_due_date(cls, value: datetime) -> datetime:
        return to_utc(value)

    @field_validator("assigned_to_id")
    @classmethod
    def _empty_assignee_is_none(cls, value: str | None) -> str | None:
        return value or None


class TaskUpdate(BaseModel):
    """更新任务请求 -- 所有字段可选，仅显式给出的字段会被写入

    assigned_to_id 可显式置为 null / "" 以取消指派；其余字段不允许为 null。
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str | None = Field(default=None, min_length=1, max_length=TASK_TITLE_MAX_LENGTH)
    description: str | None = Field(default=None, min_length=1)
    due_date: datetime | None = None
    priority: TaskPriority | None = None
    status: TaskStatus | None = None
    assigned_to_id: str | None = None

    @field_validator("due_date")
    @classmethod
    def _normalize_due_date(cls, value: datetime | None) -> datetime | None:
        return to_utc(value) if value is not None else None

    @field_validator("assigned_to_id")
    @classmethod
    def _empty_assignee_is_none(cls, value: str | None) -> str | None:
        return value or None

    @model_validator(mode="after")
    def _reject_null_fields(self) -> "TaskUpdate":
        for name in self.model_fields_set:
            if name != "assigned_to_id" and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict:
        """返回显式给出的字段（含被置空的 assigned_to_id）"""
        return {name: getattr(self, name) for name in self.model_fields_set}


class TaskFilters(BaseModel):
    """任务列表筛选条件，多个条件之间为 AND"""

    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    creator_id: str | None = None
    assigned_to_id: str | None = None
    overdue: bool = Field(
        default=False,
        description="True 表示仅返回已过截止时间且未完成的任务",
    )


class TaskSort(BaseModel):
    """任务列表排序"""

    field: TaskSortField = TaskSortField.CREATED_AT
    order: SortOrder = SortOrder.DESC
