"""TaskService -- 任务创建/更新/删除/查询业务逻辑

每个写操作的顺序固定：
1. 校验输入（ID 格式、截止时间）
2. 落盘
3. 全局广播 task:* 事件
4. 如发生指派（且被指派人不是操作者本人），生成通知并只推送给被指派人

广播尽力而为：失败只记日志，不影响已成功的写操作。
落盘失败则整个操作失败，之前已完成的写入不回滚。
"""

from datetime import datetime
from typing import Any

import structlog
from taskhub.core.exceptions import NotFoundError, ValidationError
from taskhub.core.ids import is_valid_id, new_id, normalize_id
from taskhub.core.models import (
    EventName,
    Notification,
    NotificationTemplate,
    Task,
    TaskCreate,
    TaskDeletedPayload,
    TaskFilters,
    TaskSort,
    TaskStatus,
    TaskUpdate,
)
from taskhub.core.store import StoreGroup
from taskhub.core.timeutil import utc_now

from .notification_service import NotificationService
from .sse_hub import SSEHub

log = structlog.get_logger()


class TaskService:
    """任务业务服务"""

    def __init__(
        self,
        store_group: StoreGroup,
        sse_hub: SSEHub | None = None,
        notification_service: NotificationService | None = None,
    ) -> None:
        self._stores = store_group
        self._sse_hub = sse_hub
        self._notifications = notification_service or NotificationService(
            store_group.notification_store
        )

    async def create_task(self, actor_id: str, payload: TaskCreate) -> Task:
        """创建任务

        Args:
            actor_id: 操作者（即创建者）ID
            payload: 创建请求

        Returns:
            已落盘的 Task（含展示投影）

        Raises:
            ValidationError: 截止时间不在未来
        """
        now = utc_now()
        self._ensure_future(payload.due_date, now)

        task = Task(
            task_id=new_id(),
            title=payload.title,
            description=payload.description,
            due_date=payload.due_date,
            priority=payload.priority,
            status=TaskStatus.TODO,
            creator_id=actor_id,
            assigned_to_id=payload.assigned_to_id,
            created_at=now,
            updated_at=now,
        )
        await self._stores.task_store.create_task(task)
        created = await self._stores.task_store.get_task(task.task_id)
        if created is None:
            # 写入后回读不到（已被并发删除）
            raise NotFoundError(
                f"Task with id {task.task_id} does not exist", code="TASK_NOT_FOUND"
            )

        log.info(
            "task_created",
            task_id=created.task_id,
            creator_id=actor_id,
            assigned_to_id=created.assigned_to_id,
        )
        await self._broadcast_global(EventName.TASK_CREATED, _task_payload(created))

        if created.assigned_to_id and created.assigned_to_id != actor_id:
            await self._notify_assignee(
                created, NotificationTemplate.TASK_CREATED_ASSIGNMENT
            )

        return created

    async def update_task(
        self,
        task_id: str,
        payload: TaskUpdate,
        actor_id: str,
    ) -> Task:
        """部分更新任务

        只写入 payload 中显式给出的字段。仅当 payload 含 due_date 时才重新校验截止时间，
        已过期任务的其他字段仍可编辑。指派通知与“更新前”的指派人比较，
        重复提交相同指派不会重复通知。

        Raises:
            ValidationError: task_id 格式错误或新截止时间不在未来
            NotFoundError: 任务不存在
        """
        task_id = self._normalize_id(task_id)
        existing = await self._require_task(task_id)

        changes = payload.changes()
        if "due_date" in changes:
            self._ensure_future(changes["due_date"], utc_now())

        task = await self._stores.task_store.update_task(task_id, changes, utc_now())
        if task is None:
            # 读取与更新之间被并发删除
            raise NotFoundError(
                f"Task with id {task_id} does not exist", code="TASK_NOT_FOUND"
            )

        log.info(
            "task_updated",
            task_id=task_id,
            actor_id=actor_id,
            fields=sorted(changes),
        )
        await self._broadcast_global(EventName.TASK_UPDATED, _task_payload(task))

        new_assignee = changes.get("assigned_to_id")
        if (
            "assigned_to_id" in changes
            and new_assignee
            and new_assignee != existing.assigned_to_id
            and new_assignee != actor_id
        ):
            await self._notify_assignee(task, NotificationTemplate.TASK_REASSIGNMENT)

        return task

    async def delete_task(self, task_id: str) -> str:
        """删除任务并全局广播 task:deleted；不产生通知，返回规范写法的 task_id

        Raises:
            ValidationError: task_id 格式错误
            NotFoundError: 任务不存在
        """
        task_id = self._normalize_id(task_id)
        deleted = await self._stores.task_store.delete_task(task_id)
        if not deleted:
            raise NotFoundError(
                f"Task with id {task_id} does not exist", code="TASK_NOT_FOUND"
            )

        log.info("task_deleted", task_id=task_id)
        await self._broadcast_global(
            EventName.TASK_DELETED,
            TaskDeletedPayload(task_id=task_id).model_dump(by_alias=True),
        )
        return task_id

    async def get_task(self, task_id: str) -> Task:
        """查询任务详情

        Raises:
            ValidationError: task_id 格式错误
            NotFoundError: 任务不存在
        """
        task_id = self._normalize_id(task_id)
        return await self._require_task(task_id)

    async def list_tasks(
        self,
        filters: TaskFilters | None = None,
        sort: TaskSort | None = None,
    ) -> list[Task]:
        """查询任务列表，默认按 created_at 倒序"""
        return await self._stores.task_store.list_tasks(filters, sort, now=utc_now())

    async def _require_task(self, task_id: str) -> Task:
        task = await self._stores.task_store.get_task(task_id)
        if task is None:
            raise NotFoundError(
                f"Task with id {task_id} does not exist", code="TASK_NOT_FOUND"
            )
        return task

    async def _notify_assignee(
        self, task: Task, template: NotificationTemplate
    ) -> Notification:
        """生成指派通知，并以两个事件名推送给被指派人"""
        assignee_id = task.assigned_to_id
        notification = await self._notifications.notify(
            assignee_id, task.task_id, template, task.title
        )
        payload = notification.model_dump(mode="json")
        await self._broadcast_to_user(assignee_id, EventName.TASK_ASSIGNED, payload)
        await self._broadcast_to_user(assignee_id, EventName.NOTIFICATION_NEW, payload)
        return notification

    async def _broadcast_global(self, name: EventName, payload: dict[str, Any]) -> None:
        if self._sse_hub is None:
            return
        try:
            await self._sse_hub.broadcast_global(name, payload)
        except Exception as e:
            log.warning(
                "broadcast_failed",
                event_name=name,
                scope="global",
                error_type=type(e).__name__,
            )

    async def _broadcast_to_user(
        self, user_id: str, name: EventName, payload: dict[str, Any]
    ) -> None:
        if self._sse_hub is None:
            return
        try:
            await self._sse_hub.broadcast_to_user(user_id, name, payload)
        except Exception as e:
            log.warning(
                "broadcast_failed",
                event_name=name,
                scope="user",
                user_id=user_id,
                error_type=type(e).__name__,
            )

    @staticmethod
    def _normalize_id(task_id: str) -> str:
        if not is_valid_id(task_id):
            raise ValidationError(f"Invalid task ID: {task_id}")
        return normalize_id(task_id)

    @staticmethod
    def _ensure_future(due_date: datetime, now: datetime) -> None:
        if due_date <= now:
            raise ValidationError("Due date must be in the future")


def _task_payload(task: Task) -> dict[str, Any]:
    return task.model_dump(mode="json")
