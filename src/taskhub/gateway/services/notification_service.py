"""NotificationService -- 指派通知的生成、已读标记与查询

通知由 TaskService 在指派发生时调用 notify() 生成，
推送由调用方负责（本服务不持有广播器）。
"""

import structlog
from taskhub.core.config import NOTIFICATION_LIST_LIMIT
from taskhub.core.exceptions import NotFoundError
from taskhub.core.ids import is_valid_id, new_id, normalize_id
from taskhub.core.models import Notification, NotificationTemplate
from taskhub.core.store.protocols import NotificationStore
from taskhub.core.timeutil import utc_now

log = structlog.get_logger()


class NotificationService:
    """通知业务服务"""

    def __init__(self, notification_store: NotificationStore) -> None:
        self._store = notification_store

    async def notify(
        self,
        target_user_id: str,
        task_id: str,
        template: NotificationTemplate,
        title: str,
    ) -> Notification:
        """生成并落盘一条指派通知

        不校验 target_user_id / task_id 是否存在，由调用方保证。

        Args:
            target_user_id: 被指派人
            task_id: 关联任务
            template: 文案模板（新建指派 / 重新指派）
            title: 任务标题，插入文案

        Returns:
            已落盘的 Notification，供调用方推送
        """
        notification = Notification(
            notification_id=new_id(),
            user_id=target_user_id,
            task_id=task_id,
            message=template.render(title),
            created_at=utc_now(),
        )
        await self._store.create_notification(notification)
        log.info(
            "notification_created",
            notification_id=notification.notification_id,
            user_id=target_user_id,
            task_id=task_id,
        )
        return notification

    async def mark_read(self, notification_id: str) -> Notification:
        """标记已读；已读通知再次标记同样成功

        Raises:
            NotFoundError: 通知不存在
        """
        if is_valid_id(notification_id):
            notification_id = normalize_id(notification_id)
        notification = await self._store.mark_read(notification_id)
        if notification is None:
            raise NotFoundError(
                f"Notification with id {notification_id} does not exist",
                code="NOTIFICATION_NOT_FOUND",
            )
        log.info("notification_marked_read", notification_id=notification_id)
        return notification

    async def count_unread(self, user_id: str) -> int:
        return await self._store.count_unread(user_id)

    async def list_for_user(self, user_id: str) -> list[Notification]:
        """最近的通知在前，最多 NOTIFICATION_LIST_LIMIT 条"""
        return await self._store.list_for_user(user_id, limit=NOTIFICATION_LIST_LIMIT)
