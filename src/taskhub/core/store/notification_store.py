"""NotificationStore SQLite 实现

通知只追加、只允许标记已读，不提供删除。
"""

import aiosqlite

from ..config import NOTIFICATION_LIST_LIMIT
from ..models.notification import Notification, TaskRef
from ..timeutil import format_ts, parse_ts

_COLUMNS = "n.notification_id, n.user_id, n.task_id, n.message, n.is_read, n.created_at"


class SqliteNotificationStore:
    """NotificationStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def create_notification(self, notification: Notification) -> None:
        """写入通知"""
        await self._conn.execute(
            """
            INSERT INTO notifications (notification_id, user_id, task_id,
                                       message, is_read, created_at)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                notification.notification_id,
                notification.user_id,
                notification.task_id,
                notification.message,
                int(notification.is_read),
                format_ts(notification.created_at),
            ),
        )
        await self._conn.commit()

    async def get_notification(self, notification_id: str) -> Notification | None:
        cursor = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM notifications n WHERE n.notification_id = ?",
            (notification_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_notification(row)

    async def mark_read(self, notification_id: str) -> Notification | None:
        """标记已读（幂等），通知不存在时返回 None"""
        cursor = await self._conn.execute(
            "UPDATE notifications SET is_read = 1 WHERE notification_id = ?",
            (notification_id,),
        )
        await self._conn.commit()
        if cursor.rowcount == 0:
            return None
        return await self.get_notification(notification_id)

    async def count_unread(self, user_id: str) -> int:
        cursor = await self._conn.execute(
            "SELECT COUNT(*) FROM notifications WHERE user_id = ? AND is_read = 0",
            (user_id,),
        )
        row = await cursor.fetchone()
        return row[0] if row else 0

    async def list_for_user(
        self,
        user_id: str,
        limit: int = NOTIFICATION_LIST_LIMIT,
    ) -> list[Notification]:
        """查询用户通知，按创建时间倒序，附带任务投影（id + 标题）"""
        cursor = await self._conn.execute(
            f"""
            SELECT {_COLUMNS}, t.title
            FROM notifications n
            LEFT JOIN tasks t ON t.task_id = n.task_id
            WHERE n.user_id = ?
            ORDER BY n.created_at DESC, n.notification_id DESC
            LIMIT ?
            """,
            (user_id, limit),
        )
        rows = await cursor.fetchall()
        notifications = []
        for row in rows:
            notification = self._row_to_notification(row)
            if row[6] is not None:
                notification.task = TaskRef(task_id=notification.task_id, title=row[6])
            notifications.append(notification)
        return notifications

    @staticmethod
    def _row_to_notification(row: aiosqlite.Row) -> Notification:
        """将数据库行转换为 Notification 模型"""
        return Notification(
            notification_id=row[0],
            user_id=row[1],
            task_id=row[2],
            message=row[3],
            is_read=bool(row[4]),
            created_at=parse_ts(row[5]),
        )
