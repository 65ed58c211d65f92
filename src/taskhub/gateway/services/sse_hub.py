"""SSEHub -- 内存中事件广播器

每个 SSE 连接持有一个 asyncio.Queue，按 user_id 分组：
- broadcast_global: 推送给所有在线连接
- broadcast_to_user: 只推送给该用户的连接

连接的注册/注销只由 SSE 路由（连接生命周期）调用，业务服务只读。
投递尽力而为：不排队给稍后才连接的客户端，队列写满的连接直接丢弃。
"""

import asyncio
from collections import defaultdict
from typing import Any

import structlog
from taskhub.core.config import SSE_QUEUE_MAXSIZE
from taskhub.core.models.enums import EventName
from taskhub.core.models.event import Event

log = structlog.get_logger()


class SSEHub:
    """SSE 事件广播器 -- 基于 asyncio.Queue 的发布/订阅模式"""

    def __init__(self, queue_maxsize: int = SSE_QUEUE_MAXSIZE) -> None:
        # user_id -> set of asyncio.Queue
        self._subscribers: dict[str, set[asyncio.Queue]] = defaultdict(set)
        self._queue_maxsize = queue_maxsize

    async def subscribe(self, user_id: str) -> asyncio.Queue:
        """为用户注册一个新连接

        Args:
            user_id: 连接所属用户

        Returns:
            asyncio.Queue 实例，新事件会被推送到此队列
        """
        queue: asyncio.Queue = asyncio.Queue(maxsize=self._queue_maxsize)
        self._subscribers[user_id].add(queue)
        return queue

    async def unsubscribe(self, user_id: str, queue: asyncio.Queue) -> None:
        """注销连接

        Args:
            user_id: 连接所属用户
            queue: 之前订阅时返回的队列
        """
        queues = self._subscribers.get(user_id)
        if queues is None:
            return
        queues.discard(queue)
        if not queues:
            del self._subscribers[user_id]

    def connection_count(self, user_id: str | None = None) -> int:
        """在线连接数；指定 user_id 时只统计该用户"""
        if user_id is not None:
            return len(self._subscribers.get(user_id, ()))
        return sum(len(queues) for queues in self._subscribers.values())

    async def broadcast_global(self, name: EventName, payload: dict[str, Any]) -> Event:
        """向所有在线连接广播事件"""
        event = Event(name=name, payload=payload)
        for user_id in list(self._subscribers):
            self._deliver(user_id, event)
        return event

    async def broadcast_to_user(
        self,
        user_id: str,
        name: EventName,
        payload: dict[str, Any],
    ) -> Event:
        """只向指定用户的连接推送事件"""
        event = Event(name=name, payload=payload)
        self._deliver(user_id, event)
        return event

    def _deliver(self, user_id: str, event: Event) -> None:
        dead_queues = []
        for queue in self._subscribers.get(user_id, set()):
            try:
                queue.put_nowait(event)
            except asyncio.QueueFull:
                dead_queues.append(queue)

        # 清理已满的队列
        for q in dead_queues:
            self._subscribers[user_id].discard(q)
            log.warning("sse_queue_full_dropped", user_id=user_id, event_name=event.name)
        if user_id in self._subscribers and not self._subscribers[user_id]:
            del self._subscribers[user_id]
