"""依赖注入模块 -- 通过 FastAPI Depends 注入 Store 实例与业务服务

Store / SSEHub 实例通过 app.state 管理，在 lifespan 中初始化/清理。
"""

import structlog
from fastapi import Depends, Header, Request
from taskhub.core.exceptions import AuthenticationError
from taskhub.core.store import StoreGroup

from .services.notification_service import NotificationService
from .services.sse_hub import SSEHub
from .services.task_service import TaskService


def get_store_group(request: Request) -> StoreGroup:
    """从 app.state 获取 StoreGroup 实例"""
    return request.app.state.store_group


def get_sse_hub(request: Request) -> SSEHub | None:
    """从 app.state 获取 SSEHub 实例"""
    return getattr(request.app.state, "sse_hub", None)


def get_task_service(
    store_group: StoreGroup = Depends(get_store_group),
    sse_hub: SSEHub | None = Depends(get_sse_hub),
) -> TaskService:
    return TaskService(store_group, sse_hub)


def get_notification_service(
    store_group: StoreGroup = Depends(get_store_group),
) -> NotificationService:
    return NotificationService(store_group.notification_store)


async def get_actor_id(
    x_user_id: str | None = Header(default=None),
    store_group: StoreGroup = Depends(get_store_group),
) -> str:
    """解析请求方身份

    凭证签发与校验由上游认证层完成，这里只接收其解析出的 user_id（X-User-Id 头），
    并确认该用户存在。
    """
    if not x_user_id:
        raise AuthenticationError("Authentication required")

    user = await store_group.user_store.get_user(x_user_id)
    if user is None:
        raise AuthenticationError("Invalid or unknown user")

    structlog.contextvars.bind_contextvars(actor_id=x_user_id)
    return x_user_id
