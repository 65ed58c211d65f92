"""通知路由

GET /api/notifications: 当前用户的通知（最新在前，最多 50 条）
GET /api/notifications/unread-count: 当前用户未读数
PUT /api/notifications/{notification_id}/read: 标记已读（幂等）
- 200: 标记成功（已读通知再次标记同样返回 200）
- 404: 通知不存在
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from taskhub.core.models import Notification

from ..deps import get_actor_id, get_notification_service
from ..services.notification_service import NotificationService

router = APIRouter()


class NotificationListResponse(BaseModel):
    notifications: list[Notification]


class NotificationResponse(BaseModel):
    notification: Notification


class UnreadCountResponse(BaseModel):
    count: int


@router.get("/api/notifications", response_model=NotificationListResponse)
async def list_notifications(
    actor_id: str = Depends(get_actor_id),
    service: NotificationService = Depends(get_notification_service),
):
    """查询当前用户的通知列表"""
    notifications = await service.list_for_user(actor_id)
    return NotificationListResponse(notifications=notifications)


@router.get("/api/notifications/unread-count", response_model=UnreadCountResponse)
async def unread_count(
    actor_id: str = Depends(get_actor_id),
    service: NotificationService = Depends(get_notification_service),
):
    """查询当前用户未读通知数"""
    return UnreadCountResponse(count=await service.count_unread(actor_id))


@router.put(
    "/api/notifications/{notification_id}/read",
    response_model=NotificationResponse,
)
async def mark_notification_read(
    notification_id: str,
    actor_id: str = Depends(get_actor_id),
    service: NotificationService = Depends(get_notification_service),
):
    """标记通知已读"""
    notification = await service.mark_read(notification_id)
    return NotificationResponse(notification=notification)
