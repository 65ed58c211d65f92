"""SSE 事件流路由

GET /api/stream: 当前用户的实时事件流。
连接期间接收全局 task:* 事件和仅发给本人的 task:assigned / notification:new。
不补发历史事件：客户端（重）连接后应重新拉取任务列表。
"""

import asyncio
import json
from collections.abc import AsyncGenerator

import structlog
from fastapi import APIRouter, Depends
from sse_starlette.sse import EventSourceResponse
from taskhub.core.config import SSE_HEARTBEAT_INTERVAL
from taskhub.core.models.event import Event

from ..deps import get_actor_id, get_sse_hub
from ..services.sse_hub import SSEHub

log = structlog.get_logger()

router = APIRouter()


def _event_to_sse(event: Event) -> dict:
    """将 Event 转换为 sse-starlette 消息"""
    return {
        "id": event.event_id,
        "event": event.name.value,
        "data": json.dumps(
            {
                "event_id": event.event_id,
                "ts": event.ts.isoformat(),
                "payload": event.payload,
            },
            ensure_ascii=False,
        ),
    }


async def event_stream(
    sse_hub: SSEHub,
    user_id: str,
    heartbeat_interval: float = SSE_HEARTBEAT_INTERVAL,
) -> AsyncGenerator[dict, None]:
    """注册连接并持续产出事件，生成器关闭时注销连接"""
    queue = await sse_hub.subscribe(user_id)
    log.info("sse_client_connected", user_id=user_id)
    try:
        while True:
            try:
                event = await asyncio.wait_for(queue.get(), timeout=heartbeat_interval)
            except TimeoutError:
                # 心跳保活
                yield {"comment": "heartbeat"}
                continue
            yield _event_to_sse(event)
    finally:
        await sse_hub.unsubscribe(user_id, queue)
        log.info("sse_client_disconnected", user_id=user_id)


@router.get("/api/stream")
async def stream_events(
    actor_id: str = Depends(get_actor_id),
    sse_hub: SSEHub = Depends(get_sse_hub),
):
    """SSE 事件流端点"""
    return EventSourceResponse(event_stream(sse_hub, actor_id))
