"""TraceMiddleware -- 为任务操作绑定 task_id

从 /api/tasks/{task_id} 路径中提取 task_id，绑定到 structlog contextvars，
贯穿该请求内的业务日志。
"""

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from taskhub.core.ids import is_valid_id


class TraceMiddleware(BaseHTTPMiddleware):
    """任务级追踪中间件 -- 为任务操作绑定 task_id"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        task_id = None

        parts = request.url.path.split("/")
        for i, part in enumerate(parts):
            if part == "tasks" and i + 1 < len(parts):
                candidate = parts[i + 1]
                if candidate and is_valid_id(candidate):
                    task_id = candidate
                    break

        if task_id:
            structlog.contextvars.bind_contextvars(task_id=task_id)

        return await call_next(request)
