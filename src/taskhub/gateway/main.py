"""FastAPI 应用主文件

app 创建 + lifespan 管理：DB 初始化/关闭 + SSEHub 初始化 + 路由注册 + 业务异常映射。
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from starlette.responses import JSONResponse
from taskhub.core.config import get_db_path
from taskhub.core.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    TaskHubError,
    ValidationError,
)
from taskhub.core.store import create_store_group

from .middleware.logging_config import setup_logfire, setup_logging
from .middleware.logging_mw import LoggingMiddleware
from .middleware.trace_mw import TraceMiddleware
from .routes import health, notifications, stream, tasks, users
from .services.sse_hub import SSEHub

log = structlog.get_logger()

# 业务异常 -> HTTP 状态码
_ERROR_STATUS: dict[type[TaskHubError], int] = {
    ValidationError: 400,
    AuthenticationError: 401,
    NotFoundError: 404,
    ConflictError: 409,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期管理：启动时初始化 DB 和 SSEHub，关闭时清理连接"""
    db_path = get_db_path()
    app.state.store_group = await create_store_group(db_path)
    app.state.sse_hub = SSEHub()
    log.info("gateway_started", db_path=db_path)

    yield

    if getattr(app.state, "store_group", None) is not None:
        await app.state.store_group.conn.close()


async def handle_taskhub_error(request: Request, exc: TaskHubError) -> JSONResponse:
    """把业务异常转换为统一错误结构"""
    status_code = 500
    for error_type, code in _ERROR_STATUS.items():
        if isinstance(exc, error_type):
            status_code = code
            break

    log.info(
        "request_rejected",
        error_code=exc.code,
        status_code=status_code,
    )
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": exc.code, "message": exc.message}},
    )


def create_app() -> FastAPI:
    """创建 FastAPI 应用实例"""
    app = FastAPI(
        title="TaskHub Gateway",
        version="0.1.0",
        description="任务协作与实时指派通知 API",
        lifespan=lifespan,
    )

    # 注册中间件（顺序：先 Trace 后 Logging，Logging 位于最外层）
    app.add_middleware(TraceMiddleware)
    app.add_middleware(LoggingMiddleware)

    app.add_exception_handler(TaskHubError, handle_taskhub_error)

    # 初始化日志
    setup_logging()
    setup_logfire(app)

    # 注册路由
    app.include_router(tasks.router, tags=["tasks"])
    app.include_router(notifications.router, tags=["notifications"])
    app.include_router(users.router, tags=["users"])
    app.include_router(stream.router, tags=["stream"])
    app.include_router(health.router, tags=["health"])

    return app


# 默认 app 实例（uvicorn 入口）
app = create_app()
