"""任务路由

POST   /api/tasks            创建任务（201）
GET    /api/tasks            任务列表，支持筛选与排序
GET    /api/tasks/{task_id}  任务详情
PUT    /api/tasks/{task_id}  部分更新
DELETE /api/tasks/{task_id}  删除

业务异常（ValidationError / NotFoundError）由 main.py 注册的 handler 统一转换。
"""

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from starlette.responses import JSONResponse
from taskhub.core.models import (
    SortOrder,
    Task,
    TaskCreate,
    TaskFilters,
    TaskPriority,
    TaskSort,
    TaskSortField,
    TaskStatus,
    TaskUpdate,
)

from ..deps import get_actor_id, get_task_service
from ..services.task_service import TaskService

router = APIRouter()


class TaskResponse(BaseModel):
    """单个任务响应"""

    task: Task


class TaskListResponse(BaseModel):
    """任务列表响应"""

    tasks: list[Task]


class TaskDeletedResponse(BaseModel):
    task_id: str
    deleted: bool


@router.post("/api/tasks", status_code=201, response_model=TaskResponse)
async def create_task(
    body: TaskCreate,
    actor_id: str = Depends(get_actor_id),
    service: TaskService = Depends(get_task_service),
):
    """创建任务，操作者即创建者"""
    task = await service.create_task(actor_id, body)
    return TaskResponse(task=task)


@router.get("/api/tasks", response_model=TaskListResponse)
async def list_tasks(
    status: TaskStatus | None = Query(default=None, description="按状态筛选"),
    priority: TaskPriority | None = Query(default=None, description="按优先级筛选"),
    creator_id: str | None = Query(default=None, alias="creatorId"),
    assigned_to_id: str | None = Query(default=None, alias="assignedToId"),
    overdue: bool = Query(default=False, description="仅返回已逾期且未完成的任务"),
    sort_by: TaskSortField | None = Query(default=None, alias="sortBy"),
    sort_order: SortOrder | None = Query(default=None, alias="sortOrder"),
    actor_id: str = Depends(get_actor_id),
    service: TaskService = Depends(get_task_service),
):
    """查询任务列表；未指定 sortBy 时按 createdAt 倒序，指定 sortBy 时方向默认 desc"""
    filters = TaskFilters(
        status=status,
        priority=priority,
        creator_id=creator_id,
        assigned_to_id=assigned_to_id,
        overdue=overdue,
    )
    sort = None
    if sort_by is not None:
        sort = TaskSort(field=sort_by, order=sort_order or SortOrder.DESC)

    tasks = await service.list_tasks(filters, sort)
    return TaskListResponse(tasks=tasks)


@router.get("/api/tasks/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: str,
    actor_id: str = Depends(get_actor_id),
    service: TaskService = Depends(get_task_service),
):
    """查询任务详情"""
    task = await service.get_task(task_id)
    return TaskResponse(task=task)


@router.put("/api/tasks/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: str,
    body: TaskUpdate,
    actor_id: str = Depends(get_actor_id),
    service: TaskService = Depends(get_task_service),
):
    """部分更新任务；assigned_to_id 传 null 表示取消指派"""
    task = await service.update_task(task_id, body, actor_id)
    return TaskResponse(task=task)


@router.delete("/api/tasks/{task_id}")
async def delete_task(
    task_id: str,
    actor_id: str = Depends(get_actor_id),
    service: TaskService = Depends(get_task_service),
):
    """删除任务"""
    deleted_id = await service.delete_task(task_id)
    return JSONResponse(
        status_code=200,
        content=TaskDeletedResponse(task_id=deleted_id, deleted=True).model_dump(),
    )
