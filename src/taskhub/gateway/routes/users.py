"""用户路由

GET /api/users: 用户列表（供前端选择被指派人）
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from taskhub.core.models import UserRef
from taskhub.core.store import StoreGroup

from ..deps import get_actor_id, get_store_group

router = APIRouter()


class UserListResponse(BaseModel):
    users: list[UserRef]


@router.get("/api/users", response_model=UserListResponse)
async def list_users(
    actor_id: str = Depends(get_actor_id),
    store_group: StoreGroup = Depends(get_store_group),
):
    """查询全部用户，仅返回 id / 名称 / 邮箱"""
    users = await store_group.user_store.list_users()
    return UserListResponse(users=[u.to_ref() for u in users])
