"""User 模型 -- 用户协作方的只读视图

注册、密码与令牌不在本服务范围内，这里只保存展示与指派所需的字段。
"""

from datetime import UTC, datetime

from pydantic import BaseModel, Field

from .task import UserRef


class User(BaseModel):
    """用户记录"""

    user_id: str = Field(description="唯一标识，ULID 格式")
    name: str = Field(description="显示名称")
    email: str = Field(description="邮箱，全局唯一")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="创建时间",
    )

    def to_ref(self) -> UserRef:
        return UserRef(user_id=self.user_id, name=self.name, email=self.email)
