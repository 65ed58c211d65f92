"""TaskHub 异常体系

业务层只抛出 TaskHubError 子类；基础设施异常（aiosqlite.Error 等）原样向上传播。
Gateway 通过 exception handler 把 code 映射为 HTTP 状态码与统一错误结构。
"""


class TaskHubError(Exception):
    """TaskHub 基础异常"""

    code = "TASKHUB_ERROR"

    def __init__(self, message: str, code: str | None = None) -> None:
        """
        Args:
            message: 错误描述（会返回给调用方）
            code: 机器可读错误码，缺省使用类级别默认值
        """
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class ValidationError(TaskHubError):
    """输入不合法：ID 格式错误、截止时间不在未来、必填字段缺失等

    抛出时不会产生任何状态变更。
    """

    code = "VALIDATION_ERROR"


class NotFoundError(TaskHubError):
    """引用的 Task / Notification / User 不存在"""

    code = "NOT_FOUND"


class ConflictError(TaskHubError):
    """唯一性冲突（如注册时邮箱重复），由存储层抛出，核心层原样传播"""

    code = "CONFLICT"


class AuthenticationError(TaskHubError):
    """无法解析请求方身份"""

    code = "UNAUTHORIZED"
