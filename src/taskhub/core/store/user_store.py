"""UserStore SQLite 实现 -- 用户协作方

仅提供展示投影和指派所需的读写；邮箱唯一约束冲突转换为 ConflictError。
"""

import aiosqlite

from ..exceptions import ConflictError
from ..models.user import User
from ..timeutil import format_ts, parse_ts


class SqliteUserStore:
    """UserStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def create_user(self, user: User) -> None:
        """创建用户

        Raises:
            ConflictError: 邮箱已被注册
        """
        try:
            await self._conn.execute(
                """
                INSERT INTO users (user_id, name, email, created_at)
                VALUES (?, ?, ?, ?)
                """,
                (user.user_id, user.name, user.email, format_ts(user.created_at)),
            )
            await self._conn.commit()
        except aiosqlite.IntegrityError as e:
            await self._conn.rollback()
            if "users.email" in str(e) or "idx_users_email" in str(e):
                raise ConflictError(
                    f"Email already registered: {user.email}", code="EMAIL_TAKEN"
                ) from e
            raise

    async def get_user(self, user_id: str) -> User | None:
        cursor = await self._conn.execute(
            "SELECT user_id, name, email, created_at FROM users WHERE user_id = ?",
            (user_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_user(row)

    async def list_users(self) -> list[User]:
        """查询全部用户（供指派选择），按名称排序"""
        cursor = await self._conn.execute(
            "SELECT user_id, name, email, created_at FROM users ORDER BY name ASC"
        )
        rows = await cursor.fetchall()
        return [self._row_to_user(row) for row in rows]

    async def exists_by_email(self, email: str) -> bool:
        cursor = await self._conn.execute(
            "SELECT COUNT(*) FROM users WHERE email = ?",
            (email,),
        )
        row = await cursor.fetchone()
        return bool(row and row[0])

    @staticmethod
    def _row_to_user(row: aiosqlite.Row) -> User:
        return User(
            user_id=row[0],
            name=row[1],
            email=row[2],
            created_at=parse_ts(row[3]),
        )
