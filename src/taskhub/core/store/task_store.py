"""TaskStore SQLite 实现

每次写操作单独提交（单行原子性），不做跨表事务。
读取时 LEFT JOIN users 得到 creator / assignee 展示投影。
"""

from datetime import datetime
from typing import Any

import aiosqlite

from ..models.enums import PRIORITY_RANK, SortOrder, TaskSortField, TaskStatus
from ..models.task import Task, TaskFilters, TaskSort, UserRef
from ..timeutil import format_ts, parse_ts

_SELECT_TASK = """
SELECT t.task_id, t.title, t.description, t.due_date, t.priority, t.status,
       t.creator_id, t.assigned_to_id, t.created_at, t.updated_at,
       c.name, c.email, a.name, a.email
FROM tasks t
LEFT JOIN users c ON c.user_id = t.creator_id
LEFT JOIN users a ON a.user_id = t.assigned_to_id
"""

# 允许通过 update_task 写入的列
_UPDATABLE_COLUMNS = frozenset(
    {"title", "description", "due_date", "priority", "status", "assigned_to_id"}
)

_PRIORITY_RANK_SQL = (
    "CASE t.priority "
    + " ".join(f"WHEN '{p.value}' THEN {rank}" for p, rank in PRIORITY_RANK.items())
    + " END"
)

_SORT_COLUMNS: dict[TaskSortField, str] = {
    TaskSortField.DUE_DATE: "t.due_date",
    TaskSortField.CREATED_AT: "t.created_at",
    TaskSortField.PRIORITY: _PRIORITY_RANK_SQL,
}


class SqliteTaskStore:
    """TaskStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def create_task(self, task: Task) -> None:
        """创建任务记录"""
        await self._conn.execute(
            """
            INSERT INTO tasks (task_id, title, description, due_date, priority,
                               status, creator_id, assigned_to_id, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                task.task_id,
                task.title,
                task.description,
                format_ts(task.due_date),
                task.priority.value,
                task.status.value,
                task.creator_id,
                task.assigned_to_id,
                format_ts(task.created_at),
                format_ts(task.updated_at),
            ),
        )
        await self._conn.commit()

    async def get_task(self, task_id: str) -> Task | None:
        """根据 task_id 查询任务（含展示投影）"""
        cursor = await self._conn.execute(
            _SELECT_TASK + "WHERE t.task_id = ?",
            (task_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_task(row)

    async def list_tasks(
        self,
        filters: TaskFilters | None = None,
        sort: TaskSort | None = None,
        now: datetime | None = None,
    ) -> list[Task]:
        """按筛选条件查询任务列表

        Args:
            filters: 筛选条件（AND 组合），None 表示不过滤
            sort: 排序方式，None 时按 created_at 倒序
            now: overdue 判定基准时间，仅在 filters.overdue 为 True 时使用
        """
        filters = filters or TaskFilters()
        sort = sort or TaskSort()

        clauses: list[str] = []
        params: list[Any] = []
        if filters.status is not None:
            clauses.append("t.status = ?")
            params.append(filters.status.value)
        if filters.priority is not None:
            clauses.append("t.priority = ?")
            params.append(filters.priority.value)
        if filters.creator_id:
            clauses.append("t.creator_id = ?")
            params.append(filters.creator_id)
        if filters.assigned_to_id:
            clauses.append("t.assigned_to_id = ?")
            params.append(filters.assigned_to_id)
        if filters.overdue:
            if now is None:
                raise ValueError("now is required when filtering overdue tasks")
            clauses.append("t.due_date < ? AND t.status != ?")
            params.extend([format_ts(now), TaskStatus.COMPLETED.value])

        sql = _SELECT_TASK
        if clauses:
            sql += "WHERE " + " AND ".join(clauses) + " "
        direction = "ASC" if sort.order == SortOrder.ASC else "DESC"
        sql += f"ORDER BY {_SORT_COLUMNS[sort.field]} {direction}, t.task_id {direction}"

        cursor = await self._conn.execute(sql, params)
        rows = await cursor.fetchall()
        return [self._row_to_task(row) for row in rows]

    async def update_task(
        self,
        task_id: str,
        changes: dict[str, Any],
        updated_at: datetime,
    ) -> Task | None:
        """部分更新任务字段，返回更新后的任务；任务不存在时返回 None"""
        unknown = set(changes) - _UPDATABLE_COLUMNS
        if unknown:
            raise ValueError(f"Cannot update task columns: {sorted(unknown)}")

        assignments = ["updated_at = ?"]
        params: list[Any] = [format_ts(updated_at)]
        for column, value in changes.items():
            assignments.append(f"{column} = ?")
            params.append(self._to_column_value(value))
        params.append(task_id)

        cursor = await self._conn.execute(
            f"UPDATE tasks SET {', '.join(assignments)} WHERE task_id = ?",
            params,
        )
        await self._conn.commit()
        if cursor.rowcount == 0:
            return None
        return await self.get_task(task_id)

    async def delete_task(self, task_id: str) -> bool:
        """删除任务，返回是否确实删除了记录"""
        cursor = await self._conn.execute(
            "DELETE FROM tasks WHERE task_id = ?",
            (task_id,),
        )
        await self._conn.commit()
        return cursor.rowcount > 0

    async def exists(self, task_id: str) -> bool:
        cursor = await self._conn.execute(
            "SELECT COUNT(*) FROM tasks WHERE task_id = ?",
            (task_id,),
        )
        row = await cursor.fetchone()
        return bool(row and row[0])

    @staticmethod
    def _to_column_value(value: Any) -> Any:
        if isinstance(value, datetime):
            return format_ts(value)
        if hasattr(value, "value"):
            return value.value
        return value

    @staticmethod
    def _row_to_task(row: aiosqlite.Row) -> Task:
        """将数据库行转换为 Task 模型"""
        creator = (
            UserRef(user_id=row[6], name=row[10], email=row[11])
            if row[10] is not None
            else None
        )
        assignee = (
            UserRef(user_id=row[7], name=row[12], email=row[13])
            if row[7] is not None and row[12] is not None
            else None
        )
        return Task(
            task_id=row[0],
            title=row[1],
            description=row[2],
            due_date=parse_ts(row[3]),
            priority=row[4],
            status=row[5],
            creator_id=row[6],
            assigned_to_id=row[7],
            created_at=parse_ts(row[8]),
            updated_at=parse_ts(row[9]),
            creator=creator,
            assignee=assignee,
        )
