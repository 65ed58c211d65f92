"""CLI 入口模块 -- python -m taskhub.core <command>

支持的命令：
  init-db                    按当前配置创建数据库与表结构
  add-user <name> <email>    新增用户（开发环境造数）
"""

import asyncio
import sys

from .config import get_db_path
from .exceptions import ConflictError


def main() -> None:
    """CLI 主入口"""
    if len(sys.argv) < 2:
        _print_usage()
        sys.exit(1)

    command = sys.argv[1]

    if command == "init-db":
        asyncio.run(init_database())
    elif command == "add-user":
        if len(sys.argv) != 4:
            print("用法: python -m taskhub.core add-user <name> <email>")
            sys.exit(1)
        try:
            asyncio.run(add_user(sys.argv[2], sys.argv[3]))
        except ConflictError as e:
            print(f"创建失败: {e.message}")
            sys.exit(1)
    else:
        print(f"未知命令: {command}")
        print("可用命令: init-db, add-user")
        sys.exit(1)


def _print_usage() -> None:
    print("用法: python -m taskhub.core <command>")
    print("命令:")
    print("  init-db                    创建数据库与表结构")
    print("  add-user <name> <email>    新增用户")


async def init_database() -> None:
    """执行数据库初始化"""
    from .store import create_store_group

    db_path = get_db_path()
    print(f"数据库路径: {db_path}")

    store_group = await create_store_group(db_path)
    await store_group.conn.close()
    print("初始化完成")


async def add_user(name: str, email: str) -> str:
    """新增用户并返回 user_id"""
    from .ids import new_id
    from .models.user import User
    from .store import create_store_group

    store_group = await create_store_group(get_db_path())
    try:
        user = User(user_id=new_id(), name=name, email=email)
        await store_group.user_store.create_user(user)
    finally:
        await store_group.conn.close()

    print(f"已创建用户 {user.name} <{user.email}>: {user.user_id}")
    return user.user_id


if __name__ == "__main__":
    main()
