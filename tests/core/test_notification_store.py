"""SqliteNotificationStore 测试"""

from datetime import timedelta

from taskhub.core.ids import new_id
from taskhub.core.models import Notification
from taskhub.core.timeutil import utc_now


def _notification(user_id: str, task_id: str, offset: timedelta = timedelta(0)) -> Notification:
    return Notification(
        notification_id=new_id(),
        user_id=user_id,
        task_id=task_id,
        message="You have been assigned to task: \"x\"",
        created_at=utc_now() + offset,
    )


class TestNotificationStore:
    async def test_create_and_get(self, store_group, alice):
        n = _notification(alice.user_id, new_id())
        await store_group.notification_store.create_notification(n)

        loaded = await store_group.notification_store.get_notification(n.notification_id)
        assert loaded.message == n.message
        assert loaded.is_read is False

    async def test_mark_read_is_idempotent(self, store_group, alice):
        n = _notification(alice.user_id, new_id())
        await store_group.notification_store.create_notification(n)

        first = await store_group.notification_store.mark_read(n.notification_id)
        second = await store_group.notification_store.mark_read(n.notification_id)
        assert first.is_read is True
        assert second.is_read is True
        assert await store_group.notification_store.count_unread(alice.user_id) == 0

    async def test_mark_read_missing_returns_none(self, store_group):
        assert await store_group.notification_store.mark_read(new_id()) is None

    async def test_count_unread_per_user(self, store_group, alice, bob):
        for _ in range(3):
            await store_group.notification_store.create_notification(
                _notification(alice.user_id, new_id())
            )
        await store_group.notification_store.create_notification(
            _notification(bob.user_id, new_id())
        )
        assert await store_group.notification_store.count_unread(alice.user_id) == 3
        assert await store_group.notification_store.count_unread(bob.user_id) == 1

    async def test_list_newest_first_with_limit(self, store_group, alice):
        created = []
        for i in range(5):
            n = _notification(alice.user_id, new_id(), timedelta(seconds=i))
            await store_group.notification_store.create_notification(n)
            created.append(n.notification_id)

        listed = await store_group.notification_store.list_for_user(alice.user_id, limit=3)
        assert [n.notification_id for n in listed] == created[::-1][:3]

    async def test_list_includes_task_projection(self, store_group, make_task, alice, bob):
        task = await make_task(alice.user_id, title="Review PR", assigned_to_id=bob.user_id)
        await store_group.notification_store.create_notification(
            _notification(bob.user_id, task.task_id)
        )

        [listed] = await store_group.notification_store.list_for_user(bob.user_id)
        assert listed.task.task_id == task.task_id
        assert listed.task.title == "Review PR"

    async def test_notification_survives_task_deletion(
        self, store_group, make_task, alice, bob
    ):
        """删除任务不级联删除通知，任务投影为空"""
        task = await make_task(alice.user_id, assigned_to_id=bob.user_id)
        await store_group.notification_store.create_notification(
            _notification(bob.user_id, task.task_id)
        )
        await store_group.task_store.delete_task(task.task_id)

        [listed] = await store_group.notification_store.list_for_user(bob.user_id)
        assert listed.task_id == task.task_id
        assert listed.task is None
        assert await store_group.notification_store.count_unread(bob.user_id) == 1
