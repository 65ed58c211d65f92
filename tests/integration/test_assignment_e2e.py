"""端到端指派场景

alice 创建任务并指派给 bob：
- 任务落盘，状态 To Do，创建者 alice
- 所有在线连接收到一次 task:created
- bob 收到一条通知，并且只有 bob 的连接收到 task:assigned + notification:new
随后 bob 查看、标记已读，alice 删除任务。
"""

import asyncio
from datetime import UTC, datetime, timedelta

from httpx import AsyncClient
from taskhub.core.ids import new_id
from taskhub.core.models import User


def _drain(queue: asyncio.Queue) -> list:
    events = []
    while not queue.empty():
        events.append(queue.get_nowait())
    return events


async def _seed(app, name: str) -> User:
    user = User(user_id=new_id(), name=name, email=f"{name}@example.com")
    await app.state.store_group.user_store.create_user(user)
    return user


class TestAssignmentScenario:
    async def test_alice_assigns_bob(self, client: AsyncClient, integration_app):
        alice = await _seed(integration_app, "alice")
        bob = await _seed(integration_app, "bob")
        carol = await _seed(integration_app, "carol")

        hub = integration_app.state.sse_hub
        alice_q = await hub.subscribe(alice.user_id)
        bob_q = await hub.subscribe(bob.user_id)
        carol_q = await hub.subscribe(carol.user_id)

        tomorrow = datetime.now(UTC) + timedelta(days=1)
        resp = await client.post(
            "/api/tasks",
            json={
                "title": "Ship release",
                "description": "Tag, build and publish",
                "due_date": tomorrow.isoformat(),
                "priority": "High",
                "assigned_to_id": bob.user_id,
            },
            headers={"X-User-Id": alice.user_id},
        )
        assert resp.status_code == 201
        task = resp.json()["task"]
        assert task["status"] == "To Do"
        assert task["creator_id"] == alice.user_id

        # 全局事件：每个连接恰好一次 task:created
        for queue in (alice_q, carol_q):
            events = _drain(queue)
            assert [e.name for e in events] == ["task:created"]
            assert events[0].payload["task_id"] == task["task_id"]

        # 定向事件：只有 bob 收到
        bob_events = _drain(bob_q)
        assert [e.name for e in bob_events] == [
            "task:created",
            "task:assigned",
            "notification:new",
        ]
        expected_message = 'You have been assigned a new task: "Ship release"'
        assert bob_events[1].payload["message"] == expected_message
        assert bob_events[2].payload["user_id"] == bob.user_id

        # bob 的通知
        bob_headers = {"X-User-Id": bob.user_id}
        resp = await client.get("/api/notifications", headers=bob_headers)
        [notification] = resp.json()["notifications"]
        assert notification["message"] == expected_message
        assert notification["notification_id"] == bob_events[2].payload["notification_id"]

        resp = await client.get("/api/notifications/unread-count", headers=bob_headers)
        assert resp.json() == {"count": 1}

        resp = await client.put(
            f"/api/notifications/{notification['notification_id']}/read",
            headers=bob_headers,
        )
        assert resp.status_code == 200
        resp = await client.get("/api/notifications/unread-count", headers=bob_headers)
        assert resp.json() == {"count": 0}

        # alice 删除任务：所有连接收到一次 task:deleted，不产生通知事件
        resp = await client.delete(
            f"/api/tasks/{task['task_id']}", headers={"X-User-Id": alice.user_id}
        )
        assert resp.status_code == 200
        for queue in (alice_q, bob_q, carol_q):
            events = _drain(queue)
            assert [e.name for e in events] == ["task:deleted"]
            assert events[0].payload == {"taskId": task["task_id"]}

    async def test_overdue_listing(self, client: AsyncClient, integration_app):
        """已逾期且未完成的任务才会出现在 overdue 列表中"""
        alice = await _seed(integration_app, "alice")
        headers = {"X-User-Id": alice.user_id}

        resp = await client.post(
            "/api/tasks",
            json={
                "title": "Soon due",
                "description": "d",
                "due_date": (datetime.now(UTC) + timedelta(seconds=1)).isoformat(),
                "priority": "Low",
            },
            headers=headers,
        )
        soon = resp.json()["task"]

        resp = await client.get("/api/tasks", params={"overdue": "true"}, headers=headers)
        assert resp.json()["tasks"] == []

        await asyncio.sleep(1.1)
        resp = await client.get("/api/tasks", params={"overdue": "true"}, headers=headers)
        assert [t["task_id"] for t in resp.json()["tasks"]] == [soon["task_id"]]

        await client.put(
            f"/api/tasks/{soon['task_id']}", json={"status": "Completed"}, headers=headers
        )
        resp = await client.get("/api/tasks", params={"overdue": "true"}, headers=headers)
        assert resp.json()["tasks"] == []
