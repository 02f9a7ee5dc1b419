"""Tests for the client-side TaskStore."""

import asyncio
import threading
from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest

from tasklist.client.api_client import ApiError
from tasklist.client.task_store import (
    MSG_CREATE_FAILED,
    MSG_DELETE_FAILED,
    MSG_FETCH_FAILED,
    MSG_TASK_CREATED,
    MSG_TASK_DELETED,
    MSG_TASK_UPDATED,
    MSG_UPDATE_FAILED,
    TaskStore,
)
from tasklist.domain.task import Task, TaskStatus


def _task(task_id: str, title: str = "t", status: str = "pending") -> Task:
    return Task(
        id=task_id,
        title=title,
        description="d",
        status=status,
        user_id="user-a",
        created_at=datetime(2024, 1, 1, tzinfo=UTC),
    )


@pytest.fixture
def task_client():
    return AsyncMock()


@pytest.fixture
def store(task_client, scheduler):
    return TaskStore(task_client, scheduler=scheduler)


@pytest.mark.unit
class TestMessages:
    """Tests for error and success message lifetimes."""

    def test_error_expires_after_five_seconds(self, store, scheduler):
        store.set_error("boom")

        assert store.error == "boom"
        assert store.message_id == 1

        scheduler.advance(4.5)
        assert store.error == "boom"

        scheduler.advance(0.5)
        assert store.error is None
        assert store.message_id == 1

    def test_success_expires_after_three_seconds(self, store, scheduler):
        store.set_success("ok")

        scheduler.advance(2.5)
        assert store.success == "ok"
        scheduler.advance(0.5)
        assert store.success is None

    def test_new_message_restarts_timer(self, store, scheduler):
        store.set_error("first")
        scheduler.advance(4)
        store.set_error("second")

        scheduler.advance(4)
        assert store.error == "second"
        assert store.message_id == 2

        scheduler.advance(1)
        assert store.error is None

    def test_clearing_does_not_bump_message_id(self, store, scheduler):
        store.set_error("boom")
        store.set_error(None)

        assert store.error is None
        assert store.message_id == 1
        assert scheduler.pending == 0

    def test_identical_messages_get_distinct_ids(self, store):
        store.set_success("same")
        first = store.message_id
        store.set_success("same")

        assert store.message_id == first + 1

    def test_subscribers_notified_on_expiry(self, store, scheduler):
        seen = []
        store.subscribe(lambda s: seen.append(s.error))
        store.set_error("boom")

        scheduler.advance(5)

        assert seen == ["boom", None]

    def test_unsubscribe(self, store):
        seen = []
        unsubscribe = store.subscribe(lambda s: seen.append(s.loading))
        unsubscribe()

        store.set_loading(True)

        assert seen == []


@pytest.mark.unit
class TestActions:
    """Tests for TaskStore remote actions."""

    async def test_fetch_tasks(self, store, task_client):
        task_client.get_tasks.return_value = [_task("a"), _task("b", status="completed")]
        states = []
        store.subscribe(lambda s: states.append(s.loading))

        await store.fetch_tasks()

        assert [t.id for t in store.tasks] == ["a", "b"]
        assert [t.id for t in store.pending_tasks] == ["a"]
        assert [t.id for t in store.completed_tasks] == ["b"]
        assert states[0] is True
        assert store.loading is False
        assert store.success is None

    async def test_fetch_failure_uses_fallback_message(self, store, task_client):
        task_client.get_tasks.side_effect = RuntimeError("network down")

        await store.fetch_tasks()

        assert store.error == MSG_FETCH_FAILED
        assert store.loading is False

    async def test_create_prepends(self, store, task_client):
        store.tasks = [_task("old")]
        task_client.create_task.return_value = _task("new", title="Buy milk")

        await store.create_task({"title": "Buy milk", "description": "2 liters"})

        assert [t.id for t in store.tasks] == ["new", "old"]
        assert store.success == MSG_TASK_CREATED
        assert store.error is None

    async def test_create_failure_prefers_server_error(self, store, task_client):
        task_client.create_task.side_effect = ApiError(400, {"error": "Validation failed", "details": []})

        await store.create_task({"title": "", "description": "x"})

        assert store.error == "Validation failed"
        assert store.tasks == []
        assert store.success is None

    async def test_create_failure_without_body_uses_fallback(self, store, task_client):
        task_client.create_task.side_effect = ApiError(502, "Bad Gateway")

        await store.create_task({"title": "t", "description": "d"})

        assert store.error == MSG_CREATE_FAILED

    async def test_update_replaces_in_place(self, store, task_client):
        store.tasks = [_task("a"), _task("b"), _task("c")]
        task_client.update_task.return_value = _task("b", status="completed")

        await store.update_task("b", {"status": "completed"})

        assert [t.id for t in store.tasks] == ["a", "b", "c"]
        assert store.tasks[1].status == TaskStatus.COMPLETED
        assert store.success == MSG_TASK_UPDATED

    async def test_update_of_unknown_task_leaves_list(self, store, task_client):
        store.tasks = [_task("a")]
        task_client.update_task.return_value = _task("zzz")

        await store.update_task("zzz", {"title": "x"})

        assert [t.id for t in store.tasks] == ["a"]
        assert store.success == MSG_TASK_UPDATED

    async def test_update_failure(self, store, task_client):
        task_client.update_task.side_effect = ApiError(404, {"error": "Task not found"})

        await store.update_task("a", {"title": "x"})

        assert store.error == "Task not found"
        assert store.loading is False

    async def test_delete_removes(self, store, task_client):
        store.tasks = [_task("a"), _task("b")]

        await store.delete_task("a")

        task_client.delete_task.assert_awaited_once_with("a")
        assert [t.id for t in store.tasks] == ["b"]
        assert store.success == MSG_TASK_DELETED

    async def test_delete_failure_keeps_list(self, store, task_client):
        store.tasks = [_task("a")]
        task_client.delete_task.side_effect = RuntimeError("timeout")

        await store.delete_task("a")

        assert [t.id for t in store.tasks] == ["a"]
        assert store.error == MSG_DELETE_FAILED

    async def test_action_clears_previous_error(self, store, task_client):
        store.set_error("old")
        task_client.get_tasks.return_value = []

        await store.fetch_tasks()

        assert store.error is None

    async def test_update_fallback_message(self, store, task_client):
        task_client.update_task.side_effect = ValueError("bad payload")

        await store.update_task("a", {"title": "x"})

        assert store.error == MSG_UPDATE_FAILED


@pytest.mark.unit
class TestMessageSlots:
    """Error and success messages expire independently."""

    def test_success_does_not_restart_error_timer(self, store, scheduler):
        store.set_error("e")
        scheduler.advance(1)
        store.set_success("s")

        scheduler.advance(3)
        assert store.success is None
        assert store.error == "e"

        scheduler.advance(1)
        assert store.error is None

    def test_error_does_not_restart_success_timer(self, store, scheduler):
        store.set_success("s")
        scheduler.advance(2)
        store.set_error("e")

        scheduler.advance(1)
        assert store.success is None
        assert store.error == "e"

    def test_empty_message_still_counts(self, store, scheduler):
        store.set_error("")
        store.set_success("")

        assert store.error == ""
        assert store.success == ""
        assert store.message_id == 2
        assert scheduler.pending == 2

        scheduler.advance(5)
        assert store.error is None
        assert store.success is None


@pytest.mark.unit
class TestDefaultScheduler:
    """TaskStore built without an explicit scheduler."""

    def test_set_error_outside_event_loop(self):
        expired = threading.Event()
        store = TaskStore(AsyncMock(), error_ttl=0.01)
        store.subscribe(lambda s: s.error is None and expired.set())

        store.set_error("boom")

        assert store.message_id == 1
        assert expired.wait(timeout=1)
        assert store.error is None

    async def test_set_success_inside_event_loop(self):
        store = TaskStore(AsyncMock(), success_ttl=0.01)

        store.set_success("ok")
        await asyncio.sleep(0.05)

        assert store.success is None
