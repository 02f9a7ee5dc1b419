"""Assemble the client stack from settings."""

import httpx

from tasklist.client.api_client import ApiClient, TokenGetter
from tasklist.client.task_client import TaskClient
from tasklist.client.task_store import TaskStore
from tasklist.client.timers import Scheduler
from tasklist.core.config import Settings, get_settings


def create_task_store(
    settings: Settings | None = None,
    *,
    token_getter: TokenGetter | None = None,
    scheduler: Scheduler | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> TaskStore:
    """Build an ApiClient, TaskClient and TaskStore wired to ``settings.api_base_url``.

    The caller owns the returned store's ``task_client.api`` and should close it
    with ``aclose()`` when done.
    """
    settings = settings or get_settings()

    api = ApiClient(settings.api_base_url, transport=transport)
    if token_getter is not None:
        api.set_token_getter(token_getter)

    return TaskStore(
        TaskClient(api),
        scheduler=scheduler,
        error_ttl=settings.error_message_ttl_seconds,
        success_ttl=settings.success_message_ttl_seconds,
    )
