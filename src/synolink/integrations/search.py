# Search Task — start/poll/stop lifecycle for SYNO.FileStation.Search.
# Created: 2026-10-12

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import TYPE_CHECKING, Any

import httpx

from synolink.integrations.errors import SearchTaskError, describe_http_error

if TYPE_CHECKING:
    from synolink.integrations.filestation import FileStationClient

logger = logging.getLogger(__name__)

_SEARCH_API = "SYNO.FileStation.Search"
_SEARCH_VERSION = 2


class SearchState(str, Enum):
    CREATED = "created"
    STARTED = "started"
    POLLING = "polling"
    FINISHED = "finished"
    STOPPED = "stopped"


class SearchTask:
    """A server-side search job.

    The NAS runs the search out of band. ``run()`` starts the task, polls it
    every ``poll_interval`` seconds until the server reports ``finished``,
    then releases it with a single best-effort ``stop`` call. Matches from
    every poll are accumulated in ``results``.

    There is no client-side timeout: a task that never finishes keeps the
    caller polling.
    """

    def __init__(
        self,
        client: FileStationClient,
        folder_path: str,
        pattern: str,
        *,
        poll_interval: float = 0.5,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self._client = client
        self.folder_path = folder_path
        self.pattern = pattern
        self.poll_interval = poll_interval
        self._sleep = sleep

        self.state = SearchState.CREATED
        self.task_id: str | None = None
        self.results: list[dict[str, Any]] = []
        self.polls = 0

    async def start(self) -> str:
        payload = await self._client.call(
            _SEARCH_API,
            _SEARCH_VERSION,
            "start",
            operation="start search",
            folder_path=self.folder_path,
            pattern=self.pattern,
        )
        if not payload.get("success"):
            raise SearchTaskError.from_payload("Failed to start search task", payload)

        self.task_id = payload["data"]["taskid"]
        self.state = SearchState.STARTED
        logger.debug("Search task %s started in %s", self.task_id, self.folder_path)
        return self.task_id

    async def poll(self) -> bool:
        """Wait one interval, fetch the latest matches and report whether the task finished."""
        self.state = SearchState.POLLING
        await self._sleep(self.poll_interval)

        payload = await self._client.call(
            _SEARCH_API,
            _SEARCH_VERSION,
            "list",
            operation="poll search",
            taskid=self.task_id,
        )
        self.polls += 1
        if not payload.get("success"):
            raise SearchTaskError.from_payload("Failed to poll search task", payload)

        data = payload.get("data") or {}
        files = data.get("files")
        if files:
            self.results.extend(files)

        if data.get("finished"):
            self.state = SearchState.FINISHED
            return True
        return False

    async def stop(self) -> None:
        """Release the task on the server. Failures are logged, never raised."""
        if self.task_id is None or self.state is SearchState.STOPPED:
            return
        self.state = SearchState.STOPPED
        try:
            await self._client.call(
                _SEARCH_API,
                _SEARCH_VERSION,
                "stop",
                operation="stop search",
                taskid=self.task_id,
            )
        except Exception as e:
            detail = describe_http_error(e) if isinstance(e, httpx.HTTPError) else e
            logger.warning("Could not stop search task %s: %s", self.task_id, detail)

    async def run(self) -> list[dict[str, Any]]:
        await self.start()
        try:
            while not await self.poll():
                pass
        finally:
            await self.stop()

        logger.debug(
            "Search task %s finished after %d poll(s): %d match(es)",
            self.task_id,
            self.polls,
            len(self.results),
        )
        return self.results
