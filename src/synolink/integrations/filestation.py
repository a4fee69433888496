# FileStation Client — session-authenticated HTTP client for the Synology DSM Web API.
# Created: 2026-10-12

from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any

import httpx

from synolink.config import Settings
from synolink.integrations.errors import (
    NotAuthenticatedError,
    RemoteAPIError,
    describe_http_error,
)
from synolink.integrations.search import SearchTask

logger = logging.getLogger(__name__)

_AUTH_API = "SYNO.API.Auth"
_SESSION = "FileStation"

# Extra attributes requested from SYNO.FileStation.List so entries carry size/mtime.
_LIST_ADDITIONAL = ["real_path", "size", "time"]
_INFO_ADDITIONAL = ["size", "time", "owner", "perm"]


def json_array(*items: str) -> str:
    """Encode values the way the DSM batch parameters expect: a compact JSON array."""
    return json.dumps(list(items), separators=(",", ":"), ensure_ascii=False)


class FileStationClient:
    """HTTP client for SYNO.FileStation on a single NAS.

    Holds at most one session id. Every operation except :meth:`login` and
    :meth:`logout` needs that session and raises
    :class:`NotAuthenticatedError` without touching the network otherwise.
    Network failures are logged and re-raised as ``httpx.HTTPError``.
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 5000,
        *,
        poll_interval: float = 0.5,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        staging_dir: str | Path | None = None,
    ):
        self.base_url = f"http://{host}:{port}/webapi"
        self.poll_interval = poll_interval
        self._timeout = timeout
        self._transport = transport
        self._sleep = sleep
        self._staging_dir = staging_dir
        self._sid: str | None = None

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> FileStationClient:
        return cls(
            settings.host,
            settings.port,
            poll_interval=settings.poll_interval,
            timeout=settings.request_timeout,
            **kwargs,
        )

    @property
    def sid(self) -> str | None:
        return self._sid

    @property
    def is_authenticated(self) -> bool:
        return self._sid is not None

    def _http(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    def _require_session(self) -> str:
        if not self._sid:
            raise NotAuthenticatedError()
        return self._sid

    async def _get(self, endpoint: str, params: dict[str, Any], operation: str) -> httpx.Response:
        try:
            async with self._http() as client:
                resp = await client.get(f"{self.base_url}/{endpoint}", params=params)
                resp.raise_for_status()
            return resp
        except httpx.HTTPError as e:
            logger.error("Failed to %s: %s", operation, describe_http_error(e))
            raise

    async def call(
        self, api: str, version: int, method: str, *, operation: str, **params: Any
    ) -> dict[str, Any]:
        """Issue an authenticated GET against ``entry.cgi`` and decode the JSON body.

        Args:
            api: DSM API name (e.g. ``SYNO.FileStation.List``).
            version: API version.
            method: API method.
            operation: Short description used in log and error messages.
            **params: Extra query parameters.

        Returns:
            The decoded response payload, ``success`` flag included.
        """
        sid = self._require_session()
        query = {"api": api, "version": str(version), "method": method, **params, "_sid": sid}
        resp = await self._get("entry.cgi", query, operation)
        return resp.json()

    # ── Auth ───────────────────────────────────────────────────────────

    async def login(self, username: str, password: str) -> bool:
        """Open a FileStation session. Returns False on any failure."""
        params = {
            "api": _AUTH_API,
            "version": "3",
            "method": "login",
            "account": username,
            "passwd": password,
            "session": _SESSION,
            "format": "sid",
        }
        try:
            async with self._http() as client:
                resp = await client.get(f"{self.base_url}/auth.cgi", params=params)
                resp.raise_for_status()
            payload = resp.json()
            if payload.get("success"):
                self._sid = payload["data"]["sid"]
                logger.info("Logged in to %s as %s", self.base_url, username)
                return True
            logger.warning(
                "Login rejected: %s", RemoteAPIError.from_payload("login", payload, api=_AUTH_API)
            )
            return False
        except httpx.HTTPError as e:
            logger.error("Login failed: %s", describe_http_error(e))
            return False
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            logger.error("Login failed: malformed response (%s)", type(e).__name__)
            return False

    async def logout(self) -> bool:
        """Close the current session. A no-op success when there is none."""
        if not self._sid:
            return True

        params = {
            "api": _AUTH_API,
            "version": "3",
            "method": "logout",
            "session": _SESSION,
            "_sid": self._sid,
        }
        try:
            async with self._http() as client:
                resp = await client.get(f"{self.base_url}/auth.cgi", params=params)
                resp.raise_for_status()
            payload = resp.json()
            if payload.get("success"):
                self._sid = None
                logger.info("Logged out of %s", self.base_url)
                return True
            return False
        except httpx.HTTPError as e:
            logger.error("Logout failed: %s", describe_http_error(e))
            return False
        except (ValueError, AttributeError) as e:
            logger.error("Logout failed: malformed response (%s)", type(e).__name__)
            return False

    # ── File operations ────────────────────────────────────────────────

    async def list_files(self, folder_path: str) -> dict[str, Any]:
        """List a folder.

        Returns the raw response; callers must check ``success`` themselves.
        """
        return await self.call(
            "SYNO.FileStation.List",
            2,
            "list",
            operation="list files",
            folder_path=folder_path,
            additional=json_array(*_LIST_ADDITIONAL),
        )

    async def read_file(self, file_path: str) -> bytes:
        """Download a whole file into memory."""
        sid = self._require_session()
        params = {
            "api": "SYNO.FileStation.Download",
            "version": "2",
            "method": "download",
            "path": file_path,
            "_sid": sid,
        }
        resp = await self._get("entry.cgi", params, "read file")
        return resp.content

    async def write_file(self, folder_path: str, file_name: str, content: bytes) -> bool:
        """Upload ``content`` as ``folder_path/file_name``, overwriting any existing file.

        The bytes are staged in a temporary file for the multipart upload; the
        file is removed whether or not the upload succeeds. Disk I/O runs in a
        worker thread.
        """
        sid = self._require_session()
        staged = await asyncio.to_thread(self._stage, content)
        try:
            form = {
                "api": "SYNO.FileStation.Upload",
                "version": "2",
                "method": "upload",
                "path": folder_path,
                "create_parents": "true",
                "overwrite": "true",
                "_sid": sid,
            }
            data = await asyncio.to_thread(Path(staged).read_bytes)
            async with self._http() as client:
                resp = await client.post(
                    f"{self.base_url}/entry.cgi",
                    data=form,
                    files={"file": (file_name, data, "application/octet-stream")},
                )
                resp.raise_for_status()
            return bool(resp.json().get("success"))
        except httpx.HTTPError as e:
            logger.error("Failed to write file: %s", describe_http_error(e))
            raise
        finally:
            await asyncio.to_thread(Path(staged).unlink, missing_ok=True)

    def _stage(self, content: bytes) -> str:
        fd, staged = tempfile.mkstemp(prefix="synolink-upload-", dir=self._staging_dir)
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(content)
        except OSError:
            Path(staged).unlink(missing_ok=True)
            raise
        return staged

    async def create_folder(self, folder_path: str, name: str) -> bool:
        payload = await self.call(
            "SYNO.FileStation.CreateFolder",
            2,
            "create",
            operation="create folder",
            folder_path=folder_path,
            name=name,
        )
        return bool(payload.get("success"))

    async def delete_item(self, path: str) -> bool:
        payload = await self.call(
            "SYNO.FileStation.Delete",
            2,
            "delete",
            operation="delete item",
            path=json_array(path),
        )
        return bool(payload.get("success"))

    async def move_item(self, source: str, destination: str) -> bool:
        # The API name/version pair is kept exactly as deployed clients send it;
        # verify against a live DSM before changing it to SYNO.FileStation.CopyMove.
        payload = await self.call(
            "SYNO.FileStation.CreateFolder",
            3,
            "move",
            operation="move item",
            path=json_array(source),
            dest_folder_path=destination,
        )
        return bool(payload.get("success"))

    async def get_file_info(self, path: str) -> Any:
        """Return the ``data`` payload of SYNO.FileStation.Info unmodified."""
        payload = await self.call(
            "SYNO.FileStation.Info",
            2,
            "get",
            operation="get file info",
            path=path,
            additional=json_array(*_INFO_ADDITIONAL),
        )
        if not payload.get("success"):
            raise RemoteAPIError.from_payload("Failed to get file info", payload)
        return payload.get("data")

    async def search_files(self, folder_path: str, pattern: str) -> list[dict[str, Any]]:
        """Run a server-side search task to completion and return every match."""
        self._require_session()
        task = SearchTask(
            self,
            folder_path,
            pattern,
            poll_interval=self.poll_interval,
            sleep=self._sleep,
        )
        return await task.run()
