# Shared fixtures: a scripted FileStation stub served through httpx.MockTransport.

import re
from pathlib import Path

import httpx
import pytest

from synolink.config import get_settings
from synolink.integrations.filestation import FileStationClient

_FORM_FIELD = re.compile(rb'name="([^"]+)"\r\n\r\n(.*?)\r\n', re.DOTALL)


def form_fields(request: httpx.Request) -> dict[str, str]:
    """Plain (non-file) fields of a multipart request body."""
    return {k.decode(): v.decode() for k, v in _FORM_FIELD.findall(request.content)}


class FakeNAS:
    """Scripted DSM Web API.

    Responses are queued per ``(api, method)``; the last queued response
    repeats. A queued exception is raised from the transport instead.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], list] = {}

    def on(self, api: str, method: str, *responses) -> None:
        self._routes[(api, method)] = list(responses)

    @staticmethod
    def _route_key(request: httpx.Request) -> tuple[str, str]:
        if request.method == "POST":
            fields = form_fields(request)
            return fields.get("api", ""), fields.get("method", "")
        params = request.url.params
        return params.get("api", ""), params.get("method", "")

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self._routes.get(self._route_key(request))
        if not queue:
            return httpx.Response(200, json={"success": False, "error": {"code": 102}})

        response = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(response, Exception):
            raise response
        if isinstance(response, httpx.Response):
            return response
        return httpx.Response(200, json=response)

    def calls(self, api: str, method: str | None = None) -> list[httpx.Request]:
        return [
            r
            for r in self.requests
            if self._route_key(r)[0] == api
            and (method is None or self._route_key(r)[1] == method)
        ]


@pytest.fixture
def nas() -> FakeNAS:
    return FakeNAS()


@pytest.fixture
def staging_dir(tmp_path: Path) -> Path:
    d = tmp_path / "staging"
    d.mkdir()
    return d


@pytest.fixture
def sleeps() -> list[float]:
    return []


@pytest.fixture
def client(nas: FakeNAS, staging_dir: Path, sleeps: list[float]) -> FileStationClient:
    async def fake_sleep(seconds: float) -> None:
        sleeps.append(seconds)

    return FileStationClient(
        "nas.local",
        5000,
        transport=httpx.MockTransport(nas.handler),
        sleep=fake_sleep,
        staging_dir=staging_dir,
    )


@pytest.fixture
def authed_client(client: FileStationClient) -> FileStationClient:
    client._sid = "S"
    return client


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
