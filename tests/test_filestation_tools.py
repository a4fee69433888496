# Tests for the FileStation tool catalog and dispatch.

import httpx
import pytest

from synolink.tools.builtin import create_filestation_registry
from synolink.tools.builtin.filestation import project_entry, split_path
from synolink.tools.protocol import ErrorKind

from .conftest import form_fields

AUTH = "SYNO.API.Auth"

TOOL_NAMES = [
    "login",
    "logout",
    "list_files",
    "read_file",
    "write_file",
    "create_folder",
    "delete_item",
    "move_item",
    "get_file_info",
    "search_files",
]

VALID_ARGS = {
    "list_files": {"path": "/volume1"},
    "read_file": {"path": "/volume1/a.txt"},
    "write_file": {"path": "/volume1/a.txt", "content": "hi"},
    "create_folder": {"path": "/volume1", "name": "new"},
    "delete_item": {"path": "/volume1/a.txt"},
    "move_item": {"source": "/volume1/a.txt", "destination": "/volume1/b"},
    "get_file_info": {"path": "/volume1/a.txt"},
    "search_files": {"path": "/volume1", "pattern": "*.txt"},
}


@pytest.fixture
def registry(client):
    return create_filestation_registry(client)


@pytest.fixture
def authed_registry(authed_client):
    return create_filestation_registry(authed_client)


class TestCatalog:
    def test_tool_names(self, registry):
        assert registry.tool_names == TOOL_NAMES
        assert len(registry) == 10

    def test_definitions_have_object_schemas(self, registry):
        for definition in registry.get_definitions():
            assert definition["description"]
            assert definition["inputSchema"]["type"] == "object"

    def test_login_schema(self, registry):
        schema = registry.get("login").parameters
        assert set(schema["required"]) == {"username", "password"}
        assert schema["properties"]["username"]["type"] == "string"
        assert schema["properties"]["password"]["description"]

    def test_logout_takes_no_arguments(self, registry):
        schema = registry.get("logout").parameters
        assert schema["properties"] == {}

    def test_move_schema(self, registry):
        schema = registry.get("move_item").parameters
        assert set(schema["required"]) == {"source", "destination"}


@pytest.mark.parametrize(
    ("name", "arguments"),
    [
        ("login", {"username": "u"}),
        ("login", {"username": 1, "password": "p"}),
        ("list_files", {}),
        ("read_file", {"path": 3}),
        ("write_file", {"path": "/volume1/a.txt"}),
        ("create_folder", {"path": "/volume1"}),
        ("delete_item", {"target": "/volume1/a.txt"}),
        ("move_item", {"source": "/volume1/a.txt"}),
        ("get_file_info", {"path": None}),
        ("search_files", {"path": "/volume1"}),
    ],
)
async def test_invalid_arguments_never_reach_the_nas(authed_registry, nas, name, arguments):
    result = await authed_registry.execute(name, arguments)

    assert result.is_error
    assert result.error is ErrorKind.INVALID_ARGUMENTS
    assert result.text.startswith(f"Error: Invalid arguments for {name}:")
    assert nas.requests == []


@pytest.mark.parametrize("name", sorted(VALID_ARGS))
async def test_requires_login(registry, nas, name):
    result = await registry.execute(name, VALID_ARGS[name])

    assert result.error is ErrorKind.NOT_AUTHENTICATED
    assert "Not authenticated" in result.text
    assert nas.requests == []


async def test_unknown_tool(registry):
    result = await registry.execute("format_volume", {})
    assert result.error is ErrorKind.UNKNOWN_TOOL
    assert result.text == "Error: Unknown tool: format_volume"


class TestLoginLogout:
    async def test_error_status_hides_password(self, registry, nas, caplog):
        nas.on(AUTH, "login", httpx.Response(500))

        result = await registry.execute("login", {"username": "u", "password": "hunter2"})

        assert result.text == "Synology NAS login failed. Check the user name and password."
        assert "hunter2" not in caplog.text

    async def test_bad_credentials(self, registry, client, nas):
        nas.on(AUTH, "login", {"success": False, "error": {"code": 400}})

        result = await registry.execute("login", {"username": "u", "password": "bad"})

        assert not result.is_error
        assert result.text == "Synology NAS login failed. Check the user name and password."
        assert client.sid is None

    async def test_good_credentials(self, registry, client, nas):
        nas.on(AUTH, "login", {"success": True, "data": {"sid": "S"}})

        result = await registry.execute("login", {"username": "u", "password": "good"})

        assert result.text == "Logged in to the Synology NAS."
        assert client.sid == "S"

    async def test_logout_without_login(self, registry, nas):
        result = await registry.execute("logout", {})
        assert result.text == "Logged out of the Synology NAS."
        assert nas.requests == []

    async def test_logout_failure_sentence(self, authed_registry, nas):
        nas.on(AUTH, "logout", {"success": False})
        result = await authed_registry.execute("logout", None)
        assert result.text == "An error occurred while logging out."


class TestListFiles:
    async def test_renders_iso_timestamps(self, authed_registry, nas):
        nas.on(
            "SYNO.FileStation.List",
            "list",
            {
                "success": True,
                "data": {
                    "files": [
                        {
                            "name": "a.txt",
                            "path": "/volume1/x/a.txt",
                            "isdir": False,
                            "size": 12,
                            "time": {"mtime": 1700000000},
                        },
                        {
                            "name": "sub",
                            "path": "/volume1/x/sub",
                            "isdir": True,
                            "additional": {"size": 0, "time": {"mtime": 0}},
                        },
                    ]
                },
            },
        )

        result = await authed_registry.execute("list_files", {"path": "/volume1/x"})

        assert not result.is_error
        assert result.text.startswith('Items in "/volume1/x":\n\n')
        assert '"time": "2023-11-14T22:13:20.000Z"' in result.text
        assert '"time": "1970-01-01T00:00:00.000Z"' in result.text
        assert '"isDir": true' in result.text
        assert "1700000000" not in result.text

    async def test_reported_failure_becomes_error(self, authed_registry, nas):
        nas.on("SYNO.FileStation.List", "list", {"success": False, "error": {"code": 408}})

        result = await authed_registry.execute("list_files", {"path": "/volume1/missing"})

        assert result.error is ErrorKind.REMOTE_FAILURE
        assert "Failed to list files" in result.text
        assert "408" in result.text

    async def test_network_failure_becomes_error(self, authed_registry, nas):
        nas.on("SYNO.FileStation.List", "list", httpx.ConnectError("connection refused"))

        result = await authed_registry.execute("list_files", {"path": "/volume1"})

        assert result.error is ErrorKind.TRANSPORT
        assert "connection refused" in result.text

    async def test_error_status_hides_session_id(self, authed_registry, authed_client, nas, caplog):
        authed_client._sid = "sid-7f3a"
        nas.on("SYNO.FileStation.List", "list", httpx.Response(502))

        result = await authed_registry.execute("list_files", {"path": "/volume1"})

        assert result.error is ErrorKind.TRANSPORT
        assert result.text == "Error: Request to the NAS failed: HTTP 502 Bad Gateway"
        assert "sid-7f3a" not in result.text
        assert "sid-7f3a" not in caplog.text


async def test_read_file_decodes_with_replacement(authed_registry, nas):
    nas.on("SYNO.FileStation.Download", "download", httpx.Response(200, content=b"caf\xc3\xa9 \xff"))

    result = await authed_registry.execute("read_file", {"path": "/volume1/menu.txt"})

    assert result.text == "café \ufffd"


class TestWriteFile:
    async def test_splits_path_and_encodes_utf8(self, authed_registry, nas, staging_dir):
        nas.on("SYNO.FileStation.Upload", "upload", {"success": True})

        result = await authed_registry.execute(
            "write_file", {"path": "/volume1/docs/note.txt", "content": "안녕"}
        )

        assert result.text == "File saved: /volume1/docs/note.txt"
        (request,) = nas.requests
        assert form_fields(request)["path"] == "/volume1/docs"
        assert b'filename="note.txt"' in request.content
        assert "안녕".encode() in request.content
        assert list(staging_dir.iterdir()) == []

    async def test_bare_file_name_goes_to_root(self, authed_registry, nas):
        nas.on("SYNO.FileStation.Upload", "upload", {"success": True})

        await authed_registry.execute("write_file", {"path": "note.txt", "content": ""})

        assert form_fields(nas.requests[0])["path"] == "/"

    async def test_path_without_file_name(self, authed_registry, nas):
        result = await authed_registry.execute(
            "write_file", {"path": "/volume1/docs/", "content": "x"}
        )
        assert result.error is ErrorKind.INVALID_ARGUMENTS
        assert nas.requests == []

    async def test_failure_sentence(self, authed_registry, nas):
        nas.on("SYNO.FileStation.Upload", "upload", {"success": False})

        result = await authed_registry.execute("write_file", {"path": "/a.txt", "content": "x"})
        assert result.text == "Failed to save the file."


@pytest.mark.parametrize(
    ("name", "api", "method", "ok_text", "fail_text"),
    [
        (
            "create_folder",
            "SYNO.FileStation.CreateFolder",
            "create",
            "Folder created: /volume1/new",
            "Failed to create the folder.",
        ),
        (
            "delete_item",
            "SYNO.FileStation.Delete",
            "delete",
            "Item deleted: /volume1/a.txt",
            "Failed to delete the item.",
        ),
        (
            "move_item",
            "SYNO.FileStation.CreateFolder",
            "move",
            "Item moved: /volume1/a.txt -> /volume1/b",
            "Failed to move the item.",
        ),
    ],
)
async def test_boolean_sentences(authed_registry, nas, name, api, method, ok_text, fail_text):
    nas.on(api, method, {"success": True})
    assert (await authed_registry.execute(name, VALID_ARGS[name])).text == ok_text

    nas.on(api, method, {"success": False, "error": {"code": 408}})
    result = await authed_registry.execute(name, VALID_ARGS[name])
    assert result.text == fail_text
    assert not result.is_error


async def test_get_file_info_renders_payload(authed_registry, nas):
    data = {"files": [{"name": "a.txt", "additional": {"owner": {"user": "admin"}}}]}
    nas.on("SYNO.FileStation.Info", "get", {"success": True, "data": data})

    result = await authed_registry.execute("get_file_info", {"path": "/volume1/a.txt"})

    assert result.text.startswith("File info:\n\n")
    assert '"user": "admin"' in result.text


async def test_get_file_info_reported_failure(authed_registry, nas):
    nas.on("SYNO.FileStation.Info", "get", {"success": False, "error": {"code": 105}})

    result = await authed_registry.execute("get_file_info", {"path": "/volume1/secret"})

    assert result.error is ErrorKind.REMOTE_FAILURE
    assert "105" in result.text


async def test_search_files_renders_results(authed_registry, nas):
    nas.on("SYNO.FileStation.Search", "start", {"success": True, "data": {"taskid": "T"}})
    nas.on(
        "SYNO.FileStation.Search",
        "list",
        {"success": True, "data": {"files": [{"name": "a.txt"}], "finished": True}},
    )
    nas.on("SYNO.FileStation.Search", "stop", {"success": True})

    result = await authed_registry.execute("search_files", {"path": "/volume1", "pattern": "a"})

    assert result.text.startswith("Search results:\n\n")
    assert '"name": "a.txt"' in result.text


def test_split_path():
    assert split_path("/volume1/docs/note.txt") == ("/volume1/docs", "note.txt")
    assert split_path("/note.txt") == ("/", "note.txt")
    assert split_path("note.txt") == ("/", "note.txt")
    assert split_path("/volume1/docs/") == ("/volume1/docs", "")


def test_project_entry_without_time():
    entry = project_entry({"name": "a", "path": "/a", "isdir": False})
    assert entry == {"name": "a", "path": "/a", "isDir": False, "size": None, "time": None}
