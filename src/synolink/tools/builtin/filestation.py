# FileStation tools — login, browse, transfer and manage files on a Synology NAS.
# Created: 2026-10-12

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field

from synolink.integrations.errors import InvalidArgumentsError, RemoteAPIError
from synolink.integrations.filestation import FileStationClient
from synolink.tools.protocol import BaseTool, NoArgs


def _to_json(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False)


def _iso_time(mtime: Any) -> str | None:
    """Epoch seconds to ISO-8601 UTC with millisecond precision, e.g. ``2024-01-01T00:00:00.000Z``."""
    if mtime is None:
        return None
    dt = datetime.fromtimestamp(float(mtime), tz=timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def project_entry(entry: dict[str, Any]) -> dict[str, Any]:
    """Reduce a FileStation entry to name, path, directory flag, size and mtime."""
    additional = entry.get("additional") or {}
    time_info = entry.get("time") or additional.get("time") or {}
    size = entry.get("size", additional.get("size"))
    return {
        "name": entry.get("name"),
        "path": entry.get("path"),
        "isDir": entry.get("isdir"),
        "size": size,
        "time": _iso_time(time_info.get("mtime")),
    }


def split_path(path: str) -> tuple[str, str]:
    """Split ``/folder/file.txt`` into ``("/folder", "file.txt")``.

    A path without a folder part lands in ``/``.
    """
    folder, _, file_name = path.rpartition("/")
    return folder or "/", file_name


# ── Argument models ────────────────────────────────────────────────────


class LoginArgs(BaseModel):
    username: str = Field(description="Synology NAS login user name")
    password: str = Field(description="Synology NAS login password")


class ListFilesArgs(BaseModel):
    path: str = Field(description="Folder to list (e.g. /volume1/photos)")


class ReadFileArgs(BaseModel):
    path: str = Field(description="Full path of the file to read")


class WriteFileArgs(BaseModel):
    path: str = Field(description="Full path to save the file to")
    content: str = Field(description="Content to write to the file")


class CreateFolderArgs(BaseModel):
    path: str = Field(description="Parent path to create the folder in")
    name: str = Field(description="Name of the folder to create")


class DeleteItemArgs(BaseModel):
    path: str = Field(description="Full path of the file or folder to delete")


class MoveItemArgs(BaseModel):
    source: str = Field(description="Current path of the file or folder to move")
    destination: str = Field(description="Destination folder path")


class GetFileInfoArgs(BaseModel):
    path: str = Field(description="Full path of the file or folder to inspect")


class SearchFilesArgs(BaseModel):
    path: str = Field(description="Folder to start searching from")
    pattern: str = Field(description="File name pattern to search for")


# ── Tools ──────────────────────────────────────────────────────────────


class _FileStationTool(BaseTool):
    """Base for tools that act through a shared :class:`FileStationClient`."""

    def __init__(self, client: FileStationClient):
        self._client = client


class LoginTool(_FileStationTool):
    """Open a session on the NAS."""

    args_model = LoginArgs

    @property
    def name(self) -> str:
        return "login"

    @property
    def description(self) -> str:
        return "Log in to the Synology NAS. Log in before using any other tool."

    async def run(self, args: LoginArgs) -> str:
        if await self._client.login(args.username, args.password):
            return "Logged in to the Synology NAS."
        return "Synology NAS login failed. Check the user name and password."


class LogoutTool(_FileStationTool):
    """Close the current session."""

    args_model = NoArgs

    @property
    def name(self) -> str:
        return "logout"

    @property
    def description(self) -> str:
        return "Log out of the Synology NAS."

    async def run(self, args: NoArgs) -> str:
        if await self._client.logout():
            return "Logged out of the Synology NAS."
        return "An error occurred while logging out."


class ListFilesTool(_FileStationTool):
    """List the entries of a folder."""

    args_model = ListFilesArgs

    @property
    def name(self) -> str:
        return "list_files"

    @property
    def description(self) -> str:
        return "List the files and folders at the given path."

    async def run(self, args: ListFilesArgs) -> str:
        result = await self._client.list_files(args.path)
        if not result.get("success"):
            raise RemoteAPIError.from_payload("Failed to list files", result)

        files = (result.get("data") or {}).get("files") or []
        entries = [project_entry(f) for f in files]
        return f'Items in "{args.path}":\n\n{_to_json(entries)}'


class ReadFileTool(_FileStationTool):
    """Download a file and return it as text."""

    args_model = ReadFileArgs

    @property
    def name(self) -> str:
        return "read_file"

    @property
    def description(self) -> str:
        return "Read a file from the Synology NAS."

    async def run(self, args: ReadFileArgs) -> str:
        content = await self._client.read_file(args.path)
        return content.decode("utf-8", errors="replace")


class WriteFileTool(_FileStationTool):
    """Upload text content as a file."""

    args_model = WriteFileArgs

    @property
    def name(self) -> str:
        return "write_file"

    @property
    def description(self) -> str:
        return "Save a file to the Synology NAS. Existing files are overwritten."

    async def run(self, args: WriteFileArgs) -> str:
        folder_path, file_name = split_path(args.path)
        if not file_name:
            raise InvalidArgumentsError(f"path must end with a file name: {args.path}")

        ok = await self._client.write_file(folder_path, file_name, args.content.encode("utf-8"))
        if ok:
            return f"File saved: {args.path}"
        return "Failed to save the file."


class CreateFolderTool(_FileStationTool):
    """Create a folder under a parent path."""

    args_model = CreateFolderArgs

    @property
    def name(self) -> str:
        return "create_folder"

    @property
    def description(self) -> str:
        return "Create a new folder on the Synology NAS."

    async def run(self, args: CreateFolderArgs) -> str:
        if await self._client.create_folder(args.path, args.name):
            return f"Folder created: {args.path}/{args.name}"
        return "Failed to create the folder."


class DeleteItemTool(_FileStationTool):
    """Delete a file or folder."""

    args_model = DeleteItemArgs

    @property
    def name(self) -> str:
        return "delete_item"

    @property
    def description(self) -> str:
        return "Delete a file or folder on the Synology NAS."

    async def run(self, args: DeleteItemArgs) -> str:
        if await self._client.delete_item(args.path):
            return f"Item deleted: {args.path}"
        return "Failed to delete the item."


class MoveItemTool(_FileStationTool):
    """Move a file or folder into another folder."""

    args_model = MoveItemArgs

    @property
    def name(self) -> str:
        return "move_item"

    @property
    def description(self) -> str:
        return "Move a file or folder on the Synology NAS."

    async def run(self, args: MoveItemArgs) -> str:
        if await self._client.move_item(args.source, args.destination):
            return f"Item moved: {args.source} -> {args.destination}"
        return "Failed to move the item."


class GetFileInfoTool(_FileStationTool):
    """Show size, times, owner and permissions of an entry."""

    args_model = GetFileInfoArgs

    @property
    def name(self) -> str:
        return "get_file_info"

    @property
    def description(self) -> str:
        return "Get detailed information about a file or folder on the Synology NAS."

    async def run(self, args: GetFileInfoArgs) -> str:
        info = await self._client.get_file_info(args.path)
        return f"File info:\n\n{_to_json(info)}"


class SearchFilesTool(_FileStationTool):
    """Search a folder tree by file name pattern."""

    args_model = SearchFilesArgs

    @property
    def name(self) -> str:
        return "search_files"

    @property
    def description(self) -> str:
        return "Search the Synology NAS for files or folders matching a pattern."

    async def run(self, args: SearchFilesArgs) -> str:
        results = await self._client.search_files(args.path, args.pattern)
        return f"Search results:\n\n{_to_json(results)}"


ALL_TOOLS: tuple[type[_FileStationTool], ...] = (
    LoginTool,
    LogoutTool,
    ListFilesTool,
    ReadFileTool,
    WriteFileTool,
    CreateFolderTool,
    DeleteItemTool,
    MoveItemTool,
    GetFileInfoTool,
    SearchFilesTool,
)
