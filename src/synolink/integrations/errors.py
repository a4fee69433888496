# FileStation errors — exception types and DSM error code descriptions.
# Created: 2026-10-12

from __future__ import annotations

import httpx

# Common codes shared by every DSM Web API.
_COMMON_ERRORS: dict[int, str] = {
    100: "Unknown error",
    101: "No parameter of API, method or version",
    102: "The requested API does not exist",
    103: "The requested method does not exist",
    104: "The requested version does not support the functionality",
    105: "The logged in session does not have permission",
    106: "Session timeout",
    107: "Session interrupted by duplicate login",
    119: "SID not found",
}

# FileStation-specific codes.
_FILESTATION_ERRORS: dict[int, str] = {
    400: "Invalid parameter of file operation",
    401: "Unknown error of file operation",
    402: "System is too busy",
    403: "Invalid user does this file operation",
    404: "Invalid group does this file operation",
    405: "Invalid user and group does this file operation",
    406: "Can't get user/group information from the account server",
    407: "Operation not permitted",
    408: "No such file or directory",
    409: "Non-supported file system",
    410: "Failed to connect internet-based file system",
    411: "Read-only file system",
    412: "Filename too long in the non-encrypted file system",
    413: "Filename too long in the encrypted file system",
    414: "File already exists",
    415: "Disk quota exceeded",
    416: "No space left on device",
    417: "Input/output error",
    418: "Illegal name or path",
    419: "Illegal file name",
    420: "Illegal file name on FAT file system",
    421: "Device or resource busy",
    599: "No such task of the file operation",
    1100: "Failed to create a folder",
    1101: "The number of folders to the parent folder would exceed the system limitation",
}

# Auth API reuses the low 400s with different meanings.
_AUTH_ERRORS: dict[int, str] = {
    400: "No such account or incorrect password",
    401: "Account disabled",
    402: "Permission denied",
    403: "2-step verification code required",
    404: "Failed to authenticate 2-step verification code",
}


def describe_error(code: int | None, api: str = "SYNO.FileStation") -> str:
    """Return a human-readable description for a DSM error code."""
    if code is None:
        return "Unknown error"
    if code in _COMMON_ERRORS:
        return _COMMON_ERRORS[code]
    table = _AUTH_ERRORS if api == "SYNO.API.Auth" else _FILESTATION_ERRORS
    return table.get(code, "Unknown error")


def error_code(payload: dict | None) -> int | None:
    """Extract ``error.code`` from a DSM response payload."""
    if not isinstance(payload, dict):
        return None
    error = payload.get("error")
    if isinstance(error, dict):
        code = error.get("code")
        if isinstance(code, int):
            return code
    return None


class FileStationError(Exception):
    """Base class for every SynoLink client error."""


class NotAuthenticatedError(FileStationError):
    """An operation that needs a session was called before login."""

    def __init__(self, message: str = "Not authenticated. Call the login tool first."):
        super().__init__(message)


class InvalidArgumentsError(FileStationError):
    """Arguments passed schema validation but cannot be used."""


class RemoteAPIError(FileStationError):
    """The NAS answered the request but reported ``success: false``."""

    def __init__(self, operation: str, code: int | None = None, api: str = "SYNO.FileStation"):
        self.operation = operation
        self.code = code
        self.api = api
        if code is None:
            detail = "unknown error"
        else:
            detail = f"error {code} ({describe_error(code, api)})"
        super().__init__(f"{operation}: {detail}")

    @classmethod
    def from_payload(
        cls, operation: str, payload: dict | None, api: str = "SYNO.FileStation"
    ) -> RemoteAPIError:
        return cls(operation, error_code(payload), api=api)


class SearchTaskError(RemoteAPIError):
    """A search task could not be started or polled."""


def describe_http_error(error: httpx.HTTPError) -> str:
    """Describe a transport failure without echoing the request query.

    DSM carries ``passwd`` and ``_sid`` in the query string, so only the status
    line or the exception type, message and query-less URL are reported.
    """
    if isinstance(error, httpx.HTTPStatusError):
        resp = error.response
        return f"HTTP {resp.status_code} {resp.reason_phrase}".rstrip()

    name = type(error).__name__
    message = str(error)
    try:
        url = error.request.url.copy_with(query=None)
    except RuntimeError:
        return f"{name}: {message}" if message else name
    return f"{name} ({url}): {message}" if message else f"{name} ({url})"
