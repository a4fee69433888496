"""Synology DSM Web API integration."""

from synolink.integrations.errors import (
    FileStationError,
    InvalidArgumentsError,
    NotAuthenticatedError,
    RemoteAPIError,
    SearchTaskError,
)
from synolink.integrations.filestation import FileStationClient
from synolink.integrations.search import SearchState, SearchTask

__all__ = [
    "FileStationClient",
    "FileStationError",
    "InvalidArgumentsError",
    "NotAuthenticatedError",
    "RemoteAPIError",
    "SearchState",
    "SearchTask",
    "SearchTaskError",
]
