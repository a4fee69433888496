"""SynoLink — Synology FileStation tools over the Model Context Protocol."""

SERVER_NAME = "synology-link-server"
SERVER_VERSION = "0.1.0"
