"""Client library for the cgminer JSON-over-TCP API."""
from cgminer_api.client import CgminerAPI
from cgminer_api.config.settings import DEFAULT_PORT, DEFAULT_TIMEOUT, ClientSettings, load_settings
from cgminer_api.errors import (
    APIConnectionError,
    APIError,
    DecodeError,
    ReadError,
    RemoteError,
    UnknownStatusError,
    WriteError,
)
from cgminer_api.models.command import APICommand
from cgminer_api.models.response import APIStatus, Config, Devs, Response, StatusCode, Summary

__all__ = [
    "APICommand",
    "APIConnectionError",
    "APIError",
    "APIStatus",
    "CgminerAPI",
    "ClientSettings",
    "DEFAULT_PORT",
    "DEFAULT_TIMEOUT",
    "Config",
    "DecodeError",
    "Devs",
    "ReadError",
    "RemoteError",
    "Response",
    "StatusCode",
    "Summary",
    "UnknownStatusError",
    "WriteError",
    "load_settings",
]
