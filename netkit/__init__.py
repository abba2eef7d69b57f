"""
netkit
──────
Stable top-level exports. Import from here, not from sub-modules directly.
Every name exported here is part of the public API and subject to semver.
"""
from netkit.tier0_core.errors import (
    NetkitError,
    ParseError,
    TransportError,
    HTTPStatusError,
    DecodeError,
    EncodeError,
    FilesystemError,
)
from netkit.tier0_core.config import get_config, NetkitConfig, ClientConfig
from netkit.tier0_core.logging import get_logger
from netkit.tier0_core.http import HTTP, is_success_status_code

from netkit.tier1_runtime.serialize import encode_json, decode_json
from netkit.tier1_runtime.urls import build_url, parse_query_params

from netkit.tier2_transport.client import HttpClient, create_http_client
from netkit.tier2_transport.json_api import get_json, post_json, put_json, delete_json
from netkit.tier2_transport.files import download_file, upload_file

__version__ = "0.1.0"
__all__ = [
    # errors
    "NetkitError", "ParseError", "TransportError", "HTTPStatusError",
    "DecodeError", "EncodeError", "FilesystemError",
    # config
    "get_config", "NetkitConfig", "ClientConfig",
    # logging
    "get_logger",
    # http
    "HTTP", "is_success_status_code",
    # serialize
    "encode_json", "decode_json",
    # urls
    "build_url", "parse_query_params",
    # client
    "HttpClient", "create_http_client",
    # json verbs
    "get_json", "post_json", "put_json", "delete_json",
    # files
    "download_file", "upload_file",
]
