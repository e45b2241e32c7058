"""Core utilities for groupstool."""

from .config import CONFIG_PATH, DEFAULT_BASE, DEFAULT_TIMEOUT, Settings, load_config, save_config, get_settings
from .errors import (
    GroupsToolError,
    ValidationError,
    CredentialError,
    NetworkError,
    ResponseError,
    DecodeError,
)
from .validate import validate_netid, validate_group_id, netid_arg, group_id_arg
from .decode import OperationResult, decode_membership_list
from .http import fetch_body, fetch_status
from .dispatch import (
    GROUPS_BY_MEMBER,
    LIST_MEMBERS,
    ADD_MEMBER,
    REMOVE_MEMBER,
    OPERATIONS,
    build_request,
    run_operation,
)
from .log import configure_logging, get_logger

__all__ = [
    "CONFIG_PATH", "DEFAULT_BASE", "DEFAULT_TIMEOUT", "Settings",
    "load_config", "save_config", "get_settings",
    "GroupsToolError", "ValidationError", "CredentialError", "NetworkError",
    "ResponseError", "DecodeError",
    "validate_netid", "validate_group_id", "netid_arg", "group_id_arg",
    "OperationResult", "decode_membership_list",
    "fetch_body", "fetch_status",
    "GROUPS_BY_MEMBER", "LIST_MEMBERS", "ADD_MEMBER", "REMOVE_MEMBER", "OPERATIONS",
    "build_request", "run_operation",
    "configure_logging", "get_logger",
]
