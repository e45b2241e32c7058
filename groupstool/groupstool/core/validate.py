"""Syntax checks for NetIDs and group IDs.

Both validators return the identifier unchanged so they can be used as
argparse ``type=`` callables via the ``*_arg`` adapters below.
"""

from __future__ import annotations

import argparse
import re

from .errors import ValidationError

_NETID_RE = re.compile(r"[a-z][a-z0-9]{0,7}")
_GROUP_ID_RE = re.compile(r"(u|uw)_[a-z0-9][a-z0-9_\-]*")


def validate_netid(value: str) -> str:
    if not _NETID_RE.fullmatch(value):
        raise ValidationError("NetID may be too long or contain invalid characters.")
    return value


def validate_group_id(value: str) -> str:
    if not _GROUP_ID_RE.fullmatch(value):
        raise ValidationError("Incomplete group ID or contains invalid characters.")
    return value


def netid_arg(value: str) -> str:
    try:
        return validate_netid(value)
    except ValidationError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def group_id_arg(value: str) -> str:
    try:
        return validate_group_id(value)
    except ValidationError as e:
        raise argparse.ArgumentTypeError(str(e)) from e
