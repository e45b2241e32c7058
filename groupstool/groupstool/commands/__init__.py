"""Command handlers for groupstool CLI."""

from .config import cmd_config_set, cmd_config_show
from .members import (
    cmd_groups_by_member,
    cmd_list_members,
    cmd_add_member,
    cmd_remove_member,
)

__all__ = [
    "cmd_config_set",
    "cmd_config_show",
    "cmd_groups_by_member",
    "cmd_list_members",
    "cmd_add_member",
    "cmd_remove_member",
]
