"""Membership commands: lookups and add/remove."""

from __future__ import annotations

from ..core import (
    ADD_MEMBER,
    GROUPS_BY_MEMBER,
    LIST_MEMBERS,
    REMOVE_MEMBER,
    get_settings,
    run_operation,
)


def cmd_groups_by_member(args) -> None:
    """Print the groups ``member_uid`` belongs to, one per line."""
    groups = run_operation(GROUPS_BY_MEMBER, args.auth_cert, get_settings(), netid=args.member_uid)
    for group_id in groups:
        print(group_id)


def cmd_list_members(args) -> None:
    members = run_operation(LIST_MEMBERS, args.auth_cert, get_settings(), group=args.group_id)
    for netid in members:
        print(netid)


def cmd_add_member(args) -> None:
    result = run_operation(
        ADD_MEMBER, args.auth_cert, get_settings(), group=args.group_id, netid=args.member_uid
    )
    print(result.describe())


def cmd_remove_member(args) -> None:
    result = run_operation(
        REMOVE_MEMBER, args.auth_cert, get_settings(), group=args.group_id, netid=args.member_uid
    )
    print(result.describe())


__all__ = [
    "cmd_groups_by_member",
    "cmd_list_members",
    "cmd_add_member",
    "cmd_remove_member",
]
