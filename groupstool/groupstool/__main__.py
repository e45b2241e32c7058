"""Command line entry point for groupstool."""

from __future__ import annotations

import argparse
import os
import sys

# ``groupstool.core`` resolves both for an installed package and for the
# source-checkout wrapper one directory up.  Run as a bare script (no
# ``__package__``), the relative form below is used instead.
try:  # pragma: no cover - exercised indirectly in tests
    from groupstool.core import (
        DEFAULT_BASE,
        GroupsToolError,
        configure_logging,
        get_logger,
        group_id_arg,
        netid_arg,
    )
    from groupstool.commands import (
        cmd_config_set,
        cmd_config_show,
        cmd_groups_by_member,
        cmd_list_members,
        cmd_add_member,
        cmd_remove_member,
    )
except ModuleNotFoundError:  # pragma: no cover
    if __package__ in (None, ""):
        sys.path.append(os.path.dirname(__file__))
        __package__ = "groupstool"
    from .core import (
        DEFAULT_BASE,
        GroupsToolError,
        configure_logging,
        get_logger,
        group_id_arg,
        netid_arg,
    )
    from .commands import (
        cmd_config_set,
        cmd_config_show,
        cmd_groups_by_member,
        cmd_list_members,
        cmd_add_member,
        cmd_remove_member,
    )

CERT_HELP = "Certificate + Key (used to authenticate with the web service)"
NETID_HELP = "NetID (typical personal NetID is 8 characters or less)"
GROUP_HELP = "Group ID (typically starts with u_ or uw_)"


def main(argv=None):
    parser = argparse.ArgumentParser(prog="groupstool", description="UW Groups CLI")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log requests to stderr")
    sub = parser.add_subparsers(dest="cmd")

    p_gbm = sub.add_parser("groups-by-member", help="Get a user's group memberships")
    p_gbm.add_argument("auth_cert", help=CERT_HELP)
    p_gbm.add_argument("member_uid", type=netid_arg, help=NETID_HELP)
    p_gbm.set_defaults(func=cmd_groups_by_member)

    p_lm = sub.add_parser("list-members", help="List group members")
    p_lm.add_argument("auth_cert", help=CERT_HELP)
    p_lm.add_argument("group_id", type=group_id_arg, help=GROUP_HELP)
    p_lm.set_defaults(func=cmd_list_members)

    for name, help_text, func in [
        ("add-member", "Add a user to a group", cmd_add_member),
        ("remove-member", "Remove a user from a group", cmd_remove_member),
    ]:
        p = sub.add_parser(name, help=help_text)
        p.add_argument("auth_cert", help=CERT_HELP)
        p.add_argument("group_id", type=group_id_arg, help=GROUP_HELP)
        p.add_argument("member_uid", type=netid_arg, help=NETID_HELP)
        p.set_defaults(func=func)

    # config
    p_config = sub.add_parser("config", help="Configuration")
    sub_config = p_config.add_subparsers(dest="config_cmd")

    p_config_set = sub_config.add_parser("set", help="Save settings to ~/.groupstool.json")
    p_config_set.add_argument("--base-url", help=f"Groups Web Service URL (default: {DEFAULT_BASE})")
    p_config_set.add_argument("--timeout", type=float, help="Request timeout in seconds (default: 30)")
    p_config_set.add_argument("--ca-file", help="CA bundle used to verify the service certificate")
    p_config_set.set_defaults(func=cmd_config_set)

    p_config_show = sub_config.add_parser("show", help="Show effective settings")
    p_config_show.set_defaults(func=cmd_config_show)

    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if not args.cmd:
        parser.print_help()
        return 0
    if args.cmd == "config" and not getattr(args, "config_cmd", None):
        p_config.print_help()
        return 0
    try:
        args.func(args)
    except GroupsToolError as e:
        get_logger(__name__).debug("command_failed", cmd=args.cmd, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
