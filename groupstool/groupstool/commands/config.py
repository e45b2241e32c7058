"""Configuration commands."""

from __future__ import annotations

import json

from ..core import get_settings, save_config


def cmd_config_set(args):
    path = save_config(args.base_url, args.timeout, args.ca_file)
    print(f"Saved config to {path}")


def cmd_config_show(_args):
    print(json.dumps(get_settings().as_dict(), ensure_ascii=False, indent=2))
