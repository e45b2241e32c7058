"""Source-checkout entry for groupstool.

``setup.py`` installs the inner ``groupstool/groupstool`` package.  From a
plain checkout of the repository root only this directory is importable, so
the inner package, its ``core`` and its ``commands`` are registered under the
``groupstool`` name here; ``python -m groupstool.groupstool`` then runs the
same CLI the installed ``groupstool`` script does.
"""

from importlib import import_module as _import_module
import sys as _sys

_inner = _import_module(".groupstool", __name__)
_core = _import_module(".groupstool.core", __name__)
_commands = _import_module(".groupstool.commands", __name__)

__all__ = ["__version__", "core", "commands"]
__version__ = getattr(_inner, "__version__", "0")
core = _core
commands = _commands

# Expose submodules so ``import groupstool.commands`` works
_sys.modules[__name__ + ".core"] = _core
_sys.modules[__name__ + ".commands"] = _commands
_sys.modules[__name__ + ".groupstool"] = _inner

# Ensure package behaves like the inner implementation for submodule discovery
__path__ = _inner.__path__
