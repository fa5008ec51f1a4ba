"""Bundled JXA scripts.

Scripts live in a ``scripts/`` directory next to the module that runs them
and are shipped as package data. Each one is prefixed with ``prelude.js``,
which supplies the envelope helpers (``ok``, ``fail``, ``log``) and the
Mail.app lookups shared by all scripts.
"""

from functools import cache
from importlib.resources import files

PRELUDE_PACKAGE = "apple_mail_mcp.jxa"
PRELUDE_NAME = "prelude.js"


def read_asset(package: str, name: str) -> str:
    """Read ``scripts/<name>`` from a package without the prelude."""
    return (files(package) / "scripts" / name).read_text(encoding="utf-8")


@cache
def load_script(package: str, name: str) -> str:
    """
    Load a bundled script ready to hand to the executor.

    Args:
        package: Dotted package name owning the ``scripts/`` directory.
        name: File name of the script, e.g. ``"list_accounts.js"``.

    Returns:
        The prelude followed by the script body.
    """
    prelude = read_asset(PRELUDE_PACKAGE, PRELUDE_NAME)
    return f"{prelude}\n{read_asset(package, name)}"
