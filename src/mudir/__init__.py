"""Mudir: inventory collections and a party ledger for small shops."""

from mudir.config import APP_VERSION as __version__


# The CLI pulls in every command module; load it only when asked for
def __getattr__(name):
    if name == "main":
        from mudir.cli.main import main
        return main
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
