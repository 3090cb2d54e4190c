"""pluginctl - Manage plugins in an installation home."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pluginctl")
except PackageNotFoundError:
    __version__ = "0.0.0"
