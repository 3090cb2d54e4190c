"""Listing of installed plugins."""

from dataclasses import dataclass
from pathlib import Path

from pluginctl.layout import InstallationLayout
from pluginctl.remove import marker_path


@dataclass
class InstalledPlugin:
    """A plugin directory found under the plugins root."""

    name: str
    plugin_dir: Path
    bin_dir: Path | None
    removal_incomplete: bool


def list_plugins(layout: InstallationLayout) -> list[InstalledPlugin]:
    """List plugins installed in a layout, sorted by name.

    A plugin whose directory still holds its removal marker is reported with
    removal_incomplete=True.

    Args:
        layout: Installation layout to inspect.

    Returns:
        One InstalledPlugin per directory under the plugins root. Empty if
        the plugins root does not exist.
    """
    if not layout.plugins_dir.is_dir():
        return []

    plugins: list[InstalledPlugin] = []
    for plugin_dir in sorted(layout.plugins_dir.iterdir()):
        if not plugin_dir.is_dir() or plugin_dir.name.startswith("."):
            continue
        bin_dir = layout.bin_dir / plugin_dir.name
        plugins.append(
            InstalledPlugin(
                name=plugin_dir.name,
                plugin_dir=plugin_dir,
                bin_dir=bin_dir if bin_dir.is_dir() else None,
                removal_incomplete=marker_path(plugin_dir, plugin_dir.name).exists(),
            )
        )
    return plugins
