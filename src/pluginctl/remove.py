"""Plugin remove functionality for pluginctl.

Removal is not atomic. Before anything is deleted a marker file named
``.removing-<name>`` is created inside the plugin directory, and it is deleted
only after every other path, right before the plugin directory itself. If the
process dies part way through, the marker (or the plugin directory) is still on
disk and tells tooling that the plugin is in a half-removed state. Running the
removal again resumes it.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from pluginctl import exit_codes
from pluginctl.delete import delete_paths
from pluginctl.errors import UserError
from pluginctl.layout import InstallationLayout

MARKER_PREFIX = ".removing-"

Reporter = Callable[[str], None]


def _ignore(_message: str) -> None:
    """Default reporter that discards output."""


@dataclass
class RemoveResult:
    """Result of removing a plugin."""

    plugin_name: str
    removed_paths: list[Path] = field(default_factory=list)
    marker_preexisted: bool = False
    preserved_config_dir: Path | None = None


def marker_path(plugin_dir: Path, plugin_name: str) -> Path:
    """Return the removal marker location for a plugin directory."""
    return plugin_dir / f"{MARKER_PREFIX}{plugin_name}"


def validate_plugin_name(plugin_name: str | None) -> str:
    """Check that a plugin name was given and is a single path component.

    Names starting with a dot are rejected; list does not show them.

    Raises:
        UserError: With USAGE if the name is missing or not a plain name.
    """
    if not plugin_name:
        raise UserError(exit_codes.USAGE, "plugin name is required")
    if plugin_name.startswith(".") or "/" in plugin_name or "\\" in plugin_name:
        raise UserError(exit_codes.USAGE, f"invalid plugin name [{plugin_name}]")
    return plugin_name


def collect_paths(plugin_dir: Path, bin_dir: Path, marker: Path) -> list[Path]:
    """Collect the paths to delete, excluding the marker and plugin directory.

    The bin dir comes first, then the immediate children of the plugin
    directory. A marker left by an earlier attempt is not part of the result.

    Raises:
        UserError: With IO_ERROR if bin_dir exists but is not a directory.
    """
    paths: list[Path] = []

    if bin_dir.exists():
        if not bin_dir.is_dir():
            raise UserError(exit_codes.IO_ERROR, f"bin dir for {plugin_dir.name} is not a directory")
        paths.append(bin_dir)

    paths.extend(sorted(p for p in plugin_dir.iterdir() if p != marker))
    return paths


def create_marker(marker: Path) -> bool:
    """Create the removal marker as a new empty file.

    Returns:
        True if the marker already existed from an earlier attempt.

    Raises:
        OSError: If the marker cannot be created for any other reason.
    """
    try:
        with marker.open("x"):
            pass
    except FileExistsError:
        return True
    return False


def remove_plugin(
    plugin_name: str | None,
    layout: InstallationLayout,
    info: Reporter = _ignore,
    verbose: Reporter = _ignore,
) -> RemoveResult:
    """Remove a plugin and its bin directory from the installation.

    The plugin's config directory is never deleted; its location is reported
    so the user can remove it manually.

    Args:
        plugin_name: Name of the plugin directory under the plugins root.
        layout: Installation layout to remove from.
        info: Receives normal progress messages.
        verbose: Receives diagnostic messages.

    Returns:
        RemoveResult describing what was deleted and preserved.

    Raises:
        UserError: With USAGE if no valid name was given, with CONFIG if the
            plugin is not installed, with IO_ERROR if its bin dir is not a
            directory.
        OSError: If the marker cannot be created or paths cannot be deleted.
    """
    name = validate_plugin_name(plugin_name)

    info(f"-> removing [{name}]...")

    plugin_dir = layout.plugins_dir / name
    if not plugin_dir.exists():
        msg = f"plugin [{name}] not found; run 'pluginctl list' to get list of installed plugins"
        raise UserError(exit_codes.CONFIG, msg)

    # Listing happens before the marker is created so the marker sorts last
    marker = marker_path(plugin_dir, name)
    contents = collect_paths(plugin_dir, layout.bin_dir / name, marker)

    marker_preexisted = create_marker(marker)
    if marker_preexisted:
        verbose(f"marker file [{marker}] already exists")

    def _announce(path: Path) -> None:
        verbose(f"removing [{path}]")

    # The marker and plugin dir are only deleted once everything else is gone
    delete_paths(contents, on_delete=_announce)
    delete_paths([marker, plugin_dir], on_delete=_announce)

    result = RemoveResult(
        plugin_name=name,
        removed_paths=[*contents, marker, plugin_dir],
        marker_preexisted=marker_preexisted,
    )

    # Config is kept for upgrades
    config_dir = layout.config_dir / name
    if config_dir.exists():
        result.preserved_config_dir = config_dir
        info(
            f"-> preserving plugin config files [{config_dir}] in case of upgrade; "
            "delete manually if not needed"
        )

    return result
