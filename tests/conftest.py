"""Shared test fixtures for pluginctl tests."""

from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from typer.testing import CliRunner

from pluginctl import cli_logger
from pluginctl.layout import InstallationLayout, resolve_layout


@pytest.fixture(autouse=True)
def reset_verbosity() -> Iterator[None]:
    """Restore normal verbosity after each test."""
    yield
    cli_logger.set_verbosity(cli_logger.Verbosity.NORMAL)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def plugin_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create an installation home with plugins, bin and config directories.

    Sets PLUGINCTL_HOME and returns the home path.
    """
    home = tmp_path / "home"
    for sub in ("plugins", "bin", "config"):
        (home / sub).mkdir(parents=True)
    monkeypatch.setenv("PLUGINCTL_HOME", str(home))
    return home


@pytest.fixture
def layout(plugin_home: Path) -> InstallationLayout:
    """Resolved layout of the plugin_home fixture."""
    return resolve_layout(plugin_home)


# Type alias for the plugin factory function
PluginFactory = Callable[..., Path]


@pytest.fixture
def install_plugin(layout: InstallationLayout) -> PluginFactory:
    """Factory fixture that lays out an installed plugin on disk.

    Usage:
        plugin_dir = install_plugin(
            "foo",
            files={"plugin.jar": "jar", "lib/dep.jar": "dep"},
            bin_files={"foo.sh": "#!/bin/sh"},
            config_files={"foo.yml": "key: value"},
        )

    Files are given as relative path -> text content. bin_files and
    config_files create bin/<name> and config/<name> when not None.
    """

    def _install(
        name: str,
        files: dict[str, str] | None = None,
        bin_files: dict[str, str] | None = None,
        config_files: dict[str, str] | None = None,
    ) -> Path:
        plugin_dir = layout.plugins_dir / name
        plugin_dir.mkdir(parents=True)
        _write_files(plugin_dir, files or {"plugin.jar": "jar"})

        if bin_files is not None:
            bin_dir = layout.bin_dir / name
            bin_dir.mkdir(parents=True)
            _write_files(bin_dir, bin_files)

        if config_files is not None:
            config_dir = layout.config_dir / name
            config_dir.mkdir(parents=True)
            _write_files(config_dir, config_files)

        return plugin_dir

    return _install


def _write_files(root: Path, files: dict[str, str]) -> None:
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)


def snapshot_tree(root: Path) -> dict[str, bytes]:
    """Map every file under root (relative path) to its bytes."""
    return {
        str(path.relative_to(root)): path.read_bytes()
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }
