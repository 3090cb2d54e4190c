"""Tests for installation home resolution and layout."""

from pathlib import Path

import pytest
import yaml

from pluginctl import exit_codes
from pluginctl.layout import (
    LAYOUT_FILE,
    InstallationLayout,
    get_home,
    load_layout_config,
    resolve_layout,
    validate_home,
)


class TestGetHome:
    """Tests for home path resolution."""

    @pytest.fixture(autouse=True)
    def clear_home_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Clear PLUGINCTL_HOME before each test."""
        monkeypatch.delenv("PLUGINCTL_HOME", raising=False)

    def test_returns_env_var_when_set(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Verify PLUGINCTL_HOME takes precedence."""
        # Given
        monkeypatch.setenv("PLUGINCTL_HOME", "/custom/home")

        # When
        result = get_home()

        # Then
        assert result == Path("/custom/home")

    def test_returns_default_when_env_var_not_set(self) -> None:
        """Verify ~/.pluginctl is used by default."""
        # When
        result = get_home()

        # Then
        assert result == Path.home() / ".pluginctl"

    def test_expands_tilde_in_env_var(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Verify ~ is expanded in PLUGINCTL_HOME."""
        # Given
        monkeypatch.setenv("PLUGINCTL_HOME", "~/my-plugins")

        # When
        result = get_home()

        # Then
        assert result == Path.home() / "my-plugins"


class TestResolveLayout:
    """Tests for resolve_layout and layout.yaml."""

    def test_defaults_without_layout_file(self, tmp_path: Path) -> None:
        """Verify the default subdirectories are used."""
        # When
        layout = resolve_layout(tmp_path)

        # Then
        assert layout == InstallationLayout(
            plugins_dir=tmp_path / "plugins",
            bin_dir=tmp_path / "bin",
            config_dir=tmp_path / "config",
        )

    def test_layout_file_overrides_directories(self, tmp_path: Path) -> None:
        """Verify relative and absolute overrides from layout.yaml."""
        # Given
        shared_config = tmp_path / "etc" / "plugins"
        (tmp_path / LAYOUT_FILE).write_text(
            yaml.dump({"plugins_dir": "lib/plugins", "config_dir": str(shared_config)})
        )

        # When
        layout = resolve_layout(tmp_path)

        # Then
        assert layout.plugins_dir == tmp_path / "lib" / "plugins"
        assert layout.bin_dir == tmp_path / "bin"
        assert layout.config_dir == shared_config

    def test_empty_layout_file_uses_defaults(self, tmp_path: Path) -> None:
        """Verify an empty layout.yaml behaves like a missing one."""
        # Given
        (tmp_path / LAYOUT_FILE).write_text("")

        # When
        config = load_layout_config(tmp_path)

        # Then
        assert config.plugins_dir == Path("plugins")

    def test_unknown_field_is_rejected(self, tmp_path: Path) -> None:
        """Verify a typo in layout.yaml is reported cleanly."""
        # Given
        (tmp_path / LAYOUT_FILE).write_text(yaml.dump({"plugin_dir": "x"}))

        # When/Then
        with pytest.raises(ValueError, match="'plugin_dir': unknown field"):
            resolve_layout(tmp_path)

    def test_invalid_yaml_is_rejected(self, tmp_path: Path) -> None:
        """Verify unparseable layout.yaml raises ValueError."""
        # Given
        (tmp_path / LAYOUT_FILE).write_text("plugins_dir: [unclosed\n")

        # When/Then
        with pytest.raises(ValueError, match="Invalid YAML"):
            resolve_layout(tmp_path)


class TestValidateHome:
    """Tests for validate_home."""

    def test_valid_home(self, plugin_home: Path) -> None:
        """Verify a home with a plugins dir is valid."""
        # When
        result = validate_home(plugin_home, resolve_layout(plugin_home))

        # Then
        assert result.is_valid is True
        assert result.errors == []

    def test_missing_home(self, tmp_path: Path) -> None:
        """Verify a nonexistent home is invalid with CONFIG."""
        # Given
        home = tmp_path / "nope"

        # When
        result = validate_home(home, resolve_layout(home))

        # Then
        assert result.is_valid is False
        assert result.error_code == exit_codes.CONFIG
        assert "does not exist" in result.errors[0]

    def test_home_is_a_file(self, tmp_path: Path) -> None:
        """Verify a file is not a valid home."""
        # Given
        home = tmp_path / "file"
        home.write_text("x")

        # When
        result = validate_home(home, InstallationLayout(home / "p", home / "b", home / "c"))

        # Then
        assert result.is_valid is False
        assert "not a directory" in result.errors[0]

    def test_missing_plugins_dir(self, tmp_path: Path) -> None:
        """Verify a home without its plugins dir is invalid."""
        # When
        result = validate_home(tmp_path, resolve_layout(tmp_path))

        # Then
        assert result.is_valid is False
        assert "Missing plugins directory" in result.errors[0]
