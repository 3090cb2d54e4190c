"""Installation home resolution and layout.

The installation home holds the plugins, bin and config directories. Their
locations default to fixed subdirectories and can be overridden by an
optional layout.yaml file in the home directory.
"""

import os
from dataclasses import dataclass
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pluginctl import exit_codes
from pluginctl.errors import format_validation_errors
from pluginctl.validation import ValidationResult

# Default installation home location
DEFAULT_HOME = Path.home() / ".pluginctl"

# Environment variable for custom installation home location
HOME_ENV_VAR = "PLUGINCTL_HOME"

LAYOUT_FILE = "layout.yaml"


class LayoutConfig(BaseModel):
    """Schema for layout.yaml. Relative paths resolve against the home."""

    model_config = ConfigDict(extra="forbid")

    plugins_dir: Path = Field(default=Path("plugins"), description="Installed plugins")
    bin_dir: Path = Field(default=Path("bin"), description="Plugin executables")
    config_dir: Path = Field(default=Path("config"), description="Plugin configuration")


@dataclass(frozen=True)
class InstallationLayout:
    """Resolved, absolute root directories of an installation."""

    plugins_dir: Path
    bin_dir: Path
    config_dir: Path


def get_home() -> Path:
    """Get the installation home directory path.

    Resolution order:
    1. PLUGINCTL_HOME environment variable (if set)
    2. Default: ~/.pluginctl/

    Returns:
        Path to the installation home directory.
    """
    env_value = os.environ.get(HOME_ENV_VAR)
    if env_value:
        return Path(env_value).expanduser()
    return DEFAULT_HOME


def load_layout_config(home: Path) -> LayoutConfig:
    """Load and validate layout.yaml from the home directory.

    Returns the default layout when the file does not exist.

    Raises:
        ValueError: If YAML is invalid or schema validation fails.
    """
    layout_path = home / LAYOUT_FILE
    if not layout_path.exists():
        return LayoutConfig()

    try:
        data = yaml.safe_load(layout_path.read_text())
    except yaml.YAMLError as e:
        msg = f"Invalid YAML in '{layout_path}': {e}"
        raise ValueError(msg) from e

    try:
        return LayoutConfig.model_validate(data or {})
    except ValidationError as e:
        msg = f"Invalid layout '{layout_path}': {format_validation_errors(e)}"
        raise ValueError(msg) from e


def resolve_layout(home: Path) -> InstallationLayout:
    """Resolve the installation layout for a home directory.

    Args:
        home: Path to the installation home.

    Returns:
        InstallationLayout with absolute directories.

    Raises:
        ValueError: If layout.yaml is invalid.
    """
    home = home.expanduser().absolute()
    config = load_layout_config(home)
    return InstallationLayout(
        plugins_dir=home / config.plugins_dir.expanduser(),
        bin_dir=home / config.bin_dir.expanduser(),
        config_dir=home / config.config_dir.expanduser(),
    )


def validate_home(home: Path, layout: InstallationLayout) -> ValidationResult:
    """Validate a directory as an installation home.

    A valid home exists, is a directory, and has a plugins directory.

    Args:
        home: Path to check.
        layout: Layout resolved for that home.

    Returns:
        ValidationResult with is_valid=True if valid, otherwise is_valid=False
        with a list of specific error messages.
    """
    errors: list[str] = []

    if not home.exists():
        errors.append(f"Path does not exist: {home}")
        return ValidationResult(is_valid=False, errors=errors, error_code=exit_codes.CONFIG)

    if not home.is_dir():
        errors.append(f"Path is not a directory: {home}")
        return ValidationResult(is_valid=False, errors=errors, error_code=exit_codes.CONFIG)

    if not layout.plugins_dir.is_dir():
        errors.append(f"Missing plugins directory: {layout.plugins_dir}")

    if errors:
        return ValidationResult(is_valid=False, errors=errors, error_code=exit_codes.CONFIG)
    return ValidationResult(is_valid=True)
