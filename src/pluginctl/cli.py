"""pluginctl CLI entry point."""

import sys
from typing import Annotated

import typer
from rich.markup import escape

from pluginctl import __version__, cli_logger, exit_codes
from pluginctl.errors import UserError, handle_cli_error
from pluginctl.layout import InstallationLayout, get_home, resolve_layout, validate_home
from pluginctl.listing import list_plugins
from pluginctl.remove import remove_plugin, validate_plugin_name

app = typer.Typer(
    name="pluginctl",
    help="Manage plugins installed in a pluginctl home.",
    no_args_is_help=True,
)


def require_layout() -> InstallationLayout:
    """Resolve the installation layout and verify the home is usable.

    Returns:
        The resolved InstallationLayout.

    Raises:
        typer.Exit: With CONFIG if layout.yaml is invalid or the home is not set up.
    """
    home = get_home()
    try:
        layout = resolve_layout(home)
    except ValueError as e:
        cli_logger.error(escape(str(e)))
        raise typer.Exit(exit_codes.CONFIG) from e

    validation = validate_home(home, layout)
    if not validation.is_valid:
        cli_logger.error(escape(f"Installation home not usable at {home}"))
        for error in validation.errors:
            cli_logger.dim(f"  • {escape(error)}")
        raise typer.Exit(validation.error_code or exit_codes.CONFIG)

    return layout


def set_output_level(verbose: bool, silent: bool) -> None:
    """Apply --verbose/--silent to the CLI logger.

    Raises:
        typer.Exit: With USAGE if both flags are given.
    """
    if verbose and silent:
        cli_logger.error("Cannot specify both --verbose and --silent")
        raise typer.Exit(exit_codes.USAGE)

    if verbose:
        cli_logger.set_verbosity(cli_logger.Verbosity.VERBOSE)
    elif silent:
        cli_logger.set_verbosity(cli_logger.Verbosity.SILENT)
    else:
        cli_logger.set_verbosity(cli_logger.Verbosity.NORMAL)


VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Show diagnostic output."),
]
SilentOption = Annotated[
    bool,
    typer.Option("--silent", "-s", help="Only show errors."),
]


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        cli_logger.info(f"pluginctl v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show pluginctl version and exit.",
    ),
) -> None:
    """Manage plugins installed in a pluginctl home."""


@app.command()
def remove(
    plugin: Annotated[
        str | None,
        typer.Argument(
            help="Name of the plugin to remove.",
            show_default=False,
        ),
    ] = None,
    verbose: VerboseOption = False,
    silent: SilentOption = False,
) -> None:
    """Remove a plugin from the installation.

    Deletes the plugin directory and its bin directory. The plugin's config
    directory is preserved in case of upgrade. An interrupted removal leaves
    a .removing-<name> marker in the plugin directory; run the command again
    to finish it.
    """
    set_output_level(verbose, silent)

    try:
        validate_plugin_name(plugin)
        layout = require_layout()
        result = remove_plugin(
            plugin,
            layout,
            info=cli_logger.plain,
            verbose=cli_logger.plain_verbose,
        )
    except UserError as e:
        cli_logger.error(escape(e.message))
        raise typer.Exit(e.exit_code) from e
    except OSError as e:
        cli_logger.error(escape(f"Failed to remove plugin '{plugin}': {e}"))
        cli_logger.dim(
            escape(f"  Run 'pluginctl remove {plugin}' again once the problem is fixed.")
        )
        raise typer.Exit(exit_codes.IO_ERROR) from e

    cli_logger.success(escape(f"Removed plugin '{result.plugin_name}'"))
    raise typer.Exit(exit_codes.SUCCESS)


@app.command(name="list")
def list_command(
    verbose: VerboseOption = False,
) -> None:
    """List installed plugins.

    Plugins whose removal did not finish are flagged.
    """
    set_output_level(verbose, silent=False)
    layout = require_layout()

    plugins = list_plugins(layout)
    if not plugins:
        cli_logger.info("No plugins installed")
        raise typer.Exit(exit_codes.SUCCESS)

    for plugin in plugins:
        if plugin.removal_incomplete:
            cli_logger.info(f"{escape(plugin.name)} [yellow](removal incomplete)[/yellow]")
        else:
            cli_logger.plain(plugin.name)
        cli_logger.plain_verbose(f"  plugin dir: {plugin.plugin_dir}")
        if plugin.bin_dir is not None:
            cli_logger.plain_verbose(f"  bin dir: {plugin.bin_dir}")

    raise typer.Exit(exit_codes.SUCCESS)


def main_cli() -> None:
    """CLI entry point with top-level exception handling.

    Wraps the Typer app to catch any unhandled exceptions and format them
    as clean error messages instead of raw tracebacks.
    """
    try:
        app()
    except Exception as e:
        sys.exit(handle_cli_error(e))


if __name__ == "__main__":
    main_cli()
