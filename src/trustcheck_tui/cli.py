"""TrustCheck TUI CLI entry point.

Usage:
    trustcheck-tui                          # Launch with configured settings
    trustcheck-tui init                     # Initialize configuration
    trustcheck-tui run                      # Run with explicit settings
    trustcheck-tui run --endpoint URL       # Query a different service
    trustcheck-tui run --repeat             # Allow another query after a result
    trustcheck-tui config --show            # Print the settings file
"""

from __future__ import annotations

import sys

import click
import yaml
from dotenv import find_dotenv, load_dotenv
from pydantic import ValidationError

from . import __version__
from .logs import close_log_file, open_log_file
from .settings import Settings, load_settings, save_settings, settings_path
from .state import AfterResultPolicy


@click.group(invoke_without_command=True)
@click.pass_context
@click.version_option(version=__version__)
def main(ctx: click.Context) -> None:
    """TrustCheck TUI - check how trustworthy a website is.

    Run without arguments to start with default/configured settings.
    Use 'init' to configure, 'run' for explicit options.
    """
    if ctx.invoked_subcommand is None:
        _run(_load())


# =============================================================================
# Init Command
# =============================================================================


@main.command("init")
@click.option("--endpoint", default=None, help="Service URL queries are sent to")
@click.option("--credential-env", default=None, help="Environment variable holding the API key")
@click.option("--force", "-f", is_flag=True, help="Overwrite existing configuration")
@click.option("--yes", "-y", is_flag=True, help="Accept defaults without prompting")
def init_config(
    endpoint: str | None,
    credential_env: str | None,
    force: bool,
    yes: bool,
) -> None:
    """Initialize the TrustCheck TUI configuration.

    Examples:

        # Interactive setup
        trustcheck-tui init

        # Non-interactive with defaults
        trustcheck-tui init --yes
    """
    path = settings_path()

    if path.exists() and not force:
        click.echo(f"Configuration already exists at {path}")
        click.echo("Use --force to overwrite existing configuration.")
        if not yes and not click.confirm("Continue anyway?"):
            return

    defaults = Settings()

    selected_endpoint = endpoint
    if not selected_endpoint:
        if yes:
            selected_endpoint = defaults.endpoint
        else:
            selected_endpoint = click.prompt("Service endpoint", default=defaults.endpoint)

    selected_env = credential_env
    if not selected_env:
        if yes:
            selected_env = defaults.credential_env
        else:
            selected_env = click.prompt("API key variable", default=defaults.credential_env)

    settings = defaults.override(endpoint=selected_endpoint, credential_env=selected_env)
    save_settings(settings, path)

    click.echo(f"\n✓ Configuration saved to {path}")
    click.echo(f"  Endpoint:         {settings.endpoint}")
    click.echo(f"  API key variable: {settings.credential_env}")

    click.echo("\nTo start the TUI:")
    click.echo("  trustcheck-tui           # Use configured settings")
    click.echo("  trustcheck-tui run       # Same as above")


# =============================================================================
# Run Command
# =============================================================================


@main.command("run")
@click.option("--endpoint", default=None, help="Service URL (overrides config)")
@click.option("--timeout", type=float, default=None, help="Request timeout in seconds")
@click.option("--log-file", default=None, help="Log file path (default: debug.log)")
@click.option("--accent", default=None, help="Border colour, e.g. 'color(36)' or 'magenta'")
@click.option("--spinner", default=None, help="Busy indicator style (rich spinner name)")
@click.option(
    "--repeat/--single-shot",
    default=None,
    help="Return to the input after a result instead of stopping there",
)
def run_command(
    endpoint: str | None,
    timeout: float | None,
    log_file: str | None,
    accent: str | None,
    spinner: str | None,
    repeat: bool | None,
) -> None:
    """Run the TrustCheck TUI.

    By default, uses configured settings from 'trustcheck-tui init'.
    Command-line options override configuration.

    Examples:

        # Use configured settings
        trustcheck-tui run

        # Ask again after each result
        trustcheck-tui run --repeat
    """
    after_result = None
    if repeat is not None:
        after_result = AfterResultPolicy.RESET if repeat else AfterResultPolicy.SINGLE_SHOT

    settings = _load(
        endpoint=endpoint,
        timeout=timeout,
        log_file=log_file,
        accent=accent,
        spinner=spinner,
        after_result=after_result,
    )
    _run(settings)


# =============================================================================
# Config Command
# =============================================================================


@main.command("config")
@click.option("--show", is_flag=True, help="Show current configuration")
def config_command(show: bool) -> None:
    """View or manage TUI configuration."""
    path = settings_path()

    if not path.exists():
        click.echo("No configuration found. Run 'trustcheck-tui init' to create one.")
        return

    click.echo(f"Configuration file: {path}\n")
    if show:
        click.echo(yaml.dump(_load().to_dict(), default_flow_style=False, sort_keys=False))


# =============================================================================
# Helper Functions
# =============================================================================


def _load(**overrides) -> Settings:
    """Load settings with command-line overrides applied.

    Invalid values are reported as a CLI error before anything starts.
    """
    try:
        return load_settings().override(**overrides)
    except yaml.YAMLError as e:
        raise click.ClickException(f"Could not parse {settings_path()}: {e}") from e
    except ValidationError as e:
        problems = "\n".join(
            f"  {'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in e.errors()
        )
        raise click.ClickException(f"Invalid settings:\n{problems}") from e


def _run(settings: Settings) -> None:
    """Bootstrap (environment, log file) and run the app."""
    from .app import run

    load_dotenv(find_dotenv(usecwd=True))

    try:
        handler = open_log_file(settings.log_file, settings.log_level)
    except OSError as e:
        click.echo(f"Could not open log file {settings.log_file}: {e}", err=True)
        sys.exit(1)

    try:
        code = run(settings)
    finally:
        close_log_file(handler)

    sys.exit(code)


if __name__ == "__main__":
    main()
