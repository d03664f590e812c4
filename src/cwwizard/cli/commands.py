"""CLI command handlers."""

from contextlib import contextmanager
from typing import Optional

from cwwizard.utils.config import Config, get_wizard_dir
from cwwizard.utils.exceptions import ConfigFileError


@contextmanager
def _writing_settings(config: Config):
    """Report a failed settings write as ConfigFileError."""
    try:
        yield
    except OSError as e:
        raise ConfigFileError(
            f"Error in writing settings to {config.wizard_dir}: {e}", config.wizard_dir
        ) from e


def cmd_wizard():
    """Run the wizard and wait for Enter."""
    from cwwizard.cli.ui import console
    from cwwizard.cli.wizard import run_wizard
    from cwwizard.prompts import enter_to_exit

    path = run_wizard()
    if path is None:
        console.print("[yellow]Config not saved.[/yellow]")
    enter_to_exit()


def cmd_status():
    """Show current status."""
    from cwwizard import aws
    from cwwizard.cli.ui import console

    wizard_dir = get_wizard_dir()
    config = Config(wizard_dir)

    console.print(f"[bold]Config dir:[/bold] [dim]{wizard_dir}[/dim]")

    if config.config_file.exists():
        console.print(f"[bold]Config file:[/bold] [green]{config.config_file}[/green]")
    else:
        console.print("[bold]Config file:[/bold] [yellow]not written yet[/yellow]")

    debug_color = "green" if config.debug else "dim"
    console.print(
        f"[bold]Debug:[/bold] [{debug_color}]{'on' if config.debug else 'off'}[/{debug_color}]"
    )

    region = aws.sdk_region()
    if region:
        console.print(f"[bold]SDK region:[/bold] [green]{region}[/green]")
    else:
        console.print("[bold]SDK region:[/bold] [yellow]not configured[/yellow]")

    access_key, _, _ = aws.sdk_credentials()
    if access_key:
        console.print("[bold]Credentials:[/bold] [green]found[/green]")
    else:
        console.print("[bold]Credentials:[/bold] [yellow]not found[/yellow]")


def cmd_show():
    """Print the saved config file."""
    from cwwizard.config_file import read_config_from_json_file

    config = Config(get_wizard_dir())
    print(read_config_from_json_file(config.config_file))


def cmd_region(profile: Optional[str], ec2: bool):
    """Print the first region found, or exit 1."""
    import typer

    from cwwizard import aws
    from cwwizard.cli.ui import console

    config = Config(get_wizard_dir())
    profile = profile or config.aws_profile

    region = aws.sdk_region_with_profile(profile) if profile else aws.sdk_region()
    if not region and ec2:
        region = aws.default_ec2_region(config.imds_timeout_seconds)

    if not region:
        console.print("[yellow]No region found[/yellow]")
        raise typer.Exit(1)
    print(region)


def cmd_debug(enabled: bool):
    """Enable or disable debug logging."""
    from cwwizard.cli.ui import console
    from cwwizard.utils.debug import reload_config

    config = Config(get_wizard_dir())
    with _writing_settings(config):
        config.set_debug(enabled)
    reload_config()
    state = "enabled" if enabled else "disabled"
    console.print(f"Debug mode {state}")
    if enabled:
        console.print(f"[dim]Logs: {config.log_file}[/dim]")


def cmd_env_list():
    """List all env var overrides."""
    config = Config(get_wizard_dir())
    env_vars = config.list_env()

    if not env_vars:
        print("No env var overrides set.")
        return

    for key, value in sorted(env_vars.items()):
        print(f"{key}={value}")


def cmd_env_set(key: str, value: str):
    """Set an env var override."""
    config = Config(get_wizard_dir())
    with _writing_settings(config):
        config.set_env(key, value)
    print(f"Set {key}={value}")


def cmd_env_unset(key: str):
    """Unset an env var override."""
    config = Config(get_wizard_dir())
    with _writing_settings(config):
        removed = config.unset_env(key)
    if removed:
        print(f"Unset {key}")
    else:
        print(f"{key} not found")
