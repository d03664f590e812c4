"""CLI entry point for cwwizard.

Uses Typer for command routing with lazy loading, so `status` and `region`
do not pay for importing the wizard flow.
"""

from contextlib import contextmanager

import typer

from cwwizard.utils.exceptions import PromptAbortedError, WizardError

__all__ = ["app", "main"]

app = typer.Typer(
    name="cwwizard",
    help="Interactive config wizard for the metrics agent",
    no_args_is_help=False,
)


@contextmanager
def _handle_errors():
    """Turn wizard errors into a message and an exit code."""
    from rich.markup import escape

    from cwwizard.cli.ui import console

    try:
        yield
    except PromptAbortedError:
        console.print("\n[yellow]Aborted: input closed[/yellow]")
        raise typer.Exit(130)
    except WizardError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    """Run the wizard if no command given."""
    if ctx.invoked_subcommand is None:
        from cwwizard.cli.commands import cmd_wizard

        with _handle_errors():
            cmd_wizard()


@app.command()
def status() -> None:
    """Show current status."""
    from cwwizard.cli.commands import cmd_status

    with _handle_errors():
        cmd_status()


@app.command()
def show() -> None:
    """Print the saved config file."""
    from cwwizard.cli.commands import cmd_show

    with _handle_errors():
        cmd_show()


@app.command()
def region(
    profile: str = typer.Option(
        None, "--profile", "-p", help="Shared-config profile to read the region from"
    ),
    ec2: bool = typer.Option(
        False, "--ec2", help="Fall back to EC2 instance metadata"
    ),
) -> None:
    """Print the discovered AWS region."""
    from cwwizard.cli.commands import cmd_region

    with _handle_errors():
        cmd_region(profile, ec2)


# Debug subcommand group
debug_app = typer.Typer(help="Debug mode commands")
app.add_typer(debug_app, name="debug")


@debug_app.command("on")
def debug_on() -> None:
    """Enable debug logging."""
    from cwwizard.cli.commands import cmd_debug

    with _handle_errors():
        cmd_debug(True)


@debug_app.command("off")
def debug_off() -> None:
    """Disable debug logging."""
    from cwwizard.cli.commands import cmd_debug

    with _handle_errors():
        cmd_debug(False)


# Env subcommand group
env_app = typer.Typer(help="Manage setting overrides")
app.add_typer(env_app, name="env")


@env_app.command("list")
def env_list() -> None:
    """List setting overrides."""
    from cwwizard.cli.commands import cmd_env_list

    cmd_env_list()


@env_app.command("set")
def env_set(key: str, value: str) -> None:
    """Set a setting override, e.g. IMDS_TIMEOUT_SECONDS 3."""
    from cwwizard.cli.commands import cmd_env_set

    with _handle_errors():
        cmd_env_set(key, value)


@env_app.command("unset")
def env_unset(key: str) -> None:
    """Remove a setting override."""
    from cwwizard.cli.commands import cmd_env_unset

    with _handle_errors():
        cmd_env_unset(key)


def cli_main() -> None:
    """Entry point for pyproject.toml scripts."""
    app()


if __name__ == "__main__":
    cli_main()
