"""Create the main Typer CLI app."""

import typer

from rtlfix.cli._handle_stage_result import DISPLAY_FORMATS
from rtlfix.cli.constants import HELP
from rtlfix.cli.patch import register_patch_commands


def _create_app() -> typer.Typer:
    """Create and configure the main CLI Typer app."""
    app = typer.Typer(
        pretty_exceptions_show_locals=False,
        pretty_exceptions_enable=False,
        help="Fix right-to-left text rendering in Claude Desktop",
        context_settings={"help_option_names": ["-h", "--help"]},
        invoke_without_command=True,
        add_completion=False,
    )

    register_patch_commands(app)

    @app.command(name="help", help="Show usage and safety notes")
    def help_cmd() -> None:
        typer.echo(HELP)

    @app.callback(invoke_without_command=True)
    def main_callback(
        ctx: typer.Context,
        display: str = typer.Option("text", "--display", "-d", help="Output format: text, json or yaml"),
    ) -> None:
        if display not in DISPLAY_FORMATS:
            typer.echo(f"Error: --display must be one of {', '.join(DISPLAY_FORMATS)}, got '{display}'", err=True)
            raise typer.Exit(2)

        # Store display format in context for use by commands
        ctx.ensure_object(dict)
        ctx.obj["display_format"] = display

        if ctx.invoked_subcommand is None:
            typer.echo(HELP)
            raise typer.Exit()

    return app
