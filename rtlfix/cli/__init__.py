"""CLI - main entry point."""

import sys


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point; returns the process exit code."""
    import click
    import typer

    from rtlfix.cli._create_app import _create_app

    if argv is None:
        argv = sys.argv[1:]

    if "--version" in argv:
        from rtlfix.api.config.cmd_version import cmd_version

        result = cmd_version().run()
        print(f"rtlfix {result.output.get('version', 'unknown')}")
        return 0 if result.success else 1

    app = _create_app()
    try:
        code = app(args=argv, standalone_mode=False)
    except click.exceptions.UsageError as e:
        typer.echo(f"Usage error: {e}", err=True)
        return 2
    except click.exceptions.Abort:
        return 130
    return code if isinstance(code, int) else 0
