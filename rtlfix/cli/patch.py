"""Patch, unpatch and status commands with human-readable summaries."""

import typer
from rich import print

from rtlfix.api.patch.cmd_patch import cmd_patch
from rtlfix.api.patch.cmd_status import cmd_status
from rtlfix.api.patch.cmd_unpatch import cmd_unpatch
from rtlfix.cli._handle_stage_result import _handle_stage_result


def _print_pending(output: dict) -> None:
    if output.get("pending"):
        print("  [bold]Still to restore from backup:[/bold]")
        for path in output["pending"]:
            print(f"    {path}")


def _print_recovery(output: dict) -> None:
    if output.get("hint"):
        print(f"  [yellow]{output['hint']}[/yellow]")
    _print_pending(output)
    print("\n  If Claude Desktop is broken, try running: [bold]rtlfix unpatch[/bold]")
    print("  Or reinstall Claude Desktop to get a clean state.\n")


def patch_printer(output: dict) -> None:
    if output["errors"]:
        for error in output["errors"]:
            print(f"\n  [red]Failed to patch:[/red] {error}")
        _print_recovery(output)
        return

    print("\n  [green]RTL fix applied successfully![/green]\n")
    print(f"  Claude Desktop v{output['version']} has been patched.")
    print("  Launch Claude Desktop and try typing in Hebrew or Arabic.\n")
    print("  To undo, run: [bold]rtlfix unpatch[/bold]\n")


def unpatch_printer(output: dict) -> None:
    if output["errors"]:
        print(f"\n  [red]Failed to unpatch:[/red] {output['errors'][0]}")
        if output.get("hint"):
            print(f"  [yellow]{output['hint']}[/yellow]")
        _print_pending(output)
        print()
        return

    print("\n  [green]RTL fix removed successfully![/green]\n")
    print(f"  Claude Desktop v{output['version']} has been restored to its original state.\n")


def status_printer(output: dict) -> None:
    if output["errors"]:
        print(f"  [red]{output['errors'][0]}[/red]")
        if output.get("hint"):
            print(f"  [yellow]{output['hint']}[/yellow]")
        return

    print(f"  [bold]Claude Desktop version:[/bold] {output['version']}")
    if len(output["all_versions"]) > 1:
        print(f"  [bold]All installed versions:[/bold] {', '.join(output['all_versions'])}")
    running = "[yellow]Yes[/yellow] (close it before patching)" if output["running"] else "No"
    print(f"  [bold]Running:[/bold]  {running}")
    print(f"  [bold]Patched:[/bold]  {'[green]Yes[/green]' if output['patched'] else 'No'}")
    info = output.get("patch_info")
    if output["patched"] and info:
        print(f"    Patched on:   {info.get('patchedAt', 'unknown')}")
        print(f"    Tool version: {info.get('version', 'unknown')}")
    if output["code_patched"] is None:
        print("  [bold]Code:[/bold]     [dim]could not check app.asar[/dim]")
    backups = "Yes (can unpatch)" if output["backups_exist"] else "No"
    print(f"  [bold]Backups:[/bold]  {backups}")
    paths = output["paths"]
    print("\n  [bold]Paths:[/bold]")
    print(f"    App dir: {paths.get('app_dir', '')}")
    print(f"    ASAR:    {paths.get('asar', '')}")
    print(f"    EXE:     {paths.get('exe', '')}")
    print()


def register_patch_commands(app: typer.Typer) -> None:
    """Register patch, unpatch and status directly on the given app."""

    @app.command(name="patch", help="Apply the RTL fix (backs up original files first)")
    def patch_cmd() -> None:
        _handle_stage_result(cmd_patch, result_printer=patch_printer)()

    @app.command(name="unpatch", help="Remove the RTL fix and restore original files")
    def unpatch_cmd() -> None:
        _handle_stage_result(cmd_unpatch, result_printer=unpatch_printer)()

    @app.command(name="status", help="Show current patch status and Claude version info")
    def status_cmd() -> None:
        _handle_stage_result(cmd_status, result_printer=status_printer)()
