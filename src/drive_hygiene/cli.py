#!/usr/bin/env python3
"""Drive Hygiene CLI - storage health and cleanup inventory."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from .decoder import encode_scan
from .errors import DriveHygieneError
from .exporter import ReportFormat, export_report
from .formatting import (
    fmt_percent,
    fmt_size,
    fmt_text,
    fmt_timestamp,
    fmt_value,
    usage_bar,
)
from .inventory import ScanView
from .logger import get_logger, set_console_level, setup_file_logging
from .powershell import launch_disk_cleanup, open_inspector_script, run_inspection
from .rules import CRITICAL, OK, WARNING

app = typer.Typer(
    name="drive-hygiene",
    help="Inspect disks, volumes, SMART and TRIM status, and export hygiene reports.",
    add_completion=False,
)

console = Console()
logger = get_logger(__name__)

TIER_STYLES = {OK: "green", WARNING: "yellow", CRITICAL: "red"}


def _styled(text: str, tier: str) -> str:
    style = TIER_STYLES.get(tier, "dim")
    return f"[{style}]{text}[/{style}]"


def _configure_logging(verbose: bool, log_file: Optional[str]) -> None:
    set_console_level(verbose)
    if log_file:
        setup_file_logging(log_file=log_file, verbose=verbose)


def render_scan(view: ScanView, out: Console) -> None:
    meta = view.metadata
    summary = view.summary

    table = Table(title="System Summary", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Computer", fmt_text(meta.host_name if meta else None))
    table.add_row("Scan Time", fmt_timestamp(meta.timestamp_utc if meta else None))
    table.add_row("Privilege", "Administrator" if view.is_administrator else "Standard User")
    table.add_row("Physical Disks", str(summary.total_physical_disks))
    table.add_row("Volumes", str(summary.total_volumes))
    table.add_row("Critical Volumes", str(summary.critical_volume_count))
    table.add_row("Warning Volumes", str(summary.warning_volume_count))
    table.add_row(
        "Reclaimable Space",
        fmt_size(summary.total_reclaimable_formatted, summary.total_reclaimable_bytes),
    )
    out.print(table)

    if view.disks:
        table = Table(title="Physical Disks")
        for col in ("Id", "Name", "Media", "Bus", "Size", "Health", "Temp", "Wear"):
            table.add_column(col)
        for disk in view.disks:
            smart = view.smart_for_disk(disk.id)
            table.add_row(
                str(disk.id),
                fmt_text(disk.display_name),
                fmt_text(disk.media_type),
                fmt_text(disk.bus_type),
                fmt_size(disk.size_formatted, disk.size_bytes),
                _styled(fmt_text(disk.health_status), view.disk_tier(disk)),
                fmt_value(smart[0].temperature) if smart else "N/A",
                fmt_value(smart[0].wear) if smart else "N/A",
            )
        out.print(table)

    if view.volumes:
        table = Table(title="Volumes")
        for col in ("Drive", "Name", "FS", "Usage", "Used", "Total", "Free", "Status"):
            table.add_column(col)
        for vol in view.volumes:
            tier = view.volume_tier(vol)
            table.add_row(
                fmt_text(vol.drive_letter, ""),
                fmt_text(vol.volume_name, ""),
                fmt_text(vol.file_system, ""),
                _styled(usage_bar(view.volume_bar_percent(vol)), tier),
                fmt_size(vol.used_space_formatted, vol.used_space_bytes),
                fmt_size(vol.total_size_formatted, vol.total_size_bytes),
                fmt_percent(vol.percent_free),
                _styled(fmt_text(vol.status), tier),
            )
        out.print(table)

    if view.trim is not None:
        state = "Enabled" if view.trim.trim_enabled else "Disabled"
        out.print(_styled(f"TRIM: {state}", view.trim_tier()))
        if view.trim.details:
            out.print(f"[dim]{view.trim.details}[/dim]")

    candidates = view.candidates
    if candidates:
        table = Table(title="Cleanup Candidates")
        for col in ("Category", "Path", "Files", "Size"):
            table.add_column(col)
        for item in candidates:
            table.add_row(
                fmt_text(item.category),
                fmt_text(item.path, ""),
                str(item.file_count),
                fmt_size(item.size_formatted, item.size_bytes),
            )
        out.print(table)
        out.print(
            "[yellow]Total potentially reclaimable: "
            f"{fmt_size(summary.total_reclaimable_formatted, summary.total_reclaimable_bytes)}[/yellow]"
        )

    for reason in view.discrepancies():
        out.print(f"[yellow]Summary mismatch:[/yellow] {reason}")


@app.command()
def scan(
    as_json: bool = typer.Option(False, "--json", help="Print the scan document as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Also log to this file"),
):
    """Run a full inspection and show the results."""
    _configure_logging(verbose, log_file)
    try:
        document = run_inspection()
    except (DriveHygieneError, ValueError) as exc:
        console.print(f"[red]Inspection failed:[/red] {exc}")
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(encode_scan(document), indent=2))
        return
    render_scan(ScanView(document), console)
    console.print("[green]Inspection completed successfully.[/green]")


@app.command()
def export(
    fmt: ReportFormat = typer.Option(
        ReportFormat.TEXT, "--format", "-f", case_sensitive=False, help="Report format"
    ),
    output: Path = typer.Option(Path("."), "--output", "-o", help="Directory for the report"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Also log to this file"),
):
    """Export a freshly scanned report (HTML or Text)."""
    _configure_logging(verbose, log_file)
    try:
        path = export_report(fmt, output.resolve())
    except (DriveHygieneError, ValueError) as exc:
        console.print(f"[red]Export failed:[/red] {exc}")
        raise typer.Exit(1)
    console.print(f"[green]Report exported successfully:[/green] {path}")


@app.command()
def cleanup(drive: str = typer.Option("C", "--drive", "-d", help="Drive letter")):
    """Open the Windows Disk Cleanup utility."""
    try:
        launch_disk_cleanup(drive)
    except DriveHygieneError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)
    console.print("Windows Disk Cleanup has been launched.")


@app.command("show-script")
def show_script():
    """Open the inspector script in the default viewer."""
    try:
        open_inspector_script()
    except (DriveHygieneError, ValueError) as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)


@app.command()
def gui():
    """Start the desktop window."""
    from .ui import main

    main()


if __name__ == "__main__":
    app()
