#!/usr/bin/env python3
"""
Latin - filesystem one-liners from the shell.

Main entry point for the Latin CLI application.
"""

from dataclasses import asdict
from functools import partial
from typing import Callable, Optional

import click
import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from core import Settings, AuditLogger, ActionType, ActionStatus
from core.config import DEFAULT_CONFIG_PATH
from latin import __version__, directory, file


console = Console()


def get_audit_logger(settings: Settings) -> Optional[AuditLogger]:
    """Get the audit logger, or None when auditing is switched off."""
    if not settings.audit:
        return None
    return AuditLogger(log_path=settings.audit_log)


def report_error(ctx: click.Context, error: Exception) -> None:
    """Print an error in red and exit with status 1."""
    console.print(f"[red]Error:[/red] {escape(str(error))}")
    ctx.exit(1)


def get_line_sep(ctx: click.Context) -> bytes:
    """Resolve the configured line terminator, exiting on a bad setting."""
    settings: Settings = ctx.obj
    try:
        return settings.line_sep
    except ValueError as e:
        report_error(ctx, e)


def run_audited(
    ctx: click.Context,
    action_type: ActionType,
    description: str,
    target: str,
    operation: Callable[[], None]
) -> None:
    """Run a mutating operation and record its outcome in the audit log."""
    settings: Settings = ctx.obj
    logger = get_audit_logger(settings)

    try:
        operation()
    except OSError as e:
        if logger:
            logger.log_action(
                action_type=action_type,
                description=f"Failed: {description}",
                target=target,
                status=ActionStatus.FAILED,
                result=f"Error: {e}"
            )
        report_error(ctx, e)
        return

    if logger:
        logger.log_action(
            action_type=action_type,
            description=description,
            target=target,
            status=ActionStatus.EXECUTED
        )
    console.print(f"[green]{escape(description)}[/green]")


@click.group()
@click.version_option(version=__version__, prog_name="Latin")
@click.option("--config", "config_path", default=DEFAULT_CONFIG_PATH, show_default=True,
              help="YAML settings file.")
@click.pass_context
def latin(ctx: click.Context, config_path: str):
    """
    Latin - filesystem one-liners.

    Read, write, list, copy and remove files and directories.
    """
    ctx.obj = Settings.load(config_path)
    ctx.meta["config_path"] = config_path

    # config stays usable so a broken file can be repaired
    if ctx.invoked_subcommand != "config":
        try:
            ctx.obj.validate()
        except ValueError as e:
            report_error(ctx, e)


@latin.command()
@click.argument("path")
@click.option("--dir", "is_dir", is_flag=True, help="Check for a directory instead of a file.")
@click.pass_context
def exists(ctx: click.Context, path: str, is_dir: bool):
    """Check whether PATH is an existing file (or directory)."""
    found = directory.exists(path) if is_dir else file.exists(path)
    kind = "directory" if is_dir else "file"

    if found:
        console.print(f"✅ {escape(path)} is a {kind}")
    else:
        console.print(f"❌ {escape(path)} is not a {kind}")
        ctx.exit(1)


@latin.command()
@click.argument("path")
@click.option("--lossy", is_flag=True, help="Replace invalid UTF-8 instead of failing.")
@click.option("--bytes", "raw", is_flag=True, help="Write the raw bytes to stdout.")
@click.pass_context
def cat(ctx: click.Context, path: str, lossy: bool, raw: bool):
    """Print the contents of a file."""
    try:
        if raw:
            click.echo(file.read(path), nl=False)
        elif lossy:
            click.echo(file.read_text_utf8_lossy(path), nl=False)
        else:
            click.echo(file.read_text_utf8(path), nl=False)
    except (OSError, UnicodeDecodeError) as e:
        report_error(ctx, e)


@latin.command()
@click.argument("path")
@click.option("--number", "-n", is_flag=True, help="Prefix each line with its number.")
@click.pass_context
def lines(ctx: click.Context, path: str, number: bool):
    """Print a file line by line, reporting lines that can't be decoded."""
    try:
        reader = file.read_lines(path)
    except OSError as e:
        report_error(ctx, e)
        return

    failures = 0
    with reader:
        for i, result in enumerate(reader, start=1):
            if not result.ok:
                failures += 1
                console.print(f"[red]line {i}: {escape(str(result.error))}[/red]")
                continue
            click.echo(f"{i}\t{result.line}" if number else result.line)

    if failures:
        ctx.exit(1)


@latin.command()
@click.argument("path")
@click.argument("text", nargs=-1, required=True)
@click.option("--lines", "as_lines", is_flag=True, help="Write each TEXT as its own line.")
@click.pass_context
def write(ctx: click.Context, path: str, text, as_lines: bool):
    """Create or overwrite PATH with TEXT."""
    if as_lines:
        operation = partial(file.write_lines, path, text, line_sep=get_line_sep(ctx))
    else:
        operation = partial(file.write, path, " ".join(text))

    run_audited(ctx, ActionType.WRITE, f"Wrote {path}", path, operation)


@latin.command()
@click.argument("path")
@click.argument("text")
@click.option("--newline", is_flag=True, help="Add a line terminator after TEXT.")
@click.pass_context
def append(ctx: click.Context, path: str, text: str, newline: bool):
    """Append TEXT to PATH, creating it if needed."""
    if newline:
        operation = partial(file.append_line, path, text, line_sep=get_line_sep(ctx))
    else:
        operation = partial(file.append, path, text)

    run_audited(ctx, ActionType.WRITE, f"Appended to {path}", path, operation)


@latin.command()
@click.argument("src")
@click.argument("dst")
@click.pass_context
def cp(ctx: click.Context, src: str, dst: str):
    """Copy the contents of SRC into DST."""
    run_audited(ctx, ActionType.WRITE, f"Copied {src} to {dst}", dst, partial(file.copy, src, dst))


@latin.command()
@click.argument("path")
@click.pass_context
def rm(ctx: click.Context, path: str):
    """Remove a file."""
    run_audited(ctx, ActionType.DELETE, f"Removed {path}", path, partial(file.remove, path))


@latin.command()
@click.argument("path")
@click.option("--yes", "-y", is_flag=True, help="Don't ask for confirmation.")
@click.pass_context
def rmdir(ctx: click.Context, path: str, yes: bool):
    """Remove a directory and everything beneath it."""
    if not yes:
        click.confirm(f"Remove {path} and everything beneath it?", abort=True)

    run_audited(ctx, ActionType.DELETE, f"Removed directory {path}", path, partial(directory.remove, path))


@latin.command()
@click.argument("path", default=".")
@click.option("--files", "only", flag_value="files", help="Only regular files.")
@click.option("--dirs", "only", flag_value="dirs", help="Only subdirectories.")
@click.option("--follow-symlinks/--no-follow-symlinks", default=None,
              help="Classify symlinks by their targets.")
@click.pass_context
def ls(ctx: click.Context, path: str, only: Optional[str], follow_symlinks: Optional[bool]):
    """List the entries of a directory."""
    settings: Settings = ctx.obj
    if follow_symlinks is None:
        follow_symlinks = settings.follow_symlinks

    try:
        if only == "files":
            entries = directory.files(path, follow_symlinks=follow_symlinks)
        elif only == "dirs":
            entries = directory.sub_directories(path, follow_symlinks=follow_symlinks)
        else:
            entries = directory.children(path)
    except OSError as e:
        report_error(ctx, e)
        return

    if not entries:
        console.print("[dim]No entries found.[/dim]")
        return

    table = Table(title=escape(path))
    table.add_column("Name")
    table.add_column("Type", style="dim")

    for entry in sorted(entries):
        if entry.is_symlink():
            kind = "link"
        elif entry.is_dir():
            kind = "dir"
        else:
            kind = "file"
        table.add_row(escape(entry.name), kind)

    console.print(table)


@latin.command("has-ext")
@click.argument("path")
@click.argument("ext")
@click.pass_context
def has_ext(ctx: click.Context, path: str, ext: str):
    """Check whether PATH ends with the extension EXT (no leading dot)."""
    if file.has_extension(path, ext):
        console.print(f"✅ {escape(path)} has extension {escape(ext)}")
    else:
        console.print(f"❌ {escape(path)} does not have extension {escape(ext)}")
        ctx.exit(1)


@latin.command()
@click.option("--limit", default=20, show_default=True, help="Number of entries to show.")
@click.pass_context
def audit(ctx: click.Context, limit: int):
    """View the audit log."""
    settings: Settings = ctx.obj
    logger = AuditLogger(log_path=settings.audit_log)
    entries = logger.get_recent(limit=limit)

    if not entries:
        console.print("[dim]No audit entries found.[/dim]")
        return

    table = Table(title="Recent Audit Log")
    table.add_column("Time", style="dim")
    table.add_column("Action")
    table.add_column("Status")

    for entry in entries:
        time_str = entry.timestamp.split("T")[1].split(".")[0] if "T" in entry.timestamp else entry.timestamp

        status_str = entry.status
        if entry.status == ActionStatus.EXECUTED.value:
            status_str = f"[green]{entry.status}[/green]"
        elif entry.status == ActionStatus.FAILED.value:
            status_str = f"[red]{entry.status}[/red]"

        description = entry.action_description
        if len(description) > 50:
            description = description[:50] + "..."

        table.add_row(time_str, escape(description), status_str)

    console.print(table)


@latin.group()
def config():
    """Show or change CLI settings."""
    pass


@config.command("show")
@click.pass_context
def config_show(ctx: click.Context):
    """List current settings."""
    settings: Settings = ctx.obj
    console.print("\n[bold]Settings:[/bold]")
    for key, value in asdict(settings).items():
        console.print(f"  {key}: {escape(str(value))}")


@config.command("set")
@click.argument("key")
@click.argument("value")
@click.pass_context
def config_set(ctx: click.Context, key: str, value: str):
    """Set KEY to VALUE and save the settings file."""
    settings: Settings = ctx.obj
    if key not in Settings.__dataclass_fields__:
        report_error(ctx, ValueError(f"Unknown setting: {key}"))
        return

    try:
        setattr(settings, key, yaml.safe_load(value))
        settings.validate()
        settings.save(ctx.meta["config_path"])
    except (yaml.YAMLError, ValueError, OSError) as e:
        report_error(ctx, e)
        return

    console.print(f"[green]Set {key}:[/green] {escape(value)}")


if __name__ == "__main__":
    latin()
