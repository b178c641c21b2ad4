"""lifelog CLI - log your life from the terminal."""

import sys

import click

from .adapters.file_store import JsonFileEntryStore, StorageParseError
from .adapters.gist_api import RemoteError
from .config import DebugConfig, configure_logging
from .core.entries import (
    Entry,
    format_day,
    format_time,
    group_by_date,
    latest_entry,
    needs_quoting_hint,
    select_days,
)
from .ports import EntryStore
from .sync import SyncCoordinator
from .workflows import get_store, log_entry, setup_gist, sync_store, timestamp_for

ALIASES = {
    "add": "log",
    "ls": "list",
    "history": "list",
    "rm": "remove",
    "delete": "remove",
    "dash": "dashboard",
    "dbg": "debug",
}

NOT_SET_UP = 'lg is not set up yet. Please run "lg setup" first.'


class LifelogGroup(click.Group):
    """Command group that resolves aliases and treats bare text as ``log``."""

    def get_command(self, ctx, cmd_name):
        return super().get_command(ctx, ALIASES.get(cmd_name, cmd_name))

    def parse_args(self, ctx, args):
        if args and not args[0].startswith("-") and self.get_command(ctx, args[0]) is None:
            ctx.meta["lifelog.implicit_log"] = True
            args = ["log", "--", *args]
        return super().parse_args(ctx, args)

    def invoke(self, ctx):
        try:
            return super().invoke(ctx)
        except StorageParseError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(1)


@click.group(cls=LifelogGroup, invoke_without_command=True)
@click.version_option(package_name="lifelog")
@click.pass_context
def main(ctx):
    """lg - log your life from the terminal.

    Run `lg "text"` to log an entry, or `lg` alone to be prompted for one.
    """
    configure_logging(DebugConfig.load().enabled)
    if ctx.obj is None:
        ctx.obj = SyncCoordinator()

    if ctx.invoked_subcommand is None:
        if _require_store() is None:
            return
        content = click.prompt("Enter your log entry", value_proc=_non_empty)
        ctx.invoke(log_cmd, text=(content,))


def quick_log():
    """Entry point for ``lgl``: every argument is part of one message."""
    args = sys.argv[1:]
    if not args:
        main(args=[], prog_name="lg")
    else:
        main(args=["log", "--", " ".join(args)], prog_name="lg")


def _non_empty(value: str) -> str:
    if not value.strip():
        raise click.BadParameter("Entry cannot be empty")
    return value.strip()


def _require_store() -> JsonFileEntryStore | None:
    """Storage for the current user, or None (with a hint) before setup."""
    store = get_store()
    if not store.exists():
        click.echo(NOT_SET_UP, err=True)
        return None
    return store


def _entry_line(entry: Entry) -> str:
    stamp = click.style(f"[{format_time(entry.timestamp)}]", fg="yellow")
    return f"{stamp} {entry.content}"


def _show_entries(entries: list[Entry], limit: int | None = None, reverse: bool = False) -> None:
    """Shared listing logic: newest day first unless reversed."""
    if not entries:
        click.echo('No entries found. Start logging with: lg "Your message here"')
        return

    grouped = group_by_date(entries)
    days = select_days(grouped, descending=not reverse, limit=limit)

    click.secho("\nLife Log Entries:", bold=True)
    total = 0
    for key in days:
        click.secho(f" {format_day(key)} ", bg="blue", fg="white", bold=True)
        for entry in grouped[key]:
            click.echo(_entry_line(entry))
        click.echo()
        total += len(grouped[key])

    click.echo(
        f"Total entries: {click.style(str(total), fg='green')} "
        f"across {click.style(str(len(days)), fg='green')} days"
    )


def _choose(message: str, labels: list[str]) -> int | None:
    """Numbered menu. Returns the chosen index, or None for cancel."""
    click.echo(message)
    for number, label in enumerate(labels, start=1):
        click.echo(f"  {number:>2}) {label}")
    click.echo(f"   0) {click.style('Cancel (exit without removing)', fg='blue')}")
    choice = click.prompt(">", type=click.IntRange(0, len(labels)), default=0, show_default=False)
    if choice == 0:
        return None
    return choice - 1


@main.command()
@click.pass_obj
def setup(coordinator: SyncCoordinator):
    """Initialize lg and optionally GitHub Gist sync."""
    store = get_store()
    already_set_up = store.exists()

    if already_set_up:
        click.echo("lg is already set up and ready to use.")
    else:
        store.initialize()
        click.secho("lg setup complete! You can now start logging your life.", fg="green")

    if click.confirm("Would you like to set up GitHub Gist synchronization for your logs?", default=False):
        _configure_gist_sync(store, coordinator)
    elif not already_set_up:
        click.echo('You can set up GitHub Gist sync later by running "lg setup" again.')

    if not already_set_up:
        click.echo('Try: lg "Your first life log entry"')


def _configure_gist_sync(store: EntryStore, coordinator: SyncCoordinator) -> None:
    click.echo("Setting up GitHub Gist synchronization...")
    click.echo("This will allow you to sync your logs across multiple devices.")
    click.echo('You need a GitHub Personal Access Token with the "gist" scope.')
    click.echo("You can create one at: https://github.com/settings/tokens")

    token = click.prompt(
        "Enter your GitHub Personal Access Token",
        default="",
        show_default=False,
        hide_input=True,
    ).strip()
    if not token:
        click.echo("Token cannot be empty. Gist sync setup aborted.", err=True)
        return

    click.echo("Initializing GitHub Gist sync...")
    try:
        entries, gist_id, changed = setup_gist(store, coordinator, token)
    except RemoteError as e:
        click.echo(f"Failed to set up GitHub Gist sync: {e}", err=True)
        return

    if changed:
        click.echo(f"Imported {len(entries)} entries from GitHub Gist.")
    click.secho("GitHub Gist synchronization set up successfully!", fg="green")
    click.echo(f"Your logs will be synced with Gist ID: {gist_id}")
    click.echo("You can view your gist at: https://gist.github.com/")


@main.command("log")
@click.argument("text", nargs=-1)
@click.option("--date", "custom_date", default=None, help="Custom date for the entry (YYYY-MM-DD)")
@click.pass_context
def log_cmd(ctx, text: tuple[str, ...], custom_date: str | None):
    """Log a life entry."""
    store = _require_store()
    if store is None:
        return

    content = " ".join(text).strip()
    if not content:
        click.echo("Please provide a message to log.", err=True)
        click.echo('Usage: lg log "Your message here"')
        return

    if ctx.meta.get("lifelog.implicit_log") and needs_quoting_hint(content):
        click.secho(
            "Tip: Your entry contains special characters. "
            "If you're missing part of your text, try using quotes:",
            fg="yellow",
        )
        click.secho(f'lg "{content}"', fg="cyan")

    try:
        timestamp = timestamp_for(custom_date)
    except ValueError:
        click.echo(f"Error: invalid date '{custom_date}', expected YYYY-MM-DD", err=True)
        return

    log_entry(store, ctx.obj, content, timestamp)
    click.secho("Entry logged successfully.", fg="green")
    _show_entries(store.load())


@main.command("list")
@click.option("-n", "--limit", type=int, default=None, help="Limit the number of days to display")
@click.option("-r", "--reverse", is_flag=True, help="Display oldest days first")
@click.option("--sync", "do_sync", is_flag=True, help="Sync with GitHub Gist before listing")
@click.pass_obj
def list_cmd(coordinator: SyncCoordinator, limit: int | None, reverse: bool, do_sync: bool):
    """List logged entries grouped by day."""
    store = _require_store()
    if store is None:
        return

    entries = sync_store(store, coordinator) if do_sync else store.load()
    _show_entries(entries, limit=limit, reverse=reverse)


@main.command()
@click.option("-d", "--date", "pick_date", is_flag=True, help="Choose a date to remove entries from")
@click.option("-l", "--last", is_flag=True, help="Remove the last entry")
def remove(pick_date: bool, last: bool):
    """Remove log entries."""
    store = _require_store()
    if store is None:
        return

    entries = store.load()
    if not entries:
        click.echo("No entries found. Nothing to remove.")
        return

    if last:
        _remove_last(store, entries)
        return

    grouped = group_by_date(entries)
    days = select_days(grouped, descending=True)

    if pick_date:
        labels = [f"{format_day(key)} ({len(grouped[key])} entries)" for key in days]
        index = _choose("Select a date to remove entries from:", labels)
        if index is None:
            click.echo("Operation cancelled.")
            return
        selected = days[index]
    else:
        selected = days[0]

    _remove_from_day(store, selected, grouped[selected])


def _remove_last(store: EntryStore, entries: list[Entry]) -> None:
    newest = latest_entry(entries)
    if not click.confirm(f"Are you sure you want to remove the last entry: {_entry_line(newest)}?", default=False):
        click.echo("Operation cancelled.")
        return

    store.remove_last()
    click.echo(f"{click.style('Success:', fg='green')} Removed entry: {_entry_line(newest)}")
    _show_entries(store.load())


def _remove_from_day(store: EntryStore, key: str, day_entries: list[Entry]) -> None:
    newest_first = sorted(day_entries, key=lambda e: e.timestamp, reverse=True)
    labels = [click.style("All entries for this day", fg="red")]
    labels += [_entry_line(entry) for entry in newest_first]

    index = _choose(f"Select an entry to remove from {format_day(key)}:", labels)
    if index is None:
        click.echo("Operation cancelled.")
        return

    if index == 0:
        removed = store.remove_all_for_day(key)
        click.echo(f"{click.style('Success:', fg='green')} Removed all {removed} entries for {format_day(key)}")
    else:
        entry = newest_first[index - 1]
        store.remove_by_timestamp(entry.timestamp)
        click.echo(f"{click.style('Success:', fg='green')} Removed entry: {_entry_line(entry)}")

    _show_entries(store.load())


@main.command()
@click.pass_obj
def dashboard(coordinator: SyncCoordinator):
    """Interactive dashboard for life logs."""
    store = _require_store()
    if store is None:
        return

    entries = store.load()
    if not entries:
        click.echo('No entries found. Start logging with: lg "Your first entry"')
        return

    from .dashboard import run_dashboard

    try:
        run_dashboard(store, coordinator, entries)
    except KeyboardInterrupt:
        pass


@main.command()
@click.option("-e", "--enable", is_flag=True, help="Enable debug logging")
@click.option("-d", "--disable", is_flag=True, help="Disable debug logging")
@click.option("-s", "--status", is_flag=True, help="Show current debug logging status")
def debug(enable: bool, disable: bool, status: bool):
    """Enable or disable debug logging."""
    if enable:
        DebugConfig(enabled=True).save()
        click.secho("Debug logging enabled", fg="green")
        return

    if disable:
        DebugConfig(enabled=False).save()
        click.secho("Debug logging disabled", fg="yellow")
        return

    state = click.style("enabled", fg="green") if DebugConfig.load().enabled else click.style("disabled", fg="yellow")
    click.echo(f"Debug logging is currently {state}")


if __name__ == "__main__":
    main()
