"""Mood entry CLI commands."""

from datetime import timedelta

import click
from rich.console import Console
from rich.table import Table

from cli.utils import get_components, now, parse_day
from moods.models import MoodEntry
from moods.storage import parse_tags
from shared_types import Mood

console = Console()


@click.command("add")
@click.argument("mood", type=click.Choice([m.value for m in Mood], case_sensitive=False))
@click.argument("content", required=False)
@click.option("--date", "day", help="Entry date (YYYY-MM-DD), defaults to now")
@click.option("--tags", help="Comma-separated tags")
def add(mood: str, content: str, day: str, tags: str):
    """Log a mood entry. Opens editor if no content provided."""
    if not content:
        content = click.edit("# How are you feeling?\n\n")
        if not content:
            console.print("[yellow]No content provided, cancelled.[/]")
            return
        content = content.strip()

    try:
        date = parse_day(day) or now()
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--date")

    c = get_components()
    entry = MoodEntry(
        user_id=c["user_id"],
        date=date,
        mood=mood.lower(),
        content=content,
        tags=parse_tags(tags),
    )
    try:
        entry_id = c["store"].save(entry)
    except ValueError as e:
        console.print(f"[red]Error:[/] {e}")
        raise SystemExit(1)

    emoji = c["engine"].scale.emoji_for(entry.known_mood)
    console.print(f"[green]Logged:[/] {emoji} {entry.mood} ({entry_id})")


@click.command("list")
@click.option("-d", "--days", default=None, type=int, help="Only the last N days")
@click.option("-n", "--limit", default=20, help="Max entries to show")
def list_entries(days: int, limit: int):
    """List recent mood entries."""
    c = get_components()
    start = None
    if days:
        start = (now() - timedelta(days=days - 1)).replace(hour=0, minute=0, second=0, microsecond=0)
    entries = c["store"].list_entries(c["user_id"], start=start, limit=limit)

    if not entries:
        console.print("[yellow]No entries found. Log one with [bold]moodlog add[/].[/]")
        return

    table = Table(show_header=True, title="Mood entries")
    table.add_column("ID", style="dim")
    table.add_column("Date", style="cyan")
    table.add_column("Mood", style="green")
    table.add_column("Entry")
    table.add_column("Tags", style="dim")

    for e in entries:
        emoji = c["engine"].scale.emoji_for(e.known_mood)
        table.add_row(
            e.id,
            e.date.strftime("%Y-%m-%d %H:%M"),
            f"{emoji} {e.mood}",
            e.content[:40].replace("\n", " "),
            ", ".join(e.tags[:3]),
        )

    console.print(table)


@click.command("delete")
@click.argument("entry_id")
def delete(entry_id: str):
    """Delete a mood entry by ID."""
    c = get_components()
    if c["store"].delete(c["user_id"], entry_id):
        console.print(f"[green]Deleted:[/] {entry_id}")
    else:
        console.print(f"[red]Entry not found:[/] {entry_id}")
        raise SystemExit(1)
