"""Dashboard and insights CLI commands."""

import json

import click
from rich.console import Console
from rich.table import Table

from cli.utils import get_components, now

console = Console()

BAR_STYLE = {5: "green", 4: "green", 3: "yellow", 2: "red", 1: "red"}


def _compute(frequency_window_key: str):
    c = get_components()
    entries = c["store"].list_entries(c["user_id"])
    window = getattr(c["config"].analytics, frequency_window_key)
    return c["engine"].compute(entries, now(), frequency_window=window)


def _print_headline(data: dict) -> None:
    avg = data["weekly_average_mood"]
    freq = data["most_frequent_mood"]
    stats = data["journal_entries"]
    streak = data["streak"]

    console.print(
        f"\n[bold]Weekly mood:[/] {avg['label']} ({avg['value']})  "
        f"[dim]vs last week {avg['improvement']}[/]"
    )
    if freq["count"]:
        console.print(
            f"[bold]Most frequent ({freq['window']}):[/] {freq['emoji']} {freq['mood']} x{freq['count']}"
        )
    else:
        console.print(f"[bold]Most frequent ({freq['window']}):[/] {freq['emoji']} -")
    console.print(
        f"[bold]Entries:[/] {stats['total']} total, {stats['this_week']} this week "
        f"[dim]({stats['change']})[/]"
    )
    console.print(
        f"[bold]Streak:[/] {streak['current']} day(s) running, longest {streak['longest']}"
    )


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Print raw JSON")
def dashboard(as_json: bool):
    """Headline mood stats (monthly most-frequent mood)."""
    result = _compute("dashboard_frequency_window")
    data = result.to_dashboard_dict()
    if as_json:
        click.echo(json.dumps(data, ensure_ascii=False, indent=2))
        return
    _print_headline(data)


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Print raw JSON")
def insights(as_json: bool):
    """Full analytics: weekday chart, distribution, insights, recommendations."""
    result = _compute("insights_frequency_window")
    data = result.to_dict()
    if as_json:
        click.echo(json.dumps(data, ensure_ascii=False, indent=2))
        return

    _print_headline(data)

    table = Table(show_header=True, title="This week")
    table.add_column("Day", style="cyan")
    table.add_column("Mood")
    table.add_column("Value")
    for bucket in data["weekly_mood_data"]:
        style = BAR_STYLE.get(bucket["value"], "dim")
        bar = f"[{style}]{'█' * bucket['value']}[/]" if bucket["count"] else "[dim]·[/]"
        table.add_row(bucket["day"], bucket["mood"], bar)
    console.print(table)

    if data["monthly_mood_data"]:
        dist = Table(show_header=True, title="Last 30 days")
        dist.add_column("Mood")
        dist.add_column("Entries", justify="right")
        for row in data["monthly_mood_data"]:
            dist.add_row(row["name"], str(row["value"]))
        console.print(dist)

    for block in data["insights"]:
        console.print(f"\n[bold cyan]{block['title']}[/] [dim]{block['description']}[/]")
        if "content" in block:
            console.print(block["content"])
        for goal in block.get("goals", []):
            console.print(f"  {goal['name']}: {goal['current']}/{goal['target']}")

    console.print("\n[bold]Recommendations[/]")
    for i, rec in enumerate(data["recommendations"], 1):
        console.print(f"{i}. [green]{rec['title']}[/] [dim]{rec['description']}[/]")
        console.print(f"   {rec['content']}")
