"""Human-readable rendering of account stats."""

from typing import Any, Dict, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

BAR_WIDTH = 20
RULE = "─" * 50


def format_count(n: int) -> str:
    """Format a count with a K/M suffix above a thousand."""
    if n >= 1_000_000:
        return f"{n / 1_000_000:.1f}M"
    if n >= 1_000:
        return f"{n / 1_000:.1f}K"
    return str(n)


def progress_bar(percent: int, width: int = BAR_WIDTH) -> str:
    """Bar of `width` cells, one filled cell per 100/width percent reached."""
    percent = max(0, min(100, percent))
    filled = percent * width // 100
    return "█" * filled + "░" * (width - filled)


def _label(changes: Optional[Dict[str, Any]], field: str) -> str:
    if not changes:
        return ""
    return changes[field]["label"]


def repo_table(output: Dict[str, Any], changes: Optional[Dict[str, Any]] = None) -> Table:
    """Build the per-repository table; delta columns only appear with changes."""
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    # Only the name folds; counts, labels and language are never shrunk
    table.add_column("Repository", style="cyan", overflow="fold")
    table.add_column("⭐", justify="right", no_wrap=True)
    if changes is not None:
        table.add_column("Δ", style="green", no_wrap=True)
    table.add_column("🍴", justify="right", no_wrap=True)
    if changes is not None:
        table.add_column("Δ", style="green", no_wrap=True)
    table.add_column("Language", style="dim", no_wrap=True)

    for repo in output["repos"]:
        repo_changes = changes["repos"].get(repo["name"]) if changes is not None else None
        row = [escape(repo["name"]), str(repo["stars"])]
        if changes is not None:
            row.append(_label(repo_changes, "stars"))
        row.append(str(repo["forks"]))
        if changes is not None:
            row.append(_label(repo_changes, "forks"))
        row.append(escape(repo.get("language") or ""))
        table.add_row(*row)

    return table


def render_stats(console: Console, output: Dict[str, Any], changes: Optional[Dict[str, Any]] = None) -> None:
    """Print the stats header, repo table and progress toward the star goal."""
    totals = output["totals"]
    total_changes = changes["totals"] if changes is not None else None

    console.print(f"\n📊 GitHub Stats for {escape(output['user'])}", style="bold", highlight=False)
    console.print(RULE)
    console.print(f"⭐ Stars: {format_count(totals['stars'])} {_label(total_changes, 'stars')}".rstrip(), highlight=False)
    console.print(f"🍴 Forks: {format_count(totals['forks'])} {_label(total_changes, 'forks')}".rstrip(), highlight=False)
    console.print(f"📦 Repos: {totals['repos']}", highlight=False)
    console.print(RULE)

    if output["repos"]:
        console.print(repo_table(output, changes))
        console.print(RULE)

    goal = output["goal"]
    bar = progress_bar(goal["progress"])
    console.print(f"🎯 Progress to {goal['stars']} stars: [{bar}] {goal['progress']}%", highlight=False, markup=False)
    console.print()
