"""Main CLI application for claw-stats."""

import typer
from enum import Enum
from pathlib import Path
from typing import Optional

from .config import create_default_config
from .utils.logging import success, error, info


class SortField(str, Enum):
    """Fields the repository list can be ordered by."""
    stars = "stars"
    forks = "forks"
    updated = "updated"


# Create the main Typer app
app = typer.Typer(
    name="claw-stats",
    help="GitHub stats CLI: track stars, forks, and progress across your repos",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.command(
    epilog="Examples: claw-stats octocat | claw-stats octocat --json | "
           "claw-stats octocat/hello-world | claw-stats octocat --diff"
)
def stats(
    target: Optional[str] = typer.Argument(None, help="GitHub user (all repos) or user/repo (single repo)"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output JSON instead of a table"),
    diff: bool = typer.Option(False, "--diff", "-d", help="Show changes since last run"),
    sort: Optional[SortField] = typer.Option(None, "--sort", "-s", help="Sort by: stars, forks, updated (default: stars)"),
    goal: Optional[int] = typer.Option(None, "--goal", "-g", help="Star goal for the progress bar (default: 25)"),
    include_forks: bool = typer.Option(False, "--include-forks", help="Include forked repositories"),
    cache_file: Optional[Path] = typer.Option(None, "--cache-file", help="Snapshot cache location (default: ~/.claw-stats-cache.json)"),
    no_cache: bool = typer.Option(False, "--no-cache", help="Neither read nor update the snapshot cache"),
    init: bool = typer.Option(False, "--init", help="Write a default .claw-stats.toml in the current directory and exit"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
) -> None:
    """Show stars, forks, and goal progress for a GitHub user or repository."""
    if verbose:
        # Enable verbose logging
        import logging
        logging.basicConfig(level=logging.DEBUG)

    if init:
        init_config()
        return

    from .commands.stats import stats_main
    stats_main(
        target=target,
        json_output=json_output,
        diff=diff,
        sort=sort.value if sort else None,
        goal=goal,
        include_forks=include_forks,
        cache_file=cache_file,
        no_cache=no_cache,
    )


def init_config() -> None:
    """Create a default configuration file in the current directory."""
    try:
        config_path = create_default_config()
        success(f"Created configuration file: {config_path}")
        info("Set stats.default_user to run claw-stats without arguments")
    except FileExistsError as e:
        error(str(e))
        raise typer.Exit(1)
    except Exception as e:
        error(f"Failed to create configuration: {e}")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
