"""Stats command: fetch, aggregate, diff against the last run and display."""

import json
import logging
from pathlib import Path
from typing import Optional

import typer

from ..cache import SnapshotCache
from ..config import load_config, get_github_token
from ..stats import normalize_repo, filter_forks, sort_repos, build_output, build_snapshot, build_changes
from ..utils.github import fetch_user_repos, fetch_repo, detect_user_from_git_remote
from ..utils.logging import console, error, warning
from ..utils.paths import parse_target
from ..utils.render import render_stats

logger = logging.getLogger(__name__)


def resolve_target(target: Optional[str], default_user: Optional[str]):
    """Work out (user, repo) from the argument, the configured default or the git remote."""
    if target:
        return parse_target(target)
    if default_user:
        return parse_target(default_user)

    detected = detect_user_from_git_remote()
    if detected:
        logger.debug("Detected account %s from git remote", detected)
        return detected, None
    return None, None


def stats_main(
    target: Optional[str] = None,
    json_output: bool = False,
    diff: bool = False,
    sort: Optional[str] = None,
    goal: Optional[int] = None,
    include_forks: bool = False,
    cache_file: Optional[Path] = None,
    no_cache: bool = False,
) -> None:
    """Show stars, forks and goal progress for an account or a single repository."""
    try:
        config = load_config()
        token = get_github_token(config)

        try:
            user, repo_name = resolve_target(target, config.stats.default_user)
        except ValueError as e:
            error(str(e))
            raise typer.Exit(1)

        if not user:
            error("GitHub username required")
            error("Usage: claw-stats <user>")
            raise typer.Exit(1)

        sort = sort or config.stats.sort
        goal = config.stats.goal if goal is None else goal
        include_forks = include_forks or config.stats.include_forks

        cache = None
        store = {}
        if config.cache.enabled and not no_cache:
            cache = SnapshotCache(cache_file or config.cache.path)
            store = cache.load()
        elif diff:
            warning("Snapshot cache is disabled, so every change shows as new")
        previous = SnapshotCache.get(store, user)

        if repo_name:
            records = fetch_repo(user, repo_name, token, timeout=config.github.timeout)
        else:
            records = fetch_user_repos(user, token, timeout=config.github.timeout)

        repos = filter_forks([normalize_repo(r) for r in records], include_forks)
        repos = sort_repos(repos, sort)
        output = build_output(user, repos, goal)

        changes = build_changes(output, previous) if diff else None

        if cache is not None:
            SnapshotCache.put(store, user, build_snapshot(output))
            cache.save(store)

        if json_output:
            if changes is not None:
                output["changes"] = changes
            typer.echo(json.dumps(output, ensure_ascii=False, indent=2))
            return

        render_stats(console, output, changes)

    except typer.Exit:
        raise
    except KeyboardInterrupt:
        error("Interrupted by user")
        raise typer.Exit(1)
    except Exception as e:
        error(f"Error: {e}")
        raise typer.Exit(1)
