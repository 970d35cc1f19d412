"""Path and target utilities for claw-stats."""

from pathlib import Path
from typing import Optional, Tuple

CACHE_FILE_NAME = ".claw-stats-cache.json"
CONFIG_FILE_NAME = ".claw-stats.toml"


def get_home_dir() -> Path:
    """Get the invoking user's home directory, falling back to the cwd."""
    try:
        return Path.home()
    except RuntimeError:
        return Path(".")


def get_default_cache_path() -> Path:
    """Get the default snapshot cache file path."""
    return get_home_dir() / CACHE_FILE_NAME


def parse_target(target: str) -> Tuple[str, Optional[str]]:
    """Parse an 'account' or 'account/repo' string into (account, repo)."""
    target = target.strip()
    if "/" not in target:
        if not target:
            raise ValueError("Account name cannot be empty")
        return target, None

    parts = target.split("/")
    if len(parts) != 2:
        raise ValueError(f"Target must be in format 'account' or 'account/repo', got: {target}")

    account, repo = parts
    if not account or not repo:
        raise ValueError(f"Account and repository cannot be empty, got: {target}")

    return account, repo
