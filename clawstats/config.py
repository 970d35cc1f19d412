"""Configuration management for claw-stats."""

import os
from pathlib import Path
from typing import Optional
import tomli
import tomli_w
from dataclasses import dataclass, field

from .utils.paths import CONFIG_FILE_NAME, get_default_cache_path

SORT_FIELDS = ("stars", "forks", "updated")


@dataclass
class GitHubConfig:
    """GitHub API configuration."""
    token: Optional[str] = None
    timeout: float = 30


@dataclass
class StatsConfig:
    """Defaults for the stats display."""
    default_user: Optional[str] = None
    sort: str = "stars"
    goal: int = 25
    include_forks: bool = False


@dataclass
class CacheConfig:
    """Snapshot cache configuration."""
    path: Path = field(default_factory=get_default_cache_path)
    enabled: bool = True


@dataclass
class Config:
    """Main configuration class."""
    github: GitHubConfig = field(default_factory=GitHubConfig)
    stats: StatsConfig = field(default_factory=StatsConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)


def find_config_file(start: Optional[Path] = None) -> Optional[Path]:
    """Find the config file, checking the start directory and parents."""
    current = start or Path.cwd()

    for parent in [current] + list(current.parents):
        config_path = parent / CONFIG_FILE_NAME
        if config_path.exists():
            return config_path

    return None


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from .claw-stats.toml, then apply environment overrides."""
    config = Config()

    if config_path is None:
        config_path = find_config_file()

    if config_path:
        try:
            with open(config_path, "rb") as f:
                data = tomli.load(f)

            if "github" in data:
                github = data["github"]
                config.github.token = github.get("token", config.github.token)
                config.github.timeout = github.get("timeout", config.github.timeout)

            if "stats" in data:
                stats = data["stats"]
                config.stats.default_user = stats.get("default_user") or config.stats.default_user
                config.stats.sort = stats.get("sort", config.stats.sort)
                config.stats.goal = stats.get("goal", config.stats.goal)
                config.stats.include_forks = stats.get("include_forks", config.stats.include_forks)

            if "cache" in data:
                cache = data["cache"]
                if cache.get("path"):
                    config.cache.path = Path(cache["path"]).expanduser()
                config.cache.enabled = cache.get("enabled", config.cache.enabled)

            if config.stats.sort not in SORT_FIELDS:
                raise ValueError(f"stats.sort must be one of {', '.join(SORT_FIELDS)}, got '{config.stats.sort}'")
            if not isinstance(config.stats.goal, int) or isinstance(config.stats.goal, bool):
                raise ValueError(f"stats.goal must be an integer, got {config.stats.goal!r}")

        except Exception as e:
            raise RuntimeError(f"Error loading config from {config_path}: {e}")

    # Fall back to environment variables
    if not config.github.token:
        config.github.token = os.environ.get("GITHUB_TOKEN") or None

    cache_override = os.environ.get("CLAW_STATS_CACHE")
    if cache_override:
        config.cache.path = Path(cache_override).expanduser()

    return config


def create_default_config(config_path: Optional[Path] = None) -> Path:
    """Create a default .claw-stats.toml file, by default in the current directory."""
    config_path = config_path or Path(CONFIG_FILE_NAME)

    if config_path.exists():
        raise FileExistsError(f"Configuration file {config_path} already exists")

    default_config = {
        "github": {
            "timeout": 30
        },
        "stats": {
            "default_user": "",
            "sort": "stars",
            "goal": 25,
            "include_forks": False
        },
        "cache": {
            "path": "~/.claw-stats-cache.json",
            "enabled": True
        }
    }

    with open(config_path, "wb") as f:
        tomli_w.dump(default_config, f)

    return config_path


def get_github_token(config: Config) -> Optional[str]:
    """Get GitHub token from config."""
    return config.github.token
