"""Aggregation of repository records into totals, snapshots and deltas."""

import math
from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Any, Dict, List, Optional

import pytz

from .cache import Snapshot, compute_delta, format_delta
from .utils.dates import parse_timestamp, utc_now_iso

DIFF_FIELDS = ("stars", "forks")
_EPOCH = datetime(1970, 1, 1, tzinfo=pytz.utc)


@dataclass
class RepoStats:
    """A repository's counts and metadata, normalised from the API record."""
    name: str
    stars: int = 0
    forks: int = 0
    watchers: int = 0
    language: Optional[str] = None
    updated: Optional[str] = None
    url: Optional[str] = None
    description: Optional[str] = None
    fork: bool = False

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        del data["fork"]
        return data


def normalize_repo(record: Dict[str, Any]) -> RepoStats:
    """Map a GitHub repository object onto RepoStats."""
    return RepoStats(
        name=record.get("name") or "",
        stars=record.get("stargazers_count") or 0,
        forks=record.get("forks_count") or 0,
        watchers=record.get("watchers_count") or 0,
        language=record.get("language"),
        updated=record.get("updated_at"),
        url=record.get("html_url"),
        description=record.get("description"),
        fork=bool(record.get("fork", False)),
    )


def filter_forks(repos: List[RepoStats], include_forks: bool = False) -> List[RepoStats]:
    """Drop forked repositories unless they were asked for."""
    if include_forks:
        return list(repos)
    return [repo for repo in repos if not repo.fork]


def sort_repos(repos: List[RepoStats], field: str = "stars") -> List[RepoStats]:
    """Sort repositories descending by stars, forks or last update."""
    if field == "forks":
        return sorted(repos, key=lambda r: r.forks, reverse=True)
    if field == "updated":
        return sorted(repos, key=lambda r: parse_timestamp(r.updated) or _EPOCH, reverse=True)
    return sorted(repos, key=lambda r: r.stars, reverse=True)


def compute_totals(repos: List[RepoStats]) -> Dict[str, int]:
    return {
        "repos": len(repos),
        "stars": sum(r.stars for r in repos),
        "forks": sum(r.forks for r in repos),
        "watchers": sum(r.watchers for r in repos),
    }


def progress_percent(stars: int, goal: int) -> int:
    """Whole-number percentage of the star goal reached, capped at 100."""
    if goal <= 0:
        return 100
    return min(100, math.floor(stars * 100 / goal + 0.5))


def build_output(user: str, repos: List[RepoStats], goal: int, timestamp: Optional[str] = None) -> Dict[str, Any]:
    """Build the document emitted by --json (and rendered as a table otherwise)."""
    totals = compute_totals(repos)
    return {
        "user": user,
        "timestamp": timestamp or utc_now_iso(),
        "totals": totals,
        "repos": [repo.to_dict() for repo in repos],
        "goal": {
            "stars": goal,
            "progress": progress_percent(totals["stars"], goal),
        },
    }


def build_snapshot(output: Dict[str, Any]) -> Snapshot:
    """Reduce an output document to the snapshot kept for the next run."""
    return Snapshot(
        timestamp=output["timestamp"],
        totals=dict(output["totals"]),
        items={
            repo["name"]: {"stars": repo["stars"], "forks": repo["forks"]}
            for repo in output["repos"]
        },
    )


def _field_changes(current: Dict[str, Any], previous: Dict[str, Any]) -> Dict[str, Dict[str, Any]]:
    return {
        name: {
            "delta": compute_delta(current[name], previous.get(name)),
            "label": format_delta(current[name], previous.get(name)),
        }
        for name in DIFF_FIELDS
    }


def build_changes(output: Dict[str, Any], previous: Optional[Snapshot]) -> Dict[str, Any]:
    """Per-field deltas of the current output against the previous snapshot.

    With no previous snapshot every field reads as new.
    """
    previous_totals = previous.totals if previous else {}
    previous_items = previous.items if previous else {}

    return {
        "since": previous.timestamp if previous else None,
        "totals": _field_changes(output["totals"], previous_totals),
        "repos": {
            repo["name"]: _field_changes(repo, previous_items.get(repo["name"], {}))
            for repo in output["repos"]
        },
    }
