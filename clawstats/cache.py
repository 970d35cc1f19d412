"""Snapshot cache: the previous run's counts per account, persisted as one JSON file.

The cache only feeds the --diff display. Every operation is non-fatal: a
missing, unreadable or corrupt file reads as an empty store, and a failed
write is reported through a CacheOutcome instead of an exception.
"""

import json
import logging
import math
from dataclasses import dataclass, field
from numbers import Real
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass
class Snapshot:
    """Recorded totals and per-repository counts for an account at one point in time."""
    timestamp: str
    totals: Dict[str, int] = field(default_factory=dict)
    items: Dict[str, Dict[str, int]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "totals": dict(self.totals),
            "repos": {name: dict(counts) for name, counts in self.items.items()},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Snapshot":
        """Build a snapshot from its persisted form, raising ValueError if malformed."""
        if not isinstance(data, dict):
            raise ValueError(f"snapshot must be an object, got {type(data).__name__}")

        totals = data.get("totals", {})
        repos = data.get("repos", {})
        if not isinstance(totals, dict):
            raise ValueError("snapshot totals must be an object")
        if not isinstance(repos, dict) or not all(isinstance(v, dict) for v in repos.values()):
            raise ValueError("snapshot repos must map names to objects")

        return cls(
            timestamp=str(data.get("timestamp", "")),
            totals=dict(totals),
            items={name: dict(counts) for name, counts in repos.items()},
        )


# account identifier -> most recent snapshot
CacheStore = Dict[str, Snapshot]


@dataclass
class CacheOutcome:
    """Result of a cache read or write; failures are recorded, never raised."""
    ok: bool
    error: Optional[str] = None


class SnapshotCache:
    """File-backed store of one snapshot per account identifier."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self.last_outcome: Optional[CacheOutcome] = None

    def read(self) -> Tuple[CacheStore, CacheOutcome]:
        """Read the persisted store along with whether the read succeeded.

        A missing file is not a failure: it is the first run.
        """
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except FileNotFoundError:
            return {}, CacheOutcome(ok=True)
        except Exception as e:
            return {}, CacheOutcome(ok=False, error=f"Error reading cache file {self.path}: {e}")

        if not isinstance(raw, dict):
            return {}, CacheOutcome(ok=False, error=f"Cache file {self.path} does not contain an object")

        store: CacheStore = {}
        dropped = []
        for account, entry in raw.items():
            try:
                store[account] = Snapshot.from_dict(entry)
            except ValueError as e:
                dropped.append(f"{account}: {e}")

        if dropped:
            return store, CacheOutcome(ok=False, error=f"Dropped malformed cache entries: {'; '.join(dropped)}")
        return store, CacheOutcome(ok=True)

    def load(self) -> CacheStore:
        """Load the store, degrading to an empty store on any failure."""
        store, outcome = self.read()
        self.last_outcome = outcome
        if not outcome.ok:
            logger.debug(outcome.error)
        return store

    @staticmethod
    def get(store: CacheStore, account: str) -> Optional[Snapshot]:
        """Look up an account's snapshot; None means no prior run."""
        return store.get(account)

    @staticmethod
    def put(store: CacheStore, account: str, snapshot: Snapshot) -> CacheStore:
        """Replace the account's entry with the given snapshot."""
        store[account] = snapshot
        return store

    def save(self, store: CacheStore) -> CacheOutcome:
        """Persist the store. Errors are returned as a failed outcome, never raised."""
        try:
            payload = json.dumps(
                {account: snapshot.to_dict() for account, snapshot in store.items()},
                ensure_ascii=False,
                indent=2,
            )
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                f.write(payload)
            outcome = CacheOutcome(ok=True)
        except Exception as e:
            outcome = CacheOutcome(ok=False, error=f"Error saving cache file {self.path}: {e}")
            logger.debug(outcome.error)

        self.last_outcome = outcome
        return outcome


def _is_finite_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def compute_delta(current: int, previous: Any) -> Optional[int]:
    """Signed change from previous to current, or None when there is no usable baseline."""
    if previous is None or not _is_finite_number(previous):
        return None
    return current - previous


def format_delta(current: int, previous: Any) -> str:
    """Format the change since the previous run as a delta label.

    "(new)" when there is no baseline, "" when unchanged, otherwise the
    signed difference such as "(+3)" or "(-2)".
    """
    delta = compute_delta(current, previous)
    if delta is None:
        return "(new)"
    if delta == 0:
        return ""
    if delta > 0:
        return f"(+{delta})"
    return f"({delta})"
