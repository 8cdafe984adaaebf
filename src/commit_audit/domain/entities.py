"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal


@dataclass(frozen=True, slots=True)
class ProjectHandle:
    """A GitLab project resolved from its namespaced path."""

    path: str
    id: int


@dataclass(frozen=True, slots=True)
class Commit:
    """A single commit from the history listing.

    The list endpoint supplies identity and metadata; ``additions`` and
    ``deletions`` stay ``None`` until the detail endpoint has been queried.
    """

    id: str
    title: str
    author_name: str
    author_email: str
    created_at: datetime
    additions: int | None = None
    deletions: int | None = None

    @property
    def is_complete(self) -> bool:
        return self.additions is not None and self.deletions is not None

    def with_stats(self, additions: int, deletions: int) -> Commit:
        return replace(self, additions=additions, deletions=deletions)


@dataclass(frozen=True, slots=True)
class CommitStats:
    """Line-change counts from the commit detail endpoint."""

    additions: int
    deletions: int


@dataclass(slots=True)
class ContributorStat:
    """Running totals for one contributor identity (email local part)."""

    identity: str
    name: str
    email: str
    commit_count: int = 0
    additions: int = 0
    deletions: int = 0


@dataclass(frozen=True, slots=True)
class Totals:
    commit_count: int = 0
    additions: int = 0
    deletions: int = 0


@dataclass(frozen=True, slots=True)
class ContributorShare:
    """A contributor's totals together with their percentage of each metric."""

    stat: ContributorStat
    commit_percent: float
    additions_percent: float
    deletions_percent: float


def percent(part: int, whole: int) -> float:
    """``part`` as a percentage of ``whole``, one decimal place; 0 when empty.

    Halves round away from zero (1 of 16 is 6.3, not 6.2).
    """
    if whole <= 0:
        return 0.0
    share = Decimal(part) * 100 / Decimal(whole)
    return float(share.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


@dataclass(frozen=True, slots=True)
class AggregationResult:
    """Per-contributor metrics plus the commit log they were computed from."""

    contributors: list[ContributorStat] = field(default_factory=list)
    commits: list[Commit] = field(default_factory=list)
    totals: Totals = field(default_factory=Totals)
    since: datetime | None = None

    def shares(self) -> list[ContributorShare]:
        """Percentage breakdown, each metric relative to its own grand total."""
        commit_divisor = self.totals.commit_count or 1
        return [
            ContributorShare(
                stat=stat,
                commit_percent=percent(stat.commit_count, commit_divisor),
                additions_percent=percent(stat.additions, self.totals.additions),
                deletions_percent=percent(stat.deletions, self.totals.deletions),
            )
            for stat in self.contributors
        ]
