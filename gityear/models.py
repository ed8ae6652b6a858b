"""Data types for a yearly activity snapshot."""

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

MIN_YEAR = 2008  # GitHub launched in 2008
MAX_YEAR = 9999


@dataclass(frozen=True)
class QueryParams:
    """Input to one aggregation run."""

    username: str
    year: int
    token: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.username or not self.username.strip():
            raise ValueError("username must not be empty")
        if isinstance(self.year, bool) or not isinstance(self.year, int):
            raise ValueError(f"year must be an integer, got: {self.year!r}")
        if not MIN_YEAR <= self.year <= MAX_YEAR:
            raise ValueError(f"year must be between {MIN_YEAR} and {MAX_YEAR}, got: {self.year}")

        object.__setattr__(self, "username", self.username.strip())
        if not self.token:
            object.__setattr__(self, "token", None)


@dataclass(frozen=True)
class RepoRecord:
    """A repository from the user's repository listing."""

    name: str
    url: str
    stars: int
    description: Optional[str]
    language: Optional[str]
    pushed_at: Optional[str]

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "RepoRecord":
        return cls(
            name=data["name"],
            url=data.get("html_url", ""),
            stars=data.get("stargazers_count") or 0,
            description=data.get("description"),
            language=data.get("language"),
            pushed_at=data.get("pushed_at"),
        )


@dataclass(frozen=True)
class Profile:
    """Public profile fields of a GitHub user."""

    name: Optional[str]
    login: str
    avatar_url: str
    bio: Optional[str]
    location: Optional[str]
    html_url: str
    followers: int
    following: int

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Profile":
        return cls(
            name=data.get("name"),
            login=data["login"],
            avatar_url=data.get("avatar_url", ""),
            bio=data.get("bio"),
            location=data.get("location"),
            html_url=data.get("html_url", ""),
            followers=data.get("followers") or 0,
            following=data.get("following") or 0,
        )


@dataclass(frozen=True)
class ActivityCounts:
    """Independently fetched activity counts for one year."""

    commits: int
    pull_requests: int
    issues: int
    stars: int


@dataclass(frozen=True)
class Counts:
    """Activity counts plus derived totals, as exposed by a snapshot."""

    commits: int
    pull_requests: int
    issues: int
    stars: int
    repo_active_count: int
    total: int


@dataclass(frozen=True)
class LanguageShare:
    name: str
    count: int


@dataclass(frozen=True)
class TopRepository:
    name: str
    url: str
    stars: int
    description: Optional[str]
    language: Optional[str]


@dataclass(frozen=True)
class BreakdownItem:
    label: str
    value: int
    percent: int


@dataclass(frozen=True)
class Snapshot:
    """
    Complete result of one aggregation run.

    Snapshots are immutable and share no state with other runs.
    """

    profile: Profile
    counts: Counts
    languages: Tuple[LanguageShare, ...]
    top_repositories: Tuple[TopRepository, ...]

    def breakdown(self) -> List[BreakdownItem]:
        """
        Share of each activity category in the total.

        Percentages are rounded half up individually, so they may not add up to 100.
        """
        items = [
            ("Commits", self.counts.commits),
            ("PRs", self.counts.pull_requests),
            ("Issues", self.counts.issues),
            ("Starred", self.counts.stars),
        ]
        total = max(sum(value for _, value in items), 1)
        return [
            BreakdownItem(label=label, value=value, percent=int(value / total * 100 + 0.5))
            for label, value in items
        ]

    def share_text(self, year: int) -> str:
        """One-line summary suitable for sharing."""
        c = self.counts
        return (
            f"My {year} on GitHub: {c.commits} commits, {c.pull_requests} PRs, "
            f"{c.issues} issues, {c.stars} stars."
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-ready dict."""
        return {
            "profile": asdict(self.profile),
            "counts": asdict(self.counts),
            "languages": [asdict(lang) for lang in self.languages],
            "top_repositories": [asdict(repo) for repo in self.top_repositories],
        }


def build_snapshot(
    profile: Profile,
    counts: ActivityCounts,
    repo_active_count: int,
    languages: Sequence[LanguageShare],
    top_repositories: Sequence[TopRepository],
) -> Snapshot:
    """
    Assemble the final snapshot.

    Args:
        profile: User profile
        counts: Activity counts from the concurrent sub-queries
        repo_active_count: Number of repositories pushed to during the year
        languages: Ranked language shares
        top_repositories: Ranked top repositories

    Returns:
        Snapshot object
    """
    total = counts.commits + counts.pull_requests + counts.issues + counts.stars

    return Snapshot(
        profile=profile,
        counts=Counts(
            commits=counts.commits,
            pull_requests=counts.pull_requests,
            issues=counts.issues,
            stars=counts.stars,
            repo_active_count=repo_active_count,
            total=total,
        ),
        languages=tuple(languages),
        top_repositories=tuple(top_repositories),
    )
