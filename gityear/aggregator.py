"""Aggregate a user's yearly GitHub activity into a snapshot."""

import asyncio
import os
from typing import Any, Dict, Iterable, List, Optional, Sequence

import httpx

from shared.logger import get_logger

from .fetcher import fetch_json, fetch_starred_this_year, safe_search
from .models import (
    ActivityCounts,
    LanguageShare,
    Profile,
    QueryParams,
    RepoRecord,
    Snapshot,
    TopRepository,
    build_snapshot,
)

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://api.github.com"
API_VERSION = "2022-11-28"
REPO_PAGE_SIZE = 100
MAX_LANGUAGES = 6
MAX_TOP_REPOSITORIES = 5

COMMIT_SEARCH_MEDIA_TYPE = "application/vnd.github.cloak-preview+json"
STAR_MEDIA_TYPE = "application/vnd.github.star+json"


def build_headers(token: Optional[str] = None) -> Dict[str, str]:
    """Base request headers, with bearer authorization when a token is given."""
    headers = {
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": API_VERSION,
        "User-Agent": "git-year",
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def active_repositories(repos: Iterable[RepoRecord], year: int) -> List[RepoRecord]:
    """Repositories whose last push falls within ``year``."""
    prefix = str(year)
    return [r for r in repos if (r.pushed_at or "").startswith(prefix)]


def tally_languages(repos: Iterable[RepoRecord]) -> Dict[str, int]:
    """Count repositories per primary language, in discovery order."""
    tally: Dict[str, int] = {}
    for repo in repos:
        if repo.language:
            tally[repo.language] = tally.get(repo.language, 0) + 1
    return tally


def rank_languages(tally: Dict[str, int], limit: int = MAX_LANGUAGES) -> List[LanguageShare]:
    """Top languages by repository count; ties keep discovery order."""
    ranked = sorted(tally.items(), key=lambda x: x[1], reverse=True)
    return [LanguageShare(name=name, count=count) for name, count in ranked[:limit]]


def rank_top_repositories(
    repos: Sequence[RepoRecord], limit: int = MAX_TOP_REPOSITORIES
) -> List[TopRepository]:
    """Most starred repositories; ties keep listing order."""
    ranked = sorted(repos, key=lambda r: r.stars, reverse=True)
    return [
        TopRepository(
            name=r.name,
            url=r.url,
            stars=r.stars,
            description=r.description,
            language=r.language,
        )
        for r in ranked[:limit]
    ]


class GitYearStats:
    """
    Build yearly activity snapshots from the GitHub REST API.

    Each call to ``aggregate`` opens its own HTTP client, so one instance can
    serve concurrent runs.
    """

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the aggregator.

        Args:
            token: Default GitHub token, used when a query carries none
                (falls back to GITHUB_TOKEN)
            base_url: API base URL (falls back to GITHUB_API_URL)
            timeout: HTTP client timeout in seconds
            transport: Custom httpx transport, mainly for tests
        """
        self.token = token or os.getenv("GITHUB_TOKEN")
        self.base_url = base_url or os.getenv("GITHUB_API_URL") or DEFAULT_BASE_URL
        self.timeout = timeout
        self.transport = transport

        if not self.token:
            logger.debug("No default GitHub token. Rate limits: 60 req/hour (vs 5000 with token)")

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self.transport,
        )

    async def aggregate(self, params: QueryParams) -> Snapshot:
        """
        Fetch and reduce one user's activity for one year.

        Args:
            params: Username, year and optional token

        Returns:
            Snapshot object

        Raises:
            RequestFailed: If the profile or repository listing cannot be fetched
        """
        username = params.username
        year = params.year
        logger.info(f"Aggregating {year} activity for {username}")

        headers = build_headers(params.token or self.token)
        commit_headers = {**headers, "Accept": COMMIT_SEARCH_MEDIA_TYPE}
        star_headers = {**headers, "Accept": STAR_MEDIA_TYPE}
        date_range = f"{year}-01-01..{year}-12-31"

        async with self._client() as client:
            # Mandatory data, failures propagate
            user = await fetch_json(client, f"/users/{username}", headers)
            raw_repos = await fetch_json(
                client,
                f"/users/{username}/repos",
                headers,
                params={"per_page": REPO_PAGE_SIZE, "sort": "updated"},
            )

            # Best-effort metrics, failures degrade to 0 or a partial count
            commits, pull_requests, issues, stars = await asyncio.gather(
                safe_search(
                    client,
                    "/search/commits",
                    commit_headers,
                    params={"q": f"author:{username} committer-date:{date_range}"},
                ),
                safe_search(
                    client,
                    "/search/issues",
                    headers,
                    params={"q": f"author:{username} type:pr created:{date_range}"},
                ),
                safe_search(
                    client,
                    "/search/issues",
                    headers,
                    params={"q": f"author:{username} type:issue created:{date_range}"},
                ),
                fetch_starred_this_year(client, username, year, star_headers),
            )

        repos = self._parse_repos(raw_repos)
        active = active_repositories(repos, year)

        snapshot = build_snapshot(
            profile=Profile.from_api(user),
            counts=ActivityCounts(
                commits=commits,
                pull_requests=pull_requests,
                issues=issues,
                stars=stars,
            ),
            repo_active_count=len(active),
            languages=rank_languages(tally_languages(active)),
            top_repositories=rank_top_repositories(repos),
        )

        logger.info(
            f"{username} in {year}: {snapshot.counts.total} contributions, "
            f"{len(active)} active repositories"
        )
        return snapshot

    def fetch(self, params: QueryParams) -> Snapshot:
        """Synchronous wrapper around ``aggregate``."""
        return asyncio.run(self.aggregate(params))

    @staticmethod
    def _parse_repos(data: Any) -> List[RepoRecord]:
        if not isinstance(data, list):
            logger.warning("Repository listing is not a list, treating as empty")
            return []
        return [RepoRecord.from_api(item) for item in data]
