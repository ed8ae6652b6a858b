"""git-year - Summarize a GitHub user's activity for one year."""

from .aggregator import GitYearStats
from .fetcher import RequestFailed
from .models import QueryParams, Snapshot

__all__ = ["GitYearStats", "QueryParams", "RequestFailed", "Snapshot"]
