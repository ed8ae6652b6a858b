"""Shared fixtures: an in-memory stand-in for the GitHub REST API."""

from typing import Any, Dict, List, Optional

import httpx
import pytest

BASE_URL = "https://api.github.test"


def make_repo(name: str, stars: int = 0, language: Optional[str] = None, pushed_at: str = "2024-06-01T00:00:00Z"):
    return {
        "name": name,
        "html_url": f"https://github.com/octocat/{name}",
        "stargazers_count": stars,
        "description": f"{name} description",
        "language": language,
        "pushed_at": pushed_at,
    }


def make_stars(count: int, starred_at: str) -> List[Dict[str, Any]]:
    return [{"starred_at": starred_at, "repo": {"id": i}} for i in range(count)]


class FakeGitHub:
    """
    Routes requests to canned responses and records what was asked.

    Set ``*_status`` to a non-2xx code to simulate a failing endpoint.
    ``star_pages`` maps page number to the items returned for it.
    """

    def __init__(self):
        self.profile = {
            "login": "octocat",
            "name": "The Octocat",
            "avatar_url": "https://avatars.githubusercontent.com/u/583231",
            "bio": "Mascot",
            "location": "San Francisco",
            "html_url": "https://github.com/octocat",
            "followers": 100,
            "following": 9,
        }
        self.repos: Any = []
        self.commits = 0
        self.pull_requests = 0
        self.issues = 0
        self.star_pages: Dict[int, Any] = {}

        self.profile_status = 200
        self.repos_status = 200
        self.commit_status = 200
        self.issue_status = 200
        self.star_status: Dict[int, int] = {}

        self.requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        params = request.url.params

        if path == "/search/commits":
            if self.commit_status != 200:
                return httpx.Response(self.commit_status, json={"message": "Validation Failed"})
            return httpx.Response(200, json={"total_count": self.commits, "items": []})

        if path == "/search/issues":
            if self.issue_status != 200:
                return httpx.Response(self.issue_status, json={"message": "Server Error"})
            count = self.pull_requests if "type:pr" in params["q"] else self.issues
            return httpx.Response(200, json={"total_count": count, "items": []})

        if path.endswith("/starred"):
            page = int(params["page"])
            status = self.star_status.get(page, 200)
            if status != 200:
                return httpx.Response(status, json={"message": "error"})
            return httpx.Response(200, json=self.star_pages.get(page, []))

        if path.endswith("/repos"):
            if self.repos_status != 200:
                return httpx.Response(self.repos_status, json={"message": "Server Error"})
            return httpx.Response(200, json=self.repos)

        if path.startswith("/users/"):
            if self.profile_status != 200:
                return httpx.Response(self.profile_status, json={"message": "Not Found"})
            return httpx.Response(200, json=self.profile)

        return httpx.Response(404, json={"message": "Not Found"})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=BASE_URL, transport=self.transport)

    def paths(self) -> List[str]:
        return [r.url.path for r in self.requests]

    def star_pages_requested(self) -> List[int]:
        return [int(r.url.params["page"]) for r in self.requests if r.url.path.endswith("/starred")]


@pytest.fixture
def github():
    return FakeGitHub()
