"""Shared fixtures: in-memory stand-ins for GitHub and the provider APIs."""

from __future__ import annotations

import json
from typing import Callable

import httpx
import pytest

from repo_auditor.domain.value_objects import RepositoryRef


class FakeGitHub:
    """Serves the tree API and raw.githubusercontent.com from dicts.

    ``trees`` maps branch → list of paths (``None`` answers 200 with no
    ``tree`` key).  ``files`` maps path → content; any other path is a 404.
    """

    def __init__(
        self,
        trees: dict[str, list[str] | None] | None = None,
        files: dict[str, str] | None = None,
    ) -> None:
        self.trees = trees or {}
        self.files = files or {}
        self.requests: list[httpx.Request] = []

    @property
    def tree_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == "api.github.com"]

    @property
    def raw_paths(self) -> list[str]:
        return [
            r.url.path.split("/HEAD/", 1)[1]
            for r in self.requests
            if r.url.host == "raw.githubusercontent.com"
        ]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.url.host not in ("api.github.com", "raw.githubusercontent.com"):
            return httpx.Response(599)
        self.requests.append(request)
        if request.url.host == "api.github.com":
            branch = request.url.path.rsplit("/", 1)[-1]
            if branch not in self.trees:
                return httpx.Response(404, json={"message": "Not Found"})
            paths = self.trees[branch]
            if paths is None:
                return httpx.Response(200, json={"sha": "abc123"})
            return httpx.Response(
                200,
                json={
                    "sha": "abc123",
                    "truncated": False,
                    "tree": [{"path": p, "type": "blob", "size": 10} for p in paths],
                },
            )
        if request.url.host == "raw.githubusercontent.com":
            path = request.url.path.split("/HEAD/", 1)[1]
            if path in self.files:
                return httpx.Response(200, text=self.files[path])
            return httpx.Response(404, text="404: Not Found")
        return httpx.Response(599)


_PROVIDER_HOSTS = ("generativelanguage.googleapis.com", "api.anthropic.com", "api.groq.com")


class FakeProviders:
    """Answers Gemini, Anthropic and Groq with canned report text."""

    def __init__(self, report: str = "# Audit\nNo issues.") -> None:
        self.report = report
        self.requests: list[httpx.Request] = []

    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        host = request.url.host
        if host not in _PROVIDER_HOSTS:
            return httpx.Response(599)
        self.requests.append(request)
        if host == "generativelanguage.googleapis.com":
            return httpx.Response(
                200,
                json={"candidates": [{"content": {"role": "model", "parts": [{"text": self.report}]}}]},
            )
        if host == "api.anthropic.com":
            return httpx.Response(
                200,
                json={"id": "msg_1", "type": "message", "content": [{"type": "text", "text": self.report}]},
            )
        if host == "api.groq.com":
            return httpx.Response(200, json=chat_completion(self.report))
        return httpx.Response(599)


def chat_completion(content: str | None) -> dict:
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "created": 0,
        "model": "llama3-70b-8192",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
    }


def combined(*handlers: Callable[[httpx.Request], httpx.Response]):
    """Route each request to the first handler that does not answer 599."""

    def _handler(request: httpx.Request) -> httpx.Response:
        response = httpx.Response(599)
        for handler in handlers:
            response = handler(request)
            if response.status_code != 599:
                return response
        return response

    return _handler


def mock_client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def ref() -> RepositoryRef:
    return RepositoryRef(owner="acme", name="demo")
