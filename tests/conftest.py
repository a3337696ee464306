"""Shared fixtures: a TravisClient whose round trips are answered in-process."""

from collections.abc import Callable

import httpx
import pytest

from travis_ci_client.api import TravisApi
from travis_ci_client.travisapi import client

Handler = Callable[[httpx.Request], httpx.Response]


class Recorder:
    """MockTransport handler that records requests and replays one response."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.reply()

    def reply(
        self,
        status_code: int = 200,
        json: object = None,
        content: bytes | None = None,
    ) -> "Recorder":
        """Set the response returned for every following request."""
        self._status_code = status_code
        self._json = json
        self._content = content
        return self

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._content is not None:
            return httpx.Response(self._status_code, content=self._content)
        if self._json is None:
            return httpx.Response(self._status_code)
        return httpx.Response(self._status_code, json=self._json)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def recorder() -> Recorder:
    """Handler answering 200 with an empty body until told otherwise."""
    return Recorder()


@pytest.fixture
def make_client() -> Callable[..., client.TravisClient]:
    """Factory building a TravisClient on top of an httpx.MockTransport."""

    def _make(handler: Handler, **kwargs) -> client.TravisClient:
        http_client = httpx.Client(
            base_url="https://api.travis-ci.test",
            transport=httpx.MockTransport(handler),
        )
        return client.TravisClient(
            base_url="https://api.travis-ci.test",
            http_client=http_client,
            **kwargs,
        )

    return _make


@pytest.fixture
def api(make_client, recorder) -> TravisApi:
    """TravisApi facade answered by the ``recorder`` fixture."""
    return TravisApi(make_client(recorder))
