"""Travis CI REST API client.

Provides HTTP client with token-based authentication, thread safety,
and response decoding into Pydantic envelopes.

Non-success HTTP statuses are data, not errors: ``TravisClient.do`` returns
the raw response for every status the server sends, and only decodes the
body of 2xx responses. Callers that want an exception use
:func:`check_response`.
"""

import json
import threading
import time
from pathlib import Path
from typing import Any, TypeVar

import httpx
import pydantic
import structlog

from .. import __version__
from .types import ErrorBody

logger = structlog.get_logger(__name__)

DEFAULT_API_URL = "https://api.travis-ci.com"

DEFAULT_API_VERSION = "3"

DEFAULT_TIMEOUT = 30.0

EnvelopeT = TypeVar("EnvelopeT", bound=pydantic.BaseModel)


class TravisApiError(Exception):
    """Base class for errors raised by this library."""


class DecodeError(TravisApiError):
    """Raised when a success response body does not match its envelope.

    The raw response stays available on ``response`` so callers can still
    inspect status and headers.
    """

    def __init__(self, message: str, response: httpx.Response):
        super().__init__(message)
        self.response = response


class ApiStatusError(TravisApiError):
    """Raised by :func:`check_response` for a non-success status."""

    def __init__(self, response: httpx.Response, error: ErrorBody):
        self.response = response
        self.error = error
        detail = error.error_message or response.reason_phrase
        request = response.request
        msg = f"{request.method} {request.url.path}: {response.status_code} {detail}"
        if error.error_type:
            msg += f" ({error.error_type})"
        super().__init__(msg)


def check_response(response: httpx.Response) -> httpx.Response:
    """Raise ApiStatusError unless ``response`` has a 2xx status.

    Returns:
        The response unchanged when successful, for chaining.

    Raises:
        ApiStatusError: Carrying the decoded Travis error document, or an
            empty one when the body is not a Travis error.
    """
    if response.is_success:
        return response
    try:
        error = ErrorBody.model_validate(response.json())
    except (ValueError, pydantic.ValidationError):
        error = ErrorBody()
    raise ApiStatusError(response, error)


class TravisClient:
    """HTTP client for the Travis CI REST API.

    Lightweight client that handles authentication, sends requests and
    decodes success bodies into envelope models. Resource mapping is
    delegated to the services package.

    Thread-safe through thread-local storage of httpx.Client instances,
    unless an ``http_client`` is injected, in which case it is used as-is.
    Can be used as a context manager for automatic cleanup.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        token: str | None = None,
        token_file: str | Path | None = None,
        api_version: str = DEFAULT_API_VERSION,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: httpx.Client | None = None,
    ):
        """Initialize the REST API client.

        Args:
            base_url: Base URL for the Travis CI API (e.g., "https://api.travis-ci.com").
            token: API token. Takes precedence over ``token_file``.
            token_file: Path to file containing the API token.
            api_version: Value of the Travis-API-Version header (default: 3).
            timeout: Request timeout in seconds (default: 30.0).
            http_client: Preconfigured httpx client to send requests with.

        Raises:
            ValueError: If base_url is empty, timeout is not positive or
                the token file is empty.
            FileNotFoundError: If token_file is specified but doesn't exist.
        """
        if not base_url:
            msg = "base_url cannot be empty"
            raise ValueError(msg)
        if timeout <= 0:
            msg = "timeout must be positive"
            raise ValueError(msg)

        self.base_url = base_url.rstrip("/")
        self.api_version = api_version
        self._timeout = timeout

        # Build headers
        self._headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "User-Agent": f"travis-ci-client/{__version__}",
            "Travis-API-Version": api_version,
        }

        if token is None and token_file:
            token_path = Path(token_file)
            if not token_path.exists():
                msg = f"Token file not found: {token_file}"
                raise FileNotFoundError(msg)
            token = token_path.read_text().strip()
            if not token:
                msg = f"Token file is empty: {token_file}"
                raise ValueError(msg)
        if token:
            self._headers["Authorization"] = f"token {token}"

        self._http_client = http_client
        # Use thread-local storage for httpx.Client (thread safety)
        self._local = threading.local()

    @property
    def client(self) -> httpx.Client:
        """Get the injected client, or create a thread-local httpx client.

        Returns:
            httpx.Client instance to send requests with.
        """
        if self._http_client is not None:
            return self._http_client
        if not hasattr(self._local, "client") or self._local.client.is_closed:
            self._local.client = httpx.Client(
                base_url=self.base_url,
                headers=self._headers,
                timeout=self._timeout,
            )
        return self._local.client

    def __enter__(self):
        """Enter context manager."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context manager and cleanup resources."""
        self.close()

    def close(self):
        """Close the thread-local HTTP client if open.

        An injected client belongs to the caller and is left open.
        """
        if hasattr(self._local, "client") and not self._local.client.is_closed:
            self._local.client.close()

    def new_request(
        self,
        method: str,
        url: str,
        body: pydantic.BaseModel | dict[str, Any] | None = None,
    ) -> httpx.Request:
        """Build a request for ``url`` relative to the API base URL.

        The URL is made absolute here, so an injected client does not need
        a base URL of its own.

        Args:
            method: HTTP method.
            url: Path with optional query string (see ``url_with_options``).
            body: Optional JSON body, a model or a plain mapping.

        Returns:
            Unsent httpx.Request carrying the client headers.
        """
        if isinstance(body, pydantic.BaseModel):
            body = body.model_dump(mode="json", exclude_none=True)
        path = url.lstrip("/")
        return self.client.build_request(
            method,
            f"{self.base_url}/{path}",
            json=body,
            headers=self._headers,
        )

    def do(
        self,
        request: httpx.Request,
        envelope: type[EnvelopeT] | None = None,
    ) -> tuple[EnvelopeT | None, httpx.Response]:
        """Send ``request`` and decode a success body into ``envelope``.

        Logs request details and duration.

        Args:
            request: Request built by ``new_request``.
            envelope: Model to decode the body of a 2xx response into.
                When None, the body is not read as JSON.

        Returns:
            Tuple of (decoded envelope or None, raw response). The envelope
            is None when no envelope was requested or the status is not 2xx.

        Raises:
            httpx.HTTPError: If the round trip fails (connection, timeout).
            DecodeError: If a 2xx body does not match ``envelope``.
        """
        start_time = time.time()

        try:
            logger.debug(
                "Making API request",
                method=request.method,
                endpoint=request.url.path,
                params=dict(request.url.params),
            )
            response = self.client.send(request)
            duration = time.time() - start_time
            logger.debug(
                "API request completed",
                status_code=response.status_code,
                duration_seconds=round(duration, 3),
            )
        except httpx.HTTPError:
            duration = time.time() - start_time
            logger.exception(
                "API request failed",
                method=request.method,
                endpoint=request.url.path,
                duration_seconds=round(duration, 3),
            )
            raise

        if not response.is_success:
            logger.info(
                "API returned non-success status",
                method=request.method,
                endpoint=request.url.path,
                status_code=response.status_code,
            )
            return None, response

        if envelope is None:
            return None, response

        try:
            data = response.json()
        except json.JSONDecodeError as exc:
            msg = f"Response body is not valid JSON: {exc}"
            raise DecodeError(msg, response) from exc
        try:
            return envelope.model_validate(data), response
        except pydantic.ValidationError as exc:
            msg = f"Unexpected {envelope.__name__} payload: {exc}"
            raise DecodeError(msg, response) from exc
