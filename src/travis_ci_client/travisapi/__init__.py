"""Travis CI REST API transport package.

Provides a lightweight HTTP client for the Travis CI REST API, the Pydantic
models for its JSON envelopes, and the option records used to build query
strings. Resource-specific request/response mapping lives in the services
package.

Exports:
    TravisClient: HTTP client with token authentication and envelope decoding.
    types: Module containing Pydantic models for API responses.
    options: Module containing option records and query construction.
    DEFAULT_API_URL: Default Travis CI API base URL.
    DEFAULT_API_VERSION: Default value of the Travis-API-Version header.
    DEFAULT_TIMEOUT: Default HTTP request timeout.
"""

from . import options, types
from .client import (
    DEFAULT_API_URL,
    DEFAULT_API_VERSION,
    DEFAULT_TIMEOUT,
    ApiStatusError,
    DecodeError,
    TravisApiError,
    TravisClient,
    check_response,
)
from .options import InvalidOptionsError, QueryEncodingError

__all__ = [
    "DEFAULT_API_URL",
    "DEFAULT_API_VERSION",
    "DEFAULT_TIMEOUT",
    "ApiStatusError",
    "DecodeError",
    "InvalidOptionsError",
    "QueryEncodingError",
    "TravisApiError",
    "TravisClient",
    "check_response",
    "options",
    "types",
]
