"""Services package for Travis CI resources.

Contains one service class per REST resource. Each service translates typed
inputs into a request path and query, hands the round trip to the shared
TravisClient and unwraps the JSON envelope of the response.
"""

from .jobs import JobsService
from .requests import RequestsService

__all__ = ["JobsService", "RequestsService"]
