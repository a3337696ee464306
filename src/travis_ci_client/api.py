"""Entry point combining the transport client with the resource services."""

from . import travisapi
from .services import JobsService, RequestsService


class TravisApi:
    """Travis CI API with one attribute per resource service.

    All services share the same TravisClient, and therefore its connection
    pool. Can be used as a context manager to close that pool.
    """

    def __init__(self, client: travisapi.TravisClient):
        self.client = client
        self.jobs = JobsService(client)
        self.requests = RequestsService(client)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        self.client.close()
