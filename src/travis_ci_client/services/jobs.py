"""Jobs resource service.

Maps job operations of the Travis CI API onto HTTP requests and unwraps
the job envelopes of their responses.

Travis CI API docs: https://docs.travis-ci.com/api/#jobs
"""

import httpx
import structlog

from .. import travisapi
from ..travisapi.options import (
    MULTIPLE_FILTERS_MESSAGE,
    InvalidOptionsError,
    JobFindOptions,
    url_with_options,
)
from ..travisapi.types import BuildEnvelope, Job, JobEnvelope, JobsEnvelope
from ._ids import check_id

logger = structlog.get_logger(__name__)


class JobsService:
    """Job related methods of the Travis CI API.

    Every method performs a single round trip. Statuses are never
    interpreted: a non-2xx response comes back with a None record.
    """

    def __init__(self, client: travisapi.TravisClient):
        self._client = client

    def get(self, job_id: int) -> tuple[Job | None, httpx.Response]:
        """Fetch the job with the provided id."""
        check_id("job_id", job_id)
        url = url_with_options(f"/jobs/{job_id}")
        req = self._client.new_request("GET", url)
        envelope, resp = self._client.do(req, JobEnvelope)
        return (envelope.job if envelope else None), resp

    def list_from_build(self, build_id: int) -> tuple[list[Job] | None, httpx.Response]:
        """Retrieve the jobs of the build with the provided id.

        Jobs are returned in the order the server lists them.
        """
        check_id("build_id", build_id)
        url = url_with_options(f"/builds/{build_id}")
        req = self._client.new_request("GET", url)
        envelope, resp = self._client.do(req, BuildEnvelope)
        return (envelope.jobs if envelope else None), resp

    def find(
        self,
        options: JobFindOptions | None = None,
    ) -> tuple[list[Job] | None, httpx.Response]:
        """Find jobs using the provided options.

        At most one of the filter fields of ``options`` may be set. If
        ``state`` or ``queue`` is used, at most 250 jobs are returned.

        Raises:
            InvalidOptionsError: If more than one filter is set. No request
                is sent in that case.
        """
        if options is not None and not options.is_valid():
            logger.warning(
                "Rejected job find options",
                filter_count=options.filter_count(),
            )
            raise InvalidOptionsError(MULTIPLE_FILTERS_MESSAGE)

        url = url_with_options("/jobs", options)
        req = self._client.new_request("GET", url)
        envelope, resp = self._client.do(req, JobsEnvelope)
        return (envelope.jobs if envelope else None), resp

    def cancel(self, job_id: int) -> httpx.Response:
        """Cancel the job with the provided id.

        Acceptance is signaled by the response status alone.
        """
        check_id("job_id", job_id)
        url = url_with_options(f"/jobs/{job_id}/cancel")
        req = self._client.new_request("POST", url)
        _, resp = self._client.do(req)
        return resp

    def restart(self, job_id: int) -> httpx.Response:
        """Restart the job with the provided id.

        Acceptance is signaled by the response status alone.
        """
        check_id("job_id", job_id)
        url = url_with_options(f"/jobs/{job_id}/restart")
        req = self._client.new_request("POST", url)
        _, resp = self._client.do(req)
        return resp
