"""Build requests resource service.

Creates build requests on a repository and looks them up again. A
repository is addressed either by numeric id or by its ``owner/name`` slug.

Travis CI API docs: https://docs.travis-ci.com/user/triggering-builds/
"""

import httpx

from .. import travisapi
from ..travisapi.options import CreateRequestOption, ListOptions, url_with_options
from ..travisapi.types import (
    BuildRequest,
    CreatedRequest,
    CreatedRequestEnvelope,
    RequestEnvelope,
    RequestsEnvelope,
)
from ._ids import check_id, encode_slug


class RequestsService:
    """Request related methods of the Travis CI API.

    Request creation is asynchronous: the server answers ``202 Accepted``
    and creates the build later. As with every service, the status is
    returned on the raw response and not interpreted here.
    """

    def __init__(self, client: travisapi.TravisClient):
        self._client = client

    def create_by_repo_id(
        self,
        repo_id: int,
        option: CreateRequestOption,
    ) -> tuple[CreatedRequest | None, httpx.Response]:
        """Trigger a build request on the repository with the provided id."""
        check_id("repo_id", repo_id)
        return self._create(str(repo_id), option)

    def create_by_repo_slug(
        self,
        slug: str,
        option: CreateRequestOption,
    ) -> tuple[CreatedRequest | None, httpx.Response]:
        """Trigger a build request on the repository with the provided slug."""
        return self._create(encode_slug(slug), option)

    def find_by_repo_id(
        self,
        repo_id: int,
        request_id: int,
    ) -> tuple[BuildRequest | None, httpx.Response]:
        """Fetch a request of the repository with the provided id."""
        check_id("repo_id", repo_id)
        return self._find(str(repo_id), request_id)

    def find_by_repo_slug(
        self,
        slug: str,
        request_id: int,
    ) -> tuple[BuildRequest | None, httpx.Response]:
        """Fetch a request of the repository with the provided slug."""
        return self._find(encode_slug(slug), request_id)

    def list_by_repo_id(
        self,
        repo_id: int,
        options: ListOptions | None = None,
    ) -> tuple[list[BuildRequest] | None, httpx.Response]:
        """List the requests of the repository with the provided id."""
        check_id("repo_id", repo_id)
        return self._list(str(repo_id), options)

    def list_by_repo_slug(
        self,
        slug: str,
        options: ListOptions | None = None,
    ) -> tuple[list[BuildRequest] | None, httpx.Response]:
        """List the requests of the repository with the provided slug."""
        return self._list(encode_slug(slug), options)

    def _create(
        self,
        repo: str,
        option: CreateRequestOption,
    ) -> tuple[CreatedRequest | None, httpx.Response]:
        url = url_with_options(f"/repos/{repo}/requests")
        req = self._client.new_request("POST", url, option.to_body())
        envelope, resp = self._client.do(req, CreatedRequestEnvelope)
        return (envelope.request if envelope else None), resp

    def _find(
        self,
        repo: str,
        request_id: int,
    ) -> tuple[BuildRequest | None, httpx.Response]:
        check_id("request_id", request_id)
        url = url_with_options(f"/repos/{repo}/requests/{request_id}")
        req = self._client.new_request("GET", url)
        envelope, resp = self._client.do(req, RequestEnvelope)
        return (envelope.request if envelope else None), resp

    def _list(
        self,
        repo: str,
        options: ListOptions | None,
    ) -> tuple[list[BuildRequest] | None, httpx.Response]:
        url = url_with_options(f"/repos/{repo}/requests", options)
        req = self._client.new_request("GET", url)
        envelope, resp = self._client.do(req, RequestsEnvelope)
        return (envelope.requests if envelope else None), resp
