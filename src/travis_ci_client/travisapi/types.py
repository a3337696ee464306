"""API response types for the Travis CI REST API.

Pydantic models representing the records returned by the Travis CI API and
the envelopes that wrap them on the wire. Records keep any keys the server
sends beyond the declared fields, and are frozen once decoded.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ApiRecord(BaseModel):
    """Base for records decoded from API responses."""

    model_config = ConfigDict(extra="allow", frozen=True)


class Job(ApiRecord):
    """Build job as returned by the Travis CI API.

    ``number`` has the ``<build number>.<job index>`` form (e.g. ``"42.1"``).
    """

    # Core identification
    id: int
    build_id: int | None = None
    repository_id: int | None = None
    commit_id: int | None = None
    log_id: int | None = None
    number: str = ""

    # Execution
    state: str = ""
    queue: str = ""
    allow_failure: bool = False
    started_at: datetime | None = None
    finished_at: datetime | None = None

    config: dict[str, Any] = Field(default_factory=dict)
    tags: str | None = None
    annotation_ids: list[int] = Field(default_factory=list)


class Commit(ApiRecord):
    """Commit embedded next to builds and requests."""

    id: int
    sha: str = ""
    branch: str = ""
    message: str = ""
    committed_at: datetime | None = None
    author_name: str = ""
    author_email: str = ""
    committer_name: str = ""
    committer_email: str = ""
    compare_url: str = ""
    pull_request_number: int | None = None


class Build(ApiRecord):
    """Build record, the parent resource of jobs."""

    id: int
    repository_id: int | None = None
    commit_id: int | None = None
    number: str = ""
    event_type: str = ""
    state: str = ""
    pull_request: bool = False
    pull_request_title: str | None = None
    pull_request_number: int | None = None
    started_at: datetime | None = None
    finished_at: datetime | None = None
    duration: int | None = None
    config: dict[str, Any] = Field(default_factory=dict)
    job_ids: list[int] = Field(default_factory=list)


class BuildRequest(ApiRecord):
    """Build request record.

    A request is what Travis CI receives before deciding whether to create
    a build (push, pull request, cron or API trigger).
    """

    id: int
    repository_id: int | None = None
    commit_id: int | None = None
    created_at: datetime | None = None
    owner_id: int | None = None
    owner_type: str = ""
    event_type: str = ""
    base_commit: str | None = None
    head_commit: str | None = None
    result: str | None = None
    message: str | None = None
    branch: str | None = None
    pull_request: bool = False
    pull_request_title: str | None = None
    pull_request_number: int | None = None
    build_id: int | None = None


class CreatedRequest(ApiRecord):
    """Request payload echoed back when a request creation is accepted."""

    id: int
    message: str | None = None
    branch: str | None = None
    config: dict[str, Any] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Envelopes
# ---------------------------------------------------------------------------


class JobEnvelope(BaseModel):
    """``{"job": {...}}`` as returned by ``GET /jobs/{id}``."""

    job: Job


class JobsEnvelope(BaseModel):
    """``{"jobs": [...]}`` as returned by ``GET /jobs``."""

    jobs: list[Job] = Field(default_factory=list)


class BuildEnvelope(BaseModel):
    """``GET /builds/{id}`` response, carrying the build's jobs."""

    build: Build
    commit: Commit | None = None
    jobs: list[Job] = Field(default_factory=list)


class RequestEnvelope(BaseModel):
    """``{"request": {...}}`` as returned by a request lookup."""

    request: BuildRequest
    commit: Commit | None = None


class RequestsEnvelope(BaseModel):
    """``{"requests": [...]}`` as returned by a repository's request list."""

    requests: list[BuildRequest] = Field(default_factory=list)
    commits: list[Commit] = Field(default_factory=list)


class CreatedRequestEnvelope(BaseModel):
    """Body of a ``202 Accepted`` response to a request creation."""

    request: CreatedRequest
    remaining_requests: int | None = None
    repository: dict[str, Any] | None = None


class ErrorBody(BaseModel):
    """Error document sent by the API alongside non-success statuses."""

    error_type: str = ""
    error_message: str = ""
