"""Option records and query string construction.

Option records describe the optional parameters of list/find endpoints and
the body of request creation. ``url_with_options`` turns a record into a
request path with an encoded query string, omitting unset fields.
"""

import enum
from collections.abc import Iterable
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field, model_validator

# The server caps state and queue filtered results at this many jobs.
MAX_FILTERED_JOBS = 250

MULTIPLE_FILTERS_MESSAGE = "more than one of ids, state, queue set in JobFindOptions"


class InvalidOptionsError(ValueError):
    """Raised when more than one mutually exclusive filter is set."""


class QueryEncodingError(TypeError):
    """Raised when an option value cannot be encoded in a query string."""


def _is_default(value: Any) -> bool:
    return value is None or value == "" or value == [] or value == ()


def count_non_default(options: BaseModel, fields: Iterable[str]) -> int:
    """Count how many of ``fields`` hold a non-default value on ``options``."""
    return sum(1 for name in fields if not _is_default(getattr(options, name)))


class ListOptions(BaseModel):
    """Pagination parameters shared by list endpoints."""

    model_config = ConfigDict(frozen=True)

    limit: int | None = Field(None, gt=0)
    offset: int | None = Field(None, ge=0)


class JobFilter(enum.Enum):
    """The filter dimension selected by a JobFindOptions record."""

    IDS = "ids"
    STATE = "state"
    QUEUE = "queue"


class JobFindOptions(ListOptions):
    """Optional parameters to ``JobsService.find``.

    At most one of ``ids``, ``state`` and ``queue`` may be set. When
    ``state`` or ``queue`` is used the server returns at most
    ``MAX_FILTERED_JOBS`` jobs. Pagination fields are not filters and can
    be combined with any of them.

    Building a record with several filters raises
    ``pydantic.ValidationError`` (a ``ValueError``). ``JobsService.find``
    raises ``InvalidOptionsError`` for a record that skipped validation,
    e.g. one made with ``model_construct``. Both carry
    ``MULTIPLE_FILTERS_MESSAGE``.
    """

    ids: list[int] = Field(default_factory=list)
    state: str | None = None
    queue: str | None = None

    @model_validator(mode="after")
    def check_single_filter(self) -> "JobFindOptions":
        if not self.is_valid():
            raise ValueError(MULTIPLE_FILTERS_MESSAGE)
        return self

    @classmethod
    def by_ids(cls, ids: Iterable[int], **pagination: Any) -> "JobFindOptions":
        return cls(ids=list(ids), **pagination)

    @classmethod
    def by_state(cls, state: str, **pagination: Any) -> "JobFindOptions":
        return cls(state=state, **pagination)

    @classmethod
    def by_queue(cls, queue: str, **pagination: Any) -> "JobFindOptions":
        return cls(queue=queue, **pagination)

    def filter_count(self) -> int:
        """Number of filter fields set to a non-default value."""
        return count_non_default(self, (f.value for f in JobFilter))

    def is_valid(self) -> bool:
        """Whether zero or exactly one filter field is set."""
        return self.filter_count() <= 1

    @property
    def active_filter(self) -> JobFilter | None:
        """The filter in use, or None when the record only paginates."""
        for kind in JobFilter:
            if not _is_default(getattr(self, kind.value)):
                return kind
        return None


class CreateRequestOption(BaseModel):
    """Parameters of a build request creation.

    ``config`` is merged by the server into the repository's ``.travis.yml``.
    """

    message: str = ""
    branch: str = ""
    config: dict[str, Any] | None = None

    def to_body(self) -> dict[str, Any]:
        """JSON body expected by ``POST /repos/{repo}/requests``."""
        return {"request": self.model_dump(exclude_none=True, exclude_defaults=True)}


def _encode_value(name: str, value: Any) -> str:
    # bool is an int subclass, check it first
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int | str):
        return str(value)
    if isinstance(value, list | tuple):
        return ",".join(_encode_value(name, item) for item in value)
    if isinstance(value, enum.Enum):
        return _encode_value(name, value.value)
    msg = f"cannot encode query parameter {name!r} of type {type(value).__name__}"
    raise QueryEncodingError(msg)


def query_params(options: BaseModel | None) -> dict[str, str]:
    """Encode the non-default fields of ``options`` as query parameters."""
    if options is None:
        return {}
    params = {}
    for name in sorted(type(options).model_fields):
        value = getattr(options, name)
        if _is_default(value):
            continue
        params[name] = _encode_value(name, value)
    return params


def url_with_options(path: str, options: BaseModel | None = None) -> str:
    """Build a request path with the query string for ``options``.

    Args:
        path: Endpoint path (e.g., "/jobs").
        options: Optional option record. Unset fields are omitted.

    Returns:
        ``path`` unchanged when nothing is set, otherwise ``path?query``.

    Raises:
        QueryEncodingError: If a field holds a value with no query encoding.
    """
    params = query_params(options)
    if not params:
        return path
    return f"{path}?{httpx.QueryParams(params)}"
