"""Path parameter checks shared by the services."""

from urllib.parse import quote


def check_id(name: str, value: int) -> None:
    """Raise ValueError unless ``value`` is a positive integer."""
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        msg = f"{name} must be a positive integer, got {value!r}"
        raise ValueError(msg)


def encode_slug(slug: str) -> str:
    """Encode an ``owner/name`` repository slug as a single path segment."""
    owner, sep, name = slug.partition("/")
    if not owner or not sep or not name:
        msg = f"repository slug must look like 'owner/name', got {slug!r}"
        raise ValueError(msg)
    return quote(slug, safe="")
