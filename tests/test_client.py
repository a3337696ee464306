"""Tests for TravisClient construction, round trips and status handling."""

import json

import httpx
import pytest

from travis_ci_client.travisapi import client, types

# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


def test_empty_base_url_rejected():
    """An empty base URL is a configuration error."""
    with pytest.raises(ValueError, match="base_url"):
        client.TravisClient(base_url="")


def test_non_positive_timeout_rejected():
    """A zero timeout is a configuration error."""
    with pytest.raises(ValueError, match="timeout"):
        client.TravisClient(timeout=0)


def test_missing_token_file_raises(tmp_path):
    """A token file that does not exist is reported at construction."""
    with pytest.raises(FileNotFoundError):
        client.TravisClient(token_file=tmp_path / "missing")


def test_empty_token_file_raises(tmp_path):
    """A token file holding only whitespace is rejected."""
    token_file = tmp_path / "token"
    token_file.write_text("  \n")
    with pytest.raises(ValueError, match="empty"):
        client.TravisClient(token_file=token_file)


def test_base_url_trailing_slash_stripped():
    """The base URL is normalized without its trailing slash."""
    api_client = client.TravisClient(base_url="https://api.travis-ci.com/")
    assert api_client.base_url == "https://api.travis-ci.com"


def test_thread_local_client_targets_base_url():
    """Without an injected client a lazily created one targets the base URL."""
    with client.TravisClient(base_url="https://api.travis-ci.com") as api_client:
        http_client = api_client.client
        assert http_client.base_url.host == "api.travis-ci.com"
    assert http_client.is_closed


def test_injected_client_left_open(make_client, recorder):
    """Closing the TravisClient does not close a caller-owned client."""
    api_client = make_client(recorder)
    api_client.close()
    assert not api_client.client.is_closed


def test_injected_client_without_base_url(recorder):
    """Requests reach the configured base URL through a bare injected client."""
    recorder.reply(json={"job": {"id": 5}})
    api_client = client.TravisClient(
        base_url="https://api.travis-ci.test",
        http_client=httpx.Client(transport=httpx.MockTransport(recorder)),
    )

    envelope, resp = api_client.do(api_client.new_request("GET", "/jobs/5"), types.JobEnvelope)

    assert resp.status_code == 200
    assert envelope.job.id == 5
    assert str(recorder.last.url) == "https://api.travis-ci.test/jobs/5"


def test_base_url_path_prefix_kept(recorder):
    """A base URL with a path prefix keeps it in front of every endpoint."""
    api_client = client.TravisClient(
        base_url="https://ci.example.test/api/",
        http_client=httpx.Client(transport=httpx.MockTransport(recorder)),
    )

    api_client.do(api_client.new_request("GET", "/repos/octo%2Fhello/requests?limit=2"))

    assert recorder.last.url.raw_path == b"/api/repos/octo%2Fhello/requests?limit=2"


# ---------------------------------------------------------------------------
# Headers
# ---------------------------------------------------------------------------


def test_token_file_sets_authorization(make_client, recorder, tmp_path):
    """The token read from file is sent as a Travis token header."""
    token_file = tmp_path / "token"
    token_file.write_text("s3cr3t\n")
    api_client = make_client(recorder, token_file=token_file)

    api_client.do(api_client.new_request("GET", "/jobs"))

    assert recorder.last.headers["Authorization"] == "token s3cr3t"


def test_explicit_token_wins_over_file(make_client, recorder, tmp_path):
    """A token passed directly takes precedence over a token file."""
    api_client = make_client(recorder, token="direct", token_file=tmp_path / "missing")

    api_client.do(api_client.new_request("GET", "/jobs"))

    assert recorder.last.headers["Authorization"] == "token direct"


def test_anonymous_client_sends_no_authorization(make_client, recorder):
    """Without a token no Authorization header is sent."""
    api_client = make_client(recorder)

    api_client.do(api_client.new_request("GET", "/jobs"))

    assert "Authorization" not in recorder.last.headers


def test_api_version_and_json_headers(make_client, recorder):
    """Every request advertises the API version and JSON content."""
    api_client = make_client(recorder, api_version="3")

    api_client.do(api_client.new_request("GET", "/jobs"))

    headers = recorder.last.headers
    assert headers["Travis-API-Version"] == "3"
    assert headers["Accept"] == "application/json"
    assert headers["User-Agent"].startswith("travis-ci-client/")


def test_request_url_is_relative_to_base(make_client, recorder):
    """Paths are resolved against the configured base URL."""
    api_client = make_client(recorder)

    api_client.do(api_client.new_request("GET", "/jobs?state=passed"))

    assert str(recorder.last.url) == "https://api.travis-ci.test/jobs?state=passed"


def test_model_body_serialized_as_json(make_client, recorder):
    """A model body is sent as JSON without None fields."""
    api_client = make_client(recorder)
    body = types.CreatedRequest(id=3, message="hi")

    api_client.do(api_client.new_request("POST", "/x", body))

    sent = json.loads(recorder.last.content)
    assert sent == {"id": 3, "message": "hi", "config": {}}


# ---------------------------------------------------------------------------
# Decoding and status handling
# ---------------------------------------------------------------------------


def test_success_body_decoded_into_envelope(make_client, recorder):
    """A 200 body is decoded into the requested envelope."""
    recorder.reply(json={"job": {"id": 5, "state": "passed"}})
    api_client = make_client(recorder)

    envelope, resp = api_client.do(api_client.new_request("GET", "/jobs/5"), types.JobEnvelope)

    assert resp.status_code == 200
    assert envelope.job.id == 5
    assert envelope.job.state == "passed"


def test_unknown_record_keys_are_kept(make_client, recorder):
    """Fields the client does not declare survive decoding."""
    recorder.reply(json={"job": {"id": 5, "stage": {"name": "test"}}})
    api_client = make_client(recorder)

    envelope, _ = api_client.do(api_client.new_request("GET", "/jobs/5"), types.JobEnvelope)

    assert envelope.job.model_extra == {"stage": {"name": "test"}}


@pytest.mark.parametrize("status_code", [401, 403, 404, 409, 500])
def test_non_success_status_is_returned_not_raised(make_client, recorder, status_code):
    """Non-2xx statuses come back as data with no decoded envelope."""
    recorder.reply(
        status_code=status_code,
        json={"@type": "error", "error_type": "whatever", "error_message": "nope"},
    )
    api_client = make_client(recorder)

    envelope, resp = api_client.do(api_client.new_request("GET", "/jobs/5"), types.JobEnvelope)

    assert envelope is None
    assert resp.status_code == status_code


def test_invalid_json_raises_decode_error_with_response(make_client, recorder):
    """A non-JSON success body raises DecodeError carrying the response."""
    recorder.reply(content=b"<html>maintenance</html>")
    api_client = make_client(recorder)

    with pytest.raises(client.DecodeError) as exc_info:
        api_client.do(api_client.new_request("GET", "/jobs/5"), types.JobEnvelope)

    assert exc_info.value.response.status_code == 200


def test_unexpected_shape_raises_decode_error(make_client, recorder):
    """A success body that misses the envelope key raises DecodeError."""
    recorder.reply(json={"build": {"id": 1}})
    api_client = make_client(recorder)

    with pytest.raises(client.DecodeError, match="JobEnvelope"):
        api_client.do(api_client.new_request("GET", "/jobs/5"), types.JobEnvelope)


def test_no_envelope_skips_body(make_client, recorder):
    """Without an envelope an empty body is fine."""
    recorder.reply(status_code=202)
    api_client = make_client(recorder)

    envelope, resp = api_client.do(api_client.new_request("POST", "/jobs/5/cancel"))

    assert envelope is None
    assert resp.status_code == 202


# ---------------------------------------------------------------------------
# Transport errors
# ---------------------------------------------------------------------------


def test_connection_error_propagates(make_client):
    """Transport failures propagate unchanged."""

    def handler(request: httpx.Request) -> httpx.Response:
        msg = "connection refused"
        raise httpx.ConnectError(msg, request=request)

    api_client = make_client(handler)

    with pytest.raises(httpx.ConnectError):
        api_client.do(api_client.new_request("GET", "/jobs/5"))


def test_timeout_propagates(make_client):
    """A timed out round trip surfaces as an httpx timeout."""

    def handler(request: httpx.Request) -> httpx.Response:
        msg = "timed out"
        raise httpx.ReadTimeout(msg, request=request)

    api_client = make_client(handler)

    with pytest.raises(httpx.TimeoutException):
        api_client.do(api_client.new_request("GET", "/jobs/5"), types.JobEnvelope)


# ---------------------------------------------------------------------------
# check_response
# ---------------------------------------------------------------------------


def test_check_response_passes_success_through(make_client, recorder):
    """Successful responses are returned unchanged."""
    recorder.reply(status_code=202)
    api_client = make_client(recorder)
    _, resp = api_client.do(api_client.new_request("POST", "/jobs/1/restart"))
    assert client.check_response(resp) is resp


def test_check_response_raises_with_error_document(make_client, recorder):
    """A Travis error document is decoded onto ApiStatusError."""
    recorder.reply(
        status_code=404,
        json={"@type": "error", "error_type": "not_found", "error_message": "job not found"},
    )
    api_client = make_client(recorder)
    _, resp = api_client.do(api_client.new_request("GET", "/jobs/1"))

    with pytest.raises(client.ApiStatusError, match="job not found") as exc_info:
        client.check_response(resp)

    assert exc_info.value.error.error_type == "not_found"
    assert exc_info.value.response is resp


def test_check_response_without_error_document(make_client, recorder):
    """Bodies that are not Travis errors still raise, with an empty error."""
    recorder.reply(status_code=502, content=b"Bad Gateway")
    api_client = make_client(recorder)
    _, resp = api_client.do(api_client.new_request("GET", "/jobs/1"))

    with pytest.raises(client.ApiStatusError, match="502") as exc_info:
        client.check_response(resp)

    assert exc_info.value.error.error_type == ""
