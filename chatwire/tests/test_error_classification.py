"""Status, body and exception classification into the error taxonomy."""
from __future__ import annotations

import email.utils
import time

import httpx
import pytest

from chatwire.base.errors import (
    ApiError,
    ApiErrorKind,
    ProcessingError,
    ProcessingErrorKind,
    RequestError,
    RequestErrorKind,
    api_error_from_response,
    api_error_kind_for_status,
    classify_http_exception,
    parse_retry_after,
)

_REQ = httpx.Request("GET", "https://api.test/v1/models")


@pytest.mark.parametrize(
    "status,kind",
    [
        (400, ApiErrorKind.BAD_REQUEST),
        (401, ApiErrorKind.AUTHENTICATION),
        (403, ApiErrorKind.PERMISSION_DENIED),
        (404, ApiErrorKind.NOT_FOUND),
        (409, ApiErrorKind.CONFLICT),
        (422, ApiErrorKind.UNPROCESSABLE_ENTITY),
        (429, ApiErrorKind.RATE_LIMIT),
        (500, ApiErrorKind.INTERNAL_SERVER),
        (503, ApiErrorKind.INTERNAL_SERVER),
        (599, ApiErrorKind.INTERNAL_SERVER),
        (418, ApiErrorKind.OTHER),
        (302, ApiErrorKind.OTHER),
    ],
)
def test_status_mapping(status, kind):
    assert api_error_kind_for_status(status) is kind  # nosec B101


def test_only_rate_limit_and_server_errors_retry():
    retryable = {k for k in ApiErrorKind if ApiError(k, 400, "x").is_retryable()}
    assert retryable == {ApiErrorKind.RATE_LIMIT, ApiErrorKind.INTERNAL_SERVER}  # nosec B101


def test_request_error_retryability():
    retryable = {k for k in RequestErrorKind if RequestError(k, "x").is_retryable()}
    assert retryable == {RequestErrorKind.TIMEOUT, RequestErrorKind.CONNECTION}  # nosec B101


def test_processing_errors_never_retry():
    for kind in ProcessingErrorKind:
        assert not ProcessingError(kind, "x").is_retryable()  # nosec B101


def test_api_error_from_json_body():
    response = httpx.Response(
        401,
        json={"error": {"message": "Invalid key", "code": "invalid_api_key", "type": "auth"}},
        request=_REQ,
    )
    err = api_error_from_response(response)
    assert err.kind is ApiErrorKind.AUTHENTICATION  # nosec B101
    assert err.status == 401 and err.status_code == 401  # nosec B101
    assert (err.message, err.code, err.type) == ("Invalid key", "invalid_api_key", "auth")  # nosec B101
    assert err.is_authentication() and not err.is_retryable()  # nosec B101
    assert err.error_code == "api.authentication"  # nosec B101


def test_api_error_json_without_message_uses_default():
    response = httpx.Response(400, json={"error": {"code": 7}}, request=_REQ)
    err = api_error_from_response(response)
    assert err.message == "No error message provided"  # nosec B101
    assert err.code == "7"  # nosec B101


def test_api_error_non_json_body_uses_reason_phrase():
    response = httpx.Response(502, text="<html>bad gateway</html>", request=_REQ)
    err = api_error_from_response(response)
    assert err.kind is ApiErrorKind.INTERNAL_SERVER  # nosec B101
    assert err.message == "Bad Gateway"  # nosec B101
    assert err.is_server_error() and err.is_retryable()  # nosec B101


def test_retry_after_seconds_header():
    response = httpx.Response(429, headers={"Retry-After": "2"}, json={"error": {}}, request=_REQ)
    err = api_error_from_response(response)
    assert err.retry_after == 2.0  # nosec B101
    assert err.is_rate_limit()  # nosec B101


def test_parse_retry_after_variants():
    assert parse_retry_after(None) is None  # nosec B101
    assert parse_retry_after("") is None  # nosec B101
    assert parse_retry_after("soon") is None  # nosec B101
    assert parse_retry_after("-5") == 0.0  # nosec B101
    future = email.utils.formatdate(time.time() + 30, usegmt=True)
    parsed = parse_retry_after(future)
    assert parsed is not None and 25.0 <= parsed <= 31.0  # nosec B101


@pytest.mark.parametrize(
    "exc,kind",
    [
        (httpx.ReadTimeout("t", request=_REQ), RequestErrorKind.TIMEOUT),
        (httpx.ConnectTimeout("t", request=_REQ), RequestErrorKind.TIMEOUT),
        (httpx.ConnectError("c", request=_REQ), RequestErrorKind.CONNECTION),
        (httpx.ReadError("r", request=_REQ), RequestErrorKind.CONNECTION),
        (httpx.RemoteProtocolError("peer closed", request=_REQ), RequestErrorKind.CONNECTION),
        (httpx.UnsupportedProtocol("ftp", request=_REQ), RequestErrorKind.BUILD),
        (httpx.InvalidURL("bad"), RequestErrorKind.BUILD),
        (httpx.TooManyRedirects("loop", request=_REQ), RequestErrorKind.TRANSPORT),
    ],
)
def test_classify_http_exception(exc, kind):
    err = classify_http_exception(exc)
    assert err.kind is kind  # nosec B101
    assert err.raw is exc  # nosec B101
    assert err.error_code == f"request.{kind.value}"  # nosec B101


def test_conversion_error_message_and_payload():
    err = ProcessingError.conversion("{bad", "ChatCompletionChunk")
    assert err.kind is ProcessingErrorKind.CONVERSION  # nosec B101
    assert err.message == "Failed to convert value '{bad' to type 'ChatCompletionChunk'"  # nosec B101
    assert err.raw_payload == "{bad" and err.is_deserialization()  # nosec B101


def test_errors_are_raisable_exceptions():
    with pytest.raises(RequestError) as ei:
        raise RequestError(RequestErrorKind.TIMEOUT, "slow")
    assert ei.value.is_timeout()  # nosec B101
    assert "request.timeout" in str(ei.value)  # nosec B101
