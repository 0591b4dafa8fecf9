"""
Module: test_request.py
Description: Unit tests for signed request construction.

Covers the Action/Timestamp/Version triple, GET vs POST placement of
parameters, indexed parameters, endpoint derivation and construction
errors raised before any network activity.
"""

import base64
import hashlib
import hmac
import re
from datetime import datetime, timezone
from urllib.parse import parse_qsl

import pytest
from pydantic import SecretStr

from sqs_queue.auth.signer import string_to_sign
from sqs_queue.models.context import Auth, Region
from sqs_queue.wire.errors import ErrorKind, SQSError
from sqs_queue.wire.request import (
    API_VERSION,
    build_request,
    format_timestamp,
    indexed_params,
)

FIXED_TIME = datetime(2011, 10, 3, 15, 19, 30, tzinfo=timezone.utc)
QUEUE_PATH = "/123456789012/test-queue"


def _query(request):
    return dict(parse_qsl(request.url.query.decode("ascii"), keep_blank_values=True))


def _form(request):
    return dict(parse_qsl(request.content.decode("ascii"), keep_blank_values=True))


class TestIndexedParams:
    """Test cases for indexed parameter expansion."""

    def test_indexed_params_are_one_based_in_caller_order(self):
        """Test AttributeName.n numbering follows caller order without gaps."""
        params = indexed_params("AttributeName", ["VisibilityTimeout", "All", "QueueArn"])

        assert list(params.items()) == [
            ("AttributeName.1", "VisibilityTimeout"),
            ("AttributeName.2", "All"),
            ("AttributeName.3", "QueueArn"),
        ]

    def test_indexed_params_empty(self):
        """Test that no values produce no parameters."""
        assert indexed_params("AttributeName", []) == {}


class TestTimestamp:
    """Test cases for the wire timestamp format."""

    def test_format_timestamp_fixed(self):
        assert format_timestamp(FIXED_TIME) == "2011-10-03T15:19:30Z"

    def test_format_timestamp_converts_to_utc(self):
        """Test that aware timestamps in other zones are converted to UTC."""
        # Arrange
        from datetime import timedelta

        # Act
        local = datetime(2011, 10, 3, 17, 19, 30, tzinfo=timezone(timedelta(hours=2)))

        # Assert
        assert format_timestamp(local) == "2011-10-03T15:19:30Z"

    def test_format_timestamp_defaults_to_now(self):
        assert re.match(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z$", format_timestamp())


class TestBuildRequest:
    """Test cases for build_request()."""

    def test_get_request_carries_protocol_parameters(self, auth, region):
        """Test Action, Timestamp, Version and signature land in the query string."""
        request = build_request(auth, region, "GET", "ListQueues", "/", {"QueueNamePrefix": "test"})

        query = _query(request)
        assert request.method == "GET"
        assert query["Action"] == "ListQueues"
        assert query["Version"] == API_VERSION == "2009-02-01"
        assert re.match(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z$", query["Timestamp"])
        assert query["QueueNamePrefix"] == "test"
        assert query["AWSAccessKeyId"] == "AKIDEXAMPLE"
        assert query["SignatureVersion"] == "2"
        assert query["SignatureMethod"] == "HmacSHA256"
        assert query["Signature"]
        assert request.content == b""

    def test_endpoint_derived_from_regional_endpoint(self, auth, region):
        """Test that the 'ec2' token is swapped for 'sqs' and the path appended."""
        request = build_request(auth, region, "GET", "DeleteQueue", QUEUE_PATH)

        assert request.url.scheme == "https"
        assert request.url.host == "sqs.us-east-1.amazonaws.com"
        assert request.url.path == QUEUE_PATH

    def test_endpoint_override(self, auth):
        """Test an explicit queue-service endpoint is used verbatim."""
        # Arrange
        local = Region(
            name="local",
            ec2_endpoint="https://ec2.us-east-1.amazonaws.com",
            sqs_endpoint_override="http://localhost:9324/"
        )

        # Act
        request = build_request(auth, local, "GET", "ListQueues", "/")

        # Assert
        assert request.url.host == "localhost"
        assert request.url.port == 9324
        assert request.url.path == "/"

    def test_post_request_uses_form_body(self, auth, region):
        """Test POST puts parameters in a form-encoded body with matching length."""
        request = build_request(auth, region, "POST", "SendMessage", QUEUE_PATH, {"MessageBody": "hello world"})

        form = _form(request)
        assert request.method == "POST"
        assert request.url.query == b""
        assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
        assert int(request.headers["Content-Length"]) == len(request.content)
        assert form["Action"] == "SendMessage"
        assert form["MessageBody"] == "hello world"
        assert form["Signature"]

    def test_large_body_fits_in_post(self, auth, region):
        """Test that a body far beyond URL limits is carried in the POST body."""
        # Arrange
        body = "x" * 200_000

        # Act
        request = build_request(auth, region, "POST", "SendMessage", QUEUE_PATH, {"MessageBody": body})

        # Assert
        assert _form(request)["MessageBody"] == body
        assert len(str(request.url)) < 200

    def test_signature_verifies(self, auth, region):
        """Test the service-side recomputation of the signature matches."""
        # Arrange
        request = build_request(auth, region, "GET", "GetQueueAttributes", QUEUE_PATH, {"AttributeName.1": "All"})

        # Act
        params = _query(request)
        signature = params.pop("Signature")
        payload = string_to_sign("GET", "sqs.us-east-1.amazonaws.com", QUEUE_PATH, params)
        expected = base64.b64encode(
            hmac.new(
                auth.secret_key.get_secret_value().encode("utf-8"),
                payload.encode("utf-8"),
                hashlib.sha256
            ).digest()
        ).decode("ascii")

        # Assert
        assert signature == expected

    def test_same_inputs_same_request(self, auth, region):
        """Test determinism for a fixed timestamp."""
        first = build_request(auth, region, "GET", "ListQueues", "/", timestamp=FIXED_TIME)
        second = build_request(auth, region, "GET", "ListQueues", "/", timestamp=FIXED_TIME)

        assert first.url == second.url

    def test_fresh_timestamp_changes_signature(self, auth, region):
        """Test that requests signed at different times differ."""
        first = build_request(auth, region, "GET", "ListQueues", "/", timestamp=FIXED_TIME)
        second = build_request(
            auth, region, "GET", "ListQueues", "/",
            timestamp=datetime(2011, 10, 3, 15, 19, 31, tzinfo=timezone.utc)
        )

        assert _query(first)["Signature"] != _query(second)["Signature"]

    def test_caller_params_not_mutated(self, auth, region):
        """Test that the caller's parameter map is copied before signing."""
        # Arrange
        params = {"QueueName": "test-queue"}

        # Act
        build_request(auth, region, "GET", "CreateQueue", "/", params)

        # Assert
        assert params == {"QueueName": "test-queue"}

    def test_method_is_case_insensitive(self, auth, region):
        request = build_request(auth, region, "post", "SendMessage", QUEUE_PATH, {"MessageBody": "x"})

        assert request.method == "POST"


class TestBuildRequestErrors:
    """Test cases for construction errors."""

    def test_unsupported_method(self, auth, region):
        with pytest.raises(SQSError) as exc_info:
            build_request(auth, region, "DELETE", "DeleteQueue", QUEUE_PATH)

        assert exc_info.value.kind == ErrorKind.CONSTRUCTION
        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.cause, ValueError)

    def test_empty_action(self, auth, region):
        with pytest.raises(SQSError) as exc_info:
            build_request(auth, region, "GET", "", "/")

        assert exc_info.value.kind == ErrorKind.CONSTRUCTION

    def test_relative_path(self, auth, region):
        """Test that a path without a leading slash is rejected."""
        with pytest.raises(SQSError) as exc_info:
            build_request(auth, region, "GET", "DeleteQueue", "123456789012/test-queue")

        assert exc_info.value.kind == ErrorKind.CONSTRUCTION

    def test_malformed_endpoint(self, auth):
        """Test that an endpoint without scheme and host is rejected."""
        # Arrange
        broken = Region(name="broken", ec2_endpoint="not a url")

        # Act
        with pytest.raises(SQSError) as exc_info:
            build_request(auth, broken, "GET", "ListQueues", "/")

        # Assert
        assert exc_info.value.kind == ErrorKind.CONSTRUCTION
        assert exc_info.value.status_code is None

    def test_empty_credentials(self, region):
        """Test that signing with empty credentials aborts construction."""
        # Arrange
        empty = Auth.model_construct(access_key="", secret_key=SecretStr(""))

        # Act
        with pytest.raises(SQSError) as exc_info:
            build_request(empty, region, "GET", "ListQueues", "/")

        # Assert
        assert exc_info.value.kind == ErrorKind.CONSTRUCTION
        assert "credentials" in str(exc_info.value)
