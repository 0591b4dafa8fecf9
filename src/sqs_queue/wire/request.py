"""
Module: request.py
Description: Builds signed HTTP requests for queue-service actions.

Every request gets a fresh Action/Timestamp/Version triple and a fresh
signature; nothing is cached or reused between calls.

Key Components:
- build_request(): action + path + parameters -> signed httpx.Request
- indexed_params(): 1-based Prefix.n parameters in caller order
- resolve_url(): regional endpoint + resource path, validated

Dependencies: httpx, urllib, datetime
"""

from datetime import datetime, timezone
from typing import Dict, Iterable, Optional
from urllib.parse import urlencode

import httpx

from sqs_queue.auth.signer import sign
from sqs_queue.models.context import Auth, Region
from sqs_queue.wire.errors import SQSError

API_VERSION = "2009-02-01"
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def indexed_params(prefix: str, values: Iterable[str]) -> Dict[str, str]:
    """
    Expand values into indexed parameters.

    Example:
        >>> indexed_params("AttributeName", ["All"])
        {'AttributeName.1': 'All'}
    """
    return {f"{prefix}.{i}": str(value) for i, value in enumerate(values, start=1)}


def format_timestamp(when: Optional[datetime] = None) -> str:
    when = when or datetime.now(timezone.utc)
    if when.tzinfo is not None:
        when = when.astimezone(timezone.utc)
    return when.strftime(TIMESTAMP_FORMAT)


def resolve_url(region: Region, path: str) -> httpx.URL:
    """
    Join the queue-service endpoint with a resource path.

    Raises:
        SQSError: If the endpoint or path is malformed
    """
    if not isinstance(path, str) or not path.startswith("/"):
        raise SQSError.construction(ValueError(f"resource path must start with '/': {path!r}"))

    try:
        url = httpx.URL(region.sqs_endpoint + path)
    except (httpx.InvalidURL, TypeError) as e:
        raise SQSError.construction(e) from e

    if url.scheme not in ("http", "https") or not url.host:
        raise SQSError.construction(
            ValueError(f"endpoint must be an absolute http(s) URL: {region.sqs_endpoint!r}")
        )
    return url


def build_request(
    auth: Auth,
    region: Region,
    method: str,
    action: str,
    path: str,
    params: Optional[Dict[str, str]] = None,
    timestamp: Optional[datetime] = None,
) -> httpx.Request:
    """
    Build a signed request for an action.

    Sets Action, Timestamp and Version, signs the parameter set, and
    places it in the query string (GET) or in a form-encoded body (POST).

    Args:
        auth: Credentials to sign with
        region: Region whose queue-service endpoint is targeted
        method: 'GET' or 'POST'
        action: Action name, e.g. 'SendMessage'
        path: Resource path, '/' for service-level actions
        params: Operation parameters; copied, never mutated
        timestamp: Signing time, defaults to now (UTC)

    Returns:
        httpx.Request ready to be sent

    Raises:
        SQSError: If the inputs are malformed (construction kind)
    """
    method = (method or "").upper()
    if method not in ("GET", "POST"):
        raise SQSError.construction(ValueError(f"unsupported HTTP method: {method!r}"))
    if not action or not isinstance(action, str):
        raise SQSError.construction(ValueError("action must be a non-empty string"))

    url = resolve_url(region, path)

    signed = {key: str(value) for key, value in (params or {}).items()}
    signed["Action"] = action
    signed["Timestamp"] = format_timestamp(timestamp)
    signed["Version"] = API_VERSION

    host = url.netloc.decode("ascii")
    try:
        sign(auth, method, host, url.path, signed)
    except ValueError as e:
        raise SQSError.construction(e) from e

    encoded = urlencode(sorted(signed.items()))

    if method == "GET":
        request = httpx.Request("GET", url.copy_with(query=encoded.encode("ascii")))
    else:
        body = encoded.encode("ascii")
        request = httpx.Request(
            "POST",
            url,
            headers={
                "Content-Type": FORM_CONTENT_TYPE,
                "Content-Length": str(len(body)),
            },
            content=body,
        )

    return request
