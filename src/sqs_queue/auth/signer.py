"""
Module: signer.py
Description: Query API request signing (Signature Version 2).

Computes an HMAC-SHA256 signature over the HTTP method, host, path and
the canonicalized parameter set, and stores it in the parameters so
the service can recompute and verify it.

Key Components:
- sign(): add signing parameters and the Signature to a parameter set
- canonical_query(): sorted, RFC 3986 encoded parameter string
- string_to_sign(): the exact payload fed to the HMAC

Dependencies: hmac, hashlib, base64, urllib
"""

import base64
import hashlib
import hmac
from typing import Dict
from urllib.parse import quote

from sqs_queue.models.context import Auth

SIGNATURE_VERSION = "2"
SIGNATURE_METHOD = "HmacSHA256"

# RFC 3986 unreserved characters are left as-is, everything else is escaped
UNRESERVED = "-_.~"


def encode(value: str) -> str:
    """Percent-encode a key or value for the canonical query."""
    return quote(value, safe=UNRESERVED)


def canonical_query(params: Dict[str, str]) -> str:
    """
    Build the canonical query string.

    Keys are sorted lexicographically since the signature depends on
    input order; keys and values are percent-encoded per RFC 3986.
    """
    return "&".join(
        f"{encode(key)}={encode(params[key])}"
        for key in sorted(params)
    )


def string_to_sign(method: str, host: str, path: str, params: Dict[str, str]) -> str:
    return "\n".join([
        method.upper(),
        host.lower(),
        path or "/",
        canonical_query(params),
    ])


def sign(auth: Auth, method: str, host: str, path: str, params: Dict[str, str]) -> str:
    """
    Sign a parameter set in place.

    Adds AWSAccessKeyId, SignatureVersion, SignatureMethod (and
    SecurityToken when the credentials carry one), then the Signature
    computed over all of them.

    Args:
        auth: Credentials to sign with
        method: HTTP method ('GET' or 'POST')
        host: Host header value the request will be sent with
        path: URL path of the request
        params: Parameter set to sign; mutated

    Returns:
        The base64 encoded signature

    Raises:
        ValueError: If the credentials are empty

    Example:
        >>> params = {"Action": "ListQueues"}
        >>> sign(auth, "GET", "sqs.us-east-1.amazonaws.com", "/", params)
        'ZLe1qfS...='
    """
    secret = auth.secret_key.get_secret_value() if auth else ""
    if not auth or not auth.access_key or not secret:
        raise ValueError("credentials must be non-empty")

    params.pop("Signature", None)
    params["AWSAccessKeyId"] = auth.access_key
    params["SignatureVersion"] = SIGNATURE_VERSION
    params["SignatureMethod"] = SIGNATURE_METHOD
    if auth.token:
        params["SecurityToken"] = auth.token

    payload = string_to_sign(method, host, path, params)
    digest = hmac.new(
        secret.encode("utf-8"),
        payload.encode("utf-8"),
        hashlib.sha256
    ).digest()
    signature = base64.b64encode(digest).decode("ascii")

    params["Signature"] = signature
    return signature
