"""
Module: auth
Description: Package initialization for request authentication.

This package contains the request signer:
- signer: Signature Version 2 (HMAC-SHA256) over the query parameters
"""

from .signer import sign

__all__ = ["sign"]
