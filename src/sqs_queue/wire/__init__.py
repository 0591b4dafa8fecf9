"""
Module: wire
Description: Package initialization for the request/response pipeline.

This package contains the pieces every operation flows through:
- errors: SQSError and the error-body builder
- request: signed request construction
- executor: synchronous HTTP execution
- decoder: XML body decoding into result models
"""

from .errors import ErrorKind, SQSError, build_error
from .request import API_VERSION, build_request, indexed_params
from .decoder import decode
from .executor import Executor

__all__ = [
    "ErrorKind",
    "SQSError",
    "build_error",
    "API_VERSION",
    "build_request",
    "indexed_params",
    "decode",
    "Executor",
]
