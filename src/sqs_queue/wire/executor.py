"""
Module: executor.py
Description: Synchronous HTTP execution of signed requests.

Sends one request, reads and releases the response on every exit path,
and routes the body to the decoder (2xx) or the error builder (anything
else). There is no retry; every failure is raised to the caller.

Key Components:
- Executor: per-call httpx client with timeout and debug settings

Dependencies: httpx, typing
"""

from typing import Type, TypeVar

import httpx
from pydantic import BaseModel

from sqs_queue.utils.logger import get_logger
from sqs_queue.wire.decoder import decode
from sqs_queue.wire.errors import SQSError, build_error

logger = get_logger(__name__)

ResultT = TypeVar("ResultT", bound=BaseModel)

DEFAULT_TIMEOUT = 10.0

# Debug dumps of bodies are truncated to this many characters
DEBUG_BODY_LIMIT = 2000


class Executor:
    """
    Executes signed requests against the queue service.

    A new httpx.Client is opened for every call and closed before the
    call returns, so an Executor holds no connection state and can be
    shared across threads.

    Attributes:
        timeout: httpx timeout applied to connect/read/write/pool
        debug: When True, request and response payloads are logged
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, debug: bool = False):
        """
        Initialize executor.

        Args:
            timeout: HTTP timeout in seconds
            debug: Log request/response payloads

        Raises:
            ValueError: If timeout is not positive
        """
        if not isinstance(timeout, (int, float)) or timeout <= 0:
            raise ValueError("timeout must be a positive number")

        self.timeout = httpx.Timeout(timeout, connect=timeout)
        self.debug = debug

    def execute(self, request: httpx.Request, result_type: Type[ResultT]) -> ResultT:
        """
        Send a request and decode its response.

        Args:
            request: Signed request from build_request()
            result_type: Result model to decode a success body into

        Returns:
            Decoded result model

        Raises:
            SQSError: Transport kind when no response arrived, service
                kind for non-2xx responses, decode kind for bad bodies
        """
        if self.debug:
            logger.debug(
                "Sending request",
                method=request.method,
                url=str(request.url),
                body=request.content.decode("utf-8", "replace")[:DEBUG_BODY_LIMIT]
            )

        with httpx.Client(timeout=self.timeout) as client:
            try:
                response = client.send(request, stream=True)
                try:
                    body = response.read()
                finally:
                    response.close()

            except httpx.RequestError as e:
                logger.error(
                    "Request to queue service failed",
                    method=request.method,
                    host=request.url.host,
                    error=str(e),
                    error_type=type(e).__name__
                )
                raise SQSError.transport(e) from e

        if self.debug:
            logger.debug(
                "Received response",
                status_code=response.status_code,
                body=body.decode("utf-8", "replace")[:DEBUG_BODY_LIMIT]
            )

        if not response.is_success:
            error = build_error(response.status_code, response.reason_phrase, body)
            logger.warning(
                "Queue service returned an error",
                status_code=error.status_code,
                error_type=error.type,
                error_code=error.code,
                error_message=error.message,
                request_id=error.request_id
            )
            raise error

        return decode(body, result_type, response.status_code, response.reason_phrase)
