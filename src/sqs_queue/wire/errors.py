"""
Module: errors.py
Description: Structured error type and error-body builder.

Every failure the client can hit is surfaced as a single exception
type, SQSError, so callers have one thing to catch. The kind of
failure is recorded in ``kind``; which fields are populated follows
from it:

- CONSTRUCTION: cause set, no status (bad input, bad endpoint)
- TRANSPORT: cause set, no status (DNS, refused connection, timeout)
- SERVICE: status set; type/code/message/request_id when the error
  body parsed, otherwise cause holds the parse failure
- DECODE: status set, cause holds the parse failure
- NOT_FOUND: a lookup by name matched nothing

Key Components:
- ErrorKind: failure taxonomy
- SQSError: the structured error
- build_error(): turns a failed HTTP response into an SQSError

SQSError pickles with all of its fields, so it can cross process
boundaries.

Dependencies: xml.etree, enum, typing
"""

from enum import Enum
from typing import Optional
from xml.etree import ElementTree

from sqs_queue.models.bindings import strip_namespaces
from sqs_queue.utils.logger import get_logger

logger = get_logger(__name__)


class ErrorKind(str, Enum):
    """Which stage of a call failed."""

    CONSTRUCTION = "construction"
    TRANSPORT = "transport"
    SERVICE = "service"
    DECODE = "decode"
    NOT_FOUND = "not_found"


class SQSError(Exception):
    """
    Error raised by every SQS client operation.

    Attributes:
        kind: Failure kind (see ErrorKind)
        cause: Underlying exception, if any
        status_code: HTTP status code (None when no response arrived)
        status_text: HTTP reason phrase ("Forbidden", ...)
        type: Whether the service blamed the sender or the receiver
        code: Service error code ("InvalidParameterValue", ...)
        message: Human-oriented error message
        request_id: Unique id of the failed request
    """

    def __init__(
        self,
        kind: ErrorKind,
        cause: Optional[BaseException] = None,
        status_code: Optional[int] = None,
        status_text: str = "",
        type: str = "",
        code: str = "",
        message: str = "",
        request_id: str = "",
    ):
        self.kind = kind
        self.cause = cause
        self.status_code = status_code
        self.status_text = status_text
        self.type = type
        self.code = code
        self.message = message
        self.request_id = request_id
        super().__init__(str(self))

    @classmethod
    def construction(cls, cause: BaseException) -> "SQSError":
        return cls(ErrorKind.CONSTRUCTION, cause=cause)

    @classmethod
    def transport(cls, cause: BaseException) -> "SQSError":
        return cls(ErrorKind.TRANSPORT, cause=cause)

    @classmethod
    def not_found(cls, message: str) -> "SQSError":
        return cls(ErrorKind.NOT_FOUND, cause=LookupError(message), message=message)

    @classmethod
    def decode(cls, cause: BaseException, status_code: int, status_text: str = "") -> "SQSError":
        return cls(
            ErrorKind.DECODE,
            cause=cause,
            status_code=status_code,
            status_text=status_text,
        )

    def __str__(self) -> str:
        if self.message:
            return self.message
        if self.kind == ErrorKind.SERVICE and self.status_code is not None:
            return f"{self.status_code} {self.status_text}".strip()
        if self.cause is not None:
            return str(self.cause)
        return self.kind.value

    def __repr__(self) -> str:
        return (
            f"SQSError(kind={self.kind.value!r}, status_code={self.status_code!r}, "
            f"code={self.code!r}, message={self.message!r}, request_id={self.request_id!r}, "
            f"cause={self.cause!r})"
        )

    def __reduce__(self):
        return (
            type(self),
            (
                self.kind,
                self.cause,
                self.status_code,
                self.status_text,
                self.type,
                self.code,
                self.message,
                self.request_id,
            ),
        )


def build_error(status_code: int, status_text: str, body: bytes) -> SQSError:
    """
    Build a service error from a failed HTTP response.

    Status code and text are always set. The body is parsed as the
    service's error document (ErrorResponse/Error/{Type,Code,Message}
    plus RequestId); if that fails the service fields stay empty and
    the parse failure becomes the cause. Never raises.

    Args:
        status_code: HTTP status code of the response
        status_text: HTTP reason phrase of the response
        body: Raw response body

    Returns:
        Populated SQSError of kind SERVICE
    """
    error = SQSError(ErrorKind.SERVICE, status_code=status_code, status_text=status_text)

    try:
        root = strip_namespaces(ElementTree.fromstring(body))
    except ElementTree.ParseError as e:
        logger.warning(
            "Unparseable error body",
            status_code=status_code,
            error=str(e)
        )
        error.cause = e
        error.__cause__ = e
        return error

    detail = root if root.tag == "Error" else root.find("Error")
    if detail is not None:
        error.type = detail.findtext("Type", default="")
        error.code = detail.findtext("Code", default="")
        error.message = detail.findtext("Message", default="")
    error.request_id = root.findtext("RequestId", default="")
    if not error.request_id and detail is not None:
        error.request_id = detail.findtext("RequestId", default="")

    return error

