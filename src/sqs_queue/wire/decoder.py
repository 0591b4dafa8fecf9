"""
Module: decoder.py
Description: XML response decoding into typed result models.

Parses a success body, strips XML namespaces, checks the document
element against the one the result model expects, and binds it using
the model's static xml_bindings.
"""

from typing import Type, TypeVar
from xml.etree import ElementTree

from pydantic import BaseModel

from sqs_queue.models.bindings import bind, strip_namespaces
from sqs_queue.utils.logger import get_logger
from sqs_queue.wire.errors import SQSError

logger = get_logger(__name__)

ResultT = TypeVar("ResultT", bound=BaseModel)


def decode(body: bytes, result_type: Type[ResultT], status_code: int = 200, status_text: str = "") -> ResultT:
    """
    Decode a success response body.

    Missing elements below the document element decode to empty values.
    A body that is not well-formed XML, whose document element is not
    the expected <...Response>, or that cannot populate the model is an
    error.

    Args:
        body: Raw response body
        result_type: Result model declaring xml_root and xml_bindings
        status_code: HTTP status of the response, kept on errors
        status_text: HTTP reason phrase of the response

    Returns:
        Populated result model

    Raises:
        SQSError: Decode kind, with the underlying failure as cause
    """
    try:
        root = strip_namespaces(ElementTree.fromstring(body))
        if not result_type.matches_root(root.tag):
            raise ValueError(f"unexpected document element <{root.tag}> for {result_type.__name__}")
        return bind(root, result_type)

    # pydantic's ValidationError is a ValueError
    except (ElementTree.ParseError, ValueError) as e:
        logger.error(
            "Failed to decode response body",
            result_type=result_type.__name__,
            status_code=status_code,
            error=str(e)
        )
        raise SQSError.decode(e, status_code, status_text) from e
