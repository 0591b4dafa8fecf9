"""
Module: attributes.py
Description: Queue attribute names understood by the 2009-02-01 API.
"""

from enum import Enum
from typing import Union


class Attribute(str, Enum):
    """Named queue property; ALL requests every attribute."""

    ALL = "All"
    APPROXIMATE_NUMBER_OF_MESSAGES = "ApproximateNumberOfMessages"
    APPROXIMATE_NUMBER_OF_MESSAGES_NOT_VISIBLE = "ApproximateNumberOfMessagesNotVisible"
    VISIBILITY_TIMEOUT = "VisibilityTimeout"
    CREATED_TIMESTAMP = "CreatedTimestamp"
    LAST_MODIFIED_TIMESTAMP = "LastModifiedTimestamp"
    POLICY = "Policy"
    MAXIMUM_MESSAGE_SIZE = "MaximumMessageSize"
    MESSAGE_RETENTION_PERIOD = "MessageRetentionPeriod"
    QUEUE_ARN = "QueueArn"


AttributeName = Union[Attribute, str]


def attribute_name(attr: AttributeName) -> str:
    """Return the wire name for an Attribute member or plain string."""
    if isinstance(attr, Attribute):
        return attr.value
    return str(attr)
