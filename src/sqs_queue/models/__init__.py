"""
Module: models
Description: Package initialization for context and result models.

This package contains the value objects used by the SQS client:
- Auth, Region: credential and endpoint context
- Attribute: queue attribute names
- Result models: one per operation response

All models are exported here for convenient importing.
"""

from .attributes import Attribute
from .context import Auth, Region, REGIONS, get_region
from .results import (
    AttributePair,
    CreateQueueResult,
    ListQueuesResult,
    Message,
    QueueAttributes,
    ReceiveMessageResult,
    ResponseMetadata,
    SendMessageResult,
)

__all__ = [
    "Attribute",
    "Auth",
    "Region",
    "REGIONS",
    "get_region",
    "AttributePair",
    "CreateQueueResult",
    "ListQueuesResult",
    "Message",
    "QueueAttributes",
    "ReceiveMessageResult",
    "ResponseMetadata",
    "SendMessageResult",
]
