"""
Package: sqs_queue
Description: Client for a signed HTTP+XML message queue service.

Lists, creates and deletes queues, sends and receives messages, and
reads and writes queue attributes. Every call is signed with the
Signature Version 2 scheme and answered with a typed result or an
SQSError.

Example:
    >>> from sqs_queue import SQS, Auth, get_region
    >>> sqs = SQS(Auth(access_key="AKID", secret_key="secret"), get_region("us-east-1"))
    >>> queue = sqs.create_queue("orders")
    >>> queue.send_message("hello world")
"""

from .wire import ErrorKind, Executor, SQSError
from .models import (
    Attribute,
    AttributePair,
    Auth,
    Message,
    QueueAttributes,
    REGIONS,
    Region,
    ResponseMetadata,
    SendMessageResult,
    get_region,
)
from .queue import Queue
from .sqs import SQS, CreateQueueOptions

__version__ = "0.1.0"

__all__ = [
    "SQS",
    "Queue",
    "CreateQueueOptions",
    "Executor",
    "SQSError",
    "ErrorKind",
    "Attribute",
    "AttributePair",
    "Auth",
    "Message",
    "QueueAttributes",
    "REGIONS",
    "Region",
    "ResponseMetadata",
    "SendMessageResult",
    "get_region",
]
