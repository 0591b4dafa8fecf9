"""
Module: queue.py
Description: Operations on a single queue.

A Queue is a lightweight handle: the owning SQS client plus the
resource path the service assigned to the queue. It holds no other
state; discarding it does not touch the remote queue.
"""

import posixpath
from typing import TYPE_CHECKING, Iterable, List, Optional

from sqs_queue.models.attributes import AttributeName, Attribute, attribute_name
from sqs_queue.models.results import (
    Message,
    QueueAttributes,
    ReceiveMessageResult,
    ResponseMetadata,
    SendMessageResult,
)
from sqs_queue.utils.logger import get_logger
from sqs_queue.wire.errors import SQSError
from sqs_queue.wire.request import indexed_params

if TYPE_CHECKING:
    from sqs_queue.sqs import SQS

logger = get_logger(__name__)

# Service limit on messages returned by one ReceiveMessage call
MAX_RECEIVE_MESSAGES = 10


class Queue:
    """
    Handle for one queue.

    Attributes:
        sqs: Client whose credentials and endpoint are used
        path: Resource path, e.g. '/123456789012/orders'
    """

    def __init__(self, sqs: "SQS", path: str):
        if not path or not isinstance(path, str) or not path.startswith("/"):
            raise SQSError.construction(ValueError(f"resource path must start with '/': {path!r}"))

        self.sqs = sqs
        self.path = path

    @property
    def name(self) -> str:
        return posixpath.basename(self.path.rstrip("/"))

    @property
    def url(self) -> str:
        return self.sqs.region.sqs_endpoint + self.path

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Queue):
            return NotImplemented
        return self.url == other.url

    def __hash__(self) -> int:
        return hash(self.url)

    def __repr__(self) -> str:
        return f"Queue({self.path!r})"

    def delete_queue(self) -> ResponseMetadata:
        """Delete the remote queue. The handle stays usable but stale."""
        result = self.sqs.get("DeleteQueue", self.path, None, ResponseMetadata)

        logger.info(
            "Queue deleted",
            path=self.path,
            request_id=result.request_id
        )

        return result

    def get_queue_attributes(self, *attrs: AttributeName) -> QueueAttributes:
        """
        Get one, several or all attributes of the queue.

        Names are sent as AttributeName.1, AttributeName.2, ... in the
        order given. With no names, Attribute.ALL is requested.

        Example:
            >>> queue.get_queue_attributes(Attribute.APPROXIMATE_NUMBER_OF_MESSAGES).as_dict()
            {'ApproximateNumberOfMessages': '1'}
        """
        names = [attribute_name(attr) for attr in attrs] or [Attribute.ALL.value]
        params = indexed_params("AttributeName", names)

        return self.sqs.get("GetQueueAttributes", self.path, params, QueueAttributes)

    def set_queue_attributes(self, name: AttributeName, value: str) -> ResponseMetadata:
        """
        Set one attribute of the queue.

        Sent as POST since attribute values such as Policy can be large.
        """
        wire_name = attribute_name(name)
        if not wire_name:
            raise SQSError.construction(ValueError("attribute name must be a non-empty string"))

        params = {
            "Attribute.Name": wire_name,
            "Attribute.Value": str(value),
        }
        result = self.sqs.post("SetQueueAttributes", self.path, params, ResponseMetadata)

        logger.info(
            "Queue attribute set",
            path=self.path,
            attribute=wire_name,
            request_id=result.request_id
        )

        return result

    def send_message(self, body: str) -> SendMessageResult:
        """
        Deliver a message to the queue.

        Always POSTs: large bodies overflow URL length limits as GET.

        Args:
            body: Message body

        Returns:
            SendMessageResult with the service-assigned message_id
        """
        if not isinstance(body, str):
            raise SQSError.construction(ValueError("body must be a string"))

        result = self.sqs.post("SendMessage", self.path, {"MessageBody": body}, SendMessageResult)

        logger.info(
            "Message sent",
            path=self.path,
            message_id=result.message_id,
            body_length=len(body),
            request_id=result.request_id
        )

        return result

    def receive_messages(
        self,
        max_number: int = 1,
        visibility_timeout: Optional[int] = None,
        attributes: Iterable[AttributeName] = (),
    ) -> List[Message]:
        """
        Receive up to max_number messages.

        Args:
            max_number: 1 to 10 messages
            visibility_timeout: Seconds the messages stay hidden from
                other receivers, defaults to the queue's setting
            attributes: Message attributes to return with each message

        Returns:
            Received messages, empty when none are available
        """
        if not isinstance(max_number, int) or not 1 <= max_number <= MAX_RECEIVE_MESSAGES:
            raise SQSError.construction(
                ValueError(f"max_number must be between 1 and {MAX_RECEIVE_MESSAGES}")
            )

        params = {}
        if max_number != 1:
            params["MaxNumberOfMessages"] = str(max_number)
        if visibility_timeout is not None:
            params["VisibilityTimeout"] = str(visibility_timeout)
        params.update(indexed_params("AttributeName", [attribute_name(attr) for attr in attributes]))

        result = self.sqs.get("ReceiveMessage", self.path, params, ReceiveMessageResult)

        logger.info(
            "Messages received",
            path=self.path,
            count=len(result.messages),
            request_id=result.request_id
        )

        return result.messages

    def receive_message(self, visibility_timeout: Optional[int] = None) -> Optional[Message]:
        """
        Receive a single message.

        Returns:
            The message, or None when the queue had nothing to deliver
        """
        messages = self.receive_messages(1, visibility_timeout)
        if not messages:
            return None
        return messages[0]

    def delete_message(self, receipt_handle: str) -> ResponseMetadata:
        """Delete a received message using its receipt handle."""
        if not receipt_handle or not isinstance(receipt_handle, str):
            raise SQSError.construction(ValueError("receipt_handle must be a non-empty string"))

        result = self.sqs.get("DeleteMessage", self.path, {"ReceiptHandle": receipt_handle}, ResponseMetadata)

        logger.info(
            "Message deleted",
            path=self.path,
            request_id=result.request_id
        )

        return result

    def change_message_visibility(self, receipt_handle: str, visibility_timeout: int) -> ResponseMetadata:
        """Change how long a received message stays hidden."""
        if not receipt_handle or not isinstance(receipt_handle, str):
            raise SQSError.construction(ValueError("receipt_handle must be a non-empty string"))
        if not isinstance(visibility_timeout, int) or visibility_timeout < 0:
            raise SQSError.construction(ValueError("visibility_timeout must be a non-negative integer"))

        params = {
            "ReceiptHandle": receipt_handle,
            "VisibilityTimeout": str(visibility_timeout),
        }
        return self.sqs.get("ChangeMessageVisibility", self.path, params, ResponseMetadata)

    def add_permission(self, label: str, account_ids: Iterable[str], actions: Iterable[str]) -> ResponseMetadata:
        """
        Grant principals access to the queue.

        account_ids and actions are paired positionally as
        AWSAccountId.n / ActionName.n.

        Raises:
            SQSError: If label is empty or the lists are empty or uneven
        """
        account_ids = list(account_ids)
        actions = list(actions)
        if not label or not isinstance(label, str):
            raise SQSError.construction(ValueError("label must be a non-empty string"))
        if not account_ids or len(account_ids) != len(actions):
            raise SQSError.construction(
                ValueError("account_ids and actions must be non-empty and of equal length")
            )

        params = {"Label": label}
        params.update(indexed_params("AWSAccountId", account_ids))
        params.update(indexed_params("ActionName", actions))

        result = self.sqs.get("AddPermission", self.path, params, ResponseMetadata)

        logger.info(
            "Permission added",
            path=self.path,
            label=label,
            request_id=result.request_id
        )

        return result

    def remove_permission(self, label: str) -> ResponseMetadata:
        """Revoke the permission added under label."""
        if not label or not isinstance(label, str):
            raise SQSError.construction(ValueError("label must be a non-empty string"))

        return self.sqs.get("RemovePermission", self.path, {"Label": label}, ResponseMetadata)
