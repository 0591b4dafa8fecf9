"""
Module: results.py
Description: Typed result models for each queue-service operation.

One frozen model per operation response. Each declares its XML layout
statically through ``xml_bindings`` (see bindings.py); the decoder
never guesses at response shapes.

Key Components:
- ResponseMetadata: request id only (DeleteQueue, DeleteMessage, ...)
- ListQueuesResult, CreateQueueResult
- QueueAttributes, AttributePair
- SendMessageResult
- ReceiveMessageResult, Message

Dependencies: pydantic, typing
"""

from typing import ClassVar, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from sqs_queue.models.attributes import AttributeName, attribute_name
from sqs_queue.models.bindings import Binding, Nested, Pairs, Text, TextList


class ResultModel(BaseModel):
    """Base for decoded results: frozen, with a request id."""

    model_config = ConfigDict(frozen=True)

    # Document element a well-formed reply must have
    xml_root: ClassVar[str] = ""

    xml_bindings: ClassVar[Dict[str, Binding]] = {
        "request_id": Text("ResponseMetadata/RequestId"),
    }

    request_id: str = Field(default="", description="Service request id")

    @classmethod
    def matches_root(cls, tag: str) -> bool:
        return tag == cls.xml_root


class ResponseMetadata(ResultModel):
    """
    Result of operations that return nothing but a request id.

    Shared by several actions, so any <...Response> document other than
    an error document is accepted.
    """

    @classmethod
    def matches_root(cls, tag: str) -> bool:
        return tag.endswith("Response") and tag != "ErrorResponse"


class ListQueuesResult(ResultModel):
    """ListQueues response: queue URLs in service order."""

    xml_root: ClassVar[str] = "ListQueuesResponse"

    xml_bindings: ClassVar[Dict[str, Binding]] = {
        **ResultModel.xml_bindings,
        "queue_urls": TextList("ListQueuesResult/QueueUrl"),
    }

    queue_urls: List[str] = Field(default_factory=list)


class CreateQueueResult(ResultModel):
    """CreateQueue response."""

    xml_root: ClassVar[str] = "CreateQueueResponse"

    xml_bindings: ClassVar[Dict[str, Binding]] = {
        **ResultModel.xml_bindings,
        "queue_url": Text("CreateQueueResult/QueueUrl"),
    }

    queue_url: str = ""


class AttributePair(BaseModel):
    """A single Name/Value attribute."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: str


class QueueAttributes(ResultModel):
    """
    GetQueueAttributes response.

    Attributes keep the order the service returned them in.
    """

    xml_root: ClassVar[str] = "GetQueueAttributesResponse"

    xml_bindings: ClassVar[Dict[str, Binding]] = {
        **ResultModel.xml_bindings,
        "attributes": Pairs("GetQueueAttributesResult/Attribute"),
    }

    attributes: List[AttributePair] = Field(default_factory=list)

    def get(self, name: AttributeName, default: Optional[str] = None) -> Optional[str]:
        wanted = attribute_name(name)
        for pair in self.attributes:
            if pair.name == wanted:
                return pair.value
        return default

    def as_dict(self) -> Dict[str, str]:
        return {pair.name: pair.value for pair in self.attributes}


class SendMessageResult(ResultModel):
    """SendMessage response: the id the service assigned."""

    xml_root: ClassVar[str] = "SendMessageResponse"

    xml_bindings: ClassVar[Dict[str, Binding]] = {
        **ResultModel.xml_bindings,
        "message_id": Text("SendMessageResult/MessageId"),
        "md5_of_message_body": Text("SendMessageResult/MD5OfMessageBody"),
    }

    message_id: str = ""
    md5_of_message_body: str = ""


class Message(BaseModel):
    """
    A received message.

    Attributes:
        message_id: Service-assigned message id
        receipt_handle: Handle required by delete/visibility calls
        md5_of_body: MD5 digest of the body as computed by the service
        body: Message body
        attributes: Message attributes requested with AttributeName.n
    """

    model_config = ConfigDict(frozen=True)

    xml_bindings: ClassVar[Dict[str, Binding]] = {
        "message_id": Text("MessageId"),
        "receipt_handle": Text("ReceiptHandle"),
        "md5_of_body": Text("MD5OfBody"),
        "body": Text("Body"),
        "attributes": Pairs("Attribute"),
    }

    message_id: str = ""
    receipt_handle: str = ""
    md5_of_body: str = ""
    body: str = ""
    attributes: List[AttributePair] = Field(default_factory=list)


class ReceiveMessageResult(ResultModel):
    """ReceiveMessage response; empty messages means the queue had none."""

    xml_root: ClassVar[str] = "ReceiveMessageResponse"

    xml_bindings: ClassVar[Dict[str, Binding]] = {
        **ResultModel.xml_bindings,
        "messages": Nested("ReceiveMessageResult/Message", Message),
    }

    messages: List[Message] = Field(default_factory=list)
