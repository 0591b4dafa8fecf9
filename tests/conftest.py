"""
Module: conftest.py
Description: Shared pytest fixtures for SQS client tests.

Provides credentials, region and client fixtures plus builders for the
XML documents the queue service returns. HTTP traffic is stubbed with
pytest-httpx's httpx_mock fixture so no test touches the network.
"""

from typing import Iterable, Tuple

import pytest
from pydantic import Field, SecretStr
from pydantic_settings import SettingsConfigDict

from sqs_queue.config.settings import Settings
from sqs_queue.models.context import Auth, Region
from sqs_queue.sqs import SQS
from sqs_queue.wire.executor import Executor

NAMESPACE = "http://queue.amazonaws.com/doc/2009-02-01/"
ACCOUNT_ID = "123456789012"
QUEUE_HOST = "https://sqs.us-east-1.amazonaws.com"


class TestSettings(Settings):
    """Test settings that don't read environment variables or .env files."""

    model_config = SettingsConfigDict(
        env_prefix="SQS_TEST_UNUSED_",
        env_file=None,
        case_sensitive=False,
        extra="ignore"
    )

    access_key_id: str = Field(default="AKIDEXAMPLE")
    secret_access_key: SecretStr = Field(default=SecretStr("wJalrXUtnFEMI/K7MDENG+bPxRfiCYEXAMPLEKEY"))
    timeout: float = Field(default=5.0, gt=0, le=300)


@pytest.fixture
def test_settings():
    """Provide settings isolated from the process environment."""
    return TestSettings()


@pytest.fixture
def auth():
    """Provide example credentials."""
    return Auth(access_key="AKIDEXAMPLE", secret_key="wJalrXUtnFEMI/K7MDENG+bPxRfiCYEXAMPLEKEY")


@pytest.fixture
def region():
    """Provide the us-east-1 region with its EC2-style endpoint."""
    return Region(name="us-east-1", ec2_endpoint="https://ec2.us-east-1.amazonaws.com")


@pytest.fixture
def executor():
    return Executor(timeout=5.0)


@pytest.fixture
def sqs(auth, region, executor):
    """Provide an SQS client bound to the example context."""
    return SQS(auth, region, executor)


@pytest.fixture
def queue(sqs):
    """Provide a handle for the 'test-queue' queue."""
    return sqs.queue_from_url(f"{QUEUE_HOST}/{ACCOUNT_ID}/test-queue")


def _metadata(request_id: str) -> str:
    return f"<ResponseMetadata><RequestId>{request_id}</RequestId></ResponseMetadata>"


def list_queues_xml(urls: Iterable[str], request_id: str = "req-list") -> str:
    entries = "".join(f"<QueueUrl>{url}</QueueUrl>" for url in urls)
    return (
        f'<?xml version="1.0"?><ListQueuesResponse xmlns="{NAMESPACE}">'
        f"<ListQueuesResult>{entries}</ListQueuesResult>"
        f"{_metadata(request_id)}</ListQueuesResponse>"
    )


def create_queue_xml(url: str, request_id: str = "req-create") -> str:
    return (
        f'<?xml version="1.0"?><CreateQueueResponse xmlns="{NAMESPACE}">'
        f"<CreateQueueResult><QueueUrl>{url}</QueueUrl></CreateQueueResult>"
        f"{_metadata(request_id)}</CreateQueueResponse>"
    )


def attributes_xml(pairs: Iterable[Tuple[str, str]], request_id: str = "req-attrs") -> str:
    entries = "".join(
        f"<Attribute><Name>{name}</Name><Value>{value}</Value></Attribute>"
        for name, value in pairs
    )
    return (
        f'<GetQueueAttributesResponse xmlns="{NAMESPACE}">'
        f"<GetQueueAttributesResult>{entries}</GetQueueAttributesResult>"
        f"{_metadata(request_id)}</GetQueueAttributesResponse>"
    )


def send_message_xml(message_id: str, md5: str = "5eb63bbbe01eeed093cb22bb8f5acdc3", request_id: str = "req-send") -> str:
    return (
        f'<SendMessageResponse xmlns="{NAMESPACE}"><SendMessageResult>'
        f"<MD5OfMessageBody>{md5}</MD5OfMessageBody><MessageId>{message_id}</MessageId>"
        f"</SendMessageResult>{_metadata(request_id)}</SendMessageResponse>"
    )


def receive_message_xml(messages: Iterable[Tuple[str, str, str]] = (), request_id: str = "req-receive") -> str:
    """Build a ReceiveMessage response from (message_id, receipt_handle, body) tuples."""
    entries = "".join(
        f"<Message><MessageId>{message_id}</MessageId><ReceiptHandle>{handle}</ReceiptHandle>"
        f"<MD5OfBody>5eb63bbbe01eeed093cb22bb8f5acdc3</MD5OfBody><Body>{body}</Body></Message>"
        for message_id, handle, body in messages
    )
    return (
        f'<?xml version="1.0"?><ReceiveMessageResponse xmlns="{NAMESPACE}">'
        f"<ReceiveMessageResult>{entries}</ReceiveMessageResult>"
        f"{_metadata(request_id)}</ReceiveMessageResponse>"
    )


def metadata_xml(action: str, request_id: str = "req-meta") -> str:
    return f'<{action}Response xmlns="{NAMESPACE}">{_metadata(request_id)}</{action}Response>'


def error_xml(code: str, message: str, error_type: str = "Sender", request_id: str = "req-error") -> str:
    return (
        f'<ErrorResponse xmlns="{NAMESPACE}"><Error><Type>{error_type}</Type>'
        f"<Code>{code}</Code><Message>{message}</Message><Detail/></Error>"
        f"<RequestId>{request_id}</RequestId></ErrorResponse>"
    )
