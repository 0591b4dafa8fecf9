"""
Module: sqs.py
Description: Service-level queue operations.

SQS binds an immutable credential/endpoint context to an Executor and
offers the operations that are not tied to an existing queue: listing,
creating and looking up queues. Queue handles it returns share the
same context.

Key Components:
- SQS: service client (list_queues, create_queue, queue)
- CreateQueueOptions: optional CreateQueue configuration

Dependencies: httpx, pydantic, typing
"""

from typing import Dict, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ConfigDict, Field

from sqs_queue.config.settings import Settings, settings as default_settings
from sqs_queue.models.context import Auth, Region
from sqs_queue.models.results import CreateQueueResult, ListQueuesResult
from sqs_queue.queue import Queue
from sqs_queue.utils.logger import get_logger
from sqs_queue.wire.errors import SQSError
from sqs_queue.wire.executor import Executor
from sqs_queue.wire.request import build_request

logger = get_logger(__name__)

ResultT = TypeVar("ResultT", bound=BaseModel)


class CreateQueueOptions(BaseModel):
    """Optional CreateQueue configuration; unset values are not sent."""

    model_config = ConfigDict(frozen=True)

    default_visibility_timeout: Optional[int] = Field(
        default=None,
        ge=0,
        description="Default visibility timeout in seconds"
    )
    maximum_message_size: Optional[int] = Field(
        default=None,
        ge=1,
        description="Maximum message size in bytes"
    )


class SQS:
    """
    Client for a queue service in one region.

    Attributes:
        auth: Credentials used to sign every request
        region: Region whose queue-service endpoint is targeted
        executor: Executor that sends requests

    Example:
        >>> sqs = SQS(Auth(access_key="AKID", secret_key="secret"), REGIONS["us-east-1"])
        >>> queue = sqs.create_queue("orders")
        >>> queue.send_message("hello world").message_id
        'c5c2a6d4-...'
    """

    def __init__(self, auth: Auth, region: Region, executor: Optional[Executor] = None):
        """
        Initialize SQS client.

        Args:
            auth: Credentials
            region: Target region
            executor: Optional executor, defaults to Executor()

        Raises:
            ValueError: If auth or region is missing
        """
        if not isinstance(auth, Auth):
            raise ValueError("auth must be an Auth instance")
        if not isinstance(region, Region):
            raise ValueError("region must be a Region instance")

        self.auth = auth
        self.region = region
        self.executor = executor or Executor()

        logger.info(
            "SQS client initialized",
            region=region.name,
            endpoint=region.sqs_endpoint
        )

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "SQS":
        """Build a client from Settings (the global instance by default)."""
        if settings is None:
            settings = default_settings

        return cls(
            settings.auth(),
            settings.region_context(),
            Executor(timeout=settings.timeout, debug=settings.debug)
        )

    def call(
        self,
        method: str,
        action: str,
        path: str,
        params: Optional[Dict[str, str]],
        result_type: Type[ResultT],
    ) -> ResultT:
        """Build, sign and execute one action, returning its decoded result."""
        request = build_request(self.auth, self.region, method, action, path, params)
        return self.executor.execute(request, result_type)

    def get(self, action: str, path: str, params: Optional[Dict[str, str]], result_type: Type[ResultT]) -> ResultT:
        return self.call("GET", action, path, params, result_type)

    def post(self, action: str, path: str, params: Optional[Dict[str, str]], result_type: Type[ResultT]) -> ResultT:
        return self.call("POST", action, path, params, result_type)

    def queue_from_url(self, queue_url: str) -> Queue:
        """
        Build a Queue handle from a service-assigned queue URL.

        Raises:
            SQSError: If the URL has no usable path
        """
        try:
            path = httpx.URL(queue_url).path
        except (httpx.InvalidURL, TypeError) as e:
            raise SQSError.construction(e) from e

        if not path or path == "/":
            raise SQSError.construction(ValueError(f"queue URL has no path: {queue_url!r}"))
        return Queue(self, path)

    def list_queues(self, prefix: str = "") -> List[Queue]:
        """
        List queues, optionally only those whose names start with prefix.

        Args:
            prefix: Queue name prefix filter

        Returns:
            Queues in the order the service returned them
        """
        params = {}
        if prefix:
            params["QueueNamePrefix"] = prefix

        result = self.get("ListQueues", "/", params, ListQueuesResult)
        queues = [self.queue_from_url(url) for url in result.queue_urls]

        logger.info(
            "Queues listed",
            prefix=prefix,
            count=len(queues),
            request_id=result.request_id
        )

        return queues

    def create_queue(self, name: str, options: Optional[CreateQueueOptions] = None) -> Queue:
        """
        Create a queue (or return the existing one with the same name).

        Args:
            name: Queue name
            options: Optional visibility timeout / maximum message size

        Returns:
            Queue handle addressed by the path of the returned QueueUrl

        Raises:
            SQSError: If the name is empty or the call fails
        """
        if not name or not isinstance(name, str):
            raise SQSError.construction(ValueError("name must be a non-empty string"))

        params = {"QueueName": name}
        if options is not None:
            if options.default_visibility_timeout is not None:
                params["DefaultVisibilityTimeout"] = str(options.default_visibility_timeout)
            if options.maximum_message_size is not None:
                params["MaximumMessageSize"] = str(options.maximum_message_size)

        result = self.get("CreateQueue", "/", params, CreateQueueResult)
        queue = self.queue_from_url(result.queue_url)

        logger.info(
            "Queue created",
            name=name,
            path=queue.path,
            request_id=result.request_id
        )

        return queue

    def queue(self, name: str) -> Queue:
        """
        Look up an existing queue by exact name.

        Raises:
            SQSError: If no queue with that name exists
        """
        for queue in self.list_queues(name):
            if queue.name == name:
                return queue

        logger.warning("Queue not found", name=name)
        raise SQSError.not_found(f"queue not found: {name}")
