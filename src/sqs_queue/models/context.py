"""
Module: context.py
Description: Credential and endpoint context shared by every SQS call.

Key Components:
- Auth: access key id, secret key and optional session token
- Region: regional endpoint used to derive the queue-service endpoint
- REGIONS: well-known regions keyed by name
- get_region(): lookup helper with a derived fallback

Both models are frozen; a single instance is safely shared between
threads and between every Queue derived from an SQS client.

Dependencies: pydantic, typing
"""

from typing import Dict, Optional
from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator


class Auth(BaseModel):
    """
    Credentials used to sign requests.

    Attributes:
        access_key: Access key id sent as AWSAccessKeyId
        secret_key: Shared secret used for the HMAC, never sent or logged
        token: Optional session token sent as SecurityToken
    """

    model_config = ConfigDict(frozen=True)

    access_key: str = Field(..., min_length=1, description="Access key id")
    secret_key: SecretStr = Field(..., description="Secret access key")
    token: Optional[str] = Field(default=None, description="Session token")

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, v: SecretStr) -> SecretStr:
        """Reject empty secrets."""
        if not v.get_secret_value():
            raise ValueError("secret_key must be a non-empty string")
        return v


class Region(BaseModel):
    """
    Regional endpoint context.

    The queue-service endpoint is derived from the general EC2 endpoint
    by swapping its first 'ec2' token for 'sqs', unless an explicit
    sqs_endpoint is configured (useful for local SQS-compatible servers).
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Region name")
    ec2_endpoint: str = Field(..., min_length=1, description="EC2 endpoint URL")
    sqs_endpoint_override: Optional[str] = Field(
        default=None,
        description="Explicit queue-service endpoint URL"
    )

    @property
    def sqs_endpoint(self) -> str:
        if self.sqs_endpoint_override:
            return self.sqs_endpoint_override.rstrip("/")
        return self.ec2_endpoint.replace("ec2", "sqs", 1).rstrip("/")


REGIONS: Dict[str, Region] = {
    name: Region(name=name, ec2_endpoint=f"https://ec2.{name}.amazonaws.com")
    for name in (
        "us-east-1",
        "us-west-1",
        "us-west-2",
        "eu-west-1",
        "ap-southeast-1",
        "ap-southeast-2",
        "ap-northeast-1",
        "sa-east-1",
    )
}


def get_region(name: str, endpoint: Optional[str] = None) -> Region:
    """
    Resolve a region by name.

    Args:
        name: Region name such as 'us-east-1'
        endpoint: Optional explicit queue-service endpoint

    Returns:
        Region for the name; unknown names get the conventional
        https://ec2.<name>.amazonaws.com endpoint
    """
    if not name or not isinstance(name, str):
        raise ValueError("region name must be a non-empty string")

    region = REGIONS.get(name) or Region(
        name=name,
        ec2_endpoint=f"https://ec2.{name}.amazonaws.com"
    )
    if endpoint:
        region = region.model_copy(update={"sqs_endpoint_override": endpoint})
    return region
