"""Lazy initialization of the CloudWatch client.

The boto3 session is created eagerly so credential problems abort the run.
The botocore client is only built on the first request, which means a missing
region shows up as a per-metric fetch error instead of a startup failure.

The credential resolution order is:
1. Explicit access key id and secret (both must be given)
2. boto3 default chain (environment, shared config, instance role)
"""

import logging
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError

from ..exceptions import SessionError

logger = logging.getLogger(__name__)


class CloudWatchClient:
    """CloudWatch client bound to one boto3 session, created on first use."""

    def __init__(self, session: boto3.session.Session):
        self._session = session
        self._client: Any = None

    @property
    def region(self) -> str | None:
        return self._session.region_name

    @property
    def client(self) -> Any:
        """Returns the botocore CloudWatch client, building it if needed."""
        if self._client is None:
            logger.debug(f"Creating CloudWatch client (region={self.region})")
            self._client = self._session.client("cloudwatch")
        return self._client

    def get_metric_statistics(self, **kwargs: Any) -> dict[str, Any]:
        return self.client.get_metric_statistics(**kwargs)


def build_cloudwatch_client(
    access_key_id: str | None = None,
    secret_access_key: str | None = None,
    region: str | None = None,
) -> CloudWatchClient:
    """Returns a CloudWatch client using explicit or default credentials.

    Args:
        access_key_id: AWS access key id. Ignored unless the secret is set too.
        secret_access_key: AWS secret access key.
        region: Region override; boto3 resolves it when omitted.

    Raises:
        SessionError: If the boto3 session cannot be created.
    """
    session_kwargs: dict[str, str] = {}
    if access_key_id and secret_access_key:
        session_kwargs["aws_access_key_id"] = access_key_id
        session_kwargs["aws_secret_access_key"] = secret_access_key
    else:
        logger.debug("Using default AWS credential chain")
    if region:
        session_kwargs["region_name"] = region

    try:
        session = boto3.session.Session(**session_kwargs)
    except BotoCoreError as e:
        raise SessionError(f"Failed to create AWS session: {e}") from e

    return CloudWatchClient(session)
