"""Shared fixtures for DynamoDB plugin tests."""

from datetime import datetime, timezone
from typing import Any

import pytest


def ts(seconds: int) -> datetime:
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


class FakeCloudWatch:
    """In-memory stand-in for the CloudWatch client.

    `responses` maps a metric name to either a list of datapoints or an
    exception to raise for that metric.
    """

    def __init__(self, responses: dict[str, Any] | None = None):
        self.responses = responses or {}
        self.calls: list[dict[str, Any]] = []

    def get_metric_statistics(self, **kwargs: Any) -> dict[str, Any]:
        self.calls.append(kwargs)
        response = self.responses.get(kwargs["MetricName"], [])
        if isinstance(response, Exception):
            raise response
        return {"Label": kwargs["MetricName"], "Datapoints": response}


@pytest.fixture
def fake_cloudwatch():
    return FakeCloudWatch


@pytest.fixture
def make_ts():
    return ts
