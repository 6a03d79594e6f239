"""AWS clients used by the DynamoDB metrics plugin."""

from .cloudwatch import MetricStatisticsClient, get_last_point
from .factory import CloudWatchClient, build_cloudwatch_client

__all__ = [
    "CloudWatchClient",
    "MetricStatisticsClient",
    "build_cloudwatch_client",
    "get_last_point",
]
