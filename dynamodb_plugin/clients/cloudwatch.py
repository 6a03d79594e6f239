"""Direct API client for CloudWatch metric statistics.

This module fetches the most recent datapoint of a DynamoDB table metric via
GetMetricStatistics. It is used by the aggregator, once per catalog entry.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Protocol

from opentelemetry.trace import Status, StatusCode

from ..catalog import NAMESPACE, TABLE_DIMENSION
from ..exceptions import MetricFetchError
from ..schema import DataPoint, MetricSpec
from ..telemetry import get_tracer

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)

# Some DynamoDB metrics are only published every 5 minutes.
WINDOW = timedelta(minutes=8)
PERIOD_SECONDS = 60


class MetricStatisticsClient(Protocol):
    def get_metric_statistics(self, **kwargs: Any) -> dict[str, Any]: ...


def get_last_point(
    client: MetricStatisticsClient,
    spec: MetricSpec,
    table_name: str,
    now: datetime | None = None,
) -> DataPoint | None:
    """Fetches the latest datapoint of a metric for one table.

    Args:
        client: Anything exposing CloudWatch's get_metric_statistics.
        spec: Catalog entry naming the metric and the statistics to request.
        table_name: Value of the TableName dimension.
        now: End of the query window. Defaults to the current UTC time.

    Returns:
        The datapoint with the latest timestamp, or None when the window
        holds no data.

    Raises:
        MetricFetchError: If the latest datapoint lacks a requested statistic.
        botocore.exceptions.ClientError / BotoCoreError: On API or transport
            failure.
    """
    with tracer.start_as_current_span("get_last_point") as span:
        span.set_attribute("cloudwatch.metric_name", spec.upstream_name)
        span.set_attribute("dynamodb.table_name", table_name or "")
        try:
            return _get_last_point(client, spec, table_name, now)
        except Exception as e:
            span.set_status(Status(StatusCode.ERROR, str(e)))
            raise


def _get_last_point(
    client: MetricStatisticsClient,
    spec: MetricSpec,
    table_name: str,
    now: datetime | None,
) -> DataPoint | None:
    if now is None:
        now = datetime.now(timezone.utc)
    statistics = [kind.value for kind in spec.reductions]

    response = client.get_metric_statistics(
        Namespace=NAMESPACE,
        MetricName=spec.upstream_name,
        Dimensions=[{"Name": TABLE_DIMENSION, "Value": table_name}],
        StartTime=now - WINDOW,
        EndTime=now,
        Period=PERIOD_SECONDS,
        Statistics=statistics,
    )

    datapoints = response.get("Datapoints", [])
    if not datapoints:
        logger.debug(f"No datapoints for {spec.upstream_name} on table {table_name}")
        return None

    latest = datapoints[0]
    for dp in datapoints[1:]:
        if dp["Timestamp"] > latest["Timestamp"]:
            latest = dp

    values = {}
    for kind in spec.reductions:
        if kind.value not in latest:
            raise MetricFetchError(
                spec.upstream_name, f"datapoint has no {kind.value} statistic"
            )
        values[kind] = float(latest[kind.value])

    return DataPoint(timestamp=latest["Timestamp"], values=values)
