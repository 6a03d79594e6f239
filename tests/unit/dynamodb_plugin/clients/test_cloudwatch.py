from datetime import datetime, timedelta, timezone
from unittest import mock

import pytest
from botocore.exceptions import ClientError
from opentelemetry.trace import Status, StatusCode

from dynamodb_plugin.catalog import METRIC_CATALOG
from dynamodb_plugin.clients.cloudwatch import get_last_point
from dynamodb_plugin.exceptions import MetricFetchError
from dynamodb_plugin.schema import MetricOutput, MetricSpec, ReductionKind

NOW = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

LATENCY = next(s for s in METRIC_CATALOG if s.upstream_name == "SuccessfulRequestLatency")
READ_CAPACITY = next(
    s for s in METRIC_CATALOG if s.upstream_name == "ConsumedReadCapacityUnits"
)


def _client_error(code: str = "AccessDenied") -> ClientError:
    return ClientError(
        {"Error": {"Code": code, "Message": "denied"}}, "GetMetricStatistics"
    )


def test_get_last_point_request_shape(fake_cloudwatch):
    """The query covers the trailing window at 60s granularity."""
    client = fake_cloudwatch()

    get_last_point(client, LATENCY, "orders", now=NOW)

    assert len(client.calls) == 1
    call = client.calls[0]
    assert call["Namespace"] == "AWS/DynamoDB"
    assert call["MetricName"] == "SuccessfulRequestLatency"
    assert call["Dimensions"] == [{"Name": "TableName", "Value": "orders"}]
    assert call["StartTime"] == NOW - timedelta(minutes=8)
    assert call["EndTime"] == NOW
    assert call["Period"] == 60
    assert call["Statistics"] == ["Minimum", "Maximum", "Average", "SampleCount"]


def test_get_last_point_no_data(fake_cloudwatch):
    client = fake_cloudwatch({"ConsumedReadCapacityUnits": []})

    assert get_last_point(client, READ_CAPACITY, "orders", now=NOW) is None


def test_get_last_point_selects_latest(fake_cloudwatch, make_ts):
    """The point with the latest timestamp wins regardless of input order."""
    client = fake_cloudwatch(
        {
            "ConsumedReadCapacityUnits": [
                {"Timestamp": make_ts(100), "Sum": 1.0, "Average": 0.1},
                {"Timestamp": make_ts(300), "Sum": 3.0, "Average": 0.3},
                {"Timestamp": make_ts(200), "Sum": 2.0, "Average": 0.2},
            ]
        }
    )

    point = get_last_point(client, READ_CAPACITY, "orders", now=NOW)

    assert point is not None
    assert point.timestamp == make_ts(300)
    assert point.values == {ReductionKind.SUM: 3.0, ReductionKind.AVERAGE: 0.3}


def test_get_last_point_tie_keeps_first_seen(fake_cloudwatch, make_ts):
    client = fake_cloudwatch(
        {
            "ConsumedReadCapacityUnits": [
                {"Timestamp": make_ts(300), "Sum": 1.0, "Average": 0.1},
                {"Timestamp": make_ts(300), "Sum": 9.0, "Average": 0.9},
            ]
        }
    )

    point = get_last_point(client, READ_CAPACITY, "orders", now=NOW)

    assert point.values[ReductionKind.SUM] == 1.0


def test_get_last_point_requests_each_statistic_once(fake_cloudwatch):
    spec = MetricSpec(
        upstream_name="UserErrors",
        outputs=(
            MetricOutput(output_name="A", reduction=ReductionKind.SUM),
            MetricOutput(output_name="B", reduction=ReductionKind.SUM),
        ),
    )
    client = fake_cloudwatch()

    get_last_point(client, spec, "orders", now=NOW)

    assert client.calls[0]["Statistics"] == ["Sum"]


def test_get_last_point_missing_statistic(fake_cloudwatch, make_ts):
    client = fake_cloudwatch(
        {"ConsumedReadCapacityUnits": [{"Timestamp": make_ts(100), "Sum": 1.0}]}
    )

    with pytest.raises(MetricFetchError, match="Average"):
        get_last_point(client, READ_CAPACITY, "orders", now=NOW)


def test_get_last_point_propagates_api_error(fake_cloudwatch):
    client = fake_cloudwatch({"ConsumedReadCapacityUnits": _client_error()})

    with pytest.raises(ClientError):
        get_last_point(client, READ_CAPACITY, "orders", now=NOW)


@mock.patch("dynamodb_plugin.clients.cloudwatch.tracer")
def test_get_last_point_otel_error_status(mock_tracer, fake_cloudwatch):
    """A failed fetch sets the span status to ERROR."""
    mock_span = mock.Mock()
    mock_tracer.start_as_current_span.return_value.__enter__.return_value = mock_span
    client = fake_cloudwatch(
        {"ConsumedReadCapacityUnits": _client_error("ThrottlingException")}
    )

    with pytest.raises(ClientError):
        get_last_point(client, READ_CAPACITY, "orders", now=NOW)

    mock_tracer.start_as_current_span.assert_called_with("get_last_point")
    assert mock_span.set_status.call_count == 1
    args, _ = mock_span.set_status.call_args
    status_obj = args[0]
    assert isinstance(status_obj, Status)
    assert status_obj.status_code == StatusCode.ERROR
    assert "ThrottlingException" in status_obj.description


def test_get_last_point_defaults_now_to_utc(fake_cloudwatch):
    client = fake_cloudwatch()

    get_last_point(client, READ_CAPACITY, "orders")

    call = client.calls[0]
    assert call["EndTime"].tzinfo is not None
    assert call["EndTime"] - call["StartTime"] == timedelta(minutes=8)
