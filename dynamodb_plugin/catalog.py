"""Catalog of DynamoDB CloudWatch metrics collected for a table.

Each entry names one CloudWatch metric and every output value read from it.
Outputs sharing an upstream metric are fetched with a single
GetMetricStatistics call.
"""

from .schema import MetricOutput, MetricSpec, ReductionKind

NAMESPACE = "AWS/DynamoDB"
TABLE_DIMENSION = "TableName"

AVERAGE = ReductionKind.AVERAGE
SUM = ReductionKind.SUM
MAXIMUM = ReductionKind.MAXIMUM
MINIMUM = ReductionKind.MINIMUM
SAMPLE_COUNT = ReductionKind.SAMPLE_COUNT


def _spec(upstream_name: str, *outputs: tuple[str, ReductionKind]) -> MetricSpec:
    return MetricSpec(
        upstream_name=upstream_name,
        outputs=tuple(
            MetricOutput(output_name=name, reduction=reduction)
            for name, reduction in outputs
        ),
    )


METRIC_CATALOG: tuple[MetricSpec, ...] = (
    _spec("ConditionalCheckFailedRequests", ("ConditionalCheckFailedRequests", SUM)),
    _spec(
        "ConsumedReadCapacityUnits",
        ("ConsumedReadCapacityUnitsSum", SUM),
        ("ConsumedReadCapacityUnitsAverage", AVERAGE),
    ),
    _spec(
        "ConsumedWriteCapacityUnits",
        ("ConsumedWriteCapacityUnitsSum", SUM),
        ("ConsumedWriteCapacityUnitsAverage", AVERAGE),
    ),
    _spec("ProvisionedReadCapacityUnits", ("ProvisionedReadCapacityUnits", MINIMUM)),
    _spec("ProvisionedWriteCapacityUnits", ("ProvisionedWriteCapacityUnits", MINIMUM)),
    _spec("ReadThrottleEvents", ("ReadThrottleEvents", SUM)),
    _spec(
        "SuccessfulRequestLatency",
        ("SuccessfulRequestLatencyMinimum", MINIMUM),
        ("SuccessfulRequestLatencyMaximum", MAXIMUM),
        ("SuccessfulRequestLatencyAverage", AVERAGE),
        ("SuccessfulRequestLatencySampleCount", SAMPLE_COUNT),
    ),
    _spec("SystemErrors", ("SystemErrors", SUM)),
    _spec("ThrottledRequests", ("ThrottledRequests", SUM)),
    _spec("UserErrors", ("UserErrors", SUM)),
    _spec("WriteThrottleEvents", ("WriteThrottleEvents", SUM)),
)


def output_names(catalog: tuple[MetricSpec, ...] = METRIC_CATALOG) -> list[str]:
    """Returns every output name declared in the catalog, in order."""
    return [output.output_name for spec in catalog for output in spec.outputs]
