"""Graph schema for the values collected by the plugin.

The schema depends only on the metric key prefix, never on what a collection
pass returned. Series names must match keys produced by the aggregator.
"""

import re

from .schema import GraphDefinition, GraphSeries, Unit

DEFAULT_PREFIX = "dynamodb"

_SEPARATORS = re.compile(r"[^0-9A-Za-z]+")


def label_prefix(prefix: str) -> str:
    """Turns a metric key prefix into a graph title prefix.

    Example:
        label_prefix("my-table") -> "My Table"
    """
    words = _SEPARATORS.sub(" ", prefix).split()
    return " ".join(word[:1].upper() + word[1:] for word in words)


def _series(*pairs: tuple[str, str]) -> list[GraphSeries]:
    return [GraphSeries(name=name, label=label) for name, label in pairs]


def build_graph_definitions(
    prefix: str = DEFAULT_PREFIX,
) -> dict[str, GraphDefinition]:
    """Returns the graph definitions keyed by graph name."""
    title = label_prefix(prefix)

    return {
        "ReadCapacity": GraphDefinition(
            label=f"{title} Read Capacity Units",
            unit=Unit.FLOAT,
            metrics=_series(
                ("ProvisionedReadCapacityUnits", "Provisioned"),
                ("ConsumedReadCapacityUnitsNormalized", "Consumed"),
                ("ConsumedReadCapacityUnitsSum", "Consumed (Sum)"),
                ("ConsumedReadCapacityUnitsAverage", "Consumed (Average)"),
            ),
        ),
        "WriteCapacity": GraphDefinition(
            label=f"{title} Write Capacity Units",
            unit=Unit.FLOAT,
            metrics=_series(
                ("ProvisionedWriteCapacityUnits", "Provisioned"),
                ("ConsumedWriteCapacityUnitsNormalized", "Consumed"),
                ("ConsumedWriteCapacityUnitsSum", "Consumed (Sum)"),
                ("ConsumedWriteCapacityUnitsAverage", "Consumed (Average)"),
            ),
        ),
        "ThrottledEvents": GraphDefinition(
            label=f"{title} Throttle Events",
            unit=Unit.INTEGER,
            metrics=_series(
                ("ReadThrottleEvents", "Read"),
                ("WriteThrottleEvents", "Write"),
            ),
        ),
        "Requests": GraphDefinition(
            label=f"{title} Requests",
            unit=Unit.INTEGER,
            metrics=_series(
                ("ConditionalCheckFailedRequests", "ConditionalCheck Failure"),
                ("SystemErrors", "System Error"),
                ("UserErrors", "User Error"),
                ("ThrottledRequests", "Throttled"),
                ("SuccessfulRequestLatencySampleCount", "Success"),
            ),
        ),
        "SuccessfulRequestLatency": GraphDefinition(
            label=f"{title} Latency of Successful Requests",
            unit=Unit.FLOAT,
            metrics=_series(
                ("SuccessfulRequestLatencyAverage", "Average"),
                ("SuccessfulRequestLatencyMaximum", "Maximum"),
                ("SuccessfulRequestLatencyMinimum", "Minimum"),
            ),
        ),
    }
