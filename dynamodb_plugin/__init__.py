"""CloudWatch metrics plugin for a single DynamoDB table."""

from .aggregator import apply_derived_values, collect_stats
from .catalog import METRIC_CATALOG
from .graphs import build_graph_definitions
from .plugin import DynamoDBPlugin

__all__ = [
    "METRIC_CATALOG",
    "DynamoDBPlugin",
    "apply_derived_values",
    "build_graph_definitions",
    "collect_stats",
]
