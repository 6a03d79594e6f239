"""DynamoDB plugin object handed to the plugin-host runner."""

import logging

from .aggregator import apply_derived_values, collect_stats
from .clients.cloudwatch import MetricStatisticsClient
from .graphs import DEFAULT_PREFIX, build_graph_definitions
from .schema import GraphDefinition

logger = logging.getLogger(__name__)


class DynamoDBPlugin:
    """Collects CloudWatch metrics for a single DynamoDB table."""

    def __init__(
        self,
        table_name: str,
        client: MetricStatisticsClient,
        prefix: str = DEFAULT_PREFIX,
    ):
        self.table_name = table_name
        self.client = client
        self.prefix = prefix

    def metric_key_prefix(self) -> str:
        return self.prefix or DEFAULT_PREFIX

    def fetch_metrics(self) -> dict[str, float]:
        """Runs one collection pass and returns the flat value mapping.

        Per-metric failures are logged by the aggregator and leave their keys
        out of the mapping.
        """
        result = collect_stats(self.client, self.table_name)
        for diagnostic in result.diagnostics:
            logger.debug(
                f"Skipped {diagnostic.upstream_name} for table "
                f"{self.table_name}: {diagnostic.error}"
            )
        return apply_derived_values(dict(result.values))

    def graph_definition(self) -> dict[str, GraphDefinition]:
        return build_graph_definitions(self.metric_key_prefix())
