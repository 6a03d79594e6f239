"""Collection pass over the metric catalog.

`collect_stats` folds the catalog into one flat mapping of output values and a
list of per-metric failures. A failing metric never aborts the pass.
`apply_derived_values` then adds the normalized per-second capacity rates.
"""

import logging
from datetime import datetime
from typing import Any

from .catalog import METRIC_CATALOG
from .clients.cloudwatch import PERIOD_SECONDS, MetricStatisticsClient, get_last_point
from .schema import CollectionResult, FetchDiagnostic, MetricSpec

logger = logging.getLogger(__name__)

# (source key, derived key, divisor)
DERIVED_VALUES: tuple[tuple[str, str, int], ...] = (
    (
        "ConsumedReadCapacityUnitsSum",
        "ConsumedReadCapacityUnitsNormalized",
        PERIOD_SECONDS,
    ),
    (
        "ConsumedWriteCapacityUnitsSum",
        "ConsumedWriteCapacityUnitsNormalized",
        PERIOD_SECONDS,
    ),
)


def collect_stats(
    client: MetricStatisticsClient,
    table_name: str,
    catalog: tuple[MetricSpec, ...] = METRIC_CATALOG,
    now: datetime | None = None,
) -> CollectionResult:
    """Fetches every catalog entry and merges the values into one mapping.

    Args:
        client: CloudWatch client used for every fetch.
        table_name: DynamoDB table to collect metrics for.
        catalog: Metric specs to fetch, in order.
        now: End of the query window, shared by all fetches.

    Returns:
        The collected values and a diagnostic for each failed fetch.
    """
    values: dict[str, float] = {}
    diagnostics: list[FetchDiagnostic] = []

    for spec in catalog:
        try:
            point = get_last_point(client, spec, table_name, now=now)
        except Exception as e:
            logger.warning(f"Failed to fetch {spec.upstream_name}: {e}")
            diagnostics.append(
                FetchDiagnostic(upstream_name=spec.upstream_name, error=str(e))
            )
            continue

        if point is None:
            continue

        for output in spec.outputs:
            values[output.output_name] = point.values[output.reduction]

    if diagnostics:
        logger.info(
            f"Collected {len(values)} values for table {table_name}, "
            f"{len(diagnostics)} metrics failed"
        )
    return CollectionResult(values=values, diagnostics=diagnostics)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def apply_derived_values(values: dict[str, Any]) -> dict[str, Any]:
    """Adds derived rates to `values` in place and returns it.

    A derivation is skipped when its source key is missing or not numeric.
    """
    for source, target, divisor in DERIVED_VALUES:
        raw = values.get(source)
        if not _is_number(raw):
            continue
        values[target] = raw / divisor
    return values
