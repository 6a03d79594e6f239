"""Pydantic schemas for the DynamoDB metrics plugin.

This module defines Pydantic schemas for:
- The metric catalog (MetricOutput, MetricSpec)
- Data returned by CloudWatch (DataPoint)
- The outcome of one collection pass (CollectionResult, FetchDiagnostic)
- The graph schema handed to the plugin host (GraphSeries, GraphDefinition)
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ReductionKind(str, Enum):
    """CloudWatch statistic used to reduce raw samples in a period."""

    AVERAGE = "Average"
    SUM = "Sum"
    MAXIMUM = "Maximum"
    MINIMUM = "Minimum"
    SAMPLE_COUNT = "SampleCount"


class Unit(str, Enum):
    """Graph units understood by the plugin host."""

    FLOAT = "float"
    INTEGER = "integer"
    PERCENTAGE = "percentage"
    BYTES = "bytes"
    BYTES_SEC = "bytes/sec"
    IOPS = "iops"


# =============================================================================
# Catalog Schemas
# =============================================================================


class MetricOutput(BaseModel):
    """One output value extracted from an upstream metric."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    output_name: str = Field(description="Key written to the stat result")
    reduction: ReductionKind = Field(description="Statistic read from the point")


class MetricSpec(BaseModel):
    """An upstream CloudWatch metric and the outputs derived from it."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    upstream_name: str = Field(description="CloudWatch metric name")
    outputs: tuple[MetricOutput, ...] = Field(
        description="Output values requested from this metric"
    )

    @property
    def reductions(self) -> list[ReductionKind]:
        """Distinct statistics to request, in declaration order."""
        kinds: list[ReductionKind] = []
        for output in self.outputs:
            if output.reduction not in kinds:
                kinds.append(output.reduction)
        return kinds


# =============================================================================
# Collection Schemas
# =============================================================================


class DataPoint(BaseModel):
    """A single CloudWatch datapoint reduced to the requested statistics."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    timestamp: datetime = Field(description="Start of the aggregation period")
    values: dict[ReductionKind, float] = Field(
        default_factory=dict, description="Statistic values keyed by kind"
    )


class FetchDiagnostic(BaseModel):
    """A metric that could not be fetched during a pass."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    upstream_name: str = Field(description="CloudWatch metric name")
    error: str = Field(description="Error raised while fetching")


class CollectionResult(BaseModel):
    """Values collected in one pass, plus the fetches that failed."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    values: dict[str, float] = Field(
        default_factory=dict, description="Flat output name to value mapping"
    )
    diagnostics: list[FetchDiagnostic] = Field(
        default_factory=list, description="Per-metric fetch failures"
    )


# =============================================================================
# Graph Schemas
# =============================================================================


class GraphSeries(BaseModel):
    """A single line on a graph."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(description="Output name of the collected value")
    label: str = Field(description="Display label")
    diff: bool = Field(default=False, description="Render as per-minute delta")
    stacked: bool = Field(default=False, description="Stack with other series")


class GraphDefinition(BaseModel):
    """A graph grouping several collected values."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    label: str = Field(description="Graph title")
    unit: Unit = Field(description="Unit of all series on the graph")
    metrics: list[GraphSeries] = Field(description="Series in display order")
