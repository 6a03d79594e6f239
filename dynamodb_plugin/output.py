"""Plugin-host protocol: value lines, graph metadata and the state file.

The host runs the plugin periodically and reads stdout. When the
MACKEREL_AGENT_PLUGIN_META environment variable is set it expects the graph
definitions as JSON; otherwise it expects one tab-separated line per value.
"""

import json
import logging
import math
import os
import sys
import tempfile
import time
from typing import Any, TextIO

from .plugin import DynamoDBPlugin

logger = logging.getLogger(__name__)

META_ENV = "MACKEREL_AGENT_PLUGIN_META"
META_HEADER = "# mackerel-agent-plugin"


def default_tempfile(prefix: str) -> str:
    """Returns the state file path used when --tempfile is not given."""
    return os.path.join(tempfile.gettempdir(), f"mackerel-plugin-{prefix}")


def format_definitions(plugin: DynamoDBPlugin) -> str:
    """Renders the graph definitions in the host's metadata format."""
    prefix = plugin.metric_key_prefix()
    graphs = {
        f"{prefix}.{name}": graph.model_dump(mode="json")
        for name, graph in plugin.graph_definition().items()
    }
    return f"{META_HEADER}\n{json.dumps({'graphs': graphs})}"


def format_values(
    plugin: DynamoDBPlugin, stats: dict[str, Any], now: float
) -> list[str]:
    """Renders one line per collected value that appears on a graph.

    Keys missing from `stats` and non-finite values are skipped.
    """
    prefix = plugin.metric_key_prefix()
    epoch = int(now)
    lines = []
    for graph_name, graph in plugin.graph_definition().items():
        for series in graph.metrics:
            value = stats.get(series.name)
            if value is None:
                continue
            if math.isnan(value) or math.isinf(value):
                logger.info(f"Skipping invalid value {value} for {series.name}")
                continue
            lines.append(f"{prefix}.{graph_name}.{series.name}\t{value:f}\t{epoch}")
    return lines


def save_state(path: str, stats: dict[str, Any], now: float) -> None:
    """Writes the last collected values for the next invocation.

    A write failure is logged and otherwise ignored; it never loses the
    values already printed.
    """
    state = dict(stats)
    state["_lastTime"] = int(now)
    try:
        with open(path, "w") as f:
            json.dump(state, f)
    except OSError as e:
        logger.warning(f"Failed to save state to {path}: {e}")


def run(
    plugin: DynamoDBPlugin,
    tempfile_path: str | None = None,
    stream: TextIO | None = None,
) -> None:
    """Runs one plugin invocation, writing to `stream` (stdout by default)."""
    out = stream if stream is not None else sys.stdout

    if os.environ.get(META_ENV, ""):
        print(format_definitions(plugin), file=out)
        return

    now = time.time()
    stats = plugin.fetch_metrics()
    for line in format_values(plugin, stats, now):
        print(line, file=out)

    save_state(tempfile_path or default_tempfile(plugin.metric_key_prefix()), stats, now)
