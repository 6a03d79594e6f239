"""Command-line entry point for the DynamoDB metrics plugin."""

import argparse
import logging

from dotenv import load_dotenv

from .clients.factory import build_cloudwatch_client
from .config import PluginSettings
from .exceptions import SessionError
from .graphs import DEFAULT_PREFIX
from .output import run
from .plugin import DynamoDBPlugin
from .telemetry import setup_logging
from .version import VERSION

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mackerel-plugin-aws-dynamodb",
        description="Collect CloudWatch metrics for a DynamoDB table",
    )
    parser.add_argument("--access-key-id", default="", help="AWS Access Key ID")
    parser.add_argument(
        "--secret-access-key", default="", help="AWS Secret Access Key"
    )
    parser.add_argument("--region", default="", help="AWS Region")
    parser.add_argument("--table-name", default="", help="DynamoDB Table Name")
    parser.add_argument("--tempfile", default="", help="Temp file name")
    parser.add_argument(
        "--metric-key-prefix", default=DEFAULT_PREFIX, help="Metric key prefix"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    return parser


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    setup_logging()

    args = build_parser().parse_args(argv)
    settings = PluginSettings.from_args(args)

    try:
        client = build_cloudwatch_client(
            access_key_id=settings.access_key_id,
            secret_access_key=settings.secret_access_key,
            region=settings.region,
        )
    except SessionError as e:
        logger.critical(str(e))
        return 1

    plugin = DynamoDBPlugin(
        table_name=settings.table_name,
        client=client,
        prefix=settings.metric_key_prefix,
    )
    run(plugin, tempfile_path=settings.tempfile)
    return 0
