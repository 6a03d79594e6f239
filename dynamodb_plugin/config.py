"""Runtime settings for one plugin invocation."""

import argparse

from pydantic import BaseModel, ConfigDict, Field

from .graphs import DEFAULT_PREFIX


class PluginSettings(BaseModel):
    """Settings resolved from command-line flags.

    Table name and region are not validated here: when they are missing each
    CloudWatch request fails on its own and is skipped.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    access_key_id: str | None = Field(default=None, description="AWS access key id")
    secret_access_key: str | None = Field(
        default=None, description="AWS secret access key"
    )
    region: str | None = Field(default=None, description="AWS region override")
    table_name: str = Field(default="", description="DynamoDB table name")
    tempfile: str | None = Field(default=None, description="State file path")
    metric_key_prefix: str = Field(
        default=DEFAULT_PREFIX, description="Prefix for every emitted metric key"
    )

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "PluginSettings":
        return cls(
            access_key_id=args.access_key_id or None,
            secret_access_key=args.secret_access_key or None,
            region=args.region or None,
            table_name=args.table_name or "",
            tempfile=args.tempfile or None,
            metric_key_prefix=args.metric_key_prefix or DEFAULT_PREFIX,
        )
