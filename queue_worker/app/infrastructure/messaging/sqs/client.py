"""boto3 SQS client construction (provider-specific infrastructure)."""
from __future__ import annotations

import boto3
from botocore.client import BaseClient
from botocore.config import Config

from queue_worker.app.config.settings import Settings


def create_sqs_client(settings: Settings) -> BaseClient:
    # read_timeout must outlast the longest long poll.
    config = Config(
        retries={"max_attempts": 6, "mode": "standard"},
        read_timeout=max(60, settings.wait_time_seconds + 10),
        connect_timeout=5,
    )
    return boto3.client(
        "sqs",
        region_name=settings.aws_region,
        endpoint_url=settings.sqs_endpoint_url or None,
        config=config,
    )
