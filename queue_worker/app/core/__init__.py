"""Shared worker constants."""
from __future__ import annotations

SERVICE_NAME = "queue_worker"
