"""Shared utilities: datetime, generators."""

from taskdesk.shared.utils.datetime import ensure_utc, start_of_day_utc, utc_now
from taskdesk.shared.utils.generators import generate_cuid

__all__ = [
    "ensure_utc",
    "generate_cuid",
    "start_of_day_utc",
    "utc_now",
]
