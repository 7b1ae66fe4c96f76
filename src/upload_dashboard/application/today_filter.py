"""Restrict the remote file list to records uploaded on the current local day."""

import logging
from datetime import datetime
from typing import Iterable

from upload_dashboard.domain.models.files import RemoteFileRecord

logger = logging.getLogger(__name__)


def day_bounds(now: datetime) -> tuple[datetime, datetime]:
    """
    Local midnight and end of day for `now`'s calendar day.

    Bounds carry `now`'s tzinfo; a naive `now` yields naive local bounds.
    """
    start = now.replace(hour=0, minute=0, second=0, microsecond=0)
    end = now.replace(hour=23, minute=59, second=59, microsecond=999999)
    return start, end


def _to_reference_zone(value: datetime, now: datetime) -> datetime:
    """Express `value` in the same zone convention as `now`"""
    if value.tzinfo is None:
        # Naive timestamps are local wall time already
        if now.tzinfo is None:
            return value
        return value.replace(tzinfo=now.tzinfo)

    if now.tzinfo is None:
        return value.astimezone().replace(tzinfo=None)
    return value.astimezone(now.tzinfo)


def filter_files_uploaded_today(
    records: Iterable[RemoteFileRecord],
    now: datetime
) -> list[RemoteFileRecord]:
    """
    Keep records whose uploadedAt falls within today's [start, end].

    Args:
        records: Remote file records in service order
        now: Reference time that defines "today"

    Returns:
        Matching records, order preserved. Records with unparseable
        timestamps are dropped.
    """
    start, end = day_bounds(now)
    kept = []
    skipped = 0

    for record in records:
        uploaded_at = record.uploaded_at_datetime()
        if uploaded_at is None:
            skipped += 1
            continue
        if start <= _to_reference_zone(uploaded_at, now) <= end:
            kept.append(record)

    if skipped:
        logger.warning(f"Skipped {skipped} records with invalid uploadedAt")

    return kept
