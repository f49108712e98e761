"""
VRCX Companion API — Server Timestamps
=======================================

What:  Formats "now" for every server-generated timestamp (memo edited_at,
       /healthz time).
Format: RFC-3339 in UTC with fixed microsecond precision, e.g.
        2025-03-01T18:04:05.123456+00:00
        Fixed width keeps lexical order equal to chronological order, which
        the "recent memos" query relies on (edited_at is a TEXT column).
"""

import logging
from datetime import datetime, timezone
from typing import Optional

logger = logging.getLogger(__name__)


def format_rfc3339(moment: datetime) -> str:
    """
    Format an aware datetime as RFC-3339 UTC.

    Best effort: returns "" instead of raising, so a formatting problem never
    fails the request that needed the timestamp.
    """
    try:
        return moment.astimezone(timezone.utc).isoformat(timespec="microseconds")
    except (ValueError, OverflowError, TypeError) as e:
        logger.warning("Could not format timestamp %r: %s", moment, e)
        return ""


def utc_now_rfc3339(now: Optional[datetime] = None) -> str:
    return format_rfc3339(now or datetime.now(timezone.utc))
