import logging
import re
from datetime import date
from typing import List, Optional

import requests

from ..config import get_ical_url, get_request_timeout
from ..errors import CalendarFeedError
from ..models import BlockedInterval
from .client import get_http_session

logger = logging.getLogger(__name__)

_DTSTART_RE = re.compile(r"DTSTART(?:;VALUE=DATE)?:(\d{8})")
_DTEND_RE = re.compile(r"DTEND(?:;VALUE=DATE)?:(\d{8})")
_SUMMARY_RE = re.compile(r"SUMMARY:(.+)")


def _parse_ical_date(value: str) -> Optional[date]:
    """Parse '20240601' into a date"""
    try:
        return date(int(value[0:4]), int(value[4:6]), int(value[6:8]))
    except ValueError:
        return None


def parse_ical(ical_text: str) -> List[BlockedInterval]:
    """Extract all-day blocked ranges from an Airbnb iCal export, in feed order."""
    blocked: List[BlockedInterval] = []
    events = ical_text.split("BEGIN:VEVENT")

    for event in events[1:]:
        start_match = _DTSTART_RE.search(event)
        end_match = _DTEND_RE.search(event)
        if not start_match or not end_match:
            continue

        start = _parse_ical_date(start_match.group(1))
        end = _parse_ical_date(end_match.group(1))
        if start is None or end is None:
            logger.warning("[ICAL] Skipping event with invalid date: %s / %s", start_match.group(1), end_match.group(1))
            continue
        if end <= start:
            logger.warning("[ICAL] Skipping empty event %s -> %s", start, end)
            continue

        summary_match = _SUMMARY_RE.search(event)
        summary = summary_match.group(1).strip() if summary_match else ""
        kind = "reserved" if "Reserved" in summary else "blocked"
        blocked.append(BlockedInterval(start=start, end=end, kind=kind))

    return blocked


def fetch_blocked_intervals(ical_url: Optional[str] = None) -> List[BlockedInterval]:
    """Download the listing calendar and parse it"""
    url = ical_url or get_ical_url()
    try:
        response = get_http_session().get(url, timeout=get_request_timeout())
        response.raise_for_status()
    except requests.RequestException as e:
        logger.error("[ICAL] Failed to fetch calendar: %s", e)
        raise CalendarFeedError(f"Calendar feed unavailable: {e}") from e

    blocked = parse_ical(response.text)
    logger.info("[ICAL] Got %d blocked ranges", len(blocked))
    return blocked
