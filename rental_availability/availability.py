from datetime import date, timedelta
from enum import Enum
from typing import List, Optional, Sequence

from .config import HORIZON_DAYS, LOOKBACK_DAYS, MAX_ALTERNATIVES, MIN_ALTERNATIVE_NIGHTS
from .models import AlternativeWindow, AvailabilityResult, BlockedInterval, CandidateInterval


def intervals_overlap(start_a: date, end_a: date, start_b: date, end_b: date) -> bool:
    """Half-open overlap: [a, b) and [c, d) share a day iff a < d and b > c.

    Checking out on the day another stay begins is not a conflict.
    """
    return start_a < end_b and end_a > start_b


def check_availability(candidate: CandidateInterval, blocked: Sequence[BlockedInterval]) -> AvailabilityResult:
    """Return the first blocked interval, in the given order, that overlaps the stay."""
    for interval in blocked:
        if intervals_overlap(candidate.check_in, candidate.check_out, interval.start, interval.end):
            return AvailabilityResult(available=False, conflict=interval)
    return AvailabilityResult(available=True)


class ScanState(Enum):
    SCANNING = "scanning"
    INSIDE_BLOCK = "inside_block"
    EMIT = "emit"
    DONE = "done"


def _containing(blocked: Sequence[BlockedInterval], day: date) -> Optional[BlockedInterval]:
    for interval in blocked:
        if interval.start <= day < interval.end:
            return interval
    return None


def _next_block_start(blocked: Sequence[BlockedInterval], day: date, max_date: date) -> date:
    # blocked is sorted, so the first start after `day` is the nearest one
    for interval in blocked:
        if interval.start > day:
            return min(interval.start, max_date)
    return max_date


def _skip_blocked(blocked: Sequence[BlockedInterval], day: date) -> date:
    # chains through back-to-back blocks because blocked is sorted by start
    for interval in blocked:
        if interval.start <= day < interval.end:
            day = interval.end
    return day


def min_nights_threshold(nights_needed: int) -> int:
    if nights_needed <= 0:
        return MIN_ALTERNATIVE_NIGHTS
    return min(nights_needed, MIN_ALTERNATIVE_NIGHTS)


def find_alternatives(
    candidate: CandidateInterval,
    blocked: Sequence[BlockedInterval],
    nights_needed: int,
    now: date,
    *,
    horizon_days: int = HORIZON_DAYS,
    lookback_days: int = LOOKBACK_DAYS,
    max_results: int = MAX_ALTERNATIVES,
) -> List[AlternativeWindow]:
    """Scan forward from just before the requested check-in for open windows.

    The cursor starts `lookback_days` before check-in (never before `now`) and
    walks towards `now + horizon_days`. Each open run between blocked
    intervals long enough for `min(nights_needed, 2)` nights is collected, up
    to `max_results`, in chronological order. After a window the cursor skips
    one day past its end and over any block it lands in.
    """
    sorted_blocked = sorted(blocked, key=lambda b: b.start)
    max_date = now + timedelta(days=horizon_days)
    threshold = min_nights_threshold(nights_needed)

    alternatives: List[AlternativeWindow] = []
    current = max(now, candidate.check_in - timedelta(days=lookback_days))
    window_end = max_date
    state = ScanState.SCANNING

    while state is not ScanState.DONE:
        if state is ScanState.SCANNING:
            if current >= max_date or len(alternatives) >= max_results:
                state = ScanState.DONE
                continue
            window_end = _next_block_start(sorted_blocked, current, max_date)
            if _containing(sorted_blocked, current) is not None:
                state = ScanState.INSIDE_BLOCK
            else:
                state = ScanState.EMIT

        elif state is ScanState.INSIDE_BLOCK:
            current = _containing(sorted_blocked, current).end
            state = ScanState.SCANNING

        elif state is ScanState.EMIT:
            available_nights = (window_end - current).days
            if available_nights >= threshold:
                alternatives.append(AlternativeWindow(start=current, end=window_end, nights=available_nights))
            current = _skip_blocked(sorted_blocked, window_end + timedelta(days=1))
            state = ScanState.SCANNING

    return alternatives
