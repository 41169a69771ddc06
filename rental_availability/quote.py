import logging
import math
from datetime import date
from typing import Callable, List, Optional

from starlette.concurrency import run_in_threadpool

from .availability import check_availability, find_alternatives
from .config import DEFAULT_GUESTS
from .errors import InvalidStayError
from .formatting import airbnb_url, alternative_label, whatsapp_message
from .models import (
    AlternativeOut,
    BlockedInterval,
    BlockedRange,
    CalendarResponse,
    CandidateInterval,
    PricingQuote,
    PricingSummary,
    QuoteResponse,
)

logger = logging.getLogger(__name__)

# Each source is a blocking call; order of intervals is whatever the feed gives
IntervalSource = Callable[[], List[BlockedInterval]]
PricingOracle = Callable[[CandidateInterval], Optional[PricingQuote]]


def validate_stay(check_in: Optional[date], check_out: Optional[date]) -> CandidateInterval:
    if check_in is None or check_out is None:
        raise InvalidStayError("check_in and check_out required")
    if check_in >= check_out:
        raise InvalidStayError("check_out must be after check_in")
    return CandidateInterval(check_in=check_in, check_out=check_out)


def _blocked_range(interval: BlockedInterval) -> BlockedRange:
    return BlockedRange(start=interval.start.isoformat(), end=interval.end.isoformat(), type=interval.kind)


def _pricing_summary(pricing: PricingQuote, nights: int) -> PricingSummary:
    # half-up rounding, matching what the booking widget displays
    per_night_avg = int(math.floor(pricing.total / nights + 0.5))
    return PricingSummary(
        total=pricing.total,
        per_night_avg=per_night_avg,
        breakdown=pricing.per_day_prices,
        min_nights=pricing.min_nights,
        restrictions=pricing.restrictions,
        rules=pricing.rules,
    )


async def build_calendar(interval_source: IntervalSource) -> CalendarResponse:
    blocked = await run_in_threadpool(interval_source)
    return CalendarResponse(blocked=[_blocked_range(b) for b in blocked])


async def build_quote(
    check_in: Optional[date],
    check_out: Optional[date],
    guests: int = DEFAULT_GUESTS,
    *,
    interval_source: IntervalSource,
    pricing_oracle: PricingOracle,
    now: Optional[date] = None,
) -> QuoteResponse:
    """Answer a stay request: availability, pricing and, when taken, alternatives."""
    candidate = validate_stay(check_in, check_out)
    nights = candidate.nights

    blocked = await run_in_threadpool(interval_source)
    availability = check_availability(candidate, blocked)
    logger.info("[QUOTE] %s -> %s (%d nights): available=%s", candidate.check_in, candidate.check_out, nights, availability.available)

    # Pricing is looked up whether or not the dates are free
    pricing = await run_in_threadpool(pricing_oracle, candidate)
    if pricing is None:
        logger.info("[QUOTE] No pricing available")

    response = QuoteResponse(
        check_in=candidate.check_in.isoformat(),
        check_out=candidate.check_out.isoformat(),
        nights=nights,
        guests=guests,
        available=availability.available,
        airbnb_url=airbnb_url(candidate.check_in, candidate.check_out, guests),
        pricing=_pricing_summary(pricing, nights) if pricing is not None else None,
        whatsapp_message=whatsapp_message(candidate.check_in, candidate.check_out, nights, availability.available),
    )
    if availability.available:
        return response

    alternatives = find_alternatives(candidate, blocked, nights, now or date.today())
    logger.info("[QUOTE] Found %d alternatives", len(alternatives))
    return response.model_copy(update={
        "conflict": _blocked_range(availability.conflict),
        "alternatives": [
            AlternativeOut(
                start=alt.start.isoformat(),
                end=alt.end.isoformat(),
                nights=alt.nights,
                label=alternative_label(alt),
            )
            for alt in alternatives
        ],
    })
