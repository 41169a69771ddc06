import logging
from datetime import date
from typing import Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Query

from .config import DEFAULT_GUESTS
from .errors import CalendarFeedError, InvalidStayError
from .feeds.ical_parser import fetch_blocked_intervals
from .feeds.pricing import fetch_pricing
from .models import AvailabilityRequest, CalendarResponse, QuoteResponse
from .quote import IntervalSource, PricingOracle, build_calendar, build_quote

logger = logging.getLogger(__name__)

router = APIRouter()


def get_interval_source() -> IntervalSource:
    return fetch_blocked_intervals


def get_pricing_oracle() -> PricingOracle:
    return fetch_pricing


def get_today() -> date:
    return date.today()


@router.get("/health")
async def health():
    return {"status": "ok"}


@router.get("/calendar", response_model=CalendarResponse)
async def calendar(interval_source: IntervalSource = Depends(get_interval_source)):
    try:
        return await build_calendar(interval_source)
    except CalendarFeedError as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.get("/availability", response_model=QuoteResponse)
async def availability(
    check_in: Optional[date] = Query(None, description="YYYY-MM-DD"),
    check_out: Optional[date] = Query(None, description="YYYY-MM-DD"),
    guests: int = Query(DEFAULT_GUESTS, ge=1),
    interval_source: IntervalSource = Depends(get_interval_source),
    pricing_oracle: PricingOracle = Depends(get_pricing_oracle),
    today: date = Depends(get_today),
):
    logger.info("[ROUTES] Checking %s -> %s for %d guests", check_in, check_out, guests)
    try:
        return await build_quote(
            check_in,
            check_out,
            guests,
            interval_source=interval_source,
            pricing_oracle=pricing_oracle,
            now=today,
        )
    except InvalidStayError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CalendarFeedError as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.post("/availability", response_model=Union[CalendarResponse, QuoteResponse])
async def availability_post(
    body: AvailabilityRequest,
    interval_source: IntervalSource = Depends(get_interval_source),
    pricing_oracle: PricingOracle = Depends(get_pricing_oracle),
    today: date = Depends(get_today),
):
    logger.info("[API] POST /availability called with check_in=%s, check_out=%s, get_calendar=%s", body.check_in, body.check_out, body.get_calendar)
    if body.get_calendar:
        return await calendar(interval_source=interval_source)
    return await availability(
        check_in=body.check_in,
        check_out=body.check_out,
        guests=body.guests,
        interval_source=interval_source,
        pricing_oracle=pricing_oracle,
        today=today,
    )
