import json
import logging
from typing import Any, Optional

import requests
from pydantic import ValidationError

from ..config import PRICELABS_PMS, PRICELABS_URL, get_listing_id, get_pricelabs_api_key, get_request_timeout
from ..models import CandidateInterval, DayPrice, PricingQuote
from .client import get_http_session

logger = logging.getLogger(__name__)


def parse_pricing_payload(payload: Any) -> Optional[PricingQuote]:
    """Map a PriceLabs listing_prices response onto a PricingQuote.

    The response is a list with one entry per requested listing; only the
    first is used. Days without a price count as 0 towards the total.
    """
    if not isinstance(payload, list) or not payload:
        return None
    listing_data = payload[0]
    if not isinstance(listing_data, dict) or not listing_data.get("data"):
        return None

    logger.debug("[PRICING] Listing data keys: %s", sorted(listing_data.keys()))
    prices = [DayPrice.from_upstream(day) for day in listing_data["data"] if isinstance(day, dict)]
    total = sum(day.price for day in prices)

    return PricingQuote(
        per_day_prices=prices,
        total=total,
        min_nights=listing_data.get("min_nights"),
        restrictions=listing_data.get("restrictions"),
        rules=listing_data.get("rules"),
    )


def fetch_pricing(candidate: CandidateInterval) -> Optional[PricingQuote]:
    """Ask PriceLabs for the stay's nightly prices; None whenever that fails."""
    api_key = get_pricelabs_api_key()
    if not api_key:
        logger.error("[PRICING] PriceLabs API key not configured")
        return None

    body = {
        "listings": [{
            "id": get_listing_id(),
            "pms": PRICELABS_PMS,
            "dateFrom": candidate.check_in.isoformat(),
            "dateTo": candidate.check_out.isoformat(),
        }]
    }
    try:
        response = get_http_session().post(
            PRICELABS_URL,
            headers={"X-API-Key": api_key, "Content-Type": "application/json"},
            data=json.dumps(body),
            timeout=get_request_timeout(),
        )
    except requests.RequestException as e:
        logger.error("[PRICING] PriceLabs fetch error: %s", e)
        return None

    if not response.ok:
        logger.error("[PRICING] PriceLabs API error: %s", response.text)
        return None

    try:
        payload = response.json()
    except ValueError as e:
        logger.error("[PRICING] PriceLabs returned invalid JSON: %s", e)
        return None

    logger.debug("[PRICING] PriceLabs full response: %s", json.dumps(payload, indent=2))
    try:
        return parse_pricing_payload(payload)
    except ValidationError as e:
        logger.error("[PRICING] PriceLabs payload does not match the expected shape: %s", e)
        return None
