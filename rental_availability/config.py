import os
from pathlib import Path
from typing import Dict, List

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent / ".env")
load_dotenv(".env")

# Hard-coded listing served by this deployment.
# Structure:
# {
#   "listing_id": str,
#   "ical_url": str,
#   "room_url": str,       # public listing page, query string appended
#   "host_name": str,      # greeting used in WhatsApp messages
# }

LISTING: Dict[str, str] = {
    "listing_id": "1503490402342628075",
    "ical_url": "https://www.airbnb.fr/calendar/ical/1503490402342628075.ics?t=9b9638075e404bf7b54c0342d07b547b",
    "room_url": "https://www.airbnb.fr/rooms/1503490402342628075",
    "host_name": "Léa",
}

PRICELABS_URL = "https://api.pricelabs.co/v1/listing_prices"
PRICELABS_PMS = "airbnb"

HORIZON_DAYS = 90
LOOKBACK_DAYS = 14
MAX_ALTERNATIVES = 3
MIN_ALTERNATIVE_NIGHTS = 2

DEFAULT_GUESTS = 2


def get_listing_id() -> str:
    return os.getenv("LISTING_ID") or LISTING["listing_id"]


def get_ical_url() -> str:
    return os.getenv("ICAL_URL") or LISTING["ical_url"]


def get_room_url() -> str:
    listing_id = os.getenv("LISTING_ID")
    if listing_id:
        return f"https://www.airbnb.fr/rooms/{listing_id}"
    return LISTING["room_url"]


def get_host_name() -> str:
    return LISTING["host_name"]


def get_pricelabs_api_key() -> str:
    return os.getenv("PRICELABS_API_KEY", "")


def get_request_timeout() -> float:
    return float(os.getenv("REQUEST_TIMEOUT", "10"))


def get_cors_origins() -> List[str]:
    origins = os.getenv("CORS_ORIGINS", "*")
    return [origin.strip() for origin in origins.split(",") if origin.strip()]


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()
