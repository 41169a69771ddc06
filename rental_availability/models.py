from datetime import date
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .config import DEFAULT_GUESTS

BlockKind = Literal["reserved", "blocked"]


class BlockedInterval(BaseModel):
    """Unavailable range [start, end) from the calendar feed."""

    model_config = ConfigDict(frozen=True)

    start: date
    end: date
    kind: BlockKind = "blocked"

    @model_validator(mode="after")
    def _check_order(self):
        if self.end <= self.start:
            raise ValueError("blocked interval must end after it starts")
        return self


class CandidateInterval(BaseModel):
    """Requested stay [check_in, check_out)."""

    model_config = ConfigDict(frozen=True)

    check_in: date
    check_out: date

    @property
    def nights(self) -> int:
        return (self.check_out - self.check_in).days


class AvailabilityResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    available: bool
    conflict: Optional[BlockedInterval] = None


class AlternativeWindow(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: date
    end: date
    nights: int


class DayPrice(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    date: Optional[str] = None
    price: float = 0

    @classmethod
    def from_upstream(cls, day: dict) -> "DayPrice":
        # PriceLabs sends null prices for closed days
        return cls(date=day.get("date"), price=day.get("price") or 0)


class PricingQuote(BaseModel):
    model_config = ConfigDict(frozen=True)

    per_day_prices: List[DayPrice] = Field(default_factory=list)
    total: float = 0
    min_nights: Optional[int] = None
    restrictions: Optional[Any] = None
    rules: Optional[Any] = None


# HTTP payloads

class AvailabilityRequest(BaseModel):
    check_in: Optional[date] = Field(None, description="Check-in date YYYY-MM-DD")
    check_out: Optional[date] = Field(None, description="Check-out date YYYY-MM-DD (exclusive)")
    guests: int = Field(DEFAULT_GUESTS, ge=1)
    get_calendar: bool = False


class BlockedRange(BaseModel):
    start: str
    end: str
    type: BlockKind


class CalendarResponse(BaseModel):
    blocked: List[BlockedRange]


class PricingSummary(BaseModel):
    total: float
    per_night_avg: int
    breakdown: List[DayPrice]
    min_nights: Optional[int] = None
    restrictions: Optional[Any] = None
    rules: Optional[Any] = None


class AlternativeOut(BaseModel):
    start: str
    end: str
    nights: int
    label: str


class QuoteResponse(BaseModel):
    check_in: str
    check_out: str
    nights: int
    guests: int
    available: bool
    airbnb_url: str
    pricing: Optional[PricingSummary] = None
    conflict: Optional[BlockedRange] = None
    alternatives: Optional[List[AlternativeOut]] = None
    whatsapp_message: str
