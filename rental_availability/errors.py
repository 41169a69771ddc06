class RentalAvailabilityError(Exception):
    pass


class InvalidStayError(RentalAvailabilityError, ValueError):
    """Requested stay is missing a date or does not end after it starts."""


class CalendarFeedError(RentalAvailabilityError):
    """The iCal feed could not be fetched; its blocked dates are unknown."""
