class KlcalError(Exception):
    """Base error."""

class ResourceError(KlcalError):
    """Raised when the lunar table resource is missing or malformed."""

class InvalidDate(KlcalError, ValueError):
    """Raised when a caller-supplied date cannot be converted."""

class YearOutOfRange(InvalidDate):
    """Raised when a year (or the counterpart year) falls outside the table."""

class InvalidMonth(InvalidDate):
    """Raised when a month is outside 1..12."""

class InvalidIntercalation(InvalidDate):
    """Raised when a leap month is requested where the year has none."""

class InvalidDay(InvalidDate):
    """Raised when a day exceeds the length of its month."""
