"""Date parsing and formatting shared by date rules and field state."""

from datetime import date, datetime

# Accepted textual input formats, tried in order
INPUT_FORMATS = ("%Y-%m-%d", "%m/%d/%y", "%m/%d/%Y")

# Medium display style, e.g. "Jan 15, 1990"
DISPLAY_FORMAT = "%b %d, %Y"


def parse_date(text: str, formats: tuple[str, ...] = INPUT_FORMATS) -> date | None:
    """Parse a date string in one of `formats`. Returns None if unparseable."""
    text = text.strip()
    if not text:
        return None
    for fmt in formats:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def as_day(value: date) -> date:
    """Reduce a date or datetime to its calendar day."""
    if isinstance(value, datetime):
        return value.date()
    return value


def format_date(value: date) -> str:
    return as_day(value).strftime(DISPLAY_FORMAT)


def parse_iso_timestamp(text: str) -> datetime:
    """Parse an ISO-8601 timestamp, accepting a trailing 'Z' for UTC.

    Raises:
        ValueError: If the text is not ISO-8601
    """
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)
