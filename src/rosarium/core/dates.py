"""ISO-8601 timestamp helpers.

Timestamps are stored as UTC strings with millisecond precision and a ``Z``
suffix, e.g. ``2024-05-01T09:30:00.000Z``. Calendar days are always judged in
local time, the way a user picking a date would see them.
"""

from datetime import UTC, date, datetime, time


def format_iso(moment: datetime) -> str:
    """Format a datetime as a UTC timestamp string (naive means local time)."""
    if moment.tzinfo is None:
        moment = moment.astimezone()
    utc = moment.astimezone(UTC)
    return f"{utc:%Y-%m-%dT%H:%M:%S}.{utc.microsecond // 1000:03d}Z"


def now_iso() -> str:
    return format_iso(datetime.now(UTC))


def today() -> date:
    return datetime.now().astimezone().date()


def parse_iso(text: str) -> datetime | None:
    """Parse an ISO-8601 timestamp or plain date.

    Returns:
        An aware datetime, or None if the text cannot be read. Naive values
        are taken as local time.
    """
    text = text.strip()
    if not text:
        return None
    try:
        moment = datetime.fromisoformat(text)
    except ValueError:
        return None
    if moment.tzinfo is None:
        moment = moment.astimezone()
    return moment


def local_day(text: str) -> date | None:
    """Return the local calendar day of a timestamp, or None if unreadable."""
    moment = parse_iso(text)
    if moment is None:
        return None
    return moment.astimezone().date()


def day_label(text: str) -> str:
    """Display form of a timestamp: its local day, or the raw text if unreadable."""
    day = local_day(text)
    return day.isoformat() if day else text


def start_of_day(day: date) -> str:
    """Local midnight of ``day`` as a timestamp, for date-only fields."""
    return format_iso(datetime.combine(day, time()).astimezone())


def stamp_for_day(day: date, now: datetime | None = None) -> str:
    """Synthesize a timestamp for a record dated ``day``.

    A record dated today carries the current time of day, so same-day records
    keep their insertion order; any other day is stamped at local midnight.
    """
    current = now if now is not None else datetime.now().astimezone()
    if current.tzinfo is None:
        current = current.astimezone()
    if day == current.date():
        return format_iso(current)
    if now is not None:
        return format_iso(datetime.combine(day, time(), tzinfo=current.tzinfo))
    return start_of_day(day)


def replace_day(text: str, day: date) -> str:
    """Move a timestamp to another calendar day, keeping its local time of day."""
    moment = parse_iso(text)
    if moment is None:
        return stamp_for_day(day)
    local = moment.astimezone()
    return format_iso(datetime.combine(day, local.timetz()))
