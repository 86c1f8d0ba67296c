"""W3C datetime normalisation for ``lastmod`` values."""

from datetime import UTC, date, datetime

_FORMAT = "%Y-%m-%dT%H:%M:%S+00:00"


def _parse(value: str) -> datetime | None:
    text = value.strip()
    if not text:
        return None
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def normalise_date(value: object) -> str | None:
    """Format a date-like value as ``YYYY-MM-DDTHH:MM:SS+00:00`` in UTC.

    Accepts ISO-8601 strings, ``datetime``, ``date`` and POSIX
    timestamps.  Naive datetimes are taken to be UTC.  Returns ``None``
    for anything that cannot be interpreted as a date.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        moment = datetime(value.year, value.month, value.day)
    elif isinstance(value, int | float):
        try:
            moment = datetime.fromtimestamp(value, tz=UTC)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str):
        parsed = _parse(value)
        if parsed is None:
            return None
        moment = parsed
    else:
        return None

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC).strftime(_FORMAT)
