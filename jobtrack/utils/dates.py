from datetime import date, datetime, time, timedelta, timezone

# Date-only values are pinned to midday so that converting between
# timezones can never move them onto a neighbouring calendar day.
DATE_ONLY_TIME = time(12, 0)


def utcnow() -> datetime:
    """Naive UTC now, matching what MongoDB hands back."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def normalize_date(value):
    """
    Turn a calendar date coming from a client into the stored datetime.

    Accepts `YYYY-MM-DD` strings, full ISO-8601 datetimes, `date` and
    `datetime` objects. Empty values become None. Aware datetimes are
    converted to naive UTC.
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return datetime.combine(value, DATE_ONLY_TIME)
    elif isinstance(value, str):
        text = value.strip()
        if len(text) == 10:
            return datetime.combine(date.fromisoformat(text), DATE_ONLY_TIME)
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    else:
        raise ValueError(f"Invalid date value: {value!r}")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def next_timestamp(previous: datetime = None) -> datetime:
    """
    Timestamp for a mutation, strictly later than `previous`.

    MongoDB keeps millisecond precision, so the value is truncated to the
    millisecond before comparing.
    """
    now = utcnow()
    now = now.replace(microsecond=now.microsecond // 1000 * 1000)
    if previous is not None and now <= previous:
        now = previous + timedelta(milliseconds=1)
    return now
