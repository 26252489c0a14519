"""UTC timestamp helpers. Every timestamp crossing the engine boundary is an ISO-8601 string."""

from datetime import UTC, date, datetime, timedelta


def utc_now() -> datetime:
    return datetime.now(UTC)


def as_utc(moment: datetime) -> datetime:
    """Convert a datetime to aware UTC. Naive values are assumed to already be UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


def resolve_now(now: datetime | None = None) -> datetime:
    """Return ``now`` as aware UTC, or the current UTC time when it is None."""
    return utc_now() if now is None else as_utc(now)


def to_iso(moment: datetime) -> str:
    """Render a datetime as ISO-8601 in UTC. Naive values are read as UTC."""
    return as_utc(moment).isoformat()


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 date or datetime string into an aware UTC datetime.

    Date-only values ("2024-12-30") are read as midnight UTC; naive datetimes
    are assumed to be UTC.

    Raises:
        ValueError: If the value is not ISO-8601.
    """
    return as_utc(datetime.fromisoformat(value))


def add_days(moment: datetime, days: int) -> datetime:
    return moment + timedelta(days=days)


def add_one_year(moment: datetime) -> datetime:
    """Return the same calendar instant one year later.

    February 29 rolls over to March 1 of the following year.
    """
    try:
        return moment.replace(year=moment.year + 1)
    except ValueError:
        return moment.replace(year=moment.year + 1, month=3, day=1)


def month_periods(moment: datetime, count: int) -> list[str]:
    """Return ``YYYY-MM`` labels for the last ``count`` calendar months, oldest first.

    The month containing ``moment`` is the last label.
    """
    anchor = moment.year * 12 + (moment.month - 1)
    labels: list[str] = []
    for offset in range(count - 1, -1, -1):
        index = anchor - offset
        labels.append(date(index // 12, index % 12 + 1, 1).strftime("%Y-%m"))
    return labels
