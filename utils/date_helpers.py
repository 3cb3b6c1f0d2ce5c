from datetime import date, datetime, tzinfo
import calendar
from utils.constants import DATE_FORMAT, MONTH_FORMAT

# English regardless of the process locale
MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def now() -> datetime:
    return datetime.now()


def today() -> date:
    return date.today()


def local_date(dt: datetime, tz: tzinfo | None = None) -> date:
    """Calendar day of dt. Aware datetimes are converted to tz first; naive
    ones are taken as already being local."""
    if tz is not None and dt.tzinfo is not None:
        dt = dt.astimezone(tz)
    return dt.date()


def instant(dt: datetime) -> float:
    """POSIX timestamp of dt, for ordering naive and aware values together.
    Naive values count as local time."""
    return dt.timestamp()


def same_month(a: datetime | date, b: datetime | date, tz: tzinfo | None = None) -> bool:
    """True when a and b fall in the same calendar month and year."""
    if isinstance(a, datetime):
        a = local_date(a, tz)
    if isinstance(b, datetime):
        b = local_date(b, tz)
    return (a.year, a.month) == (b.year, b.month)


def month_start(d: datetime | date) -> date:
    if isinstance(d, datetime):
        d = d.date()
    return d.replace(day=1)


def parse_date(date_str: str) -> date | None:
    """Parse a date string in YYYY-MM-DD format, returning None on failure."""
    if not date_str:
        return None
    for fmt in ("%Y-%m-%d", "%Y/%m/%d", "%Y.%m.%d"):
        try:
            return datetime.strptime(date_str.strip(), fmt).date()
        except ValueError:
            continue
    return None


def format_date(d: date) -> str:
    return d.strftime(DATE_FORMAT)


def format_month(d: date) -> str:
    return d.strftime(MONTH_FORMAT)


def clamp_day_to_month(year: int, month: int, day: int) -> int:
    """Clamp day to valid range for the given year/month."""
    max_day = calendar.monthrange(year, month)[1]
    return min(day, max_day)


def add_months(d: date, n: int) -> date:
    """Add n months to date d (n may be negative), clamping day to month end."""
    month = d.month - 1 + n
    year = d.year + month // 12
    month = month % 12 + 1
    day = clamp_day_to_month(year, month, d.day)
    return d.replace(year=year, month=month, day=day)


def month_label(d: date) -> str:
    """Short month name, e.g. 'Mar'."""
    return MONTH_NAMES[d.month - 1][:3]


def friendly_month(d: date) -> str:
    """e.g. 'February 2026'."""
    return f"{MONTH_NAMES[d.month - 1]} {d.year}"


def combine_with_time(d: date, time_source: datetime | None = None) -> datetime:
    """Attach the time of day of time_source (or now) to the calendar day d."""
    source = time_source or datetime.now()
    return datetime.combine(d, source.time())
