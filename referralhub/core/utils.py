"""
Small helpers shared by the page modules: timestamps, date windows, pagination and sums.
"""

import math
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple
from zoneinfo import ZoneInfo

DATE_RANGES = ("today", "week", "month", "year", "all")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse a Supabase timestamp (ISO string, possibly ending in Z) into an aware datetime."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def day_key(value: Any) -> str:
    """YYYY-MM-DD of a timestamp in UTC"""
    return parse_timestamp(value).astimezone(timezone.utc).date().isoformat()


def is_same_day(value: Any, now: datetime) -> bool:
    ts = parse_timestamp(value)
    if ts is None:
        return False
    return ts.astimezone(now.tzinfo).date() == now.date()


def start_of_month(now: datetime) -> datetime:
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def date_range_start(range_name: str, now: datetime, tz: Optional[str] = None) -> Optional[datetime]:
    """Lower bound for the transaction date filters. None means no bound.

    Calendar boundaries (today, month, year) are midnights in tz, an IANA zone name,
    or in now's own zone when tz is not given.
    """
    if tz:
        now = now.astimezone(ZoneInfo(tz))
    if range_name == "today":
        return now.replace(hour=0, minute=0, second=0, microsecond=0)
    if range_name == "week":
        return now - timedelta(days=7)
    if range_name == "month":
        return start_of_month(now)
    if range_name == "year":
        return now.replace(month=1, day=1, hour=0, minute=0, second=0, microsecond=0)
    return None


def format_time_remaining(seconds: float) -> str:
    total = max(0, int(seconds))
    days, rest = divmod(total, 24 * 3600)
    hours, rest = divmod(rest, 3600)
    minutes, secs = divmod(rest, 60)
    if days > 0:
        return f"{days}d {hours}h {minutes}m {secs}s"
    if hours > 0:
        return f"{hours}h {minutes}m {secs}s"
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def paginate(items: Sequence[Any], page: int, page_size: int) -> Tuple[List[Any], int]:
    """Return (items on page, total pages). Pages are 1-based."""
    page = max(1, page)
    total_pages = math.ceil(len(items) / page_size) if page_size > 0 else 0
    start = (page - 1) * page_size
    return list(items[start:start + page_size]), total_pages


def sum_field(rows: Iterable[Dict[str, Any]], field: str) -> float:
    return float(sum((row.get(field) or 0) for row in rows))


def fetch_single(query) -> Optional[Dict[str, Any]]:
    """Run a query expecting zero or one row; returns the row dict or None."""
    result = query.maybe_single().execute()
    if result is None:
        return None
    return result.data or None


def format_amount(value: Any) -> str:
    """Render a money amount without a trailing .0 (50 -> "50", 12.5 -> "12.5")"""
    number = float(value or 0)
    if number.is_integer():
        return str(int(number))
    return f"{number:.8f}".rstrip("0").rstrip(".")


def newest_first(rows: List[Dict[str, Any]], field: str = "created_at") -> List[Dict[str, Any]]:
    """Sort rows by a timestamp field, newest first; rows without one go last."""
    oldest = datetime.min.replace(tzinfo=timezone.utc)
    return sorted(rows, key=lambda row: parse_timestamp(row.get(field)) or oldest, reverse=True)
