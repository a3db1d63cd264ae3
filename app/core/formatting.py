"""
Date, currency and search-text helpers shared by the listing endpoints.

Sales and purchase documents store their date as epoch seconds. A bare
calendar date ("2024-04-01") maps to UTC midnight of that day; all day,
month and year windows below are computed in UTC as well so that a document
entered for a date always falls inside that date's window.
"""
import re
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Tuple, Union


DateInput = Union[str, date, datetime, int, float]

_WHITESPACE = re.compile(r"\s+")
_NON_ALNUM = re.compile(r"[^a-z0-9]")


def to_epoch_seconds(value: DateInput) -> int:
    """
    Convert a calendar date or timestamp to whole epoch seconds.

    Raises:
        ValueError: if ``value`` cannot be interpreted as a date
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid date: {value!r}")
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime.combine(value, time.min)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("Invalid date: empty string")
        try:
            dt = datetime.combine(date.fromisoformat(text), time.min)
        except ValueError:
            if text.endswith("Z"):
                text = text[:-1] + "+00:00"
            dt = datetime.fromisoformat(text)
    else:
        raise ValueError(f"Invalid date: {value!r}")

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp())


def from_epoch_seconds(value: int) -> datetime:
    return datetime.fromtimestamp(value, tz=timezone.utc)


def document_date_to_epoch(value: DateInput) -> int:
    """
    Epoch seconds for the date posted with a sales or purchase document.

    Numbers are JavaScript timestamps in milliseconds, which is what the entry
    forms send; strings and dates go through ``to_epoch_seconds``. The result
    must land on a real calendar date.

    Raises:
        ValueError: if ``value`` is unparseable or out of range
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        epoch = int(value // 1000)
    else:
        epoch = to_epoch_seconds(value)
    try:
        from_epoch_seconds(epoch)
    except (OverflowError, OSError) as e:
        raise ValueError(f"Date out of range: {value!r}") from e
    return epoch


def day_window(day: date) -> Tuple[int, int]:
    """First and last epoch second of ``day`` (UTC)."""
    start = to_epoch_seconds(day)
    return start, start + 86399


def month_window(today: date) -> Tuple[int, int]:
    first = today.replace(day=1)
    if first.month == 12:
        next_first = first.replace(year=first.year + 1, month=1)
    else:
        next_first = first.replace(month=first.month + 1)
    last = next_first - timedelta(days=1)
    return to_epoch_seconds(first), day_window(last)[1]


def year_window(today: date) -> Tuple[int, int]:
    return (
        to_epoch_seconds(date(today.year, 1, 1)),
        day_window(date(today.year, 12, 31))[1],
    )


def format_date_in(value: Optional[int]) -> str:
    """Render epoch seconds the way en-IN locales print a date (d/m/yyyy)."""
    if value is None:
        return "Invalid Date"
    try:
        dt = from_epoch_seconds(int(value))
    except (OverflowError, OSError, ValueError):
        return "Invalid Date"
    return f"{dt.day}/{dt.month}/{dt.year}"


def _group_indian(digits: str) -> str:
    # 12345678 -> 1,23,45,678
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_inr(amount: Union[Decimal, float, int, None]) -> str:
    """Format an amount as Indian Rupees, e.g. ``₹1,18,000.00``."""
    value = Decimal(str(amount or 0)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    whole, fraction = f"{abs(value):.2f}".split(".")
    return f"{sign}₹{_group_indian(whole)}.{fraction}"


def normalize_search_text(text: str) -> str:
    """Lowercase and drop whitespace and punctuation ("Brake-Pad 12" -> "brakepad12")."""
    return _NON_ALNUM.sub("", _WHITESPACE.sub("", text.lower().strip()))


def parse_date_bound(value: str, end_of_day: bool = False) -> int:
    """
    Parse a ``start_date`` / ``end_date`` query value.

    Accepts epoch seconds or an ISO date / timestamp. With ``end_of_day`` a
    bare calendar date resolves to the last second of that day so the range
    includes it.

    Raises:
        ValueError: if the value is neither
    """
    text = value.strip()
    if text.lstrip("-").isdigit():
        return int(text)
    epoch = to_epoch_seconds(text)
    if end_of_day:
        try:
            date.fromisoformat(text)
        except ValueError:
            return epoch
        return epoch + 86399
    return epoch
