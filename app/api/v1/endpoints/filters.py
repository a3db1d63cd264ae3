"""Query-parameter dependencies shared by the document listings."""
from dataclasses import dataclass
from typing import Annotated, Optional

from fastapi import Depends, HTTPException, Query, status

from app.core.formatting import parse_date_bound


@dataclass
class DateRangeParams:
    start: Optional[int] = None
    end: Optional[int] = None


def date_range(
    start_date: Optional[str] = Query(None, description="Epoch seconds or YYYY-MM-DD"),
    end_date: Optional[str] = Query(None, description="Epoch seconds or YYYY-MM-DD (inclusive)"),
) -> DateRangeParams:
    """
    Parse the optional ``start_date`` / ``end_date`` pair.

    The range only filters when both ends are given.
    """
    try:
        start = parse_date_bound(start_date) if start_date else None
        end = parse_date_bound(end_date, end_of_day=True) if end_date else None
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid date format. Use YYYY-MM-DD or epoch seconds"
        )
    return DateRangeParams(start=start, end=end)


DateRange = Annotated[DateRangeParams, Depends(date_range)]
