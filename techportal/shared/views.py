"""Shared helpers for turning a loaded ListView into an API response"""

from typing import Optional

from fastapi import HTTPException

from ..listview import ListPage, ListView, SortDirection


def parse_direction(value: Optional[str]) -> SortDirection:
    """Query-string sort direction; 400 when it is not asc/desc"""
    try:
        return SortDirection.parse(value)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None


def finish_view(
    view: ListView,
    sort: Optional[str] = None,
    direction: SortDirection = SortDirection.ASC,
    page: int = 1,
) -> ListPage:
    """Apply the requested sort and page, then render"""
    try:
        view.sort(sort, direction)
    except KeyError as e:
        raise HTTPException(status_code=400, detail=e.args[0]) from None
    # Out-of-range pages leave the view on page 1
    view.go_to_page(page)
    return view.render()
