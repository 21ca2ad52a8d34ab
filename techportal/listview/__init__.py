"""Reusable filter -> sort -> paginate -> render pipeline for list screens"""

from .filtering import FieldMatch, FilterField, apply_filters, field_accessor, is_sentinel, keyword_filter
from .pagination import Pager, page_count, paginate
from .pipeline import Column, ListPage, ListView
from .presentation import StatusPalette, format_date, is_placeholder_date, status_badge_class
from .sorting import SortDirection, SortState, sort_records

__all__ = [
    "Column",
    "FieldMatch",
    "FilterField",
    "ListPage",
    "ListView",
    "Pager",
    "SortDirection",
    "SortState",
    "StatusPalette",
    "apply_filters",
    "field_accessor",
    "format_date",
    "is_placeholder_date",
    "is_sentinel",
    "keyword_filter",
    "page_count",
    "paginate",
    "sort_records",
    "status_badge_class",
]
