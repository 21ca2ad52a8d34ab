"""
Generic list-view pipeline
load (fetch + validate, cached fallback) -> refine (filter) -> sort -> paginate -> render
One ListView lives for a single screen view and is then discarded.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Generic, Iterable, Mapping, Optional, TypeVar

from pydantic import BaseModel

from .. import config
from ..datasource import FetchResult, validate_rows
from ..exceptions import FetchError
from .filtering import Accessor, FilterField, apply_filters, field_accessor, keyword_filter
from .pagination import Pager
from .sorting import SortDirection, SortState, sort_class, sort_icon, sort_records

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=BaseModel)

NO_RESULTS = "No results found"


@dataclass
class Column:
    name: str
    accessor: Optional[Accessor] = None
    label: Optional[str] = None

    def __post_init__(self):
        if self.accessor is None:
            self.accessor = field_accessor(self.name)
        if self.label is None:
            self.label = self.name


class ListPage(BaseModel):
    """One rendered page window of a list screen"""

    rows: list[dict[str, Any]]
    page: int
    pageSize: int
    pageCount: int
    total: int
    reportedTotal: Optional[int] = None
    startRecord: int
    endRecord: int
    pageWindow: list[int] = []
    columns: list[dict[str, Any]] = []
    sortColumn: Optional[str] = None
    sortDirection: Optional[str] = None
    message: Optional[str] = None
    stale: bool = False
    extras: dict[str, Any] = {}


def default_renderer(record: BaseModel) -> dict[str, Any]:
    return record.model_dump(mode="json")


@dataclass
class ListView(Generic[R]):
    """State of one list screen: loaded rows, filter, sort and page"""

    name: str
    loader: Callable[[Mapping[str, Any]], Awaitable[FetchResult]]
    model: type[R]
    columns: list[Column]
    page_size: int
    cache: Optional[Any] = None
    cache_key: Optional[str] = None
    cache_ttl: int = config.SNAPSHOT_TTL
    filter_fields: Mapping[str, FilterField] = field(default_factory=dict)
    keyword_columns: Iterable[str] = ()
    renderer: Callable[[R], dict[str, Any]] = default_renderer
    # Verb used in the fetch error message
    action: str = "loading"

    def __post_init__(self):
        if not 1 <= self.page_size <= config.MAX_PAGE_SIZE:
            raise ValueError(f"Page size must be between 1 and {config.MAX_PAGE_SIZE}")
        self._columns = {c.name: c for c in self.columns}
        # Keyword search may cover fields that are not displayed columns
        self._keyword_accessors = [
            self._columns[name].accessor if name in self._columns else field_accessor(name)
            for name in self.keyword_columns
        ]
        self.loaded: list[R] = []
        self.visible: list[R] = []
        self.extras: dict[str, Any] = {}
        self.message: Optional[str] = None
        self.stale = False
        self.reported_total: Optional[int] = None
        self.sort_state = SortState()
        self.pager = Pager(self.page_size)

    # ------------------------------------------------------------------
    # load
    async def load(self, criteria: Optional[Mapping[str, Any]] = None) -> "ListView[R]":
        """
        Fetch the list for ``criteria``.

        A failed fetch is not raised: the last cached snapshot (if any) is
        shown instead together with an error message.
        """
        criteria = dict(criteria or {})
        try:
            result = await self.loader(criteria)
        except FetchError as e:
            logger.warning(f"⚠️ Loading {self.name} failed, falling back to snapshot: {e}")
            self._load_snapshot()
            self.message = f"Error {self.action} {self.name}: {e}"
            return self

        records = validate_rows(result.rows, self.model)
        self.extras = dict(result.extras)
        self.stale = False
        # Only rows held locally are paged; a larger server count is reported as is
        self.reported_total = result.count if result.count > len(result.rows) else None
        self._replace(records)
        self.message = None if records else NO_RESULTS
        self._write_snapshot(records)
        return self

    def _write_snapshot(self, records: list[R]) -> None:
        if self.cache is None or not self.cache_key:
            return
        snapshot = [r.model_dump(mode="json") for r in records]
        if not self.cache.set(self.cache_key, snapshot, self.cache_ttl):
            logger.warning(f"⚠️ Could not store {self.name} snapshot under {self.cache_key}")

    def _load_snapshot(self) -> None:
        rows = None
        if self.cache is not None and self.cache_key:
            rows = self.cache.get(self.cache_key)
        records = validate_rows(rows or [], self.model)
        self.extras = {}
        self.stale = rows is not None
        self.reported_total = None
        self._replace(records)
        if rows is not None:
            logger.info(f"📦 Showing {len(records)} cached {self.name} rows")

    def _replace(self, records: list[R]) -> None:
        self.loaded = records
        self.visible = list(records)
        if self.sort_state.column:
            self._apply_sort()
        self.pager.reset(len(records))

    # ------------------------------------------------------------------
    # filter / sort / page
    def refine(self, criteria: Mapping[str, Any], keyword: Optional[str] = None) -> "ListView[R]":
        """Filter the loaded rows in memory and go back to page 1"""
        rows = apply_filters(self.loaded, criteria, self.filter_fields)
        rows = keyword_filter(rows, keyword, self._keyword_accessors)
        self.visible = rows
        if not rows and self.loaded and self.message is None:
            self.message = NO_RESULTS
        if self.sort_state.column:
            self._apply_sort()
        self.pager.reset(len(rows))
        return self

    def sort_by(self, column: str) -> "ListView[R]":
        """Header click: toggle the direction on the same column, else sort ascending"""
        self._column(column)
        self.sort_state.select(column)
        self._apply_sort()
        self.pager.go_to(1)
        return self

    def sort(self, column: Optional[str], direction: SortDirection = SortDirection.ASC) -> "ListView[R]":
        """Set an explicit sort order"""
        if column is None:
            return self
        self._column(column)
        self.sort_state = SortState(column, direction)
        self._apply_sort()
        self.pager.go_to(1)
        return self

    def _apply_sort(self) -> None:
        column = self._column(self.sort_state.column)
        self.visible = sort_records(self.visible, column.accessor, self.sort_state.direction)

    def _column(self, name: Optional[str]) -> Column:
        try:
            return self._columns[name]
        except KeyError:
            raise KeyError(f"Unknown column {name!r} for {self.name}") from None

    def go_to_page(self, page: int) -> bool:
        return self.pager.go_to(page)

    def next_page(self) -> bool:
        return self.pager.next()

    def previous_page(self) -> bool:
        return self.pager.previous()

    # ------------------------------------------------------------------
    def _header(self, column: Column) -> dict[str, Any]:
        return {
            "name": column.name,
            "label": column.label,
            "sortIcon": sort_icon(self.sort_state, column.name),
            "sortClass": sort_class(self.sort_state, column.name),
        }

    def render(self) -> ListPage:
        window = self.pager.slice(self.visible)
        direction = None
        if self.sort_state.column:
            direction = "asc" if self.sort_state.direction is SortDirection.ASC else "desc"
        return ListPage(
            rows=[self.renderer(r) for r in window],
            page=self.pager.page,
            pageSize=self.pager.page_size,
            pageCount=self.pager.page_count,
            total=self.pager.total,
            reportedTotal=self.reported_total,
            startRecord=self.pager.start_record,
            endRecord=self.pager.end_record,
            pageWindow=self.pager.window,
            columns=[self._header(c) for c in self.columns],
            sortColumn=self.sort_state.column,
            sortDirection=direction,
            message=self.message,
            stale=self.stale,
            extras=self.extras,
        )
