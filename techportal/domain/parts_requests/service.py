"""Parts request status service - report screen over the list pipeline"""

from collections import Counter
from datetime import date
from typing import Any, Iterable, Optional

from ... import cache as snapshot_cache
from ... import config
from ...datasource import FetchResult, HttpDataSource
from ...listview import Column, FieldMatch, FilterField, ListPage, ListView, SortDirection, field_accessor
from ...listview.presentation import PARTS_REQUEST_STATUS_COLORS, format_date, status_badge_class
from ...listview.values import parse_date
from ...shared.views import finish_view
from .schemas import PartsRequestFilter, PartsRequestRecord

PARTS_REQUESTS_PATH = "/PartReqStatus/GetPartReqStatusByKey"
COLLECTION_KEY = "partRequests"

COLUMNS = [
    Column("callNbr", label="Job #"),
    Column("custNmbr", label="Cust #"),
    Column("custName", label="Customer"),
    Column("technician", label="Technician"),
    Column("city", label="City"),
    Column("state", label="State"),
    Column("status", label="Status"),
    Column("age", label="Age"),
    Column("reqDate", label="Req Date"),
    Column("shipDate", label="Ship Date"),
    Column("urgent", label="Urgent"),
]

FILTER_FIELDS = {
    "urgent": FilterField(field_accessor("urgent"), FieldMatch.CODE),
    "state": FilterField(field_accessor("state"), FieldMatch.CODE),
    "status": FilterField(field_accessor("status"), FieldMatch.CODE),
}

KEYWORD_COLUMNS = ("callNbr", "custNmbr", "custName", "technician", "city")


def calculate_age(req_date: Any, today: Optional[date] = None) -> Optional[int]:
    """Whole days between the request date and today"""
    requested = parse_date(req_date)
    if requested is None:
        return None
    delta = (today or date.today()) - requested.date()
    return abs(delta.days)


def status_counts(records: Iterable[PartsRequestRecord]) -> dict[str, int]:
    counts = Counter(r.status for r in records if r.status)
    return dict(counts)


def render_parts_request(record: PartsRequestRecord) -> dict[str, Any]:
    row = record.model_dump(mode="json")
    row.update(
        {
            "statusColor": PARTS_REQUEST_STATUS_COLORS.color(record.status),
            "statusBadgeClass": status_badge_class(record.status),
            "ageDays": record.age if record.age is not None else calculate_age(record.reqDate),
            "reqDateDisplay": format_date(record.reqDate),
            "shipDateDisplay": format_date(record.shipDate),
        }
    )
    return row


class PartsRequestService:
    """Service layer for the parts request status report"""

    def __init__(self, source: HttpDataSource, cache=None, page_size: int = config.PARTS_REQUESTS_PAGE_SIZE):
        self.source = source
        self.cache = cache
        self.page_size = page_size

    async def _fetch(self, criteria: dict) -> FetchResult:
        return await self.source.fetch(PARTS_REQUESTS_PATH, criteria, collection_key=COLLECTION_KEY)

    def new_view(self, criteria: Optional[dict] = None) -> ListView[PartsRequestRecord]:
        return ListView(
            name="parts requests",
            loader=self._fetch,
            model=PartsRequestRecord,
            columns=COLUMNS,
            page_size=self.page_size,
            cache=self.cache,
            cache_key=snapshot_cache.build_snapshot_key(snapshot_cache.PARTS_REQUESTS, criteria),
            filter_fields=FILTER_FIELDS,
            keyword_columns=KEYWORD_COLUMNS,
            renderer=render_parts_request,
        )

    async def get_report(
        self,
        report_filter: PartsRequestFilter,
        sort: Optional[str] = None,
        direction: SortDirection = SortDirection.ASC,
        page: int = 1,
    ) -> ListPage:
        params = report_filter.upstream_params()
        view = self.new_view(params)
        await view.load(params)
        view.refine(
            {"urgent": report_filter.urgent, "state": report_filter.state},
            keyword=report_filter.keyword,
        )
        view.extras = {
            "crashKitCount": int(view.extras.get("crashKitCount") or 0),
            "loadBankCount": int(view.extras.get("loadBankCount") or 0),
            "statusCounts": status_counts(view.loaded),
        }
        return finish_view(view, sort, direction, page)
