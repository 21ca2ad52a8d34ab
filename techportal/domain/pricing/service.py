"""Cap/fan pricing service"""

from typing import Any, Optional

from ... import cache as snapshot_cache
from ... import config
from ...datasource import FetchResult, HttpDataSource
from ...listview import Column, ListPage, ListView, SortDirection
from ...listview.presentation import format_date
from ...shared.views import finish_view
from .schemas import CapFanPriceFilter, CapFanPriceRecord

CAP_FAN_PRICING_PATH = "/Pricing/GetCapPrice"

# Rows without their own colour render black
DEFAULT_ROW_COLOR = "black"

COLUMNS = [
    Column("make", label="Make"),
    Column("model", label="Model"),
    Column("modelName", label="Model Name"),
    Column("kva", label="KVA"),
    Column("inOutVolt", label="In/Out Volt"),
    Column("sngParallel", label="Single/Parallel"),
    Column("quoteHours", label="Quote Hours"),
    Column("pricing", label="Pricing"),
    Column("freight", label="Freight"),
    Column("assemblyPartNo", label="Assembly Part #"),
    Column("modifiedOn", label="Modified On"),
]

KEYWORD_COLUMNS = ("make", "model", "modelName", "serialNo", "assemblyPartNo", "notes")


def render_price(record: CapFanPriceRecord) -> dict[str, Any]:
    row = record.model_dump(mode="json")
    row["rowColor"] = (record.rowColor or "").strip() or DEFAULT_ROW_COLOR
    row["modifiedOnDisplay"] = format_date(record.modifiedOn)
    return row


class CapFanPricingService:
    """Service layer for the cap/fan pricing list"""

    def __init__(self, source: HttpDataSource, cache=None, page_size: int = config.PRICING_PAGE_SIZE):
        self.source = source
        self.cache = cache
        self.page_size = page_size

    async def _fetch(self, criteria: dict) -> FetchResult:
        return await self.source.fetch(CAP_FAN_PRICING_PATH, criteria)

    def new_view(self, criteria: Optional[dict] = None) -> ListView[CapFanPriceRecord]:
        return ListView(
            name="cap/fan pricing",
            loader=self._fetch,
            model=CapFanPriceRecord,
            columns=COLUMNS,
            page_size=self.page_size,
            cache=self.cache,
            cache_key=snapshot_cache.build_snapshot_key(snapshot_cache.CAP_FAN_PRICING, criteria),
            keyword_columns=KEYWORD_COLUMNS,
            renderer=render_price,
        )

    async def list_prices(
        self,
        price_filter: CapFanPriceFilter,
        sort: Optional[str] = None,
        direction: SortDirection = SortDirection.ASC,
        page: int = 1,
    ) -> ListPage:
        params = price_filter.upstream_params()
        view = self.new_view(params)
        await view.load(params)
        # Form criteria are applied by the server; only the keyword is local
        view.refine({}, keyword=price_filter.keyword)
        return finish_view(view, sort, direction, page)
