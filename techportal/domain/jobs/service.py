"""Job list service - wires the job screen into the list pipeline"""

import logging
from typing import Any, Optional

from fastapi import HTTPException

from ... import cache as snapshot_cache
from ... import config
from ...datasource import FetchResult, HttpDataSource
from ...listview import Column, FieldMatch, FilterField, ListPage, ListView, SortDirection, field_accessor
from ...listview.presentation import (
    EQUIPMENT_STATUS,
    JOB_STATUS_CLASSES,
    PRIORITY_COLORS,
    QUOTE_STATUS_COLORS,
    format_date,
)
from ...shared.views import finish_view
from .schemas import JobListRequest, JobRecord

logger = logging.getLogger(__name__)

JOBS_PATH = "/Jobs/GetJobs"
SEARCH_PATH = "/Jobs/GetSearchedJob"

CALL_NBR_LENGTH = 10

COLUMNS = [
    Column("callNbr", label="Job #"),
    Column("custName", label="Customer"),
    Column("status", label="Status"),
    Column("techName", label="Technician"),
    Column("accMgr", label="Acct Mgr"),
    Column("address", label="Address"),
    Column("svcDescr", label="Service"),
    Column("strDate", label="Start Date"),
    Column("strtTime", label="Start Time"),
    Column("returnJob", label="Return Job"),
    Column("description", label="Description"),
]

FILTER_FIELDS = {
    "status": FilterField(field_accessor("status"), FieldMatch.CODE),
    "techId": FilterField(field_accessor("techId"), FieldMatch.CODE),
    "accMgr": FilterField(field_accessor("accMgr"), FieldMatch.TEXT),
    "custName": FilterField(field_accessor("custName"), FieldMatch.TEXT),
}

KEYWORD_COLUMNS = ("callNbr", "custName", "techName", "address", "description")


def add_prefix_to_call_nbr(job_id: Optional[str]) -> str:
    """Left-pad a job id with zeros to the 10-character call number"""
    trimmed = (job_id or "").strip()
    if not trimmed:
        return ""
    if len(trimmed) >= CALL_NBR_LENGTH:
        return trimmed[:CALL_NBR_LENGTH]
    return trimmed.rjust(CALL_NBR_LENGTH, "0")


def render_job(job: JobRecord) -> dict[str, Any]:
    row = job.model_dump(mode="json")
    icon = EQUIPMENT_STATUS.lookup(job.equipStatus)
    row.update(
        {
            "statusClass": JOB_STATUS_CLASSES.lookup(job.status),
            "statusColor": QUOTE_STATUS_COLORS.color(job.status),
            "equipStatusColor": icon.color,
            "equipStatusTooltip": icon.tooltip,
            "priorityColor": PRIORITY_COLORS.color(job.priority),
            "startDate": format_date(job.strDate),
            "returnJobDisplay": format_date(job.returnJob),
        }
    )
    return row


class JobListService:
    """Service layer for the job list screen"""

    def __init__(self, source: HttpDataSource, cache=None, page_size: int = config.JOBS_PAGE_SIZE):
        self.source = source
        self.cache = cache
        self.page_size = page_size

    async def _fetch_jobs(self, criteria: dict) -> FetchResult:
        return await self.source.fetch(JOBS_PATH, criteria)

    async def _fetch_search(self, criteria: dict) -> FetchResult:
        return await self.source.fetch(SEARCH_PATH, criteria)

    def new_view(self, criteria: Optional[dict] = None, searching: bool = False) -> ListView[JobRecord]:
        """Fresh view for one screen visit; search results are never cached"""
        return ListView(
            name="jobs",
            loader=self._fetch_search if searching else self._fetch_jobs,
            model=JobRecord,
            columns=COLUMNS,
            page_size=self.page_size,
            cache=None if searching else self.cache,
            cache_key=snapshot_cache.build_snapshot_key(snapshot_cache.JOB_LIST, criteria),
            filter_fields=FILTER_FIELDS,
            keyword_columns=KEYWORD_COLUMNS,
            renderer=render_job,
            action="searching" if searching else "loading",
        )

    async def list_jobs(
        self,
        request: JobListRequest,
        sort: Optional[str] = None,
        direction: SortDirection = SortDirection.ASC,
        page: int = 1,
    ) -> ListPage:
        """Load the job list for the filter form, then refine, sort and page it"""
        params = request.upstream_params()
        view = self.new_view(params)
        await view.load(params)
        view.refine({"status": request.status}, keyword=request.keyword)
        return finish_view(view, sort, direction, page)

    async def search_jobs(
        self,
        job_id: Optional[str],
        tech_id: str = "All",
        emp_id: str = "",
        sort: Optional[str] = None,
        direction: SortDirection = SortDirection.ASC,
        page: int = 1,
    ) -> ListPage:
        """Look up jobs by call number"""
        call_nbr = add_prefix_to_call_nbr(job_id)
        if not call_nbr:
            raise HTTPException(status_code=400, detail="Please enter a Job ID to search")

        logger.info(f"🔎 Searching jobs for call number {call_nbr}")
        view = self.new_view(searching=True)
        await view.load({"jobId": call_nbr, "techId": tech_id or "All", "empId": emp_id or ""})
        return finish_view(view, sort, direction, page)

