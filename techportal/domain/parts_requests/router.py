"""Parts request status router"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ...cache import get_cache
from ...datasource import HttpDataSource
from ...listview import ListPage
from ...shared.views import parse_direction
from .schemas import PartsRequestFilter
from .service import PartsRequestService

router = APIRouter(prefix="/reports/parts-requests", tags=["Reports"])


def get_parts_request_service() -> PartsRequestService:
    """Dependency injection for PartsRequestService"""
    return PartsRequestService(HttpDataSource(), get_cache())


@router.get("", response_model=ListPage)
async def get_parts_request_report(
    key: int = Query(0, ge=0, le=8, description="Status group, 0 for all"),
    invUserID: str = Query("All"),
    offName: str = Query("All", description="Account manager"),
    urgent: Optional[str] = Query(None),
    state: Optional[str] = Query(None),
    keyword: Optional[str] = Query(None),
    sort: Optional[str] = Query(None),
    direction: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    service: PartsRequestService = Depends(get_parts_request_service),
):
    """Get one page of the parts request status report with status counts"""
    report_filter = PartsRequestFilter(
        key=key, invUserID=invUserID, offName=offName, urgent=urgent, state=state, keyword=keyword
    )
    return await service.get_report(
        report_filter, sort=sort, direction=parse_direction(direction), page=page
    )
