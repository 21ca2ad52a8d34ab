"""Job list router - FastAPI endpoints for the job list screen"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ...cache import get_cache
from ...datasource import HttpDataSource
from ...listview import ListPage
from ...shared.views import parse_direction
from .schemas import JobListRequest
from .service import JobListService

router = APIRouter(prefix="/jobs", tags=["Jobs"])


def get_job_list_service() -> JobListService:
    """Dependency injection for JobListService"""
    return JobListService(HttpDataSource(), get_cache())


@router.get("", response_model=ListPage)
async def list_jobs(
    empId: str = Query("All"),
    techId: str = Query("All"),
    mgrId: str = Query("All"),
    rbButton: int = Query(0),
    currentYear: Optional[int] = Query(None),
    month: Optional[int] = Query(None, ge=0, le=12),
    status: Optional[str] = Query(None, description="Client-side status filter"),
    keyword: Optional[str] = Query(None, description="Free-text search over the loaded list"),
    sort: Optional[str] = Query(None, description="Column to sort by"),
    direction: Optional[str] = Query(None, description="asc or desc"),
    page: int = Query(1, ge=1),
    service: JobListService = Depends(get_job_list_service),
):
    """Get one page of the job list for the filter form"""
    fields = {
        "empId": empId,
        "techId": techId,
        "mgrId": mgrId,
        "rbButton": rbButton,
        "month": month,
        "status": status,
        "keyword": keyword,
    }
    if currentYear is not None:
        fields["currentYear"] = currentYear
    request = JobListRequest(**fields)
    return await service.list_jobs(
        request, sort=sort, direction=parse_direction(direction), page=page
    )


@router.get("/search", response_model=ListPage)
async def search_jobs(
    jobId: Optional[str] = Query(None, description="Job / call number, zero-padded to 10 characters"),
    techId: str = Query("All"),
    empId: str = Query(""),
    sort: Optional[str] = Query(None),
    direction: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    service: JobListService = Depends(get_job_list_service),
):
    """Search jobs by call number; results are not kept as the offline snapshot"""
    return await service.search_jobs(
        jobId, tech_id=techId, emp_id=empId, sort=sort, direction=parse_direction(direction), page=page
    )
