"""Cap/fan pricing router"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ...cache import get_cache
from ...datasource import HttpDataSource
from ...listview import ListPage
from ...shared.views import parse_direction
from .schemas import CapFanPriceFilter
from .service import CapFanPricingService

router = APIRouter(prefix="/pricing", tags=["Pricing"])


def get_pricing_service() -> CapFanPricingService:
    """Dependency injection for CapFanPricingService"""
    return CapFanPricingService(HttpDataSource(), get_cache())


@router.get("/cap-fan", response_model=ListPage)
async def list_cap_fan_prices(
    make: str = Query(""),
    model: str = Query(""),
    kva: str = Query(""),
    partName: str = Query(""),
    dcgPartNo: str = Query(""),
    oemPartNo: str = Query(""),
    capfanpart: str = Query(""),
    status: str = Query(""),
    keyword: Optional[str] = Query(None),
    sort: Optional[str] = Query(None),
    direction: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    service: CapFanPricingService = Depends(get_pricing_service),
):
    """Get one page of the cap/fan pricing list"""
    price_filter = CapFanPriceFilter(
        make=make,
        model=model,
        kva=kva,
        partName=partName,
        dcgPartNo=dcgPartNo,
        oemPartNo=oemPartNo,
        capfanpart=capfanpart,
        status=status,
        keyword=keyword,
    )
    return await service.list_prices(
        price_filter, sort=sort, direction=parse_direction(direction), page=page
    )
