"""Cap/fan pricing list schemas"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator


class CapFanPriceRecord(BaseModel):
    """One capacitor/fan pricing entry as returned by Pricing/GetCapPrice"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    rowIndex: Optional[int] = None
    make: Optional[str] = None
    model: Optional[str] = None
    modelName: Optional[str] = None
    kva: Optional[str] = None
    serialNo: Optional[str] = None
    inOutVolt: Optional[str] = None
    sngParallel: Optional[str] = None
    quoteHours: float = 0
    notes: Optional[str] = None
    pricing: Optional[str] = None
    freight: Optional[str] = None
    modifiedOn: Optional[str] = None
    rowColor: Optional[str] = None
    assemblyPartNo: Optional[str] = None

    @field_validator("kva", "pricing", "freight", "modifiedOn", mode="before")
    @classmethod
    def stringify(cls, v):
        if v is None or isinstance(v, str):
            return v
        return str(v)

    @field_validator("quoteHours", mode="before")
    @classmethod
    def default_hours(cls, v):
        return 0 if v is None or v == "" else v


class CapFanPriceFilter(BaseModel):
    """Pricing filter form; blank fields place no constraint"""

    make: str = ""
    model: str = ""
    kva: str = ""
    partName: str = ""
    dcgPartNo: str = ""
    oemPartNo: str = ""
    capfanpart: str = ""
    status: str = ""
    # Client-side only
    keyword: Optional[str] = None

    def upstream_params(self) -> dict:
        return self.model_dump(exclude={"keyword"})
