"""Parts request status report schemas"""

from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class PartsRequestRecord(BaseModel):
    """One parts requisition as returned by PartReqStatus/GetPartReqStatusByKey"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    callNbr: str = Field(validation_alias=AliasChoices("callNbr", "callnbr", "callNumber"))
    custNmbr: Optional[str] = Field(None, validation_alias=AliasChoices("custNmbr", "custnumbr", "customerNumber"))
    custName: Optional[str] = Field(None, validation_alias=AliasChoices("custName", "custname", "customerName"))
    city: Optional[str] = None
    state: Optional[str] = None
    status: Optional[str] = None
    reqDate: Optional[str] = None
    urgent: Optional[str] = None
    technician: Optional[str] = None
    shipDate: Optional[str] = Field(None, validation_alias=AliasChoices("shipDate", "ship_Date"))
    age: Optional[int] = None

    @field_validator("callNbr")
    @classmethod
    def strip_call_nbr(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Call number is required")
        return v

    @field_validator("age", mode="before")
    @classmethod
    def parse_age(cls, v):
        if v is None or v == "":
            return None
        try:
            return int(float(v))
        except (TypeError, ValueError):
            return None

    @field_validator("reqDate", "shipDate", mode="before")
    @classmethod
    def stringify_date(cls, v):
        if v is None or isinstance(v, str):
            return v
        return str(v)


class PartsRequestFilter(BaseModel):
    """Report filter; key 0 and 'All' mean no constraint"""

    key: int = Field(0, ge=0, le=8, description="Requisition status group")
    invUserID: str = "All"
    offName: str = "All"
    # Client-side only
    urgent: Optional[str] = None
    state: Optional[str] = None
    keyword: Optional[str] = None

    def upstream_params(self) -> dict:
        return {"key": self.key, "invUserID": self.invUserID, "offName": self.offName}
