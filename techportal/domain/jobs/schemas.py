"""Job list schemas - Pydantic models for validation"""

from datetime import date
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from ...listview import is_sentinel


class JobRecord(BaseModel):
    """One row of the job list as returned by Jobs/GetJobs"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    callNbr: str = Field(validation_alias=AliasChoices("callNbr", "CallNbr", "jobID", "jobId"))
    description: Optional[str] = None
    custName: Optional[str] = Field(None, validation_alias=AliasChoices("custName", "CustName"))
    status: Optional[str] = Field(None, validation_alias=AliasChoices("status", "Status"))
    techName: Optional[str] = Field(None, validation_alias=AliasChoices("techName", "TechName"))
    techId: Optional[str] = Field(None, validation_alias=AliasChoices("techId", "techID", "TechID"))
    address: Optional[str] = None
    accMgr: Optional[str] = Field(None, validation_alias=AliasChoices("accMgr", "AccMgr"))
    archive: Optional[str] = None
    svcDescr: Optional[str] = None
    strDate: Optional[str] = Field(None, validation_alias=AliasChoices("strDate", "StrDate", "strtDate"))
    strtTime: Optional[str] = None
    returnJob: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    jobType: Optional[str] = None
    contNbr: Optional[str] = None
    custNmbr: Optional[str] = None
    priority: Optional[str] = None
    equipStatus: Optional[str] = None

    @field_validator("callNbr")
    @classmethod
    def strip_call_nbr(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Call number is required")
        return v

    @field_validator("strDate", "strtTime", "returnJob", mode="before")
    @classmethod
    def stringify(cls, v):
        if v is None or isinstance(v, str):
            return v
        return str(v)


class JobListRequest(BaseModel):
    """Filter form of the job list; 'All' means no constraint"""

    empId: str = "All"
    techId: str = "All"
    mgrId: str = "All"
    rbButton: int = 0
    currentYear: int = Field(default_factory=lambda: date.today().year)
    month: Optional[int] = Field(None, ge=0, le=12)
    # Client-side only
    status: Optional[str] = None
    keyword: Optional[str] = None

    def upstream_params(self, today: Optional[date] = None) -> dict:
        return {
            "empId": self.empId,
            "techId": self.techId,
            "mgrId": self.mgrId,
            "rbButton": self.rbButton,
            "currentYear": self.currentYear,
            "month": effective_month(self.month, self.techId, self.mgrId, today),
        }


def effective_month(
    month: Optional[int], tech_id: str, mgr_id: str, today: Optional[date] = None
) -> int:
    """
    Month sent upstream; 0 means the whole year.

    An unset month covers the whole year once a technician or manager is
    picked, otherwise the current month.
    """
    if month is not None:
        return month
    if not is_sentinel(tech_id) or not is_sentinel(mgr_id):
        return 0
    return (today or date.today()).month
