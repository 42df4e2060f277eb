from pydantic import Field, model_validator
from typing import Optional

from jobly.schemas.base import CamelModel, CamelRequest, reject_nulls

# Decimal string in [0, 1]: "0", "0.05", "1", "1.00"
EQUITY_PATTERN = r"^(0(\.\d+)?|1(\.0+)?)$"


class JobCreateRequest(CamelRequest):
    """Schema for creating a new job"""
    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[str] = Field(None, pattern=EQUITY_PATTERN)
    company_handle: str = Field(..., min_length=1, max_length=25)


class JobUpdateRequest(CamelRequest):
    """Schema for a partial job update; id and company cannot change"""
    title: Optional[str] = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[str] = Field(None, pattern=EQUITY_PATTERN)

    @model_validator(mode="after")
    def title_not_null(self):
        reject_nulls(self, ("title",))
        return self


class JobFilter(CamelModel):
    """
    Optional filters for listing jobs.

    has_equity only narrows the list when True; False behaves like absent.
    """
    title: Optional[str] = None
    min_salary: Optional[int] = Field(None, ge=0)
    has_equity: Optional[bool] = None


class JobResponse(CamelModel):
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[str] = None
    company_handle: str
