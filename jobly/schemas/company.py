from pydantic import AfterValidator, AnyHttpUrl, Field, TypeAdapter, ValidationError, model_validator
from typing import Annotated, List, Optional

from jobly.schemas.base import CamelModel, CamelRequest, reject_nulls

_url_adapter = TypeAdapter(AnyHttpUrl)


def _check_url(v: Optional[str]) -> Optional[str]:
    # Validate only; keep the caller's exact spelling
    if v is not None:
        try:
            _url_adapter.validate_python(v)
        except ValidationError:
            raise ValueError("logoUrl must be an http(s) URL")
    return v


LogoUrl = Annotated[Optional[str], AfterValidator(_check_url)]


class CompanyCreateRequest(CamelRequest):
    """Schema for creating a new company"""
    handle: str = Field(..., min_length=1, max_length=25)
    name: str = Field(..., min_length=1)
    description: str
    num_employees: Optional[int] = Field(None, ge=0)
    logo_url: LogoUrl = None


class CompanyUpdateRequest(CamelRequest):
    """Schema for a partial company update; the handle cannot change"""
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    num_employees: Optional[int] = Field(None, ge=0)
    logo_url: LogoUrl = None

    @model_validator(mode="after")
    def required_columns_not_null(self):
        reject_nulls(self, ("name", "description"))
        return self


class CompanyFilter(CamelModel):
    """Optional filters for listing companies"""
    name: Optional[str] = None
    min_employees: Optional[int] = Field(None, ge=0)
    max_employees: Optional[int] = Field(None, ge=0)


class CompanyResponse(CamelModel):
    handle: str
    name: str
    description: str
    num_employees: Optional[int] = None
    logo_url: Optional[str] = None


class CompanyJob(CamelModel):
    """A job as listed under its company (the handle is implied)"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[str] = None


class CompanyDetailResponse(CompanyResponse):
    jobs: List[CompanyJob] = []
