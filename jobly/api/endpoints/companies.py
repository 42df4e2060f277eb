import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import ensure_admin
from jobly.crud import company as company_crud
from jobly.schemas.company import (
    CompanyCreateRequest,
    CompanyDetailResponse,
    CompanyFilter,
    CompanyResponse,
    CompanyUpdateRequest,
)

router = APIRouter(prefix="/companies", tags=["Companies"])
logger = logging.getLogger(__name__)


@router.post("/", status_code=201, response_model=CompanyResponse, dependencies=[Depends(ensure_admin)])
def create_company(
    request: CompanyCreateRequest,
    db: Session = Depends(get_db)
):
    """
    Create a company.

    Authorization required: admin
    """
    company = company_crud.create(db, request)
    logger.info(f"Created company {company['handle']}")
    return company


@router.get("/", response_model=List[CompanyResponse])
def list_companies(
    name: Optional[str] = None,
    min_employees: Optional[int] = Query(None, alias="minEmployees", ge=0),
    max_employees: Optional[int] = Query(None, alias="maxEmployees", ge=0),
    db: Session = Depends(get_db)
):
    """
    List companies ordered by name.

    Args:
        name: Case-insensitive partial match on the company name
        minEmployees: At least this many employees
        maxEmployees: At most this many employees (must not be below minEmployees)

    Authorization required: none
    """
    filters = CompanyFilter(name=name, min_employees=min_employees, max_employees=max_employees)
    return company_crud.find_all(db, filters)


@router.get("/{handle}", response_model=CompanyDetailResponse)
def get_company(handle: str, db: Session = Depends(get_db)):
    """
    Retrieve a company and its jobs.

    Authorization required: none
    """
    return company_crud.get(db, handle)


@router.patch("/{handle}", response_model=CompanyResponse, dependencies=[Depends(ensure_admin)])
def update_company(
    handle: str,
    request: CompanyUpdateRequest,
    db: Session = Depends(get_db)
):
    """
    Partially update a company: name, description, numEmployees, logoUrl.

    Authorization required: admin
    """
    company = company_crud.update(db, handle, request.changes())
    logger.info(f"Updated company {handle}")
    return company


@router.delete("/{handle}", dependencies=[Depends(ensure_admin)])
def delete_company(handle: str, db: Session = Depends(get_db)):
    """
    Delete a company and its jobs.

    Authorization required: admin
    """
    company_crud.remove(db, handle)
    logger.info(f"Deleted company {handle}")
    return {"deleted": handle}
