import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import ensure_admin
from jobly.crud import job as job_crud
from jobly.schemas.job import JobCreateRequest, JobFilter, JobResponse, JobUpdateRequest

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)


@router.post("/", status_code=201, response_model=JobResponse, dependencies=[Depends(ensure_admin)])
def create_job(
    request: JobCreateRequest,
    db: Session = Depends(get_db)
):
    """
    Create a job posting for an existing company.

    Authorization required: admin
    """
    job = job_crud.create(db, request)
    logger.info(f"Created job {job['id']}: {job['title']} ({job['companyHandle']})")
    return job


@router.get("/", response_model=List[JobResponse])
def list_jobs(
    title: Optional[str] = None,
    min_salary: Optional[int] = Query(None, alias="minSalary", ge=0),
    has_equity: Optional[bool] = Query(None, alias="hasEquity"),
    db: Session = Depends(get_db)
):
    """
    List jobs ordered by id.

    Args:
        title: Case-insensitive partial match on the title
        minSalary: Salary of at least this much
        hasEquity: When true, only jobs offering non-zero equity

    Authorization required: none
    """
    filters = JobFilter(title=title, min_salary=min_salary, has_equity=has_equity)
    return job_crud.find_all(db, filters)


@router.get("/{job_id}", response_model=JobResponse)
def get_job(job_id: int, db: Session = Depends(get_db)):
    """
    Retrieve a job by ID.

    Authorization required: none
    """
    return job_crud.get(db, job_id)


@router.patch("/{job_id}", response_model=JobResponse, dependencies=[Depends(ensure_admin)])
def update_job(
    job_id: int,
    request: JobUpdateRequest,
    db: Session = Depends(get_db)
):
    """
    Partially update a job: title, salary, equity.

    Authorization required: admin
    """
    job = job_crud.update(db, job_id, request.changes())
    logger.info(f"Updated job {job_id}")
    return job


@router.delete("/{job_id}", dependencies=[Depends(ensure_admin)])
def delete_job(job_id: int, db: Session = Depends(get_db)):
    """
    Delete a job by ID.

    Authorization required: admin
    """
    job_crud.remove(db, job_id)
    logger.info(f"Deleted job {job_id}")
    return {"deleted": job_id}
