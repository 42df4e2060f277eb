"""
CRUD operations for jobs.

Records are dicts with id, title, salary, equity and companyHandle. Equity is
read back as text so decimal fractions keep their exact digits.
"""

from typing import List, Optional
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobly.core.database import dialect_name
from jobly.core.errors import InvalidInputError, NotFoundError
from jobly.core.sql import FilterQuery, bind_params, sql_for_partial_update
from jobly.schemas.job import JobCreateRequest, JobFilter

JOB_COLUMNS = (
    "id, title, salary, "
    "CAST(equity AS TEXT) AS equity, "
    'company_handle AS "companyHandle"'
)


def create(db: Session, job_data: JobCreateRequest) -> dict:
    """
    Create a new job.

    The company is not looked up first; the foreign key decides.

    Raises:
        InvalidInputError: If company_handle does not name an existing company
    """
    try:
        job = db.execute(
            text(f"""INSERT INTO jobs (title, salary, equity, company_handle)
                     VALUES (:title, :salary, :equity, :company_handle)
                     RETURNING {JOB_COLUMNS}"""),
            job_data.model_dump(),
        ).mappings().one()
        db.commit()
    except IntegrityError:
        db.rollback()
        raise InvalidInputError(f"No company: {job_data.company_handle}")

    return dict(job)


def find_all(db: Session, filters: Optional[JobFilter] = None) -> List[dict]:
    """
    List jobs ordered by id, optionally filtered.

    Filters:
        title: case-insensitive partial match
        min_salary: salary >= min_salary
        has_equity: when True, only jobs with equity > 0; otherwise no restriction
    """
    filters = filters or JobFilter()

    query_filter = (
        FilterQuery()
        .contains("title", filters.title)
        .at_least("salary", filters.min_salary)
    )
    if filters.has_equity is True:
        query_filter.greater_than("equity", 0, numeric=True)

    where = query_filter.render(dialect_name(db))

    query = f"""SELECT {JOB_COLUMNS}
                FROM jobs
                {where.sql}
                ORDER BY id"""
    rows = db.execute(text(query), bind_params(where.values)).mappings().all()
    return [dict(row) for row in rows]


def get(db: Session, job_id: int) -> dict:
    """
    Retrieve a job by its ID.

    Raises:
        NotFoundError: If no job has this id
    """
    job = db.execute(
        text(f"SELECT {JOB_COLUMNS} FROM jobs WHERE id = :id"),
        {"id": job_id},
    ).mappings().first()

    if not job:
        raise NotFoundError(f"No job: {job_id}")

    return dict(job)


def update(db: Session, job_id: int, data: dict) -> dict:
    """
    Partially update a job (title, salary, equity).

    Raises:
        InvalidInputError: If data is empty (before any query)
        NotFoundError: If no job has this id
    """
    # Public names match the column names
    set_clause = sql_for_partial_update(data, {})

    query = f"""UPDATE jobs
                SET {set_clause.sql}
                WHERE id = {set_clause.next_placeholder}
                RETURNING {JOB_COLUMNS}"""
    job = db.execute(
        text(query), bind_params([*set_clause.values, job_id])
    ).mappings().first()

    if not job:
        raise NotFoundError(f"No job: {job_id}")

    db.commit()
    return dict(job)


def remove(db: Session, job_id: int) -> None:
    """
    Delete a job by ID.

    Raises:
        NotFoundError: If no job has this id
    """
    deleted = db.execute(
        text("DELETE FROM jobs WHERE id = :id RETURNING id"),
        {"id": job_id},
    ).first()

    if not deleted:
        raise NotFoundError(f"No job: {job_id}")

    db.commit()
