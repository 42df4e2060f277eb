"""
CRUD operations for companies.

Every function takes the request's database session first and returns plain
dict records keyed by the public field names (handle, name, description,
numEmployees, logoUrl).
"""

from typing import List, Optional
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobly.core.database import dialect_name
from jobly.core.errors import AlreadyExistsError, NotFoundError
from jobly.core.sql import FilterQuery, bind_params, sql_for_partial_update
from jobly.schemas.company import CompanyCreateRequest, CompanyFilter

COMPANY_COLUMNS = (
    "handle, name, description, "
    'num_employees AS "numEmployees", logo_url AS "logoUrl"'
)

# Public field name -> column, for fields that differ
JS_TO_SQL = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}


def _handle_taken(db: Session, handle: str) -> bool:
    return db.execute(
        text("SELECT handle FROM companies WHERE handle = :handle"),
        {"handle": handle},
    ).first() is not None


def create(db: Session, company_data: CompanyCreateRequest) -> dict:
    """
    Create a new company.

    Args:
        db: Database session
        company_data: Validated company creation data

    Returns:
        The created company record

    Raises:
        AlreadyExistsError: If the handle (or name) is already taken
    """
    handle = company_data.handle

    if _handle_taken(db, handle):
        raise AlreadyExistsError(f"Duplicate company: {handle}")

    try:
        company = db.execute(
            text(f"""INSERT INTO companies
                     (handle, name, description, num_employees, logo_url)
                     VALUES (:handle, :name, :description, :num_employees, :logo_url)
                     RETURNING {COMPANY_COLUMNS}"""),
            company_data.model_dump(),
        ).mappings().one()
        db.commit()
    except IntegrityError:
        # Lost a race for the handle, or the name belongs to another company
        db.rollback()
        if _handle_taken(db, handle):
            raise AlreadyExistsError(f"Duplicate company: {handle}")
        raise AlreadyExistsError(f"Duplicate company name: {company_data.name}")

    return dict(company)


def find_all(db: Session, filters: Optional[CompanyFilter] = None) -> List[dict]:
    """
    List companies ordered by name, optionally filtered.

    Filters:
        name: case-insensitive partial match
        min_employees / max_employees: inclusive employee range

    Raises:
        InvalidInputError: If min_employees > max_employees (before any query)
    """
    filters = filters or CompanyFilter()

    where = (
        FilterQuery()
        .between(
            "num_employees",
            filters.min_employees,
            filters.max_employees,
            lower_name="minEmployees",
            upper_name="maxEmployees",
        )
        .contains("name", filters.name)
        .render(dialect_name(db))
    )

    query = f"""SELECT {COMPANY_COLUMNS}
                FROM companies
                {where.sql}
                ORDER BY name"""
    rows = db.execute(text(query), bind_params(where.values)).mappings().all()
    return [dict(row) for row in rows]


def get(db: Session, handle: str) -> dict:
    """
    Retrieve a company with its jobs.

    Returns:
        Company record plus "jobs": [{id, title, salary, equity}, ...] ordered
        by id, empty when the company has none. Equity is a string or None.

    Raises:
        NotFoundError: If no company has this handle
    """
    company = db.execute(
        text(f"""SELECT {COMPANY_COLUMNS}
                 FROM companies
                 WHERE handle = :handle"""),
        {"handle": handle},
    ).mappings().first()

    if not company:
        raise NotFoundError(f"No company: {handle}")

    jobs = db.execute(
        text("""SELECT id,
                       title,
                       salary,
                       CAST(equity AS TEXT) AS equity
                FROM jobs
                WHERE company_handle = :handle
                ORDER BY id"""),
        {"handle": handle},
    ).mappings().all()

    return {**company, "jobs": [dict(job) for job in jobs]}


def update(db: Session, handle: str, data: dict) -> dict:
    """
    Partially update a company.

    Args:
        db: Database session
        handle: Company to update
        data: Fields to change, keyed by public name
            (name, description, numEmployees, logoUrl)

    Returns:
        The updated company record

    Raises:
        InvalidInputError: If data is empty (before any query)
        NotFoundError: If no company has this handle
        AlreadyExistsError: If the new name belongs to another company
    """
    set_clause = sql_for_partial_update(data, JS_TO_SQL)

    query = f"""UPDATE companies
                SET {set_clause.sql}
                WHERE handle = {set_clause.next_placeholder}
                RETURNING {COMPANY_COLUMNS}"""
    try:
        company = db.execute(
            text(query), bind_params([*set_clause.values, handle])
        ).mappings().first()
    except IntegrityError:
        db.rollback()
        raise AlreadyExistsError(f"Duplicate company name: {data.get('name')}")

    if not company:
        raise NotFoundError(f"No company: {handle}")

    db.commit()
    return dict(company)


def remove(db: Session, handle: str) -> None:
    """
    Delete a company (its jobs go with it).

    Raises:
        NotFoundError: If no company has this handle
    """
    deleted = db.execute(
        text("DELETE FROM companies WHERE handle = :handle RETURNING handle"),
        {"handle": handle},
    ).first()

    if not deleted:
        raise NotFoundError(f"No company: {handle}")

    db.commit()
