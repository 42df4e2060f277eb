"""
CRUD operations for users and their job applications.

Records are dicts with username, firstName, lastName, email and isAdmin.
Password hashes never leave this module.
"""

from typing import List
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobly.core.errors import AlreadyExistsError, NotFoundError, UnauthenticatedError
from jobly.core.security import get_password_hash, verify_password
from jobly.core.sql import bind_params, sql_for_partial_update
from jobly.models.application import APPLIED
from jobly.schemas.user import UserCreateRequest

USER_COLUMNS = (
    "username, "
    'first_name AS "firstName", '
    'last_name AS "lastName", '
    "email, "
    'is_admin AS "isAdmin"'
)

JS_TO_SQL = {
    "firstName": "first_name",
    "lastName": "last_name",
}


def _public(row) -> dict:
    user = dict(row)
    user["isAdmin"] = bool(user["isAdmin"])
    return user


def authenticate(db: Session, username: str, password: str) -> dict:
    """
    Check a username/password pair.

    Returns:
        The user record

    Raises:
        UnauthenticatedError: If the user is missing or the password is wrong
    """
    row = db.execute(
        text(f"SELECT {USER_COLUMNS}, password FROM users WHERE username = :username"),
        {"username": username},
    ).mappings().first()

    if row and verify_password(password, row["password"]):
        user = _public(row)
        del user["password"]
        return user

    raise UnauthenticatedError("Invalid username/password")


def register(db: Session, user_data: UserCreateRequest, is_admin: bool = False) -> dict:
    """
    Create a user with a hashed password.

    Args:
        db: Database session
        user_data: Validated registration data
        is_admin: Admin flag for the new user; only admins may pass True

    Raises:
        AlreadyExistsError: If the username is taken
    """
    username = user_data.username

    duplicate_check = db.execute(
        text("SELECT username FROM users WHERE username = :username"),
        {"username": username},
    ).first()
    if duplicate_check:
        raise AlreadyExistsError(f"Duplicate username: {username}")

    try:
        user = db.execute(
            text(f"""INSERT INTO users
                     (username, password, first_name, last_name, email, is_admin)
                     VALUES (:username, :password, :first_name, :last_name, :email, :is_admin)
                     RETURNING {USER_COLUMNS}"""),
            {
                "username": username,
                "password": get_password_hash(user_data.password),
                "first_name": user_data.first_name,
                "last_name": user_data.last_name,
                "email": user_data.email,
                "is_admin": is_admin,
            },
        ).mappings().one()
        db.commit()
    except IntegrityError:
        db.rollback()
        raise AlreadyExistsError(f"Duplicate username: {username}")

    return _public(user)


def find_all(db: Session) -> List[dict]:
    """All users ordered by username."""
    rows = db.execute(
        text(f"SELECT {USER_COLUMNS} FROM users ORDER BY username")
    ).mappings().all()
    return [_public(row) for row in rows]


def get(db: Session, username: str) -> dict:
    """
    Retrieve a user and the ids of the jobs they applied to.

    Raises:
        NotFoundError: If no user has this username
    """
    user = db.execute(
        text(f"SELECT {USER_COLUMNS} FROM users WHERE username = :username"),
        {"username": username},
    ).mappings().first()

    if not user:
        raise NotFoundError(f"No user: {username}")

    job_ids = db.execute(
        text("""SELECT job_id
                FROM applications
                WHERE username = :username
                ORDER BY job_id"""),
        {"username": username},
    ).scalars().all()

    return {**_public(user), "jobs": list(job_ids)}


def update(db: Session, username: str, data: dict) -> dict:
    """
    Partially update a user (firstName, lastName, email, password).

    A new password is hashed before it reaches the query.

    Raises:
        InvalidInputError: If data is empty (before any query)
        NotFoundError: If no user has this username
    """
    changes = dict(data)
    if changes.get("password") is not None:
        changes["password"] = get_password_hash(changes["password"])

    set_clause = sql_for_partial_update(changes, JS_TO_SQL)

    query = f"""UPDATE users
                SET {set_clause.sql}
                WHERE username = {set_clause.next_placeholder}
                RETURNING {USER_COLUMNS}"""
    user = db.execute(
        text(query), bind_params([*set_clause.values, username])
    ).mappings().first()

    if not user:
        raise NotFoundError(f"No user: {username}")

    db.commit()
    return _public(user)


def remove(db: Session, username: str) -> None:
    """
    Delete a user; their applications go with them.

    Raises:
        NotFoundError: If no user has this username
    """
    deleted = db.execute(
        text("DELETE FROM users WHERE username = :username RETURNING username"),
        {"username": username},
    ).first()

    if not deleted:
        raise NotFoundError(f"No user: {username}")

    db.commit()


def _job_exists(db: Session, job_id: int) -> bool:
    return db.execute(
        text("SELECT id FROM jobs WHERE id = :job_id"), {"job_id": job_id}
    ).first() is not None


def _user_exists(db: Session, username: str) -> bool:
    return db.execute(
        text("SELECT username FROM users WHERE username = :username"),
        {"username": username},
    ).first() is not None


def apply_to_job(db: Session, username: str, job_id: int) -> dict:
    """
    Record that a user applied to a job.

    Applying twice is a no-op.

    Returns:
        {"applied": job_id}

    Raises:
        NotFoundError: If the user or the job does not exist
    """
    if not _job_exists(db, job_id):
        raise NotFoundError(f"No job: {job_id}")
    if not _user_exists(db, username):
        raise NotFoundError(f"No user: {username}")

    try:
        db.execute(
            text("""INSERT INTO applications (username, job_id, state)
                    VALUES (:username, :job_id, :state)
                    ON CONFLICT (username, job_id) DO NOTHING"""),
            {"username": username, "job_id": job_id, "state": APPLIED},
        )
        db.commit()
    except IntegrityError:
        # The job or the user was deleted after the checks above
        db.rollback()
        if not _job_exists(db, job_id):
            raise NotFoundError(f"No job: {job_id}")
        raise NotFoundError(f"No user: {username}")

    return {"applied": job_id}
