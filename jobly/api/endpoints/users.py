"""
User endpoints.

- POST /users/: open self-registration (never creates admins)
- POST /users/admin: admin creates a user, optionally an admin
- GET /users/: admin lists everyone
- GET, PATCH, DELETE /users/{username}: that user or an admin
- POST /users/{username}/jobs/{job_id}: apply to a job, as that user or an admin
"""

import logging
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import ensure_admin, ensure_correct_user_or_admin
from jobly.core.security import create_token
from jobly.crud import user as user_crud
from jobly.schemas.user import (
    ApplicationResponse,
    UserAdminCreateRequest,
    UserCreateRequest,
    UserCreateResponse,
    UserDetailResponse,
    UserResponse,
    UserUpdateRequest,
)

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger(__name__)


@router.post("/", status_code=201, response_model=UserCreateResponse)
def register_user(
    request: UserCreateRequest,
    db: Session = Depends(get_db)
):
    """
    Register a new (non-admin) user and return a token for them.

    Authorization required: none
    """
    user = user_crud.register(db, request, is_admin=False)
    logger.info(f"New user registered: {user['username']}")
    return UserCreateResponse(user=user, access_token=create_token(user))


@router.post("/admin", status_code=201, response_model=UserCreateResponse, dependencies=[Depends(ensure_admin)])
def create_user(
    request: UserAdminCreateRequest,
    db: Session = Depends(get_db)
):
    """
    Create a user, who may be an admin.

    Authorization required: admin
    """
    user = user_crud.register(db, request, is_admin=request.is_admin)
    logger.info(f"Admin created user {user['username']} (admin: {user['isAdmin']})")
    return UserCreateResponse(user=user, access_token=create_token(user))


@router.get("/", response_model=List[UserResponse], dependencies=[Depends(ensure_admin)])
def list_users(db: Session = Depends(get_db)):
    """
    List all users.

    Authorization required: admin
    """
    return user_crud.find_all(db)


@router.get("/{username}", response_model=UserDetailResponse, dependencies=[Depends(ensure_correct_user_or_admin)])
def get_user(username: str, db: Session = Depends(get_db)):
    """
    Retrieve a user and the ids of jobs they applied to.

    Authorization required: that user or admin
    """
    return user_crud.get(db, username)


@router.patch("/{username}", response_model=UserResponse, dependencies=[Depends(ensure_correct_user_or_admin)])
def update_user(
    username: str,
    request: UserUpdateRequest,
    db: Session = Depends(get_db)
):
    """
    Partially update a user: firstName, lastName, email, password.

    Authorization required: that user or admin
    """
    user = user_crud.update(db, username, request.changes())
    logger.info(f"Updated user {username}")
    return user


@router.delete("/{username}", dependencies=[Depends(ensure_correct_user_or_admin)])
def delete_user(username: str, db: Session = Depends(get_db)):
    """
    Delete a user and their applications.

    Authorization required: that user or admin
    """
    user_crud.remove(db, username)
    logger.info(f"Deleted user {username}")
    return {"deleted": username}


@router.post("/{username}/jobs/{job_id}", response_model=ApplicationResponse, dependencies=[Depends(ensure_correct_user_or_admin)])
def apply_to_job(username: str, job_id: int, db: Session = Depends(get_db)):
    """
    Apply to a job. Applying again to the same job changes nothing.

    Authorization required: that user or admin
    """
    result = user_crud.apply_to_job(db, username, job_id)
    logger.info(f"User {username} applied to job {job_id}")
    return result
