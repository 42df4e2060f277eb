"""
Authentication endpoints.

- POST /auth/token: exchange username/password for a JWT
- POST /auth/register: create a (non-admin) account and get a JWT
"""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.security import create_token
from jobly.crud import user as user_crud
from jobly.schemas.auth import TokenRequest, TokenResponse
from jobly.schemas.user import UserCreateRequest

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = logging.getLogger(__name__)


@router.post("/token", response_model=TokenResponse)
def login(
    request: TokenRequest,
    db: Session = Depends(get_db)
):
    """
    Authenticate a user and return an access token.

    Wrong username or password -> 401.
    """
    user = user_crud.authenticate(db, request.username, request.password)
    logger.info(f"User logged in: {user['username']}")
    return TokenResponse(access_token=create_token(user))


@router.post("/register", status_code=201, response_model=TokenResponse)
def register(
    request: UserCreateRequest,
    db: Session = Depends(get_db)
):
    """
    Register a new user account and return a token for immediate use.

    Duplicate username -> 400.
    """
    user = user_crud.register(db, request, is_admin=False)
    logger.info(f"New user registered: {user['username']}")
    return TokenResponse(access_token=create_token(user))
