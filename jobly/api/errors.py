"""
HTTP translation of the error taxonomy.

ERROR_STATUS_CODES is the only place a failure kind is tied to a status
code. Anything that is not a JoblyError is left alone and becomes a 500.
"""

import logging
from typing import Dict, Type

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from jobly.core.errors import (
    AlreadyExistsError,
    ForbiddenError,
    InvalidInputError,
    JoblyError,
    NotFoundError,
    UnauthenticatedError,
)

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES: Dict[Type[JoblyError], int] = {
    InvalidInputError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    AlreadyExistsError: status.HTTP_400_BAD_REQUEST,
    UnauthenticatedError: status.HTTP_401_UNAUTHORIZED,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
}


def status_code_for(exc: JoblyError) -> int:
    """Status for ``exc``, honouring subclasses of the mapped kinds."""
    for cls in type(exc).__mro__:
        if cls in ERROR_STATUS_CODES:
            return ERROR_STATUS_CODES[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def jobly_error_handler(request: Request, exc: JoblyError) -> JSONResponse:
    status_code = status_code_for(exc)
    logger.info(f"{request.method} {request.url.path} -> {status_code}: {exc.message}")

    headers = None
    if status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}

    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message},
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(JoblyError, jobly_error_handler)
