import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jobly import __version__
from jobly.core.config import settings
from jobly.core.database import init_db
from jobly.core.logging_config import setup_logging
from jobly.api.errors import register_exception_handlers
from jobly.api.middleware import RequestIdMiddleware
from jobly.api.endpoints import auth, companies, health, jobs, users

setup_logging(log_level=settings.LOG_LEVEL, json_logs=settings.JSON_LOGS)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Register models on startup; nothing to release on shutdown.
    """
    logger.info(f"Starting {settings.PROJECT_NAME} {__version__}")
    init_db()

    yield

    logger.info(f"Stopping {settings.PROJECT_NAME}")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=__version__,
    description="Companies, jobs and the users who apply to them",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
# Added last so it wraps CORS and sees every response
app.add_middleware(RequestIdMiddleware)

register_exception_handlers(app)

app.include_router(health.router)
for router in (auth.router, companies.router, jobs.router, users.router):
    app.include_router(router, prefix=settings.API_V1_STR)


@app.get("/")
async def root():
    """Service name, version and where the API lives"""
    return {
        "name": settings.PROJECT_NAME,
        "version": __version__,
        "api": settings.API_V1_STR,
        "docs": app.docs_url,
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
