from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from jobly.core.config import settings

if settings.DATABASE_URL.startswith("sqlite"):
    # Local development only; tests build their own in-memory engine
    engine = create_engine(
        settings.DATABASE_URL,
        connect_args={"check_same_thread": False},
    )
else:
    engine = create_engine(
        settings.DATABASE_URL,
        pool_pre_ping=True,  # Verify connections before using them
        pool_size=10,  # Connection pool size
        max_overflow=20  # Allow up to 20 connections beyond pool_size
    )

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class for models
Base = declarative_base()


def get_db():
    """
    Dependency function to get database session.
    Used in FastAPI endpoints with Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def dialect_name(db) -> str:
    """Name of the SQL dialect the session is bound to ("postgresql", "sqlite", ...)."""
    return db.get_bind().dialect.name


def init_db():
    """
    Initialize database.

    Schema is owned by Alembic; this only makes sure every model is imported
    and registered on Base.metadata.

    Use "alembic upgrade head" to create/update database schema.
    """
    from jobly.models import company, job, user, application  # noqa: F401
