from pydantic_settings import BaseSettings
from typing import List, Optional, Union
from pydantic import field_validator
import json


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # API Settings
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Jobly API"

    # Database Settings
    POSTGRES_USER: str = "user"
    POSTGRES_PASSWORD: str = "password"
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: str = "5432"
    POSTGRES_DB: str = "jobly"

    # Full URL override (e.g. for a managed database)
    SQLALCHEMY_DATABASE_URI: Optional[str] = None

    @property
    def DATABASE_URL(self) -> str:
        if self.SQLALCHEMY_DATABASE_URI:
            return self.SQLALCHEMY_DATABASE_URI
        return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    # Auth Settings
    SECRET_KEY: str = "secret-dev"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # bcrypt cost; tests lower this to keep hashing fast
    BCRYPT_WORK_FACTOR: int = 12

    # Logging Settings
    LOG_LEVEL: str = "INFO"
    JSON_LOGS: bool = False

    # CORS Settings - can be set as JSON string in .env
    BACKEND_CORS_ORIGINS: Union[List[str], str] = ["http://localhost:3000", "http://localhost:8000"]

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: Union[List[str], str]) -> List[str]:
        """Parse CORS origins from JSON string or list"""
        if isinstance(v, str):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                # If not valid JSON, split by comma
                return [origin.strip() for origin in v.split(",")]
        return v

    @field_validator("BCRYPT_WORK_FACTOR")
    @classmethod
    def check_work_factor(cls, v: int) -> int:
        """bcrypt only accepts 4..31 rounds"""
        if not 4 <= v <= 31:
            raise ValueError("BCRYPT_WORK_FACTOR must be between 4 and 31")
        return v

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
