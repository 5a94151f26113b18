import json
from pathlib import Path
from typing import Annotated, List, Optional

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Hotel Booking Service'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production

    # Security
    SECRET_KEY: SecretStr = SecretStr('test_secret_key_change_in_production')
    ACCESS_TOKEN_EXPIRE_DAYS: int = 7
    ALGORITHM: str = 'HS256'

    # CORS
    # Comma separated or a JSON list, NoDecode hands the raw env string to the validator
    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = []

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str):
            if v.strip().startswith('['):
                return json.loads(v)
            return [i.strip() for i in v.split(',') if i.strip()]
        elif isinstance(v, list):
            return v
        return []

    # PostgreSQL
    POSTGRES_SERVER: str = 'localhost'
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = 'postgres'
    POSTGRES_PASSWORD: SecretStr = SecretStr('postgres')
    POSTGRES_DB: str = 'hotel_booking'

    # Optional read replica (falls back to primary when unset)
    POSTGRES_REPLICA_SERVER: Optional[str] = None
    POSTGRES_REPLICA_PORT: Optional[int] = None

    # Full URL override, e.g. sqlite+aiosqlite:///./local.db
    DATABASE_URL: Optional[str] = None

    # SQLAlchemy pool
    DB_POOL_SIZE_WRITE: int = 5
    DB_POOL_SIZE_READ: int = 10
    DB_POOL_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30  # seconds to wait for a connection
    DB_POOL_RECYCLE: int = 1800
    DB_POOL_PRE_PING: bool = True

    # OpenTelemetry
    OTEL_SERVICE_NAME: str = 'booking-service'

    def _build_postgres_url(self, *, server: str, port: int) -> str:
        password = self.POSTGRES_PASSWORD.get_secret_value()
        return (
            f'postgresql+asyncpg://{self.POSTGRES_USER}:{password}'
            f'@{server}:{port}/{self.POSTGRES_DB}'
        )

    @property
    def DATABASE_URL_ASYNC(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return self._build_postgres_url(server=self.POSTGRES_SERVER, port=self.POSTGRES_PORT)

    @property
    def DATABASE_READ_URL_ASYNC(self) -> str:
        if self.DATABASE_URL or not self.POSTGRES_REPLICA_SERVER:
            return self.DATABASE_URL_ASYNC
        return self._build_postgres_url(
            server=self.POSTGRES_REPLICA_SERVER,
            port=self.POSTGRES_REPLICA_PORT or self.POSTGRES_PORT,
        )


settings = Settings()  # type: ignore
