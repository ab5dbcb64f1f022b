from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./reading_notes.db"
    DATABASE_POOL_MAX_SIZE: int = 10
    DATABASE_POOL_MIN_IDLE: int = 2
    DATABASE_POOL_TIMEOUT_SECONDS: int = 30

    # Server
    SERVER_HOST: str = "127.0.0.1"
    SERVER_PORT: int = 8080

    # Pagination
    DEFAULT_PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 100
    POPULAR_TAGS_DEFAULT_LIMIT: int = 10
    POPULAR_TAGS_MAX_LIMIT: int = 50

    # Comma separated
    ALLOWED_ORIGINS: str = "http://localhost:3000,http://localhost:5173"
    ALLOWED_HOSTS: str = "*"

    class Config:
        env_file = [".env"]
        case_sensitive = True

    @property
    def allowed_origins(self) -> List[str]:
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]

    @property
    def allowed_hosts(self) -> List[str]:
        return [host.strip() for host in self.ALLOWED_HOSTS.split(",") if host.strip()]


settings = Settings()
