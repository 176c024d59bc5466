from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

load_dotenv()


class Settings(BaseSettings):
    host: str = "127.0.0.1"
    port: int = 4000
    frontend_origin: str = "http://localhost:5173"
    log_level: str = "INFO"

    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.5-flash"
    gemini_temperature: float = 0.0
    gemini_max_output_tokens: int = 1200

    # DATABASE_URL wins; otherwise the libpq-style PG* variables are used
    database_url: Optional[str] = None
    pghost: str = "localhost"
    pgport: int = 5432
    pguser: str = "postgres"
    pgpassword: str = "postgres"
    pgdatabase: str = "resume_db"
    db_pool_size: int = 5
    db_echo: bool = False
    db_create_schema: bool = True

    upload_dir: str = "uploads"
    max_upload_bytes: int = 8 * 1024 * 1024

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def sqlalchemy_url(self):
        if self.database_url:
            return self.database_url
        return URL.create(
            "postgresql+psycopg",
            username=self.pguser,
            password=self.pgpassword,
            host=self.pghost,
            port=self.pgport,
            database=self.pgdatabase,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
