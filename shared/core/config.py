import os
from typing import Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

# Always load .env from root
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
load_dotenv(os.path.join(BASE_DIR, ".env"))


class Settings(BaseSettings):
    # Full URL wins over the DB_* parts when set
    DATABASE_URL: Optional[str] = None

    DB_USER: str = "postgres"
    DB_PASS: str = "postgres"
    DB_HOST: str = "localhost"
    DB_PORT: str = "5432"
    DB_NAME: str = "asset_service"
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 5
    DB_CONNECT_RETRY_DELAY: int = 5

    FILE_BUCKET_NAME: str = "asset_app_files"
    MAX_UPLOAD_SIZE_MB: int = 5

    # Allow a new commissioning to replace an active, passed one
    COMMISSIONING_REPLACE_PASSED: bool = False

    LOG_LEVEL: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+psycopg2://{self.DB_USER}:{self.DB_PASS}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )


settings = Settings()
