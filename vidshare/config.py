# config.py
import logging
from functools import lru_cache
from typing import Optional

from psycopg.conninfo import make_conninfo
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: Optional[str] = None
    sql_server: str = "localhost"
    sql_port: int = 5432
    sql_user: str = "postgres"
    sql_password: str = ""
    sql_db: str = "vidshare"
    sql_sslmode: str = "require"
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10

    azure_storage_connection: str = ""
    azure_blob_container_name: str = "videos"

    port: int = 3000
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    @property
    def conninfo(self) -> str:
        """Connection string for psycopg; DATABASE_URL wins over the SQL_* parts."""
        if self.database_url:
            return self.database_url
        return make_conninfo(
            host=self.sql_server,
            port=self.sql_port,
            user=self.sql_user,
            password=self.sql_password,
            dbname=self.sql_db,
            sslmode=self.sql_sslmode,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
