from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DB_PATH = "./gokv.db"
# the listen port is not configurable
PORT = 8080

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="BUCKETKV_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    db_path: str = Field(default=DEFAULT_DB_PATH, description="Path to the SQLite database file")
    host: str = Field(default="0.0.0.0")
    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=False, description="Render log lines as JSON")

@lru_cache
def get_settings() -> Settings:
    return Settings()
