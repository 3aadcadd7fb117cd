from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    port: int = Field(default=5000, validation_alias="PORT")
    yts_api_url: str = Field(default="https://yts.lt/api/v2", validation_alias="YTS_API_URL")
    imdb_api_url: str = Field(default="https://api.imdbapi.dev", validation_alias="IMDB_API_URL")
    subsource_api_url: str = Field(
        default="https://api.subsource.net/api/v1", validation_alias="SUBSOURCE_API_URL"
    )
    subsource_api_key: str = Field(default="", validation_alias="SUBSOURCE_API_KEY")
    upstream_timeout: float = Field(default=10.0, validation_alias="UPSTREAM_TIMEOUT")

    # "2000 and below" listing: how many upstream pages to merge, at which page size
    year_range_max_pages: int = Field(default=20, validation_alias="YEAR_RANGE_MAX_PAGES")
    year_range_fetch_limit: int = Field(default=50, validation_alias="YEAR_RANGE_FETCH_LIMIT")
    year_range_max_year: int = Field(default=2000, validation_alias="YEAR_RANGE_MAX_YEAR")

    log_dev_mode: bool = Field(default=True, validation_alias="LOG_DEV_MODE")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    cors_origins: List[str] = Field(default=["*"], validation_alias="CORS_ORIGINS")

    class Config:
        env_file = ".env"
        extra = "allow"
