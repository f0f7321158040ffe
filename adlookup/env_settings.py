from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class EnvSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    # AD connection
    dc_host: str = Field("", alias="ADLOOKUP_DC_HOST")
    domain: str = Field("", alias="ADLOOKUP_DOMAIN")
    port: int = Field(636, alias="ADLOOKUP_PORT")
    use_ssl: bool = Field(True, alias="ADLOOKUP_USE_SSL")
    starttls: bool = Field(False, alias="ADLOOKUP_STARTTLS")
    tls_validate: bool = Field(False, alias="ADLOOKUP_TLS_VALIDATE")
    ca_pem: str = Field("", alias="ADLOOKUP_CA_PEM")
    connect_timeout: float = Field(5.0, alias="ADLOOKUP_CONNECT_TIMEOUT")

    # Query
    page_size: int = Field(200, alias="ADLOOKUP_PAGE_SIZE")
    default_root: str = Field("", alias="ADLOOKUP_DEFAULT_ROOT")

    # Event log
    event_db: bool = Field(False, alias="ADLOOKUP_EVENT_DB")
    sqlite_path: str = Field("data/adlookup.db", alias="SQLITE_PATH")

    # Logging
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_retention_days: int = Field(30, alias="LOG_RETENTION_DAYS")
    log_max_size_mb: int = Field(50, alias="LOG_MAX_SIZE_MB")


@lru_cache(maxsize=1)
def get_env() -> EnvSettings:
    return EnvSettings()
