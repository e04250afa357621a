"""
Configuration settings for the Ignite World service.

Uses Pydantic Settings to load environment variables for the cluster
connection, logging, and the HTTP server.
"""
from __future__ import annotations

from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Cluster connection
    ignite_addresses: str = Field("127.0.0.1:10800", alias="IGNITE_ADDRESSES")
    ignite_timeout: int = Field(10, alias="IGNITE_TIMEOUT")
    ignite_identity: Optional[str] = Field(None, alias="IGNITE_IDENTITY")
    ignite_secret: Optional[str] = Field(None, alias="IGNITE_SECRET")
    ignite_schema: str = Field("PUBLIC", alias="IGNITE_SCHEMA")
    ignite_page_size: int = Field(1024, alias="IGNITE_PAGE_SIZE")
    ignite_connect_attempts: int = Field(3, alias="IGNITE_CONNECT_ATTEMPTS")

    # TLS
    ignite_use_ssl: bool = Field(False, alias="IGNITE_USE_SSL")
    ignite_ssl_keyfile: Optional[str] = Field(None, alias="IGNITE_SSL_KEYFILE")
    ignite_ssl_certfile: Optional[str] = Field(None, alias="IGNITE_SSL_CERTFILE")
    ignite_ssl_ca_certfile: Optional[str] = Field(None, alias="IGNITE_SSL_CA_CERTFILE")

    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")
    startup_diagnostics: bool = Field(True, alias="STARTUP_DIAGNOSTICS")

    # HTTP
    http_host: str = Field("0.0.0.0", alias="HTTP_HOST")
    http_port: int = Field(8080, alias="HTTP_PORT")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def address_list(self) -> List[str]:
        """Cluster node addresses, one ``host:port`` per entry."""
        return [part.strip() for part in self.ignite_addresses.split(",") if part.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
