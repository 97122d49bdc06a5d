"""Runtime settings loaded from environment variables."""

from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

NonEmptyStr = Annotated[str, Field(min_length=1)]
PortInt = Annotated[int, Field(gt=0, le=65_535)]
PositiveFloat = Annotated[float, Field(gt=0.0)]
ServiceScheme = Literal["http", "https"]


class Settings(BaseSettings):
    """Environment-driven manage-service settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    auth_protocol: ServiceScheme = Field(default="http", validation_alias="AUTH_PROTOCOL")
    auth_host: NonEmptyStr = Field(default="localhost", validation_alias="AUTH_HOST")
    auth_port: PortInt = Field(default=9004, validation_alias="AUTH_PORT")
    datastore_writer_protocol: ServiceScheme = Field(
        default="http",
        validation_alias="DATASTORE_WRITER_PROTOCOL",
    )
    datastore_writer_host: NonEmptyStr = Field(
        default="localhost",
        validation_alias="DATASTORE_WRITER_HOST",
    )
    datastore_writer_port: PortInt = Field(
        default=9011,
        validation_alias="DATASTORE_WRITER_PORT",
    )
    manage_host: NonEmptyStr = Field(default="0.0.0.0", validation_alias="MANAGE_HOST")
    manage_port: PortInt = Field(default=9008, validation_alias="MANAGE_PORT")
    manage_address: NonEmptyStr = Field(
        default="localhost:9008",
        validation_alias="MANAGE_ADDRESS",
    )
    manage_timeout_seconds: PositiveFloat = Field(
        default=5.0,
        validation_alias="MANAGE_TIMEOUT_SECONDS",
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    @property
    def auth_url(self) -> str:
        """Base URL of the authentication service."""

        return f"{self.auth_protocol}://{self.auth_host}:{self.auth_port}"

    @property
    def datastore_writer_url(self) -> str:
        """Base URL of the datastore writer service."""

        return (
            f"{self.datastore_writer_protocol}://"
            f"{self.datastore_writer_host}:{self.datastore_writer_port}"
        )


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Load and cache application settings."""

    return Settings()
