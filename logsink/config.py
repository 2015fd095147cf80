# -*- coding: utf-8 -*-
"""
    logsink.config
    ~~~~~~~~~~~~~~

    Package configuration.

    Process-wide settings read from the environment. Per-adapter settings are passed as JSON to `Sink.init`.
"""

from pathlib import Path

from pydantic import Field, SecretStr, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from logsink.models.enums import Level, LogFormat

DIR_ROOT = Path(__file__).parent.parent


class Config(BaseSettings):

    #############
    ## LOGGING ##
    #############

    LOGSINK_LOG_LEVEL: str = "WARNING"
    LOGSINK_LOG_FORMAT: LogFormat = LogFormat.plain
    LOGSINK_CONSOLE_LEVEL: Level = Level.DEBUG

    ###################
    ## ELASTICSEARCH ##
    ###################

    ES_USER: str | None = None
    ES_PASSWORD: SecretStr | None = Field(None, validate_default=True)
    ES_API_KEY: SecretStr | None = None
    ES_CA_CERTS: Path = Path("/etc/ssl/certs/es/ca.crt")
    ES_REQUEST_TIMEOUT: float = 10.0

    # Default index naming: <prefix><date>, e.g. 2026.10.19
    ES_INDEX_PREFIX: str = ""
    ES_INDEX_DATE_FORMAT: str = "%Y.%m.%d"

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=(
            DIR_ROOT / "config.env",
            DIR_ROOT / "config.local.env",
        ),
        env_parse_none_str="None",
        extra="ignore",
        validate_assignment=True,
    )

    @field_validator("LOGSINK_LOG_LEVEL")
    @classmethod
    def upper_str(cls, v: str) -> str:
        return v.upper()

    @field_validator("ES_PASSWORD")
    @classmethod
    def check_basic_auth(cls, password: SecretStr | None, info: ValidationInfo) -> SecretStr | None:
        if info.data.get("ES_USER") and password is None:
            raise ValueError("ES_PASSWORD is required when ES_USER is set")
        return password


# noinspection PyArgumentList
CONFIG = Config()
