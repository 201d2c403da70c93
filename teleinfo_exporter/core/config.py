from __future__ import annotations
# BaseSettings moved to the pydantic-settings package in Pydantic v2
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

PARITIES = ("N", "E", "O", "M", "S")
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")
# Aliases accepted by logging but not by uvicorn
LOG_LEVEL_ALIASES = {"WARN": "WARNING", "FATAL": "CRITICAL"}

LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]


class Settings(BaseSettings):
    """Exporter configuration loaded from environment variables."""

    serial_device: str = Field("/dev/ttyAMA0", alias="TELEINFO_SERIAL_DEVICE")
    baud_rate: int = Field(1200, alias="TELEINFO_BAUD_RATE", gt=0)
    byte_size: int = Field(7, alias="TELEINFO_BYTE_SIZE", ge=5, le=8)
    parity: str = Field("E", alias="TELEINFO_PARITY")
    # pyserial applies the timeout to a whole read_until() call, and a frame
    # takes a couple of seconds to arrive at 1200 baud
    read_timeout: float = Field(5.0, alias="TELEINFO_READ_TIMEOUT", gt=0)

    metrics_namespace: str = Field("teleinfo", alias="TELEINFO_METRICS_NAMESPACE")
    listen_host: str = Field("0.0.0.0", alias="TELEINFO_LISTEN_HOST")
    listen_port: int = Field(9105, alias="TELEINFO_LISTEN_PORT", gt=0, lt=65536)
    log_level: LogLevel = Field("INFO", alias="TELEINFO_LOG_LEVEL")

    model_config = {
        "env_prefix": "",
        "case_sensitive": False,
        "extra": "ignore",
        "populate_by_name": True,
    }

    @field_validator("parity", mode="before")
    @classmethod
    def _normalize_parity(cls, value: str) -> str:
        parity = str(value).strip().upper()[:1]
        if parity not in PARITIES:
            raise ValueError(f"parity must be one of {', '.join(PARITIES)}")
        return parity

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = str(value).strip().upper()
        return LOG_LEVEL_ALIASES.get(level, level)


_settings_instance = None


def get_settings() -> Settings:
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
