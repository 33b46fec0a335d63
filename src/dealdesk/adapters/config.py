# src/dealdesk/adapters/config.py
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    # App & logging
    ENV: str = Field(default="dev")
    LOG_LEVEL: str = Field(default="INFO")

    # -----------------------------
    # Input persistence
    # -----------------------------
    STORAGE_BACKEND: Literal["json", "sql", "memory"] = Field(default="json")
    STORAGE_PATH: str = Field(default="dealdesk_inputs.json")
    DB_URI: str = Field(default="sqlite:///dealdesk.db")

    # the one key the current inputs live under
    STORAGE_KEY: str = Field(default="realEstateCalculatorData")

    # -----------------------------
    # Report export
    # -----------------------------
    EXPORT_DIR: str = Field(default="reports")
    REPORT_FILENAME: str = Field(default="Real_Estate_Deal_Analysis.html")
    SUCCESS_CLEAR_SECONDS: float = Field(default=3.0)

    model_config = SettingsConfigDict(
        env_prefix="DEALDESK_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("STORAGE_BACKEND", mode="before")
    @classmethod
    def _lower_backend(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("SUCCESS_CLEAR_SECONDS", mode="before")
    @classmethod
    def _positive_seconds(cls, v: Any) -> Any:
        f = float(v)
        if f <= 0:
            raise ValueError("SUCCESS_CLEAR_SECONDS must be > 0")
        return f

    @field_validator("STORAGE_KEY", "REPORT_FILENAME")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


config = AppConfig()
