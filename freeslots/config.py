"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path

import pendulum
import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .domain.models import WorkingHours
from .domain.report_formatter import SUPPORTED_LOCALES


class ScheduleConfig(BaseModel):
    """Working hours, horizon and slot size."""
    model_config = ConfigDict(frozen=True)

    start_hour: int = 9
    end_hour: int = 23
    horizon_days: int = 7
    slot_duration_minutes: int = 60

    @field_validator("start_hour", "end_hour")
    @classmethod
    def validate_hour(cls, v: int) -> int:
        """Validate hour is between 0 and 23."""
        if not 0 <= v <= 23:
            raise ValueError(f"Hour must be between 0 and 23, got {v}")
        return v

    @field_validator("horizon_days", "slot_duration_minutes")
    @classmethod
    def validate_positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("horizon_days and slot_duration_minutes must be greater than zero")
        return value

    @model_validator(mode="after")
    def validate_hours_order(self) -> "ScheduleConfig":
        """Ensure the configured window opens before it closes."""
        if self.end_hour <= self.start_hour:
            raise ValueError("end_hour must be later than start_hour")
        return self


class AppConfig(BaseModel):
    """Application configuration."""
    model_config = ConfigDict(frozen=True)

    calendar_url: str
    timezone: str = "Asia/Yekaterinburg"
    locale: str = "ru"
    owner_contact_url: str | None = None
    request_timeout_seconds: float = 10
    user_agent: str = "Mozilla/5.0"
    schedule: ScheduleConfig = Field(default_factory=ScheduleConfig)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Ensure the timezone identifier is known."""
        try:
            pendulum.timezone(value)
        except Exception as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value

    @field_validator("locale")
    @classmethod
    def validate_locale(cls, value: str) -> str:
        if value not in SUPPORTED_LOCALES:
            raise ValueError(f"locale must be one of {', '.join(SUPPORTED_LOCALES)}, got {value}")
        return value

    @field_validator("request_timeout_seconds")
    @classmethod
    def validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("request_timeout_seconds must be greater than zero")
        return value

    def working_hours(self) -> WorkingHours:
        """Build the domain working-hours value."""
        return WorkingHours(
            start_hour=self.schedule.start_hour,
            end_hour=self.schedule.end_hour,
            timezone=self.timezone
        )

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Build an AppConfig from a YAML document.

        A missing file raises FileNotFoundError; broken YAML, a non-mapping
        root and failed field validation all surface as ValueError.
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Copy config.example.yaml to config.yaml and set calendar_url."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        return cls(**data)


def get_default_config_path() -> Path:
    """config.yaml in the working directory, else next to the freeslots package."""
    local = Path.cwd() / "config.yaml"
    if local.exists():
        return local
    return Path(__file__).resolve().parent.parent / "config.yaml"
