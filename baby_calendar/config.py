from datetime import timedelta
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # --- Source ---
    log_url: Optional[str] = None  # JSON array of {timestamp, activity} rows
    request_timeout_s: float = 10.0

    # --- Coalescing windows ---
    eat_coalesce_window_minutes: int = 60
    sleep_coalesce_window_hours: int = 24

    # --- Next sleep prediction ---
    awake_duration_hours: float = 2.5
    bedtime_hour: int = 22  # 10pm
    waketime_hour: int = 10  # 10am

    # --- Row handling ---
    skip_invalid_rows: bool = False  # skip rows with unparseable timestamps instead of failing
    strict_ordering: bool = False  # raise on rows that go back in time

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="BABY_CALENDAR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("bedtime_hour", "waketime_hour")
    @classmethod
    def validate_hour(cls, value: int) -> int:
        if not 0 <= value <= 23:
            raise ValueError("Hour of day must be between 0 and 23.")
        return value

    @field_validator(
        "eat_coalesce_window_minutes",
        "sleep_coalesce_window_hours",
        "awake_duration_hours",
        "request_timeout_s",
    )
    @classmethod
    def validate_positive(cls, value):
        if value <= 0:
            raise ValueError("Must be greater than zero.")
        return value

    @property
    def eat_window(self) -> timedelta:
        return timedelta(minutes=self.eat_coalesce_window_minutes)

    @property
    def sleep_window(self) -> timedelta:
        return timedelta(hours=self.sleep_coalesce_window_hours)

    @property
    def awake_duration(self) -> timedelta:
        return timedelta(hours=self.awake_duration_hours)
