"""
Application Configuration

This module provides type-safe configuration loading using Pydantic settings.
Environment variables are loaded from .env file and validated.

Dashboard defaults can also come from config/default.yaml. Priority, highest
first: explicit keyword arguments, environment, .env file, YAML, class defaults.

Usage:
    from toeic_study.config import settings

    # Access settings
    goal = settings.DEFAULT_DAILY_GOAL
    limit = settings.RECENT_ACTIVITY_LIMIT
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "default.yaml"

# Settings field -> (section, key) in default.yaml
YAML_KEYS: dict[str, tuple[str, str]] = {
    "APP_NAME": ("app", "name"),
    "LOG_LEVEL": ("app", "log_level"),
    "DEFAULT_DAILY_GOAL": ("dashboard", "daily_goal"),
    "RECENT_ACTIVITY_LIMIT": ("dashboard", "recent_activity_limit"),
    "QUIZ_GOOD_RATIO": ("dashboard", "quiz_good_ratio"),
    "STREAK_MILESTONES": ("dashboard", "streak_milestones"),
}


@lru_cache()
def load_yaml_config(path: Path = CONFIG_PATH) -> dict[str, Any]:
    """Load application configuration from config/default.yaml."""
    if not path.exists():
        return {}

    with open(path) as f:
        return yaml.safe_load(f) or {}


yaml_config: dict[str, Any] = load_yaml_config()


class YamlDefaultsSource(PydanticBaseSettingsSource):
    """
    Settings source backed by the YAML config.

    Only the keys listed in YAML_KEYS are read; anything else in the
    file is ignored.
    """

    def __init__(self, settings_cls: type[BaseSettings], config: dict[str, Any]):
        super().__init__(settings_cls)
        self.config = config

    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        location = YAML_KEYS.get(field_name)
        if location is None:
            return None, field_name, False
        section, key = location
        section_values = self.config.get(section) or {}
        return section_values.get(key), field_name, False

    def __call__(self) -> dict[str, Any]:
        values: dict[str, Any] = {}
        for field_name, field in self.settings_cls.model_fields.items():
            value, key, _ = self.get_field_value(field, field_name)
            if value is not None:
                values[key] = value
        return values


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Application
    APP_NAME: str = "TOEIC Study"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # CORS - the dashboard frontend runs on its own origin in development
    CORS_ORIGINS: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])

    # Dashboard
    DEFAULT_DAILY_GOAL: int = Field(20, ge=1)  # Cards per day
    RECENT_ACTIVITY_LIMIT: int = Field(10, ge=1)
    QUIZ_GOOD_RATIO: float = Field(0.7, ge=0.0, le=1.0)
    STREAK_MILESTONES: list[int] = Field(
        default_factory=lambda: [3, 7, 14, 30, 60, 100, 365]
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlDefaultsSource(settings_cls, yaml_config),
            file_secret_settings,
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
