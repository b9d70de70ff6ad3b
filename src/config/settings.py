# src/config/settings.py
from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from engine.settings import EngineSettings
from monitor.settings import MonitorSettings


LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class SystemConfig(BaseModel):
    name: str = "Alert Evaluation Engine"
    version: str = "1.0.0"
    log_level: LogLevel = "INFO"


class SentimentAnalyzerSettings(BaseModel):
    """Settings for the keyword sentiment analyzer."""

    keyword_weight: float = Field(default=0.2, gt=0.0, le=1.0)
    positive_keywords: Optional[list[str]] = None
    negative_keywords: Optional[list[str]] = None


class AnalyzersSettings(BaseModel):
    """Settings for all analyzers."""

    sentiment: SentimentAnalyzerSettings = Field(default_factory=SentimentAnalyzerSettings)


class AlertsEnvConfig(BaseSettings):
    """Environment overrides, e.g. ALERTS_TIMEZONE=Europe/Moscow."""

    model_config = SettingsConfigDict(env_prefix="ALERTS_")

    timezone: Optional[str] = None
    log_level: Optional[LogLevel] = None


class Settings(BaseModel):
    system: SystemConfig = Field(default_factory=SystemConfig)
    engine: EngineSettings = Field(default_factory=EngineSettings)
    monitor: MonitorSettings = Field(default_factory=MonitorSettings)
    analyzers: AnalyzersSettings = Field(default_factory=AnalyzersSettings)

    @classmethod
    def from_yaml(cls, path: Path) -> "Settings":
        """Load settings from YAML file with env var overrides."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data).with_env_overrides()

    def with_env_overrides(self, env: AlertsEnvConfig | None = None) -> "Settings":
        """Return a copy with ALERTS_* environment variables applied."""
        env = env or AlertsEnvConfig()
        settings = self

        if env.timezone:
            engine = EngineSettings.model_validate(
                {**settings.engine.model_dump(), "timezone": env.timezone}
            )
            settings = settings.model_copy(update={"engine": engine})

        if env.log_level:
            system = settings.system.model_copy(update={"log_level": env.log_level})
            settings = settings.model_copy(update={"system": system})

        return settings
