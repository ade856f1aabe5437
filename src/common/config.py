"""Project configuration and paths.

Loads settings from config/settings.yaml and environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

# === Paths ===
PROJECT_ROOT = Path(__file__).parent.parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"
ASSETS_DIR = PROJECT_ROOT / "assets"
DATA_DIR = ASSETS_DIR / "data"

# Load .env from project root
load_dotenv(PROJECT_ROOT / ".env")


class ContentSettings(BaseModel):
    """Where the content document and its schema metadata live."""
    content_url: str = "assets/data/site-content.json"
    content_path: str = str(DATA_DIR / "site-content.json")
    schema_path: str = str(DATA_DIR / "site-content.schema.json")
    schema_title: str = "HuTech Studio Site Content"


class SiteSettings(BaseModel):
    """Booking link defaults applied before content is loaded."""
    booking_url: str = "mailto:as@hutech.ventures"
    primary_label: str = "Email us"
    secondary_label: str = "View case study"
    helper_text: str = "Email us only: as@hutech.ventures"
    utm_defaults: dict[str, str] = Field(
        default_factory=lambda: {
            "utm_source": "incubation_studio_site",
            "utm_medium": "website",
            "utm_campaign": "studio_launch",
        }
    )


class AnalyticsSettings(BaseModel):
    """Analytics delivery settings."""
    dev_hosts: list[str] = Field(default_factory=lambda: ["localhost", "127.0.0.1"])


class TrackingSettings(BaseModel):
    """Viewport thresholds (intersection ratios) and sticky CTA offsets."""
    case_card_threshold: float = 0.55
    case_section_threshold: float = 0.35
    reveal_threshold: float = 0.15
    sticky_min_offset: int = 280
    sticky_viewport_ratio: float = 0.6


class LoggingSettings(BaseModel):
    """Log level name for the module loggers."""
    level: str = "INFO"


class Settings(BaseModel):
    """Top-level application settings."""
    content: ContentSettings = Field(default_factory=ContentSettings)
    site: SiteSettings = Field(default_factory=SiteSettings)
    analytics: AnalyticsSettings = Field(default_factory=AnalyticsSettings)
    tracking: TrackingSettings = Field(default_factory=TrackingSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def load(cls) -> Settings:
        """Load settings from config/settings.yaml, falling back to defaults."""
        settings_path = CONFIG_DIR / "settings.yaml"
        data: dict = {}
        if settings_path.exists():
            with open(settings_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        loaded = cls(**data)
        loaded._apply_env_overrides()
        return loaded

    def _apply_env_overrides(self) -> None:
        """Environment variables win over the YAML file."""
        if url := os.getenv("SITE_CONTENT_URL"):
            self.content.content_url = url
        if url := os.getenv("SITE_BOOKING_URL"):
            self.site.booking_url = url
        if hosts := os.getenv("ANALYTICS_DEV_HOSTS"):
            self.analytics.dev_hosts = [h.strip() for h in hosts.split(",") if h.strip()]
        if level := os.getenv("LOG_LEVEL"):
            self.logging.level = level


# Singleton settings instance
settings = Settings.load()
