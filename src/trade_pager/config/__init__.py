"""Configuration for the trade pager."""

from .settings import FetchConfig, LoggingConfig, PagerSettings, load_settings

__all__ = ["FetchConfig", "LoggingConfig", "PagerSettings", "load_settings"]
