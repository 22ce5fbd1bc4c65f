"""Core configuration."""

from quarry.core.config import AttachConfig, Config, DatabaseConfig, JournalConfig

__all__ = ["AttachConfig", "Config", "DatabaseConfig", "JournalConfig"]
