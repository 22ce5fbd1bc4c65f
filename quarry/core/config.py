"""Configuration loading with Pydantic validation and env var substitution."""

import os
import re
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field

MEMORY_DATABASE = ":memory:"


class JournalConfig(BaseModel):
    """Prompt journal settings."""
    filename: str = "prompt_history.jsonl"
    # fsync after every record (records are always flushed)
    fsync: bool = True


class DatabaseConfig(BaseModel):
    """Primary DuckDB database."""
    path: str = "quarry.duckdb"  # relative to data_dir, or :memory:
    read_only: bool = False
    # Seconds a statement may run before it is interrupted; null disables
    query_timeout: Optional[float] = Field(default=5.0, gt=0)

    # Passed straight to duckdb.connect(config=...)
    settings: dict[str, Any] = Field(default_factory=dict)


class AttachConfig(BaseModel):
    """An additional database attached during session bootstrap."""
    name: str
    path: str
    read_only: bool = True


class Config(BaseModel):
    """Root configuration model."""
    model_config = {"extra": "ignore"}

    data_dir: Path = Path("data")
    journal: JournalConfig = Field(default_factory=JournalConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    attach: list[AttachConfig] = Field(default_factory=list)
    use: Optional[str] = None  # catalog or catalog.schema selected after attach
    init_script: Path = Path("initialization.sql")

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Config":
        """
        Load config from YAML file with env var substitution.

        Args:
            path: Path to the config YAML file

        Returns:
            Validated Config object
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            raw_content = f.read()

        # Substitute environment variables: ${VAR_NAME}
        substituted = _substitute_env_vars(raw_content)

        data = yaml.safe_load(substituted) or {}
        return cls.model_validate(data)

    @property
    def journal_path(self) -> Path:
        """Location of the prompt journal."""
        return self.data_dir / self.journal.filename

    @property
    def database_path(self) -> str:
        """DuckDB database argument, resolved against data_dir."""
        if self.database.path == MEMORY_DATABASE:
            return MEMORY_DATABASE
        path = Path(self.database.path)
        if not path.is_absolute():
            path = self.data_dir / path
        return str(path)


def _substitute_env_vars(content: str) -> str:
    """Replace ${VAR_NAME} with environment variable values."""
    pattern = re.compile(r'\$\{([^}]+)\}')

    def replacer(match: re.Match) -> str:
        var_name = match.group(1)
        value = os.environ.get(var_name)
        if value is None:
            raise ValueError(f"Environment variable not set: {var_name}")
        return value

    return pattern.sub(replacer, content)
