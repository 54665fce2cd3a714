"""
Configuration management for pane_prompt.

Loads/saves TOML configuration for console toggles and logging.
"""

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from pane_prompt.dispatch import EnvironmentSource, LaunchOptions


class ConsoleConfig(BaseModel):
    """Console defaults."""

    open_floating: bool = Field(default=False, description="Open new panes floating")
    environment_source: EnvironmentSource = Field(
        default=EnvironmentSource.SESSION,
        description="Environment for `run` (session, shell, last-pane)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Log level (DEBUG, INFO, WARNING, ERROR)")
    log_dir: str = Field(default="~/.cache/pane_prompt", description="Directory for log files")


class Config(BaseModel):
    """Complete pane_prompt configuration."""

    console: ConsoleConfig = Field(default_factory=ConsoleConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def launch_options(self) -> LaunchOptions:
        """Initial console toggles."""
        return LaunchOptions(
            floating=self.console.open_floating,
            environment_source=self.console.environment_source,
        )


def get_config_path() -> Path:
    """Get default configuration file path."""
    config_home = os.getenv("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return Path(config_home) / "pane_prompt" / "config.toml"


def load_config(path: Optional[Path] = None) -> Config:
    """
    Load configuration from TOML file.

    Args:
        path: Configuration file path. If None, uses default location.

    Returns:
        Loaded configuration object.
    """
    if path is None:
        path = get_config_path()

    if not path.exists():
        return Config()

    import tomli

    with open(path, "rb") as f:
        data = tomli.load(f)

    return Config(**data)


def save_config(config: Config, path: Optional[Path] = None) -> None:
    """
    Save configuration to TOML file.

    Args:
        config: Configuration object to save.
        path: Configuration file path. If None, uses default location.
    """
    if path is None:
        path = get_config_path()

    path.parent.mkdir(parents=True, exist_ok=True)

    import tomli_w

    with open(path, "wb") as f:
        tomli_w.dump(config.model_dump(mode="json"), f)
