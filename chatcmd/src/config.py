"""
Command dispatcher configuration management.

Loads configuration from chatcmd_config.yml in the working directory (or
the file named by CHATCMD_CONFIG) with environment variable overrides.
Uses Pydantic for validation and type safety.
"""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, field_validator

CONFIG_FILE_NAME = "chatcmd_config.yml"


def default_config_path() -> Path:
    """Config file used when no path is given, resolved at call time."""
    env_path = os.environ.get("CHATCMD_CONFIG")
    if env_path:
        return Path(env_path)
    return Path.cwd() / CONFIG_FILE_NAME


class ChatCommandConfig(BaseModel):
    """Chat command settings."""
    command_prefix: str = Field(default="-", description="Character that marks a chat line as a command")
    add_default_handler: bool = Field(default=True, description="Register the unknown-command responder at startup")
    register_builtin_commands: bool = Field(default=True, description="Register help, clear, remind and ! fan-out")
    label_separator: str = Field(default=", ", description="Separator used when listing command labels")
    message_duration: float = Field(default=10.0, description="Seconds system replies stay visible")

    @field_validator("command_prefix")
    @classmethod
    def _single_character_prefix(cls, value: str) -> str:
        if len(value) != 1:
            raise ValueError("command_prefix must be exactly one character")
        return value

    @field_validator("message_duration")
    @classmethod
    def _positive_duration(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("message_duration must be positive")
        return value


class DebugConfig(BaseModel):
    """Debug and development settings."""
    log_level: str = Field(default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR)")


class DispatcherConfig(BaseModel):
    """Complete dispatcher configuration."""
    chat: ChatCommandConfig = Field(default_factory=ChatCommandConfig)
    debug: DebugConfig = Field(default_factory=DebugConfig)

    @classmethod
    def from_yaml(cls, path: Optional[Path] = None) -> "DispatcherConfig":
        """Load configuration from YAML file."""
        path = path or default_config_path()

        if not path.exists():
            # Write the defaults so there is something to edit next time
            config = cls(**cls._apply_env_overrides({}))
            cls()._save_default(path)
            return config

        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}

        data = cls._apply_env_overrides(data)

        return cls(**data)

    @staticmethod
    def _apply_env_overrides(data: dict) -> dict:
        """Apply environment variable overrides to config data."""
        env_mappings = {
            "COMMAND_PREFIX": ("chat", "command_prefix"),
            "ADD_DEFAULT_HANDLER": ("chat", "add_default_handler"),
            "REGISTER_BUILTIN_COMMANDS": ("chat", "register_builtin_commands"),
            "LOG_LEVEL": ("debug", "log_level"),
        }

        for env_var, (section, key) in env_mappings.items():
            value = os.environ.get(env_var)
            if value is not None:
                if section not in data:
                    data[section] = {}

                if key in ("add_default_handler", "register_builtin_commands"):
                    data[section][key] = value.lower() in ("true", "1", "yes")
                else:
                    data[section][key] = value

        return data

    def _save_default(self, path: Path) -> None:
        """Save default configuration to file."""
        data = self.model_dump()
        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)


def get_config() -> DispatcherConfig:
    """Get the singleton configuration instance."""
    if not hasattr(get_config, "_instance"):
        get_config._instance = DispatcherConfig.from_yaml()
    return get_config._instance


def reload_config(path: Optional[Path] = None) -> DispatcherConfig:
    """Reload configuration from file."""
    get_config._instance = DispatcherConfig.from_yaml(path)
    return get_config._instance
