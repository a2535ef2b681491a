"""
Configuration loading.

Settings come from four layers, later layers winning:
defaults < config file < environment variables < command-line flags.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigError, ConfigParseError
from .models import DEFAULT_RECORD_TYPES, Owner, Record, Records
from ..parsers.records import RecordsParser

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "~/.cf-records.json"
DEFAULT_RECORD_FILE = "records.json"
DEFAULT_RESTRICTED_FILE = "restricted.json"
DEFAULT_BASE_URL = "https://api.cloudflare.com/client/v4/"

# config file key -> Config attribute
FILE_KEYS = {
    "domain_name": "domain",
    "record_file": "record_file",
    "restricted_file": "restricted_file",
    "cf_token": "api_token",
    "zone_id": "zone_id",
    "record_type": "record_types",
    "provider": "provider",
    "base_url": "base_url",
    "logging": "logging",
}


@dataclass
class Config:
    """Settings for a single command invocation."""

    domain: str = ""
    record_file: str = DEFAULT_RECORD_FILE
    restricted_file: str = DEFAULT_RESTRICTED_FILE
    api_token: str = ""
    zone_id: str = ""
    record_types: List[str] = field(default_factory=lambda: list(DEFAULT_RECORD_TYPES))
    provider: str = "cloudflare"
    base_url: str = DEFAULT_BASE_URL
    logging: Dict = field(default_factory=dict)

    def require_domain(self) -> str:
        if not self.domain:
            raise ConfigError(
                "domain name is not set; use --domain, DOMAIN_NAME or domain_name in the config file"
            )
        return self.domain

    def to_file_dict(self) -> Dict:
        """Config in the on-disk format."""
        return {
            "cf_token": self.api_token,
            "zone_id": self.zone_id,
            "domain_name": self.domain,
            "record_file": self.record_file,
            "restricted_file": self.restricted_file,
            "record_type": list(self.record_types),
        }


def load_config_file(config_path: str) -> Dict:
    """Load a config file. JSON is the documented format; YAML is accepted too."""
    try:
        with open(config_path, "r") as f:
            text = f.read()
    except OSError as e:
        raise ConfigError(f"cannot read config file {config_path}: {e}") from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigParseError(f"fail to parse config file {config_path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigParseError(f"config file {config_path} must contain an object")

    logger.info(f"Configuration loaded from {config_path}")
    return data


class EnvSettings(BaseSettings):
    """Settings read from environment variables."""

    model_config = SettingsConfigDict(case_sensitive=True)

    config_file: Optional[str] = Field(default=None, alias="CONFIG_FILE")
    record_file: Optional[str] = Field(default=None, alias="RECORD_FILE")
    restricted_file: Optional[str] = Field(default=None, alias="RESTRICTED_FILE")
    domain: Optional[str] = Field(default=None, alias="DOMAIN_NAME")
    api_token: Optional[str] = Field(default=None, alias="CF_TOK")
    zone_id: Optional[str] = Field(default=None, alias="CF_ZID")

    def overrides(self) -> Dict:
        """Config attributes set in the environment."""
        return self.model_dump(exclude={"config_file"}, exclude_none=True)


def _apply_file_values(config: Config, data: Dict, config_path: str):
    for key, attr in FILE_KEYS.items():
        value = data.get(key)
        if value is None or value == "":
            continue
        if attr == "record_types":
            if not isinstance(value, list) or not all(isinstance(t, str) for t in value):
                raise ConfigParseError(f"{config_path}: 'record_type' must be a list of strings")
            if not value:
                continue
            value = [t.upper() for t in value]
        elif attr == "logging":
            if not isinstance(value, dict):
                raise ConfigParseError(f"{config_path}: 'logging' must be an object")
        elif not isinstance(value, str):
            raise ConfigParseError(f"{config_path}: '{key}' must be a string")
        setattr(config, attr, value)


def resolve_config_path(
    config_path: Optional[str] = None, settings: Optional[EnvSettings] = None
) -> Optional[str]:
    """Pick the config file: explicit path, then CONFIG_FILE, then the default if it exists."""
    settings = settings or EnvSettings()
    if config_path:
        return config_path
    if settings.config_file:
        return settings.config_file
    default_path = Path(DEFAULT_CONFIG_FILE).expanduser()
    if default_path.exists():
        return str(default_path)
    return None


def resolve_config(config_path: Optional[str] = None, overrides: Optional[Dict] = None) -> Config:
    """
    Build the effective configuration.

    Args:
        config_path: Explicit config file (the --config flag)
        overrides: Values from command-line flags keyed by Config attribute;
            None values are ignored

    Returns:
        The resolved Config
    """
    settings = EnvSettings()
    config = Config()

    path = resolve_config_path(config_path, settings)
    if path:
        if not Path(path).exists():
            raise ConfigError(f"Configuration file '{path}' not found")
        _apply_file_values(config, load_config_file(path), path)
    else:
        logger.debug("No config file found, using defaults")

    for attr, value in settings.overrides().items():
        setattr(config, attr, value)

    for attr, value in (overrides or {}).items():
        if value is None:
            continue
        if not hasattr(config, attr):
            raise ConfigError(f"unknown configuration option '{attr}'")
        setattr(config, attr, value)

    if not config.record_file:
        config.record_file = DEFAULT_RECORD_FILE
    if not config.restricted_file:
        config.restricted_file = DEFAULT_RESTRICTED_FILE
    if not config.record_types:
        config.record_types = list(DEFAULT_RECORD_TYPES)

    return config


def generate_config(config_path: str) -> Config:
    """
    Write a starter config file and, when missing, a sample records file.

    The records file is ./records.json when it exists, otherwise
    ~/.cf_records.json.
    """
    record_file = Path(DEFAULT_RECORD_FILE)
    if record_file.exists():
        record_file = record_file.resolve()
    else:
        record_file = Path("~/.cf_records.json").expanduser()

    config = Config(record_file=str(record_file))
    path = Path(config_path).expanduser()
    try:
        with open(path, "w") as f:
            json.dump(config.to_file_dict(), f, indent=2)
            f.write("\n")
    except OSError as e:
        raise ConfigError(f"fail to write config file {path}: {e}") from e
    logger.info(f"Config file written to {path}")

    if not record_file.exists():
        sample = Records(
            description="This is a sample record",
            owner=Owner(username="username", email="username@domain.com"),
            record=Record(
                type="A", name="*.dev", content="127.0.0.1", proxiable=True, proxied=True, ttl=1
            ),
        )
        RecordsParser(str(record_file)).write([sample], indent="  ")
        logger.info(f"Sample records file written to {record_file}")

    return config
