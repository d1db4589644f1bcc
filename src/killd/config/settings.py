"""Configuration management for killd.

Loads settings from a YAML configuration file with environment variable
overrides (``KILLD_`` prefix, ``__`` for nesting). Supports .env files.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, SecretStr, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/killd.yaml")


class ServerConfig(BaseModel):
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=80, ge=1, le=65535)


class NetworkConfig(BaseModel):
    backend: Literal["nmcli", "simulated"] = Field(default="nmcli")
    interface: str = Field(default="wlan0")
    ap_address: str = Field(default="192.168.39.12")
    ap_gateway: str = Field(default="192.168.39.1")
    ap_prefix: int = Field(default=24, ge=1, le=32)
    event_poll_interval: float = Field(default=2.0, gt=0)
    mdns_backend: Literal["zeroconf", "none"] = Field(default="zeroconf")
    max_mdns_retries: int = Field(default=5, ge=0)
    mdns_retry_delay: float = Field(default=1.0, ge=0)


class BoilerConfig(BaseModel):
    backend: Literal["gpio", "simulated"] = Field(default="gpio")
    minimum_temperature: int = Field(default=30)
    maximum_temperature: int = Field(default=90)
    initial_target: int | None = Field(default=None)
    relay_pin: int = Field(default=17, ge=0)
    sensor_path: str = Field(
        default="/sys/bus/w1/devices/28-000000000000/temperature",
        description="DS18B20 sysfs file reporting millidegrees Celsius",
    )

    @model_validator(mode="after")
    def _check_range(self) -> BoilerConfig:
        if self.minimum_temperature > self.maximum_temperature:
            raise ValueError("minimum_temperature must not exceed maximum_temperature")
        if self.initial_target is not None and not (
            self.minimum_temperature <= self.initial_target <= self.maximum_temperature
        ):
            raise ValueError("initial_target must lie within the temperature range")
        return self


class StorageConfig(BaseModel):
    path: str = Field(default="/var/lib/killd/credentials.json")


class AuthConfig(BaseModel):
    proof_field: str = Field(default="auth", min_length=1)
    shared_secret: SecretStr = Field(default=SecretStr(""))


class ProvisioningConfig(BaseModel):
    acknowledge_before_commit: bool = Field(default=False)


class RestartConfig(BaseModel):
    mode: Literal["exec", "exit"] = Field(default="exec")
    exit_code: int = Field(default=3, ge=1)


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")
    format: str = Field(
        default="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    file: str | None = Field(default=None)


class Settings(BaseSettings):
    """Root configuration for the killd daemon.

    Values come from, highest first: init arguments, ``KILLD_*``
    environment variables, the .env file, the YAML file named by
    ``yaml_file`` in the model config, then field defaults. Sources are
    merged key by key, so an env variable overrides a single YAML value
    without discarding the rest of its section.
    """

    model_config = SettingsConfigDict(
        env_prefix="KILLD_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        yaml_file=None,
    )

    server: ServerConfig = Field(default_factory=ServerConfig)
    network: NetworkConfig = Field(default_factory=NetworkConfig)
    boiler: BoilerConfig = Field(default_factory=BoilerConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    provisioning: ProvisioningConfig = Field(default_factory=ProvisioningConfig)
    restart: RestartConfig = Field(default_factory=RestartConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

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
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


def load_settings(config_path: Path | str | None = None) -> Settings:
    """Load settings from environment variables + .env + YAML.

    Priority: env vars > .env file > YAML file > defaults, per key.
    ``KILL_SHARED_SECRET`` always wins for the shared secret.
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    if path.exists():
        logger.info("Loaded configuration from %s", path)
    else:
        logger.warning("Config file %s not found, using defaults + env vars", path)

    class FileSettings(Settings):
        model_config = SettingsConfigDict(yaml_file=path if path.exists() else None)

    return FileSettings(**_env_overrides())


def _env_overrides() -> dict:
    """Collect the unprefixed shared secret variable used by provisioning scripts."""
    secret = os.environ.get("KILL_SHARED_SECRET", "")
    if secret:
        return {"auth": {"shared_secret": secret}}
    return {}
