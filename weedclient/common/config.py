# weedclient/common/config.py
from typing import Any, Dict, Literal

import yaml
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    MASTER_URL: str = "http://localhost:9333"
    LOOKUP_CACHE: Literal["none", "map", "ttl"] = "ttl"
    LOOKUP_CACHE_TTL: float = 60.0
    HTTP_TIMEOUT: float = 30.0
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="WEEDFS_", env_file=".env")

    @classmethod
    def from_yaml(cls, config_path: str) -> "Settings":
        """Settings from a YAML mapping; keys in the file override the environment"""
        values = load_yaml_config(config_path) or {}
        return cls(**{key.upper(): value for key, value in values.items()})


def load_yaml_config(config_path: str) -> Dict[str, Any]:
    with open(config_path, "r") as f:
        return yaml.safe_load(f)


settings = Settings()
