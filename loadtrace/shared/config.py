import json
from pathlib import Path
from typing import Dict, Any, Optional, Union

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from loadtrace.const import (
    CONFIG_FILE_NAME, DEFAULT_LOG_LEVEL, DEFAULT_MAX_CONNECTIONS, DEFAULT_MAX_KEEPALIVE_CONNECTIONS,
    DEFAULT_PROGRESS_LOG_STEP, DEFAULT_REQUEST_TIMEOUT, DEFAULT_TCP_OUTLIER_THRESHOLD_MS, ENV_PREFIX,
    LIBRARY_LOG_LEVELS,
)


class Config(BaseSettings):
    """Global configuration settings for loadtrace."""

    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    max_connections: int = DEFAULT_MAX_CONNECTIONS
    max_keepalive_connections: int = DEFAULT_MAX_KEEPALIVE_CONNECTIONS
    tcp_outlier_threshold_ms: Optional[float] = DEFAULT_TCP_OUTLIER_THRESHOLD_MS
    tls_verify: Union[bool, str] = True  # False, or a CA bundle path
    append_url_suffixes: bool = True
    progress_log_step: int = DEFAULT_PROGRESS_LOG_STEP
    log_level: str = DEFAULT_LOG_LEVEL
    library_log_levels: Dict[str, str] = dict(LIBRARY_LOG_LEVELS)

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
    )

    @field_validator("tls_verify", mode="before")
    @classmethod
    def parse_tls_verify(cls, value: Any) -> Any:
        """Environment values arrive as strings; map boolean words to bools, keep paths."""
        if isinstance(value, str) and value.strip().lower() in ("true", "1", "yes", "on", "false", "0", "no", "off"):
            return value.strip().lower() in ("true", "1", "yes", "on")
        return value

    @classmethod
    def load_config_from_json(cls) -> Dict[str, Any]:
        """Load configuration from loadtrace.json file."""
        config_path = Path(CONFIG_FILE_NAME)
        if config_path.exists():
            with open(config_path, 'r') as f:
                return json.load(f)
        return {}

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        """
        Customise the sources for settings.

        Order of precedence (highest to lowest):
        1. Environment variables
        2. Init settings (kwargs passed to constructor)
        3. JSON config file
        4. Default values
        """
        def json_source():
            return cls.load_config_from_json()

        return (
            env_settings,
            init_settings,
            json_source,
        )
