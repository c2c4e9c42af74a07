"""Configuration loading from CLI args, env vars, and optional YAML file.

Precedence: CLI flag > environment variable > YAML file > default.
"""

import codecs
import logging
import os
from dataclasses import dataclass

import yaml

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
OUTPUT_FORMATS = ("text", "json")
ERROR_POLICIES = ("abort", "skip")

# config key → environment variable
ENV_VARS = {
    "output_format": "CLF_OUTPUT",
    "on_error": "CLF_ON_ERROR",
    "log_level": "CLF_LOG_LEVEL",
    "encoding": "CLF_ENCODING",
    "skip_blank": "CLF_SKIP_BLANK",
}


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class Config:
    output_format: str = "text"
    on_error: str = "abort"
    log_level: str = "WARNING"
    encoding: str = "utf-8"
    skip_blank: bool = True


def load_yaml_config(path: str | None) -> dict:
    """Load settings from a YAML file. Returns empty dict if no path."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    logger.info("Loaded YAML config from %s", path)
    return data


def _validate(config: Config) -> Config:
    if config.output_format not in OUTPUT_FORMATS:
        raise ValueError(f"Invalid output_format: {config.output_format!r}")
    if config.on_error not in ERROR_POLICIES:
        raise ValueError(f"Invalid on_error: {config.on_error!r}")
    if config.log_level not in LOG_LEVELS:
        raise ValueError(f"Invalid log_level: {config.log_level!r}")
    try:
        codecs.lookup(config.encoding)
    except LookupError:
        raise ValueError(f"Invalid encoding: {config.encoding!r}") from None
    return config


def load_config(cli_args=None, yaml_data: dict | None = None) -> Config:
    """Build Config from CLI args, env vars, and parsed YAML data."""
    values = {
        "output_format": Config.output_format,
        "on_error": Config.on_error,
        "log_level": Config.log_level,
        "encoding": Config.encoding,
        "skip_blank": Config.skip_blank,
    }

    for key, value in (yaml_data or {}).items():
        if key not in values:
            raise ValueError(f"Unknown config key: {key!r}")
        values[key] = value

    for key, env_name in ENV_VARS.items():
        if env_name in os.environ:
            values[key] = os.environ[env_name]

    for key in values:
        cli_value = getattr(cli_args, key, None)
        if cli_value is not None:
            values[key] = cli_value

    return _validate(Config(
        output_format=str(values["output_format"]).lower(),
        on_error=str(values["on_error"]).lower(),
        log_level=str(values["log_level"]).upper(),
        encoding=str(values["encoding"]),
        skip_blank=_parse_bool(values["skip_blank"]),
    ))
