"""
Configuration loading utilities.

Credentials always come from the environment. Everything else has a default
in SampleConfig and may be overridden by an optional JSON config file.

Usage:
    from webapp_deployer.core.config_loader import load_sample_config, load_credentials_from_env

    config = load_sample_config(Path("config.json"))
    credentials = load_credentials_from_env()
"""

import json
import os
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import webapp_deployer.constants as CONSTANTS
from .context import SampleConfig
from .exceptions import ConfigurationError


def _load_json_file(file_path: Path, required: bool = True) -> Dict[str, Any]:
    """
    Load a JSON file and return its contents as a dictionary.

    Args:
        file_path: Path to the JSON file
        required: If True, raise error when file is missing. If False, return empty dict.

    Returns:
        Parsed JSON content as dictionary

    Raises:
        ConfigurationError: If file is missing (when required), has invalid JSON
            or does not contain a JSON object
    """
    if not file_path.exists():
        if required:
            raise ConfigurationError(
                f"Required configuration file not found: {file_path.name}",
                config_file=str(file_path)
            )
        return {}

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Invalid JSON in configuration file: {e}",
            config_file=str(file_path)
        )

    if not isinstance(data, dict):
        raise ConfigurationError(
            "Configuration file must contain a JSON object",
            config_file=str(file_path)
        )
    return data


def load_sample_config(config_path: Optional[Path] = None, required: bool = False) -> SampleConfig:
    """
    Build a SampleConfig from defaults and an optional JSON file.

    Args:
        config_path: Path to the JSON config file. None means defaults only.
        required: Whether a missing file is an error

    Returns:
        SampleConfig with file values applied over the defaults

    Raises:
        ConfigurationError: On invalid JSON, unknown keys or wrongly typed values
    """
    if config_path is None:
        return SampleConfig()

    data = _load_json_file(Path(config_path), required=required)

    known = {f.name for f in fields(SampleConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigurationError(
            f"Unknown configuration keys: {', '.join(unknown)}",
            config_file=str(config_path)
        )

    if "upload_files" in data and not isinstance(data["upload_files"], list):
        raise ConfigurationError(
            "'upload_files' must be a list of file names",
            config_file=str(config_path)
        )

    if "project_path" in data:
        data["project_path"] = Path(data["project_path"])

    return SampleConfig(**data)


def load_credentials_from_env(environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """
    Read the service principal credentials from the environment.

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        Dictionary with client_id, client_secret, tenant_id and subscription_id

    Raises:
        ConfigurationError: If any of the four variables is missing or empty
    """
    if environ is None:
        environ = os.environ

    missing = [name for name in CONSTANTS.REQUIRED_CREDENTIAL_ENV_VARS if not environ.get(name)]
    if missing:
        raise ConfigurationError(
            f"Missing required environment variables: {', '.join(missing)}"
        )

    return {
        "client_id": environ[CONSTANTS.ENV_CLIENT_ID],
        "client_secret": environ[CONSTANTS.ENV_CLIENT_SECRET],
        "tenant_id": environ[CONSTANTS.ENV_TENANT_ID],
        "subscription_id": environ[CONSTANTS.ENV_SUBSCRIPTION_ID],
    }
