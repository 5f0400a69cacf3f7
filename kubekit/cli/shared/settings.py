"""Local CLI settings (current namespace).

Settings live in a small YAML file, ``~/.kubekit/config.yaml`` unless
``KUBEKIT_CONFIG`` points elsewhere.
"""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from loguru import logger
from pydantic import BaseModel, ValidationError

from kubekit.infra.constants import DEFAULT_CONSTANTS
from kubekit.infra.k8s.errors import ConfigurationError


class CLISettings(BaseModel):
    namespace: str = DEFAULT_CONSTANTS.DEFAULT_NAMESPACE


def get_settings_path() -> Path:
    custom = os.getenv(DEFAULT_CONSTANTS.SETTINGS_PATH_ENV)
    if custom:
        return Path(custom)
    return DEFAULT_CONSTANTS.default_settings_path


def load_settings(file_path: Path | None = None) -> CLISettings:
    """Load CLI settings, falling back to defaults when the file is absent.

    Raises:
        ConfigurationError: If the file exists but is not valid
    """
    path = file_path or get_settings_path()
    if not path.exists():
        return CLISettings()

    try:
        loaded = yaml.safe_load(path.read_text()) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Error parsing settings file {path}", str(e)) from e

    try:
        return CLISettings(**loaded)
    except (TypeError, ValidationError) as e:
        raise ConfigurationError(f"Invalid settings file {path}", str(e)) from e


def save_settings(settings: CLISettings, file_path: Path | None = None) -> None:
    """Save settings atomically by writing a temp file and renaming it."""
    path = file_path or get_settings_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = path.with_suffix(".tmp")

    with open(temp_path, "w") as f:
        yaml.dump(
            settings.model_dump(),
            f,
            default_flow_style=False,
            sort_keys=False,
        )
    temp_path.replace(path)
    logger.debug(f"Saved settings to {path}")


def get_current_namespace(file_path: Path | None = None) -> str:
    return load_settings(file_path).namespace


def set_current_namespace(namespace: str, file_path: Path | None = None) -> None:
    settings = load_settings(file_path)
    settings.namespace = namespace
    save_settings(settings, file_path)
