"""Loading of the suite configuration and its propagation to workers."""

import json
import logging
import os
from collections.abc import Mapping, MutableMapping, Sequence
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from e2e_acceptance.errors import (
    ConfigMissingError,
    E2EError,
    PreconditionFailedError,
)
from e2e_acceptance.models.config import E2EConfig

log = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config.json")
CONFIG_PATH_ENV_VAR = "E2E_CONFIG_FILE"

REQUIRED_KEYS: Sequence[str] = (
    "E2E_APP_URL",
    "E2E_USER",
    "E2E_PASSWORD",
    "E2E_UNIQUE_CONTEXT",
)
PROPAGATED_KEYS: Sequence[str] = (*REQUIRED_KEYS, "E2E_LOG_FILE")


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> E2EConfig:
    """Load and validate the configuration file.

    Args:
        path: Location of the JSON configuration file

    Returns:
        The validated, immutable configuration record

    Raises:
        ConfigMissingError: If the file is absent or unreadable, is not a JSON
            object, or lacks a required key

    """
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ConfigMissingError(f"Config file not found: {path}") from e
    except OSError as e:
        raise ConfigMissingError(f"Cannot read config file {path}: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigMissingError(f"Invalid JSON in config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigMissingError(f"Config file {path} must contain a JSON object")

    config = _validate(
        data,
        error_cls=ConfigMissingError,
        message=f"Missing required configuration in {path}",
    )
    log.info("Loaded configuration from %s", path)
    return config


def propagate_environment(
    config: E2EConfig,
    keys: Sequence[str] = PROPAGATED_KEYS,
    environ: MutableMapping[str, str] = os.environ,
) -> Sequence[str]:
    """Copy configured values into the process environment.

    Keys the record does not hold are left unset; detecting them is up to
    the code that consumes them.

    Returns:
        The keys that were set, in request order

    """
    values = config.to_environment()
    propagated: list[str] = []

    for key in keys:
        if key not in values:
            log.debug("Not propagating %s: not configured", key)
            continue
        environ[key] = values[key]
        propagated.append(key)

    log.info("Propagated to environment: %s", ", ".join(propagated) or "nothing")
    return propagated


def config_from_environment(environ: Mapping[str, str] = os.environ) -> E2EConfig:
    """Rebuild the configuration record from propagated environment variables.

    Raises:
        PreconditionFailedError: If a required variable is unset or empty

    """
    data = {key: environ[key] for key in PROPAGATED_KEYS if key in environ}
    return _validate(
        data,
        error_cls=PreconditionFailedError,
        message="Missing required environment variables",
    )


def _validate(
    data: Mapping[str, Any], *, error_cls: type[E2EError], message: str
) -> E2EConfig:
    try:
        return E2EConfig.model_validate(dict(data))
    except ValidationError as e:
        keys = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
        raise error_cls(f"{message}: {', '.join(keys)}") from e
