"""Run settings for hostmaint.

There is no config file. Resolution is:
  1. Built-in defaults (``_DEFAULTS``).
  2. Host facts read from the process environment: host name, user name and
     home directory.
  3. ``HOSTMAINT_*`` environment variable overrides.

The merged mapping is validated by the pydantic ``Settings`` model, so a
malformed override (e.g. ``HOSTMAINT_TMP_MAX_AGE_DAYS=soon``) is reported
before any stage runs.

Variable                          Setting                  Default
────────────────────────────────  ───────────────────────  ─────────
HOSTMAINT_CONTAINERS              containers_enabled       false
HOSTMAINT_JOURNAL_RETENTION       journal_retention        7d
HOSTMAINT_LOG_MAX_AGE_DAYS        log_max_age_days         7
HOSTMAINT_TMP_MAX_AGE_DAYS        tmp_max_age_days         10
HOSTMAINT_VAR_TMP_MAX_AGE_DAYS    var_tmp_max_age_days     30
HOSTMAINT_REBOOT_DELAY            reboot_delay             2
HOSTMAINT_CONTAINER_STOP_DELAY    container_stop_delay     2
"""

from __future__ import annotations

import getpass
import os
import socket
from pathlib import Path
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

_ENV_PREFIX = "HOSTMAINT_"

_DEFAULTS: dict[str, Any] = {
    "containers_enabled":   False,
    "journal_retention":    "7d",
    "log_max_age_days":     7,
    "tmp_max_age_days":     10,
    "var_tmp_max_age_days": 30,
    "reboot_delay":         2,
    "container_stop_delay": 2,
}

# Environment variable suffix -> settings key, where they differ
_ENV_ALIASES = {
    "CONTAINERS": "containers_enabled",
}


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    hostname: str
    user: str
    home: Path
    containers_enabled: bool = False
    journal_retention: str = Field(default="7d", pattern=r"^\d+[a-z]*$")
    log_max_age_days: int = Field(default=7, ge=0)
    tmp_max_age_days: int = Field(default=10, ge=0)
    var_tmp_max_age_days: int = Field(default=30, ge=0)
    reboot_delay: float = Field(default=2, ge=0)
    container_stop_delay: float = Field(default=2, ge=0)


def _host_facts(environ: Mapping[str, str]) -> dict[str, Any]:
    """Return hostname / user / home, preferring the environment."""
    hostname = environ.get("HOSTNAME") or socket.gethostname()
    user = environ.get("SUDO_USER") or environ.get("USER")
    if not user:
        try:
            user = getpass.getuser()
        except Exception:
            user = "unknown"
    home = environ.get("HOME") or str(Path.home())
    return {
        "hostname": hostname.split(".")[0],
        "user": user,
        "home": home,
    }


def _env_overrides(environ: Mapping[str, str]) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for name, value in environ.items():
        if not name.startswith(_ENV_PREFIX):
            continue
        suffix = name[len(_ENV_PREFIX):]
        key = _ENV_ALIASES.get(suffix, suffix.lower())
        if key in _DEFAULTS:
            overrides[key] = value
    return overrides


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build and validate the settings for this run.

    Args:
        environ: Mapping to read from. Defaults to ``os.environ``.

    Raises:
        pydantic.ValidationError: If an override has the wrong type or range.
    """
    if environ is None:
        environ = os.environ

    config = dict(_DEFAULTS)
    config.update(_host_facts(environ))
    config.update(_env_overrides(environ))
    return Settings(**config)
