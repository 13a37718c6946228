"""
Build-mode configuration.

Whether AUTO values are shown in plaintext depends on the build mode, read
from the environment. A `.env` file found from the current working directory
is loaded first:

    LOGMESSAGE_BUILD   debug | release (default: release)
    LOGMESSAGE_DEBUG   1/true/yes/on or 0/false/no/off; wins over LOGMESSAGE_BUILD

Anything unrecognised is treated as release so that values stay masked.
"""

import logging
import os
from typing import Optional

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)

# Load environment variables from the .env file of the working directory
load_dotenv(find_dotenv(usecwd=True))

BUILD_ENV_VAR = "LOGMESSAGE_BUILD"
DEBUG_ENV_VAR = "LOGMESSAGE_DEBUG"

DEBUG_BUILDS = {"debug", "development", "dev"}
RELEASE_BUILDS = {"release", "production", "prod"}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(raw: str) -> Optional[bool]:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return None


def is_debug_build() -> bool:
    """
    Return True if the current process runs as a debug build.

    The environment is read on every call, so tests can change it with
    monkeypatch.setenv() before constructing a RedactionEngine.
    """
    raw_debug = os.getenv(DEBUG_ENV_VAR)
    if raw_debug is not None and raw_debug.strip():
        flag = _parse_bool(raw_debug)
        if flag is not None:
            return flag
        logger.warning(f"Ignoring unrecognised {DEBUG_ENV_VAR} value: {raw_debug!r}")

    build = os.getenv(BUILD_ENV_VAR, "release").strip().lower()
    if build in DEBUG_BUILDS:
        return True
    if build not in RELEASE_BUILDS:
        logger.warning(f"Unknown {BUILD_ENV_VAR} value {build!r}, assuming release")
    return False
