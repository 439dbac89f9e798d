"""
Process-wide build metadata.

The build info is read from the environment once at import time and can be
replaced later (for instance once the deployment knows its release version).
Readers always get the value current at the time of the call.

Environment variables:
 - BUILD_VERSION, BUILD_REPOSITORY, BUILD_REVISION, BUILD_DATETIME
"""
# Standard library imports
import logging
import os
import platform
import threading

# Internal imports
from api_endpoint.schemas import BuildInfo

logger = logging.getLogger(__name__)

# Placeholder used for any field the build did not provide
UNKNOWN = "In development"


def load_build_info() -> BuildInfo:
    """Build a BuildInfo from BUILD_* environment variables."""
    return BuildInfo(
        version=os.getenv("BUILD_VERSION", UNKNOWN),
        repository=os.getenv("BUILD_REPOSITORY", UNKNOWN),
        revision=os.getenv("BUILD_REVISION", UNKNOWN),
        builder=f"{platform.python_implementation()} {platform.python_version()}",
        date_time=os.getenv("BUILD_DATETIME", UNKNOWN),
    )


_lock = threading.Lock()
_current: BuildInfo = load_build_info()


def get_build_info() -> BuildInfo:
    """Return the current build info."""
    with _lock:
        return _current


def set_build_info(info: BuildInfo) -> None:
    """Replace the process-wide build info."""
    global _current
    with _lock:
        _current = info
    logger.info("Build info updated to version %s", info.version)
