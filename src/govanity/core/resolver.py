"""Request path resolution.

Maps an incoming request path to the import root and source URL advertised
for it. The most specific submodule wins: among all submodules whose absolute
path covers the request path, the one with the longest path is selected, so
declaration order never changes the outcome.
"""

import logging
from typing import NamedTuple

from govanity.core.registration import PackageRegistration
from govanity.core.types import URLPath

logger = logging.getLogger(__name__)


class Resolution(NamedTuple):
    """Effective import root and source URL for a request."""

    path: URLPath
    url: str


def covers(prefix: str, request_path: str) -> bool:
    """Return True if request_path is prefix itself or lies beneath it."""
    return (
        request_path == prefix
        or request_path == prefix + "/"
        or request_path.startswith(prefix + "/")
    )


def resolve(registration: PackageRegistration, request_path: str) -> Resolution:
    """Resolve a request path against a registration.

    Paths outside the registration, and paths matching no submodule, resolve
    to the registration's own path and URL. Never raises.

    Args:
        registration: Package registration
        request_path: Path component of the request URL

    Returns:
        Resolution with the effective import root and source URL
    """
    best_path = ""
    best_url = ""
    for submodule in registration.submodules:
        submodule_path = registration.absolute_path(submodule)
        # Strictly longer, so the first of equal-length candidates is kept
        if covers(submodule_path, request_path) and len(submodule_path) > len(best_path):
            best_path = submodule_path
            best_url = submodule.url

    if not best_path:
        return Resolution(URLPath(registration.path), registration.url)

    logger.debug(f"{request_path} matched submodule {best_path}")
    return Resolution(URLPath(best_path), best_url or registration.url)
