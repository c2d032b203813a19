"""aiohttp server for govanity.

Application factory and route registration for standalone server mode.
"""

import logging

from aiohttp import web

from govanity.api.vanity import create_vanity_routes
from govanity.app_keys import packages_key, verbose_key
from govanity.config import Config

logger = logging.getLogger(__name__)


def create_app(config: Config, *, verbose: bool = False) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration with provisioned packages
        verbose: Log every resolved request

    Returns:
        Configured aiohttp application
    """
    app = web.Application()

    app[packages_key] = list(config.packages)
    app[verbose_key] = verbose

    # The router takes the first matching route, so nested mounts such as
    # /a/b must be registered before /a
    for package in sorted(config.packages, key=lambda p: len(p.path), reverse=True):
        app.router.add_routes(create_vanity_routes(package))
        logger.debug(f"Mounted {package.path} -> {package.vcs} {package.url}")

    return app


def run_server(config: Config, *, verbose: bool = False) -> None:
    """Run the server.

    Args:
        config: Application configuration
        verbose: Log every resolved request
    """
    app = create_app(config, verbose=verbose)
    web.run_app(app, host=config.server.host, port=config.server.port)
