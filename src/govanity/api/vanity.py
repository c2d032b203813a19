"""Vanity import path endpoints.

Each registration is mounted at its path, the path with a trailing slash and
everything beneath it. Requests are resolved to the most specific submodule,
then either redirected to the repository or answered with go-import metadata.
"""

import logging

from aiohttp import web

from govanity.app_keys import verbose_key
from govanity.core.registration import PackageRegistration
from govanity.core.renderer import MetadataView, is_tooling_request, render_metadata
from govanity.core.resolver import Resolution, resolve
from govanity.errors import ConfigurationError, RenderError

logger = logging.getLogger(__name__)


def create_vanity_routes(registration: PackageRegistration) -> list[web.RouteDef]:
    """Build routes for a provisioned registration.

    Raises:
        ConfigurationError: If the mount path cannot be routed
    """
    path = registration.path
    if not path.startswith("/"):
        raise ConfigurationError(f"package path must start with '/': {path}")
    if "{" in path or "}" in path:
        raise ConfigurationError(f"package path must not contain braces: {path}")

    async def handle(request: web.Request) -> web.StreamResponse:
        return await serve_vanity(request, registration)

    mount = path.rstrip("/")
    routes = [web.route("*", path, handle)]
    if path != mount + "/":
        routes.append(web.route("*", mount + "/", handle))
    routes.append(web.route("*", mount + "/{tail:.*}", handle))
    return routes


async def serve_vanity(
    request: web.Request, registration: PackageRegistration
) -> web.StreamResponse:
    resolution = resolve(registration, request.path)
    tooling = is_tooling_request(request.query)

    if request.app.get(verbose_key, False):
        mode = "metadata" if tooling else "redirect"
        logger.info(
            f"{request.path} -> {resolution.path} {resolution.url} ({mode})"
        )

    return render_response(registration, request.host, resolution, tooling=tooling)


def render_response(
    registration: PackageRegistration,
    host: str,
    resolution: Resolution,
    *,
    tooling: bool,
) -> web.Response:
    """Produce the response for a resolved request.

    Browsers are sent a temporary redirect to the repository. Tooling
    receives the rendered metadata page.

    Args:
        registration: Provisioned registration
        host: Request Host header
        resolution: Result of resolving the request path
        tooling: Whether the request carried go-get=1

    Raises:
        web.HTTPTemporaryRedirect: For non-tooling requests
        web.HTTPInternalServerError: If the template fails to render
    """
    if not tooling:
        raise web.HTTPTemporaryRedirect(location=resolution.url)

    if registration.template is None:
        raise web.HTTPInternalServerError(
            text=f"package {registration.path} is not provisioned"
        )

    view = MetadataView(
        host=host,
        path=resolution.path,
        vcs=registration.vcs,
        url=resolution.url,
    )
    try:
        body = render_metadata(registration.template, view)
    except RenderError as e:
        logger.exception(f"Rendering metadata for {resolution.path} failed")
        raise web.HTTPInternalServerError(text=str(e)) from e

    return web.Response(text=body, content_type="text/html")
