"""HTTP endpoints for vanity import paths."""

from govanity.api.vanity import create_vanity_routes, render_response

__all__ = ["create_vanity_routes", "render_response"]
