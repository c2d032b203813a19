"""govanity - vanity import paths for Go packages.

Resolves requests for vanity import paths to their source repositories and
answers with either a redirect or go-import metadata.
"""

from govanity.core.registration import DEFAULT_TEMPLATE, PackageRegistration, Submodule
from govanity.core.renderer import MetadataView, is_tooling_request, render_metadata
from govanity.core.resolver import Resolution, resolve
from govanity.errors import ConfigurationError, DirectiveError, RenderError

__all__ = [
    "DEFAULT_TEMPLATE",
    "ConfigurationError",
    "DirectiveError",
    "MetadataView",
    "PackageRegistration",
    "RenderError",
    "Resolution",
    "Submodule",
    "is_tooling_request",
    "render_metadata",
    "resolve",
]
