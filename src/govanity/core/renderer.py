"""Metadata page rendering.

Source tooling identifies itself with ``?go-get=1``. Such requests receive an
HTML page whose ``go-import`` meta tag advertises the import root, VCS and
repository URL; everything else is redirected to the repository.
"""

from collections.abc import Mapping
from dataclasses import dataclass

from jinja2 import Template

from govanity.errors import RenderError

GO_GET_PARAM = "go-get"
GO_GET_VALUE = "1"


def is_tooling_request(query: Mapping[str, str]) -> bool:
    """Return True if the query string marks a source tooling request.

    Only an exact ``go-get=1`` counts; with repeated parameters the first
    value is used.
    """
    return query.get(GO_GET_PARAM) == GO_GET_VALUE


@dataclass(frozen=True)
class MetadataView:
    """Values exposed to the metadata template."""

    host: str
    path: str
    vcs: str
    url: str

    def to_context(self) -> dict[str, str]:
        return {"Host": self.host, "Path": self.path, "Vcs": self.vcs, "URL": self.url}


def render_metadata(template: Template, view: MetadataView) -> str:
    """Render the metadata document.

    The whole document is produced before anything is returned, so a failing
    template never yields a partial page.

    Args:
        template: Compiled metadata template
        view: Values for the template

    Returns:
        Rendered HTML document

    Raises:
        RenderError: If template execution fails
    """
    try:
        return template.render(view.to_context())
    except Exception as e:
        name = template.name or "response"
        raise RenderError(f"executing {name} template: {e}") from e
