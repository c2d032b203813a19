"""Vanity package registrations.

A registration describes one vanity import path: the HTTP path it is mounted
at, the version control system and source URL advertised for it, and optional
submodule overrides for sub-paths hosted elsewhere.

Registrations are frozen. ``provision()`` returns a finalized copy with
defaults filled in; reconfiguration means building a new registration.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from jinja2 import Template

from govanity.core.templates import compile_template
from govanity.core.types import URLPath
from govanity.errors import ConfigurationError

DEFAULT_VCS = "git"

# The go-import meta tag is parsed by `go get`; its name and the three
# space-separated tokens of its content must not change.
DEFAULT_TEMPLATE = """<html>
<head>
<meta name="go-import" content="{{ Host }}{{ Path }} {{ Vcs }} {{ URL }}">
</head>
<body>
go get {{ Host }}{{ Path }}
</body>
</html>
"""


@dataclass(frozen=True)
class Submodule:
    """Sub-path override within a vanity package.

    An empty ``url`` inherits the parent package URL.
    """

    path: str
    url: str = ""

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        result = {"path": self.path}
        if self.url:
            result["url"] = self.url
        return result

    @classmethod
    def from_dict(cls, data: object, *, key: str = "submodule") -> Submodule:
        """Build a submodule from its JSON/TOML representation.

        Args:
            data: Raw submodule mapping
            key: Location of the entry, used in error messages

        Raises:
            ConfigurationError: If the entry is malformed
        """
        if not isinstance(data, dict):
            raise ConfigurationError(f"{key} must be a dictionary")

        path = data.get("path")
        if not isinstance(path, str) or not path:
            raise ConfigurationError(f"{key}.path must be a non-empty string")

        url = data.get("url", "")
        if not isinstance(url, str):
            raise ConfigurationError(f"{key}.url must be a string")

        return cls(path=path, url=url)


@dataclass(frozen=True)
class PackageRegistration:
    """Vanity import path configuration.

    Attributes:
        path: HTTP path the package is mounted at, e.g. ``/caddy/gopkg``
        url: Default source repository URL
        vcs: Version control system (``git``, ``hg``, ``svn``, ``bzr``, ...)
        submodules: Sub-path overrides, in declaration order
        template: Compiled metadata page template
    """

    path: str
    url: str
    vcs: str = ""
    submodules: tuple[Submodule, ...] = ()
    template: Template | None = field(default=None, compare=False, repr=False)

    @property
    def provisioned(self) -> bool:
        return bool(self.vcs) and self.template is not None

    def absolute_path(self, submodule: Submodule) -> URLPath:
        """Return the full HTTP path of a submodule."""
        return URLPath(self.path + submodule.path)

    def validate(self) -> None:
        """Check required fields.

        Raises:
            ConfigurationError: If path or url is empty, or a submodule path
                is empty or declared twice
        """
        if not self.path:
            raise ConfigurationError("package path must not be empty")
        if not self.url:
            raise ConfigurationError(f"package {self.path}: url must not be empty")

        seen: set[str] = set()
        for submodule in self.submodules:
            if not submodule.path:
                raise ConfigurationError(
                    f"package {self.path}: submodule path must not be empty"
                )
            if submodule.path in seen:
                raise ConfigurationError(
                    f"package {self.path}: duplicate submodule {submodule.path}"
                )
            seen.add(submodule.path)

    def provision(self) -> PackageRegistration:
        """Validate and return a finalized copy.

        Fills ``vcs`` with ``git`` and compiles the default template when
        none was supplied.

        Raises:
            ConfigurationError: If the registration is invalid
        """
        self.validate()
        template = self.template
        if template is None:
            template = compile_template(DEFAULT_TEMPLATE)
        return replace(self, vcs=self.vcs or DEFAULT_VCS, template=template)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization.

        The template is not serialized.
        """
        result: dict[str, Any] = {"path": self.path}
        if self.vcs:
            result["vcs"] = self.vcs
        result["url"] = self.url
        if self.submodules:
            result["submodules"] = [s.to_dict() for s in self.submodules]
        return result

    @classmethod
    def from_dict(
        cls,
        data: object,
        *,
        key: str = "package",
        template: Template | None = None,
    ) -> PackageRegistration:
        """Build an unprovisioned registration from its JSON/TOML representation.

        Args:
            data: Raw package mapping
            key: Location of the entry, used in error messages
            template: Optional pre-compiled response template

        Raises:
            ConfigurationError: If a required field is missing or ill-typed
        """
        if not isinstance(data, dict):
            raise ConfigurationError(f"{key} must be a dictionary")

        path = data.get("path")
        if not isinstance(path, str) or not path:
            raise ConfigurationError(f"{key}.path must be a non-empty string")

        url = data.get("url")
        if not isinstance(url, str) or not url:
            raise ConfigurationError(f"{key}.url must be a non-empty string")

        vcs = data.get("vcs", "")
        if not isinstance(vcs, str):
            raise ConfigurationError(f"{key}.vcs must be a string")

        submodules_raw = data.get("submodules", [])
        if not isinstance(submodules_raw, list):
            raise ConfigurationError(f"{key}.submodules must be a list")
        submodules = tuple(
            Submodule.from_dict(item, key=f"{key}.submodules[{i}]")
            for i, item in enumerate(submodules_raw)
        )

        return cls(
            path=path,
            url=url,
            vcs=vcs,
            submodules=submodules,
            template=template,
        )
