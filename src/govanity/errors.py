"""Exception types for govanity."""


class ConfigurationError(ValueError):
    """Invalid package configuration.

    Raised while loading or provisioning registrations. A registration that
    fails validation is never installed.
    """


class DirectiveError(ConfigurationError):
    """Malformed ``gopkg`` directive."""

    def __init__(self, message: str, line: int) -> None:
        super().__init__(f"line {line}: {message}")
        self.line = line


class RenderError(Exception):
    """Metadata template execution failed."""
