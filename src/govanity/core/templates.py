"""Response template compilation.

Metadata pages are rendered with Jinja2. Templates receive the view model
``Host``, ``Path``, ``Vcs`` and ``URL``.
"""

from jinja2 import Environment, StrictUndefined, Template, TemplateSyntaxError

from govanity.errors import ConfigurationError

# Undefined names fail at render time instead of rendering as empty strings
_environment = Environment(
    autoescape=True,
    undefined=StrictUndefined,
    keep_trailing_newline=True,
)


def compile_template(source: str, *, name: str = "Package") -> Template:
    """Compile a response template.

    Args:
        source: Jinja2 template source
        name: Template name used in error messages

    Returns:
        Compiled template, safe to share between requests

    Raises:
        ConfigurationError: If the template source does not parse
    """
    try:
        template = _environment.from_string(source)
    except TemplateSyntaxError as e:
        raise ConfigurationError(
            f"parsing {name} template: {e.message} (line {e.lineno})"
        ) from e
    template.name = name
    return template
