"""Shot - a small line-oriented text template renderer.

    >>> from shot import Template
    >>> Template("Hello, {{ name }}!").render(name="World")
    'Hello, World!'

Lines starting with "%" are directives (if / elif / else / for / end and
"#" comments); all other lines are emitted with {{ expr }} markers replaced.
Sources ending in ".shot" are read from files.
"""

from shot.errors import (
    MissingBlockError,
    TemplateError,
    TemplateEvaluationError,
    TemplateNotFoundError,
    TemplateSyntaxError,
)
from shot.templates import Template, TemplateLoader, TemplateRenderer

__version__ = "0.1.0"

__all__ = [
    "MissingBlockError",
    "Template",
    "TemplateError",
    "TemplateEvaluationError",
    "TemplateLoader",
    "TemplateNotFoundError",
    "TemplateRenderer",
    "TemplateSyntaxError",
]
