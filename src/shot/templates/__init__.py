"""Shot template engine.

Templates are sequences of lines: "%" directive lines carry flow control
(if / elif / else / for / end, "#" comments) and every other line is output,
with {{ expr }} markers substituted. Expressions are compiled by a sandboxed
Jinja2 environment.
"""

from shot.templates.loader import TemplateLoader
from shot.templates.renderer import TemplateRenderer
from shot.templates.template import Template, create_environment

__all__ = ["Template", "TemplateLoader", "TemplateRenderer", "create_environment"]
