"""Exception hierarchy for template loading, parsing and rendering.

Construction only ever raises TemplateNotFoundError. Everything else
(malformed directives, bad expressions, undefined names, a missing
trailing block) surfaces when the template is rendered.
"""


class TemplateError(Exception):
    """Base class for all template errors.

    Attributes:
        message: Human readable description
        lineno: 1-based template line the error refers to (if known)
        name: Template name or path (None for literal templates)
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        name: str | None = None,
    ) -> None:
        self.message = message
        self.lineno = lineno
        self.name = name
        super().__init__(self._format())

    def _format(self) -> str:
        if self.lineno is None:
            return self.message
        location = f"{self.name or '<template>'}, line {self.lineno}"
        return f"{location}: {self.message}"


class TemplateSyntaxError(TemplateError):
    """Raised when a directive or inline expression cannot be parsed."""

    pass


class TemplateEvaluationError(TemplateError):
    """Raised when evaluating an expression fails at render time."""

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        name: str | None = None,
        expression: str | None = None,
    ) -> None:
        self.expression = expression
        super().__init__(message, lineno=lineno, name=name)


class MissingBlockError(TemplateError):
    """Raised when a template yields but the caller supplied no block."""

    pass


class TemplateNotFoundError(FileNotFoundError, TemplateError):
    """Raised when a named template resource cannot be found."""

    def __init__(self, name: str, search_paths: list[str] | None = None) -> None:
        self.message = f"Template not found: {name}"
        if search_paths:
            self.message += f" (searched: {', '.join(search_paths)})"
        self.lineno = None
        self.name = name
        self.search_paths = search_paths or []
        super().__init__(self.message)
