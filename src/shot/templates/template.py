"""Template construction and rendering.

A Template is built once from literal text or a ".shot" file and can be
rendered any number of times:

    template = Template("% for item in items\n- {{ item }}\n% end")
    template.render(items=["a", "b"])     # "- a\n- b"

Each render is a pure function of the template lines, the locals and the
optional trailing block. Locals live in an explicit scope object for the
duration of one call; nothing is retained between renders.
"""

import logging
from collections import ChainMap
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from functools import cached_property, lru_cache
from pathlib import Path
from typing import Any

from jinja2 import StrictUndefined, Undefined
from jinja2.sandbox import SandboxedEnvironment

from shot.errors import MissingBlockError, TemplateEvaluationError
from shot.templates.filters import FILTERS
from shot.templates.loader import TemplateLoader
from shot.templates.parser import Conditional, Expression, Loop, Node, Parser, TextLine

logger = logging.getLogger(__name__)


def create_environment() -> SandboxedEnvironment:
    """Create the sandboxed Jinja2 environment used to compile expressions.

    Undefined names are strict so that a typo fails the render instead of
    silently producing an empty string.
    """
    environment = SandboxedEnvironment(undefined=StrictUndefined, autoescape=False)
    environment.filters.update(FILTERS)
    return environment


@lru_cache(maxsize=1)
def default_environment() -> SandboxedEnvironment:
    """Return the shared default environment."""
    return create_environment()


def to_text(value: Any) -> str:
    """Convert an expression result to output text (None renders as "")."""
    if value is None:
        return ""
    return str(value)


@dataclass(frozen=True)
class LoopInfo:
    """Per-iteration loop state bound as `loop` inside for blocks."""

    index0: int
    length: int

    @property
    def index(self) -> int:
        return self.index0 + 1

    @property
    def first(self) -> bool:
        return self.index0 == 0

    @property
    def last(self) -> bool:
        return self.index0 == self.length - 1


class RenderContext:
    """Name bindings and trailing block for a single render call."""

    def __init__(
        self,
        variables: Mapping[str, Any],
        block: Callable[[], Any] | None = None,
        name: str | None = None,
    ) -> None:
        self.scope: ChainMap[str, Any] = ChainMap(dict(variables))
        self.block = block
        self.name = name
        self._block_output: str | None = None

    @contextmanager
    def bind(self, bindings: dict[str, Any]) -> Iterator[None]:
        """Bind names in a child scope for the duration of the with block."""
        self.scope = self.scope.new_child(bindings)
        try:
            yield
        finally:
            self.scope = self.scope.parents

    def evaluate(self, expression: Expression) -> Any:
        """Evaluate an expression against the current scope.

        Raises:
            TemplateEvaluationError: If evaluation fails or the result is undefined
        """
        try:
            value = expression.code(self.scope)
        except Exception as e:
            raise self.error(
                f"Error evaluating '{expression.source}': {e}", expression
            ) from e

        if isinstance(value, Undefined):
            raise self.error(f"'{expression.source}' is undefined", expression)

        return value

    def invoke_block(self, expression: Expression) -> str:
        """Return the trailing block's output, calling it at most once."""
        if self.block is None:
            raise MissingBlockError(
                "Template yields but no block was given",
                lineno=expression.lineno,
                name=self.name,
            )

        if self._block_output is None:
            self._block_output = to_text(self.block())

        return self._block_output

    def error(self, message: str, expression: Expression) -> TemplateEvaluationError:
        return TemplateEvaluationError(
            message,
            lineno=expression.lineno,
            name=self.name,
            expression=expression.source,
        )


class Template:
    """A parsed line-oriented template.

    Usage:
        template = Template("Hello, {{ name }}!")
        template.render(name="World")

        template = Template("emails/welcome.shot", loader=TemplateLoader(["templates"]))
        template.render({"user": user}, block=lambda: body)
    """

    def __init__(
        self,
        source: str | Path,
        *,
        loader: TemplateLoader | None = None,
        environment: SandboxedEnvironment | None = None,
        name: str | None = None,
    ) -> None:
        """Initialize a template.

        Args:
            source: Literal template text, or a template file name/path
            loader: Loader used when source names a file
            environment: Sandboxed Jinja2 environment compiling expressions
            name: Display name for error messages (defaults to the file name)

        Raises:
            TemplateNotFoundError: If source names a file that does not exist
        """
        loader = loader or TemplateLoader()

        if loader.is_resource(source):
            text = loader.load(source)
            name = name or str(source)
        else:
            text = str(source)

        self.name = name
        self.lines: tuple[str, ...] = tuple(text.split("\n"))
        self._environment = environment or default_environment()

    def __repr__(self) -> str:
        return f"<Template {self.name or '<literal>'} ({len(self.lines)} lines)>"

    @cached_property
    def nodes(self) -> list[Node]:
        """Parsed node tree (parsed on first access)."""
        return Parser(self.lines, self._environment, name=self.name).parse()

    def check(self) -> None:
        """Parse the template, raising TemplateSyntaxError on malformed content."""
        self.nodes  # parsing raises on malformed content

    def render(
        self,
        variables: Mapping[str, Any] | None = None,
        block: Callable[[], Any] | None = None,
        **kwargs: Any,
    ) -> str:
        """Render the template.

        Args:
            variables: Locals visible to directives and markers
            block: Optional trailing block, inlined where the template has {{ yield }}
            **kwargs: Additional locals (override entries in variables)

        Returns:
            Output lines joined with newlines

        Raises:
            TemplateSyntaxError: If the template is malformed
            TemplateEvaluationError: If an expression fails to evaluate
            MissingBlockError: If the template yields and no block was given
        """
        context = RenderContext({**(variables or {}), **kwargs}, block, name=self.name)
        output: list[str] = []

        self._execute(self.nodes, context, output)

        logger.debug(
            "Rendered %s (%d lines)", self.name or "literal template", len(output)
        )
        return "\n".join(output)

    def _execute(
        self,
        nodes: list[Node],
        context: RenderContext,
        output: list[str],
    ) -> None:
        for node in nodes:
            if isinstance(node, TextLine):
                output.append(self._render_line(node, context))
            elif isinstance(node, Conditional):
                self._execute_conditional(node, context, output)
            elif isinstance(node, Loop):
                self._execute_loop(node, context, output)

    def _render_line(self, node: TextLine, context: RenderContext) -> str:
        parts: list[str] = []

        for segment in node.segments:
            if isinstance(segment, str):
                parts.append(segment)
            elif segment.is_yield:
                parts.append(context.invoke_block(segment))
            else:
                parts.append(to_text(context.evaluate(segment)))

        return "".join(parts)

    def _execute_conditional(
        self,
        node: Conditional,
        context: RenderContext,
        output: list[str],
    ) -> None:
        for branch in node.branches:
            if branch.condition is None or self._truth(branch.condition, context):
                self._execute(branch.body, context, output)
                return

    def _execute_loop(
        self,
        node: Loop,
        context: RenderContext,
        output: list[str],
    ) -> None:
        iterable = context.evaluate(node.iterable)

        try:
            items = list(iterable)
        except TypeError as e:
            raise context.error(
                f"'{node.iterable.source}' is not iterable "
                f"({type(iterable).__name__})",
                node.iterable,
            ) from e

        for index, item in enumerate(items):
            bindings: dict[str, Any] = {"loop": LoopInfo(index0=index, length=len(items))}
            bindings.update(self._unpack(node, item, context))
            with context.bind(bindings):
                self._execute(node.body, context, output)

    def _unpack(self, node: Loop, item: Any, context: RenderContext) -> dict[str, Any]:
        if len(node.targets) == 1:
            return {node.targets[0]: item}

        try:
            values = tuple(item)
        except TypeError as e:
            raise context.error(
                f"Cannot unpack {type(item).__name__} into {', '.join(node.targets)}",
                node.iterable,
            ) from e

        if len(values) != len(node.targets):
            raise context.error(
                f"Expected {len(node.targets)} values to unpack, got {len(values)}",
                node.iterable,
            )

        return dict(zip(node.targets, values))

    def _truth(self, expression: Expression, context: RenderContext) -> bool:
        value = context.evaluate(expression)
        try:
            return bool(value)
        except Exception as e:
            raise context.error(
                f"Cannot use '{expression.source}' as a condition: {e}", expression
            ) from e
