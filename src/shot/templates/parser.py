"""Line classification and node tree construction.

A template line is either a directive line or an output line:

    % for user in users          <- directive (flow control only)
    Hello, {{ user.name }}!      <- output line with one inline marker
    % end

Directives form a closed set (if / elif / else / for / end, plus comments),
parsed into an explicit node tree that the template interprets. Inline
markers and directive conditions are compiled with Jinja2's sandboxed
expression compiler.
"""

import re
from dataclasses import dataclass, field
from typing import Any

from jinja2 import TemplateSyntaxError as JinjaSyntaxError
from jinja2.sandbox import SandboxedEnvironment

from shot.errors import TemplateSyntaxError

# Optional leading whitespace, the % sigil, code, optional trailing whitespace
DIRECTIVE_PATTERN = re.compile(r"^\s*%(.*?)\s*$")

# Non-greedy: the first closing pair ends the marker
MARKER_PATTERN = re.compile(r"\{\{(.*?)\}\}")

# Reserved marker expression that inlines the caller's trailing block
YIELD_KEYWORD = "yield"

_FOR_PATTERN = re.compile(r"^for\s+(?P<targets>.+?)\s+in\s+(?P<iterable>.+)$")

_END_KEYWORDS = {"end": None, "endif": "if", "endfor": "for"}


# =============================================================================
# Nodes
# =============================================================================


@dataclass
class Expression:
    """A compiled expression from a marker or a directive.

    Attributes:
        source: Expression text as written in the template
        lineno: Template line number
        code: Compiled Jinja2 expression (None for the yield marker)
    """

    source: str
    lineno: int
    code: Any = field(default=None, repr=False)

    @property
    def is_yield(self) -> bool:
        """Return True if this marker invokes the trailing block."""
        return self.source == YIELD_KEYWORD


@dataclass
class TextLine:
    """An output line: literal text interleaved with expressions."""

    lineno: int
    segments: list[str | Expression] = field(default_factory=list)


@dataclass
class Branch:
    """One arm of a conditional; condition is None for else."""

    condition: Expression | None
    body: list["Node"] = field(default_factory=list)


@dataclass
class Conditional:
    """An if / elif / else block."""

    lineno: int
    branches: list[Branch] = field(default_factory=list)

    @property
    def has_else(self) -> bool:
        return bool(self.branches) and self.branches[-1].condition is None


@dataclass
class Loop:
    """A for block binding one or more target names per item."""

    lineno: int
    targets: tuple[str, ...]
    iterable: Expression
    body: list["Node"] = field(default_factory=list)


Node = TextLine | Conditional | Loop


# =============================================================================
# Parser
# =============================================================================


@dataclass
class _OpenBlock:
    keyword: str
    node: Conditional | Loop

    @property
    def body(self) -> list[Node]:
        if isinstance(self.node, Loop):
            return self.node.body
        return self.node.branches[-1].body


class Parser:
    """Parses template lines into a node tree.

    Usage:
        nodes = Parser(lines, environment, name="page.shot").parse()
    """

    def __init__(
        self,
        lines: tuple[str, ...] | list[str],
        environment: SandboxedEnvironment,
        name: str | None = None,
    ) -> None:
        self.lines = lines
        self.environment = environment
        self.name = name

    def parse(self) -> list[Node]:
        """Parse every line.

        Returns:
            Top-level nodes in source order

        Raises:
            TemplateSyntaxError: On malformed directives or expressions
        """
        root: list[Node] = []
        stack: list[_OpenBlock] = []

        for lineno, line in enumerate(self.lines, start=1):
            body = stack[-1].body if stack else root

            match = DIRECTIVE_PATTERN.match(line)
            if match is None:
                body.append(self._parse_text_line(line, lineno))
                continue

            self._parse_directive(match.group(1).strip(), lineno, body, stack)

        if stack:
            unclosed = stack[-1]
            raise self._error(
                f"Unclosed '{unclosed.keyword}' block (missing '% end')",
                unclosed.node.lineno,
            )

        return root

    def _parse_directive(
        self,
        code: str,
        lineno: int,
        body: list[Node],
        stack: list[_OpenBlock],
    ) -> None:
        # Comments and bare sigils contribute nothing
        if not code or code.startswith("#"):
            return

        if code.endswith(":"):
            code = code[:-1].rstrip()
            if not code:
                raise self._error("Empty directive", lineno)

        keyword, *remainder = code.split(None, 1)
        rest = remainder[0].strip() if remainder else ""

        if keyword == "if":
            node = Conditional(lineno, [Branch(self._compile(rest, lineno, keyword))])
            body.append(node)
            stack.append(_OpenBlock("if", node))

        elif keyword in ("elif", "else"):
            block = stack[-1] if stack else None
            if block is None or not isinstance(block.node, Conditional):
                raise self._error(f"'{keyword}' without a matching 'if'", lineno)
            if block.node.has_else:
                raise self._error(f"'{keyword}' after 'else'", lineno)
            if keyword == "else":
                if rest:
                    raise self._error("'else' takes no expression", lineno)
                block.node.branches.append(Branch(None))
            else:
                block.node.branches.append(Branch(self._compile(rest, lineno, keyword)))

        elif keyword == "for":
            node = self._parse_for(code, lineno)
            body.append(node)
            stack.append(_OpenBlock("for", node))

        elif keyword in _END_KEYWORDS:
            if rest:
                raise self._error(f"'{keyword}' takes no expression", lineno)
            if not stack:
                raise self._error(f"'{keyword}' without an open block", lineno)
            expected = _END_KEYWORDS[keyword]
            if expected is not None and stack[-1].keyword != expected:
                raise self._error(
                    f"'{keyword}' closes a '{stack[-1].keyword}' block "
                    f"opened at line {stack[-1].node.lineno}",
                    lineno,
                )
            stack.pop()

        else:
            raise self._error(f"Unknown directive: '{keyword}'", lineno)

    def _parse_for(self, code: str, lineno: int) -> Loop:
        match = _FOR_PATTERN.match(code)
        if match is None:
            raise self._error("Malformed 'for' directive (expected 'for NAME in EXPR')", lineno)

        targets = tuple(t.strip() for t in match.group("targets").split(","))
        for target in targets:
            if not target.isidentifier():
                raise self._error(f"Invalid loop variable: '{target}'", lineno)

        return Loop(lineno, targets, self._compile(match.group("iterable"), lineno, "for"))

    def _parse_text_line(self, line: str, lineno: int) -> TextLine:
        node = TextLine(lineno)
        position = 0

        for match in MARKER_PATTERN.finditer(line):
            if match.start() > position:
                node.segments.append(line[position:match.start()])
            node.segments.append(self._compile(match.group(1).strip(), lineno, "marker"))
            position = match.end()

        if position < len(line) or not node.segments:
            node.segments.append(line[position:])

        return node

    def _compile(self, source: str, lineno: int, context: str) -> Expression:
        if not source:
            raise self._error(f"Empty expression in {context}", lineno)

        if source == YIELD_KEYWORD:
            if context != "marker":
                raise self._error("'yield' is only allowed inside {{ }}", lineno)
            return Expression(source, lineno)

        try:
            code = self.environment.compile_expression(source, undefined_to_none=False)
        except JinjaSyntaxError as e:
            raise self._error(f"Invalid expression '{source}': {e.message}", lineno) from e

        return Expression(source, lineno, code)

    def _error(self, message: str, lineno: int) -> TemplateSyntaxError:
        return TemplateSyntaxError(message, lineno=lineno, name=self.name)
