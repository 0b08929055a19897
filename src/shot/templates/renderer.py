"""Configured template rendering.

TemplateRenderer ties a ShotConfig to template loading and rendering: it
builds the loader from the configured search paths and suffix, and merges
the configured default locals under each call's locals.
"""

import logging
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from shot.config import ShotConfig
from shot.templates.loader import TemplateLoader
from shot.templates.template import Template, create_environment

logger = logging.getLogger(__name__)


class TemplateRenderer:
    """Renders templates using project configuration.

    Usage:
        renderer = TemplateRenderer(config)
        text = renderer.render("page.shot", {"title": "Home"})
    """

    def __init__(self, config: ShotConfig | None = None) -> None:
        """Initialize the renderer.

        Args:
            config: Shot configuration (defaults apply when None)
        """
        self.config = config or ShotConfig()
        self.loader = TemplateLoader(
            search_paths=self.config.templates.search_paths,
            suffix=self.config.templates.suffix,
            encoding=self.config.templates.encoding,
        )
        self._environment = create_environment()

    def load(self, source: str | Path) -> Template:
        """Build a template from literal text or a template file name.

        Raises:
            TemplateNotFoundError: If source names a missing file
        """
        return Template(source, loader=self.loader, environment=self._environment)

    def render(
        self,
        source: str | Path,
        variables: Mapping[str, Any] | None = None,
        block: Callable[[], Any] | None = None,
    ) -> str:
        """Render a template with the configured default locals.

        Args:
            source: Literal template text or template file name
            variables: Locals for this render (override configured locals)
            block: Optional trailing block for {{ yield }}

        Returns:
            Rendered text
        """
        template = self.load(source)
        context = {**self.config.locals, **(variables or {})}

        rendered = template.render(context, block=block)
        logger.info(
            "Rendered %s (%d characters)",
            template.name or "literal template",
            len(rendered),
        )
        return rendered

    def render_to_file(
        self,
        source: str | Path,
        output_path: Path,
        variables: Mapping[str, Any] | None = None,
        block: Callable[[], Any] | None = None,
    ) -> Path:
        """Render a template and write the result to a file.

        Args:
            source: Literal template text or template file name
            output_path: Path to write output file
            variables: Locals for this render
            block: Optional trailing block

        Returns:
            Path to written file
        """
        content = self.render(source, variables, block)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8")
        logger.info("Wrote output to %s", output_path)

        return output_path

    def preview(
        self,
        source: str | Path,
        variables: Mapping[str, Any] | None = None,
        block: Callable[[], Any] | None = None,
        max_lines: int = 50,
    ) -> str:
        """Render a template and truncate the result for display.

        Args:
            source: Literal template text or template file name
            variables: Locals for this render
            block: Optional trailing block
            max_lines: Maximum lines to include in preview

        Returns:
            Preview string with truncation indicator
        """
        full_content = self.render(source, variables, block)
        lines = full_content.split("\n")

        if len(lines) <= max_lines:
            return full_content

        preview_lines = lines[:max_lines]
        preview_lines.append(f"\n... [{len(lines) - max_lines} more lines] ...")

        return "\n".join(preview_lines)
