"""Template resource loading.

Templates can be given as literal text or as the name of a file carrying
the template suffix (".shot" by default). The loader decides which one a
source string is and reads named resources from its search paths.
"""

import logging
from pathlib import Path

from shot.config import DEFAULT_SUFFIX
from shot.errors import TemplateNotFoundError

logger = logging.getLogger(__name__)


class TemplateLoader:
    """Loads template text from files on a list of search paths.

    The loader reads each resource once, fully, and keeps no handle open.
    """

    def __init__(
        self,
        search_paths: list[str | Path] | None = None,
        suffix: str = DEFAULT_SUFFIX,
        encoding: str = "utf-8",
    ) -> None:
        """Initialize template loader.

        Args:
            search_paths: Directories searched for relative names (default: cwd)
            suffix: Filename suffix identifying template resources
            encoding: Text encoding of template files
        """
        self.search_paths = [Path(p) for p in (search_paths or [Path(".")])]
        self.suffix = suffix
        self.encoding = encoding

    def is_resource(self, source: str | Path) -> bool:
        """Return True if source names a template file rather than literal text."""
        if isinstance(source, Path):
            return True
        return source.endswith(self.suffix)

    def resolve(self, name: str | Path) -> Path:
        """Find the file for a template name.

        Args:
            name: Absolute path, or path relative to one of the search paths

        Returns:
            Path to the existing template file

        Raises:
            TemplateNotFoundError: If no search path contains the file
        """
        path = Path(name)

        if path.is_absolute():
            if path.is_file():
                return path
            raise TemplateNotFoundError(str(name))

        for search_path in self.search_paths:
            candidate = search_path / path
            if candidate.is_file():
                logger.debug("Resolved template %s to %s", name, candidate)
                return candidate

        raise TemplateNotFoundError(str(name), [str(p) for p in self.search_paths])

    def load(self, name: str | Path) -> str:
        """Read a template file.

        Args:
            name: Template name or path

        Returns:
            Template text
        """
        path = self.resolve(name)
        content = path.read_text(encoding=self.encoding)
        logger.debug("Loaded template %s (%d characters)", path, len(content))
        return content
