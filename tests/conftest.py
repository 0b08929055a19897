"""Shared pytest fixtures for shot tests.

Fixtures are organized by category:
- Path fixtures: sample template files shipped with the tests
- Configuration fixtures: config dictionaries for various scenarios
- Template fixtures: literal template sources used across test modules
"""

from pathlib import Path
from typing import Any

import pytest

from shot.templates import TemplateLoader

# =============================================================================
# Path Fixtures
# =============================================================================


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def templates_dir(fixtures_dir: Path) -> Path:
    """Return the path to sample .shot templates."""
    return fixtures_dir / "templates"


@pytest.fixture
def loader(templates_dir: Path) -> TemplateLoader:
    """Return a loader searching the sample templates directory."""
    return TemplateLoader(search_paths=[templates_dir])


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def minimal_config() -> dict[str, Any]:
    """Return a minimal valid shot configuration."""
    return {
        "templates": {
            "search_paths": ["templates"],
        }
    }


@pytest.fixture
def full_config() -> dict[str, Any]:
    """Return a complete shot configuration with all options."""
    return {
        "templates": {
            "suffix": ".tmpl",
            "search_paths": ["templates", "shared"],
            "encoding": "utf-8",
        },
        "output": {
            "path": "out/page.txt",
        },
        "locals": {
            "site": "Example",
            "year": 2026,
        },
    }


# =============================================================================
# Template Fixtures
# =============================================================================


@pytest.fixture
def letter_source() -> str:
    """Return literal text equal to fixtures/templates/letter.shot."""
    return (
        "Dear {{ name }},\n"
        "% if admin\n"
        "You have administrator access.\n"
        "% else\n"
        "You have standard access.\n"
        "% end\n"
        "% # signature below\n"
        "Regards,\n"
        "{{ sender }}\n"
    )
