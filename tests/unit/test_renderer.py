"""Unit tests for the configured template renderer."""

from pathlib import Path

import pytest

from shot.config import ShotConfig, TemplateConfig
from shot.errors import TemplateEvaluationError
from shot.templates import Template, TemplateRenderer


class TestTemplateRenderer:
    """Tests for TemplateRenderer."""

    @pytest.fixture
    def config(self, templates_dir: Path) -> ShotConfig:
        """Create a config pointing at the sample templates."""
        return ShotConfig(
            templates=TemplateConfig(search_paths=[str(templates_dir)]),
            locals={"sender": "Ops", "admin": False},
        )

    @pytest.fixture
    def renderer(self, config: ShotConfig) -> TemplateRenderer:
        """Create a renderer instance."""
        return TemplateRenderer(config)

    def test_default_config(self) -> None:
        """Test the renderer works without a config."""
        renderer = TemplateRenderer()

        assert renderer.render("{{ 1 + 1 }}") == "2"
        assert renderer.loader.suffix == ".shot"

    def test_load_returns_template(self, renderer: TemplateRenderer) -> None:
        """Test load() resolves names through the configured search paths."""
        template = renderer.load("letter.shot")

        assert isinstance(template, Template)
        assert template.name == "letter.shot"

    def test_config_locals_are_defaults(self, renderer: TemplateRenderer) -> None:
        """Test configured locals apply when the call does not override them."""
        content = renderer.render("letter.shot", {"name": "Ada"})

        assert content == "Dear Ada,\nYou have standard access.\nRegards,\nOps\n"

    def test_call_locals_override_config(self, renderer: TemplateRenderer) -> None:
        """Test call locals take precedence over configured locals."""
        content = renderer.render("letter.shot", {"name": "Ada", "admin": True})

        assert "You have administrator access." in content

    def test_block(self, renderer: TemplateRenderer) -> None:
        """Test the trailing block is passed through."""
        content = renderer.render("layout.shot", block=lambda: "body")

        assert content == "<main>\nbody\n</main>"

    def test_custom_suffix(self, tmp_path: Path) -> None:
        """Test the configured suffix decides what is a file."""
        (tmp_path / "page.tmpl").write_text("from file {{ n }}")
        config = ShotConfig(
            templates=TemplateConfig(suffix=".tmpl", search_paths=[str(tmp_path)])
        )
        renderer = TemplateRenderer(config)

        assert renderer.render("page.tmpl", {"n": 1}) == "from file 1"
        assert renderer.render("page.shot") == "page.shot"

    def test_errors_propagate(self, renderer: TemplateRenderer) -> None:
        """Test render errors reach the caller unchanged."""
        with pytest.raises(TemplateEvaluationError):
            renderer.render("{{ nope }}")

    def test_render_to_file(self, renderer: TemplateRenderer, tmp_path: Path) -> None:
        """Test rendering to a file creates parent directories."""
        output_path = tmp_path / "out" / "letter.txt"

        written = renderer.render_to_file("letter.shot", output_path, {"name": "Ada"})

        assert written == output_path
        assert output_path.read_text(encoding="utf-8").startswith("Dear Ada,")

    def test_preview_truncates(self, renderer: TemplateRenderer) -> None:
        """Test preview output is truncated with an indicator."""
        preview = renderer.preview(
            "% for i in range(10)\n{{ i }}\n% end",
            max_lines=3,
        )

        assert preview.startswith("0\n1\n2\n")
        assert "[7 more lines]" in preview

    def test_preview_short_output(self, renderer: TemplateRenderer) -> None:
        """Test short output is returned unchanged."""
        assert renderer.preview("one\ntwo", max_lines=5) == "one\ntwo"
