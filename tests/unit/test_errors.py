"""Unit tests for the template error hierarchy."""

from shot.errors import (
    MissingBlockError,
    TemplateError,
    TemplateEvaluationError,
    TemplateNotFoundError,
    TemplateSyntaxError,
)


class TestTemplateError:
    """Tests for error formatting and hierarchy."""

    def test_message_without_location(self) -> None:
        """Test errors without a line number print the bare message."""
        assert str(TemplateError("broken")) == "broken"

    def test_message_with_location(self) -> None:
        """Test errors with a line number print name and line."""
        error = TemplateSyntaxError("bad", lineno=7, name="a.shot")

        assert str(error) == "a.shot, line 7: bad"
        assert error.message == "bad"

    def test_literal_template_location(self) -> None:
        """Test literal templates are shown as <template>."""
        assert str(MissingBlockError("no block", lineno=1)) == "<template>, line 1: no block"

    def test_hierarchy(self) -> None:
        """Test all errors derive from TemplateError."""
        for cls in (
            TemplateSyntaxError,
            TemplateEvaluationError,
            MissingBlockError,
            TemplateNotFoundError,
        ):
            assert issubclass(cls, TemplateError)

    def test_evaluation_error_expression(self) -> None:
        """Test evaluation errors keep the failing expression."""
        error = TemplateEvaluationError("failed", lineno=2, expression="a + b")

        assert error.expression == "a + b"

    def test_not_found(self) -> None:
        """Test not-found errors list the searched paths."""
        error = TemplateNotFoundError("x.shot", ["views", "."])

        assert isinstance(error, FileNotFoundError)
        assert str(error) == "Template not found: x.shot (searched: views, .)"
        assert error.search_paths == ["views", "."]
        assert error.lineno is None
