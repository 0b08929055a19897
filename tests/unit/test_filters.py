"""Unit tests for expression filters."""

from datetime import datetime, timedelta, timezone

import pytest

from shot.errors import TemplateEvaluationError
from shot.templates import Template
from shot.templates.filters import format_datetime, is_blank


class TestFormatDatetime:
    """Tests for format_datetime."""

    def test_none(self) -> None:
        """Test None renders as N/A."""
        assert format_datetime(None) == "N/A"

    def test_naive_datetime_is_utc(self) -> None:
        """Test naive datetimes are treated as UTC."""
        assert format_datetime(datetime(2024, 1, 15, 12, 0, 0)) == "2024-01-15 12:00:00 UTC"

    def test_aware_datetime_converted(self) -> None:
        """Test aware datetimes are converted to UTC."""
        dt = datetime(2024, 1, 15, 14, 0, 0, tzinfo=timezone(timedelta(hours=2)))

        assert format_datetime(dt) == "2024-01-15 12:00:00 UTC"

    def test_iso_string(self) -> None:
        """Test ISO strings are parsed."""
        assert format_datetime("2024-01-15T12:00:00") == "2024-01-15 12:00:00 UTC"

    def test_unparseable_string_passthrough(self) -> None:
        """Test non-ISO strings are returned unchanged."""
        assert format_datetime("last tuesday") == "last tuesday"

    def test_in_template(self) -> None:
        """Test the filter is registered for template expressions."""
        template = Template("Released: {{ released | format_datetime }}")

        assert template.render(released=datetime(2024, 1, 15)) == (
            "Released: 2024-01-15 00:00:00 UTC"
        )


class TestIsBlank:
    """Tests for is_blank."""

    @pytest.mark.parametrize("value", [None, "", "   ", "\n\t", [], {}])
    def test_blank_values(self, value: object) -> None:
        """Test values that render as nothing."""
        assert is_blank(value) is True

    @pytest.mark.parametrize("value", ["x", 0, False, [0], {"a": 1}])
    def test_non_blank_values(self, value: object) -> None:
        """Test values with content (numbers and booleans are never blank)."""
        assert is_blank(value) is False

    def test_in_directive(self) -> None:
        """Test the filter in an if directive."""
        template = Template("% if notes | is_blank\n(no notes)\n% else\n{{ notes }}\n% end")

        assert template.render(notes="  ") == "(no notes)"
        assert template.render(notes="hi") == "hi"

    def test_undefined_still_fails(self) -> None:
        """Test filters do not hide undefined names."""
        with pytest.raises(TemplateEvaluationError):
            Template("% if notes | is_blank\n% end").render()
