"""Property-based tests for the Breeze renderer.

Uses hypothesis to verify invariants that must hold for *all* inputs, not
just hand-picked examples:

- Text without markers renders unchanged
- Every scalar value substitutes as its canonical text form
- Well-formed templates always render, and render deterministically
- Arbitrary input never escapes as anything but a TemplateError
"""

from __future__ import annotations

from hypothesis import example, find, given, settings

from breeze import Context, TemplateError, render

from .strategies import (
    PROPERTY_CONTEXT,
    arbitrary_template_source,
    plain_text,
    scalar_value,
    template_fragment,
)


class TestRenderProperties:
    """Property-based render invariants."""

    @given(source=plain_text)
    @settings(max_examples=200)
    def test_plain_text_roundtrip(self, source: str) -> None:
        """Text without markers is copied to the output unchanged."""
        assert render(source) == source

    @given(value=scalar_value)
    @settings(max_examples=200)
    def test_substitution_matches_to_string(self, value) -> None:
        """``{{ v }}`` renders exactly the value's string form, never re-scanned."""
        ctx = Context([("v", value)])
        assert render("<{{ v }}>", ctx) == f"<{value.to_string()}>"

    @given(source=template_fragment)
    @settings(max_examples=300)
    def test_well_formed_templates_render(self, source: str) -> None:
        """Templates built from valid constructs never raise and are deterministic."""
        first = render(source, PROPERTY_CONTEXT)
        assert render(source, PROPERTY_CONTEXT) == first

    @given(source=template_fragment)
    @settings(max_examples=200)
    def test_output_has_no_directive_markers(self, source: str) -> None:
        """Directive and comment markup never reaches the output."""
        output = render(source, PROPERTY_CONTEXT)
        assert "{%" not in output
        assert "<!--" not in output

    def test_arbitrary_sources_include_markers(self) -> None:
        """Broken-markup sources really mix multi-character markers into the text."""
        source = find(arbitrary_template_source, lambda s: "{%" in s and "<!--" in s)
        assert "{%" in source

    @given(source=arbitrary_template_source)
    @settings(max_examples=500)
    @example(source="{% for item in items %}{{ item }}{% endfor")
    @example(source="<!-- {% if flag %}")
    def test_no_unhandled_crash(self, source: str) -> None:
        """The renderer never raises an unexpected exception.

        It may raise a TemplateError subclass for invalid input, but must
        not raise TypeError, ValueError, IndexError, etc.
        """
        try:
            render(source, PROPERTY_CONTEXT)
        except TemplateError:
            pass  # Expected for malformed input
