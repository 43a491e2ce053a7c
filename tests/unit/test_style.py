#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_style.py
"""Unit tests for the immutable style context and alignment resolution."""

import dataclasses

import pytest

from html2all.style import DEFAULT_STYLE, Alignment, Emphasis, StyleContext, resolve_alignment


@pytest.mark.unit
class TestStyleContext:
    """Tests for StyleContext."""

    def test_defaults(self):
        ctx = StyleContext()
        assert ctx.alignment is Alignment.LEFT
        assert ctx.emphasis == frozenset()
        assert ctx.font_size is None
        assert ctx.color is None
        assert not ctx.forced_center

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_STYLE.font_size = 12

    def test_derive_does_not_mutate(self):
        base = StyleContext()
        derived = base.derive(font_size=18, color=(255, 0, 0))
        assert derived.font_size == 18
        assert base.font_size is None
        assert base.color is None

    def test_derive_without_overrides_returns_self(self):
        assert DEFAULT_STYLE.derive() is DEFAULT_STYLE

    def test_with_emphasis_is_idempotent(self):
        bold = DEFAULT_STYLE.with_emphasis(Emphasis.BOLD)
        assert bold.with_emphasis(Emphasis.BOLD) is bold
        assert bold.bold and not bold.italic

    def test_with_emphasis_union(self):
        ctx = DEFAULT_STYLE.with_emphasis(Emphasis.ITALIC).with_emphasis(Emphasis.BOLD, Emphasis.UNDERLINE)
        assert ctx.has(Emphasis.BOLD)
        assert ctx.has(Emphasis.ITALIC)
        assert ctx.underline

    def test_style_mask_order(self):
        ctx = DEFAULT_STYLE.with_emphasis(Emphasis.UNDERLINE, Emphasis.BOLD)
        assert ctx.style_mask == "BU"

    def test_sibling_isolation(self):
        """Test that an override made for one child is not seen by its sibling."""
        parent = DEFAULT_STYLE.derive(font_size=12)
        first = parent.with_emphasis(Emphasis.BOLD).derive(color=(0, 0, 255))
        second = parent
        assert first.bold and first.color == (0, 0, 255)
        assert not second.bold
        assert second.color is None
        assert second.font_size == 12

    def test_centered(self):
        ctx = DEFAULT_STYLE.centered()
        assert ctx.alignment is Alignment.CENTER
        assert ctx.forced_center
        assert not DEFAULT_STYLE.forced_center


@pytest.mark.unit
class TestAlignment:
    """Tests for Alignment parsing and resolve_alignment."""

    @pytest.mark.parametrize("value,expected", [("center", Alignment.CENTER), (" RIGHT ", Alignment.RIGHT)])
    def test_from_attr(self, value, expected):
        assert Alignment.from_attr(value) is expected

    @pytest.mark.parametrize("value", [None, "", "justify", "middle"])
    def test_from_attr_unknown(self, value):
        assert Alignment.from_attr(value) is None

    def test_no_attribute_inherits(self):
        ctx = DEFAULT_STYLE.derive(alignment=Alignment.RIGHT)
        own, child = resolve_alignment(ctx, {})
        assert own is Alignment.RIGHT
        assert child is ctx

    def test_explicit_alignment_applies_to_subtree(self):
        own, child = resolve_alignment(DEFAULT_STYLE, {"align": "center"})
        assert own is Alignment.CENTER
        assert child.alignment is Alignment.CENTER

    def test_explicit_alignment_under_center_is_local(self):
        """Test that below <center> the attribute aligns only the element itself."""
        centered = DEFAULT_STYLE.centered()
        own, child = resolve_alignment(centered, {"align": "left"})
        assert own is Alignment.LEFT
        assert child.alignment is Alignment.CENTER
        assert child.forced_center

    def test_invalid_attribute_ignored(self):
        own, child = resolve_alignment(DEFAULT_STYLE, {"align": "sideways"})
        assert own is Alignment.LEFT
        assert child is DEFAULT_STYLE
