#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2all/style.py
"""Inherited style state for the tree walks.

A :class:`StyleContext` is an immutable value passed down the recursion.
Elements that change the style derive a new context for their own subtree;
the caller's context is never modified, so an override can never leak into
a following sibling.

Examples
--------
    >>> base = StyleContext()
    >>> bold = base.with_emphasis(Emphasis.BOLD)
    >>> bold.has(Emphasis.BOLD), base.has(Emphasis.BOLD)
    (True, False)

"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Mapping

from html2all.constants import RGB


class Alignment(Enum):
    """Horizontal alignment of block content."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"

    @classmethod
    def from_attr(cls, value: str | None) -> Alignment | None:
        """Parse an ``align`` attribute value; unknown values give None."""
        if not value:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


class Emphasis(Enum):
    """Inline emphasis flags."""

    BOLD = "B"
    ITALIC = "I"
    UNDERLINE = "U"


@dataclass(frozen=True)
class StyleContext:
    """Style inherited from ancestors.

    Parameters
    ----------
    alignment : Alignment, default Alignment.LEFT
        Alignment of paragraphs opened in this subtree
    emphasis : frozenset of Emphasis, default empty
        Active emphasis flags
    font_family : str or None, default None
        Font family override; None means the renderer default
    font_size : float or None, default None
        Font size override in points; None means the renderer default
    color : tuple of int or None, default None
        Text colour override as RGB; None means the renderer default
    forced_center : bool, default False
        True below a ``<center>`` element

    """

    alignment: Alignment = Alignment.LEFT
    emphasis: frozenset[Emphasis] = field(default_factory=frozenset)
    font_family: str | None = None
    font_size: float | None = None
    color: RGB | None = None
    forced_center: bool = False

    def derive(self, **overrides: Any) -> StyleContext:
        """Return a copy with the given fields replaced."""
        if not overrides:
            return self
        return replace(self, **overrides)

    def with_emphasis(self, *flags: Emphasis) -> StyleContext:
        """Return a copy with ``flags`` added; flags already present are a no-op."""
        merged = self.emphasis.union(flags)
        if merged == self.emphasis:
            return self
        return replace(self, emphasis=merged)

    def has(self, flag: Emphasis) -> bool:
        return flag in self.emphasis

    @property
    def bold(self) -> bool:
        return Emphasis.BOLD in self.emphasis

    @property
    def italic(self) -> bool:
        return Emphasis.ITALIC in self.emphasis

    @property
    def underline(self) -> bool:
        return Emphasis.UNDERLINE in self.emphasis

    @property
    def style_mask(self) -> str:
        """Emphasis as a canvas font-style string such as ``"BI"``."""
        return "".join(flag.value for flag in Emphasis if flag in self.emphasis)

    def centered(self) -> StyleContext:
        """Return the context used below a ``<center>`` element."""
        return replace(self, alignment=Alignment.CENTER, forced_center=True)


DEFAULT_STYLE = StyleContext()


def resolve_alignment(ctx: StyleContext, attrs: Mapping[str, str]) -> tuple[Alignment, StyleContext]:
    """Apply an element's ``align`` attribute to the inherited context.

    Parameters
    ----------
    ctx : StyleContext
        Context inherited from the parent
    attrs : mapping of str to str
        The element's attributes, keyed by lower-cased name

    Returns
    -------
    tuple of (Alignment, StyleContext)
        The alignment for the element's own paragraph and the context its
        children inherit. Outside a ``<center>`` ancestor the attribute
        applies to the whole subtree; below one it applies to the element
        itself while the children stay centered.

    """
    explicit = Alignment.from_attr(attrs.get("align"))
    if explicit is None:
        return ctx.alignment, ctx
    if ctx.forced_center:
        return explicit, ctx
    return explicit, ctx.derive(alignment=explicit)


__all__ = ["Alignment", "DEFAULT_STYLE", "Emphasis", "StyleContext", "resolve_alignment"]
