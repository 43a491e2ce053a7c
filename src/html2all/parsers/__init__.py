#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Markup parsers producing the trees walked by the renderers."""

from html2all.parsers.html import HtmlParser

__all__ = ["HtmlParser"]
