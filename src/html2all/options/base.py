#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2all/options/base.py
"""Base classes for parser and renderer options.

This module defines the foundation classes for the option dataclasses used
by the HTML parser and the three renderers.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from html2all.constants import DEFAULT_CREATOR


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class BaseRendererOptions(CloneFrozenMixin):
    """Base class for all renderer options.

    Parameters
    ----------
    creator : str or None, default "html2all"
        Creator application name written to document metadata where the
        output format supports it. None disables creator metadata.

    """

    creator: str | None = field(
        default=DEFAULT_CREATOR,
        metadata={"help": "Creator application name for document metadata", "importance": "core"},
    )


@dataclass(frozen=True)
class BaseParserOptions(CloneFrozenMixin):
    """Base class for parser options."""
