#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Utility helpers shared by the html2all parser and renderers."""
