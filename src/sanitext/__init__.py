"""Sanitext: rich-text sanitizer with a previewable highlight overlay."""

from __future__ import annotations

__version__ = "0.1.0"
