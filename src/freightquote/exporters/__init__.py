"""Exporters: render quotations for sharing outside the app."""
from freightquote.exporters.markdown import render_markdown

__all__ = ["render_markdown"]
