"""Renderers for the invoice document tree."""

from core.rendering.text import render_text
from core.rendering.pdf import render_pdf
