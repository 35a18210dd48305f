"""
Gopher page generation using Jinja2 templates.

Components:
    - GopherRenderer: Jinja2-based .gph renderer
    - filters: gph link lines and text escaping
"""
from .renderer import GopherRenderer

__all__ = ["GopherRenderer"]
