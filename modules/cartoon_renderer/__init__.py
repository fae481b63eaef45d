"""
Cartoon renderer module.

Stylized image-to-image rendering with per-render cost reporting.
"""

from .cost_estimator import estimate_render_cost
from .renderer import CartoonRenderRequester

__all__ = ["CartoonRenderRequester", "estimate_render_cost"]
