"""
Core helpers for the popup runtime: configuration merge, routing and actions.
"""

from .config_merger import resolve  # noqa: F401
from .content_router import RenderKind, RenderTarget, route  # noqa: F401
