"""
popup_app package.

Runtime helpers for the popup entry point.
"""

__all__ = [
    "logger",
]
