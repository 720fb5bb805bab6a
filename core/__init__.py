"""Project-wide infrastructure shared by the library and its entry points.

This package must NEVER import from ``tgwire/``.
"""

from core.logger import TgWireLogger

__all__ = [
    "TgWireLogger",
]
