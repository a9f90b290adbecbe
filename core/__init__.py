"""Framework-agnostic infrastructure shared by every layer.

This package must NEVER import from ``bot/`` or ``telebind/``.
"""

from core.logger import TelebindLogger

__all__ = [
    "TelebindLogger",
]
