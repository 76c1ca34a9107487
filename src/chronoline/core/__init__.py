"""Core package initializer for chronoline.

Submodules are imported directly by callers, e.g.:
    from chronoline.core.settings import settings, load_settings, Settings, get_logger
    from chronoline.core.calendar.normalizer import normalize
"""

from __future__ import annotations

__all__ = ["__doc__"]
