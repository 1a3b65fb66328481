"""
Activity Logger

Fluent API for recording activities.
"""

from .service import ActivityLogger, activity, normalize_contragent

__all__ = ['ActivityLogger', 'activity', 'normalize_contragent']
