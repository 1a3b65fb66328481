"""
Process-wide switch for activity logging.
"""

import logging

logger = logging.getLogger(__name__)


class ActivityLogStatus:
    """
    Tracks whether activities are currently being recorded.

    One instance is created by the app config when Django starts and is
    shared by every ``ActivityLogger``, so toggling it affects all
    subsequent recordings in the process.
    """

    def __init__(self, enabled: bool = True):
        self._enabled = enabled

    def enable(self) -> None:
        self._enabled = True
        logger.debug("Activity logging enabled")

    def disable(self) -> None:
        self._enabled = False
        logger.debug("Activity logging disabled")

    def is_disabled(self) -> bool:
        return not self._enabled


def get_log_status() -> ActivityLogStatus:
    """Return the log status owned by the activitylog app config."""
    from django.apps import apps

    return apps.get_app_config('activitylog').log_status
