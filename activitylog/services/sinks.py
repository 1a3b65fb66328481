"""
Database persistence for activities.
"""

import logging
from typing import Optional

from django.db.models import Model

from activitylog.models import ActivityLoggable
from .config import ActivityLogConfig, get_activity_model

logger = logging.getLogger(__name__)


class DatabaseActivitySink:
    """
    Creates, saves and links activities using the Django ORM.
    """

    def __init__(self, config: Optional[ActivityLogConfig] = None):
        self.config = config

    def create_record(self):
        """Instantiate an unsaved record of the configured activity model."""
        return get_activity_model(self.config)()

    def save(self, record) -> None:
        record.save()

    def associate(self, record, entity: Model) -> None:
        """
        Link a saved activity to a secondary entity.

        Args:
            record: Saved activity instance
            entity: Model instance to link
        """
        ActivityLoggable.objects.create(activity=record, loggable=entity)
        logger.debug(
            f"Activity {record.pk} linked to {entity.__class__.__name__} {entity.pk}"
        )
