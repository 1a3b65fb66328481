from django.apps import AppConfig


class ActivitylogConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'activitylog'
    verbose_name = 'Activity Log'

    def ready(self):
        """Create the process-wide log status from the configured default."""
        from activitylog.services.config import get_config
        from activitylog.services.status import ActivityLogStatus

        self.log_status = ActivityLogStatus(enabled=get_config().enabled)
