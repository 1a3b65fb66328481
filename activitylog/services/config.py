"""
Configuration for the activity log.

Values come from Django settings and are read on every call, so changes made
with ``override_settings`` are picked up immediately.

Settings:
    ACTIVITYLOG_ENABLED: Initial state of the log status (default True)
    ACTIVITYLOG_DEFAULT_LOG_NAME: Log channel used when none is given (default 'default')
    ACTIVITYLOG_DEFAULT_AUTH_DRIVER: Dotted path of the auth backend used to
        resolve users; falls back to the first AUTHENTICATION_BACKENDS entry
    ACTIVITYLOG_ACTIVITY_MODEL: 'app_label.ModelName' of the activity model
        (default 'activitylog.Activity')
    ACTIVITYLOG_ATOMIC_FANOUT: Write all records of one log() call in a
        single transaction (default False)
"""

from dataclasses import dataclass
from typing import Optional, Type

from django.apps import apps
from django.conf import settings

from .exceptions import InvalidConfiguration


DEFAULT_LOG_NAME = 'default'
DEFAULT_ACTIVITY_MODEL = 'activitylog.Activity'


@dataclass(frozen=True)
class ActivityLogConfig:
    default_log_name: str = DEFAULT_LOG_NAME
    default_auth_driver: Optional[str] = None
    enabled: bool = True
    activity_model: str = DEFAULT_ACTIVITY_MODEL
    atomic_fanout: bool = False


def get_config() -> ActivityLogConfig:
    """
    Build a configuration snapshot from the current Django settings.

    Returns:
        ActivityLogConfig with defaults applied for missing settings
    """
    return ActivityLogConfig(
        default_log_name=getattr(settings, 'ACTIVITYLOG_DEFAULT_LOG_NAME', DEFAULT_LOG_NAME),
        default_auth_driver=getattr(settings, 'ACTIVITYLOG_DEFAULT_AUTH_DRIVER', None),
        enabled=getattr(settings, 'ACTIVITYLOG_ENABLED', True),
        activity_model=getattr(settings, 'ACTIVITYLOG_ACTIVITY_MODEL', DEFAULT_ACTIVITY_MODEL),
        atomic_fanout=getattr(settings, 'ACTIVITYLOG_ATOMIC_FANOUT', False),
    )


def get_activity_model(config: Optional[ActivityLogConfig] = None) -> Type:
    """
    Resolve the configured activity model class.

    Args:
        config: Optional configuration snapshot (defaults to get_config())

    Returns:
        The activity model class

    Raises:
        InvalidConfiguration: If the model is not installed or does not
            derive from activitylog.models.Activity
    """
    from activitylog.models import Activity

    config = config or get_config()
    try:
        model = apps.get_model(config.activity_model, require_ready=False)
    except (LookupError, ValueError):
        raise InvalidConfiguration(
            f"Activity model `{config.activity_model}` is not an installed model."
        )

    if not issubclass(model, Activity):
        raise InvalidConfiguration(
            f"Model `{config.activity_model}` does not extend `activitylog.models.Activity`."
        )
    return model
