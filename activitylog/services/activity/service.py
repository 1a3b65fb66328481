"""
Activity Logger

Fluent builder for recording activities.

An activity answers: who (causer) did what (description) to what (subject),
with which extra context (properties), in which log. Each setter returns the
logger so calls can be chained, and ``log()`` writes the result.

Contragents:
    Secondary entities can be attached with ``with_contragent(s)``. One
    activity is written per contragent and linked to it, so a single call
    can show up in the history of several entities.
"""

import contextlib
import copy
import logging
from collections.abc import Mapping
from typing import Any, List, Optional, Union

from django.db import transaction
from django.db.models import Model, QuerySet

from activitylog.services.config import ActivityLogConfig, get_config
from activitylog.services.exceptions import CouldNotDetermineActor
from activitylog.services.interfaces import ActorResolver, GeoLookup, PersistenceSink
from activitylog.services.placeholders import replace_placeholders
from activitylog.services.resolvers import AuthActorResolver, ClientIPLookup
from activitylog.services.sinks import DatabaseActivitySink
from activitylog.services.status import ActivityLogStatus, get_log_status

logger = logging.getLogger(__name__)


Contragent = Union[None, Model, List[Model]]


def normalize_contragent(value: Any) -> Contragent:
    """
    Classify contragent input.

    Returns:
        The model itself for a single instance, a list for a non-empty
        QuerySet, list or tuple, and None for anything else (including
        empty collections)
    """
    if isinstance(value, Model):
        return value
    if isinstance(value, (QuerySet, list, tuple)):
        items = list(value)
        return items or None
    return None


class ActivityLogger:
    """
    Builder for activity records.

    The causer defaults to the authenticated user of the current request
    and the log name to ACTIVITYLOG_DEFAULT_LOG_NAME.

    Example:
        >>> from activitylog.services.activity import activity
        >>>
        >>> activity().performed_on(article) \\
        ...     .caused_by(user) \\
        ...     .with_properties({'title': 'Old title'}) \\
        ...     .log('Renamed :properties.title to :subject.title')
        >>>
        >>> # One activity per linked customer
        >>> activity('billing').on(invoice) \\
        ...     .with_contragents(invoice.customers.all()) \\
        ...     .log('Invoice sent')
    """

    def __init__(
        self,
        resolver: Optional[ActorResolver] = None,
        config: Optional[ActivityLogConfig] = None,
        log_status: Optional[ActivityLogStatus] = None,
        sink: Optional[PersistenceSink] = None,
        ip_lookup: Optional[GeoLookup] = None,
    ):
        """
        Initialize the logger.

        Args:
            resolver: Actor resolver (defaults to AuthActorResolver)
            config: Configuration snapshot (defaults to get_config())
            log_status: Shared log status (defaults to the app-wide instance)
            sink: Persistence sink (defaults to DatabaseActivitySink)
            ip_lookup: Client IP lookup (defaults to ClientIPLookup)
        """
        self.resolver = resolver or AuthActorResolver()
        self.config = config or get_config()
        self.log_status = log_status or get_log_status()
        self.sink = sink or DatabaseActivitySink(self.config)
        self.ip_lookup = ip_lookup or ClientIPLookup()

        self.auth_driver = self.config.default_auth_driver or self.resolver.default_driver()
        self.causer = self.resolver.current_actor(self.auth_driver)
        self.log_name = self.config.default_log_name
        self.subject = None
        self.properties = {}
        self.contragent = None

    def set_log_status(self, log_status: ActivityLogStatus) -> 'ActivityLogger':
        self.log_status = log_status
        return self

    def performed_on(self, model: Model) -> 'ActivityLogger':
        self.subject = model
        return self

    def on(self, model: Model) -> 'ActivityLogger':
        return self.performed_on(model)

    def caused_by(self, model_or_id: Any) -> 'ActivityLogger':
        """
        Set who performed the activity.

        Args:
            model_or_id: Model instance, primary key of a user, or None
                         (keeps the current causer)

        Raises:
            CouldNotDetermineActor: If a primary key does not resolve to a user
        """
        if model_or_id is None:
            return self

        self.causer = self._normalize_causer(model_or_id)
        return self

    def by(self, model_or_id: Any) -> 'ActivityLogger':
        return self.caused_by(model_or_id)

    def with_properties(self, properties: Optional[Mapping]) -> 'ActivityLogger':
        self.properties = dict(properties or {})
        return self

    def with_property(self, key: str, value: Any) -> 'ActivityLogger':
        self.properties[key] = value
        return self

    def use_log(self, log_name: str) -> 'ActivityLogger':
        self.log_name = log_name
        return self

    def in_log(self, log_name: str) -> 'ActivityLogger':
        return self.use_log(log_name)

    def with_contragent(self, contragent: Any) -> 'ActivityLogger':
        """
        Attach one or more secondary entities.

        Accepts a model instance, a QuerySet, or a list/tuple of instances.
        Empty collections and other values are ignored.
        """
        normalized = normalize_contragent(contragent)
        if normalized is not None:
            self.contragent = normalized
        return self

    def with_contragents(self, contragents: Any) -> 'ActivityLogger':
        return self.with_contragent(contragents)

    def enable_logging(self) -> 'ActivityLogger':
        self.log_status.enable()
        return self

    def disable_logging(self) -> 'ActivityLogger':
        self.log_status.disable()
        return self

    def log(self, description: str) -> Optional[List[Model]]:
        """
        Write the activity.

        Args:
            description: Text, optionally containing placeholders such as
                         :subject.name or :properties.key

        Returns:
            List of saved activities in creation order, or None while
            logging is disabled
        """
        if self.log_status.is_disabled():
            return None

        fanout = transaction.atomic() if self.config.atomic_fanout else contextlib.nullcontext()
        activities = []

        with fanout:
            if isinstance(self.contragent, list):
                for contragent in self.contragent:
                    activities.append(self._log_one(description, contragent))
            else:
                activities.append(self._log_one(description, self.contragent))

        return activities

    def _log_one(self, description: str, contragent: Optional[Model]):
        activity = self.sink.create_record()

        if self.subject is not None:
            activity.subject = self.subject

        if self.causer is not None:
            activity.causer = self.causer

        activity.properties = copy.deepcopy(self.properties)
        activity.log_name = self.log_name
        activity.ip_address = self.ip_lookup.client_ip_address()
        activity.description = replace_placeholders(description, activity)

        try:
            self.sink.save(activity)
            if contragent is not None:
                self.sink.associate(activity, contragent)
        except Exception as e:
            logger.error(f"Failed to log activity in '{self.log_name}': {description} - {e}")
            raise

        logger.debug(f"Activity logged in '{self.log_name}': {activity.description}")
        return activity

    def _normalize_causer(self, model_or_id: Any) -> Model:
        if isinstance(model_or_id, Model):
            return model_or_id

        model = self.resolver.resolve_by_id(self.auth_driver, model_or_id)
        if model is not None:
            return model

        logger.warning(f"Could not determine actor for identifier {model_or_id!r}")
        raise CouldNotDetermineActor(model_or_id)


def activity(log_name: Optional[str] = None) -> ActivityLogger:
    """
    Create an ActivityLogger, optionally for a specific log.

    Args:
        log_name: Log channel (defaults to ACTIVITYLOG_DEFAULT_LOG_NAME)

    Returns:
        New ActivityLogger
    """
    activity_logger = ActivityLogger()
    if log_name:
        activity_logger.use_log(log_name)
    return activity_logger
